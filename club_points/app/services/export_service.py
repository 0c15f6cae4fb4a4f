"""
Ranking export.

The leaderboard is exported as a comma-separated file that opens
directly in a spreadsheet.  Rows follow the ranked view: 1-based rank,
member name, total points.  The file goes to a fresh temporary
directory on every export; the API hands it to the client as a
download.
"""

import csv
import io
import logging
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Sequence

from club_points.app.core.config import settings
from club_points.app.schemas.member import Member
from club_points.app.services.results import ExportResult

logger = logging.getLogger(__name__)

HEADERS = {
    "tr": ("Sira", "Isim", "Toplam Puan"),
    "en": ("Rank", "Name", "TotalPoints"),
}


def header_for(locale: str) -> Sequence[str]:
    return HEADERS.get(locale.lower(), HEADERS["tr"])


class ExportService:
    """Service for rendering and writing the ranking export."""

    @staticmethod
    def render_csv(ranked: Iterable[Member], header: Optional[Sequence[str]] = None) -> str:
        """Return the ranking as CSV text, one row per member in ranked order."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(header or header_for(settings.export_header_locale))
        for rank, member in enumerate(ranked, start=1):
            writer.writerow([rank, member.name, member.points])
        return buffer.getvalue()

    @classmethod
    def export_ranking(
        cls,
        ranked: Iterable[Member],
        directory: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> ExportResult:
        """Write the ranking CSV and return where it landed.

        ``directory`` defaults to a new temporary directory.  I/O errors
        are reported in the result instead of being raised.
        """
        content = cls.render_csv(ranked)
        try:
            target_dir = Path(directory) if directory else Path(tempfile.mkdtemp(prefix="club_points_"))
            path = target_dir / (filename or settings.export_filename)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("Ranking export failed: %s", exc)
            return ExportResult(ok=False, reason=str(exc))
        logger.info("Exported ranking to %s", path)
        return ExportResult(ok=True, path=path)
