"""Club points API client and command-line tool.

``ClubPointsAPI`` wraps the HTTP API served by ``club_points.app.main``
using the ``requests`` library.  Every method returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure
``data`` is empty and ``error`` is a dictionary with ``status_code``
and ``message`` keys.  Nothing raises for HTTP or network errors.

The module doubles as a small command-line front end::

    python club_points_client.py members
    python club_points_client.py add-member "Ayse"
    python club_points_client.py award <member-id> --event-id <event-id>
    python club_points_client.py ranking
    python club_points_client.py export ranking.csv

The base URL defaults to the ``CLUB_POINTS_BASE_URL`` environment
variable, falling back to ``http://localhost:8000``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ClubPointsAPI:
    """Client for the club points API (version 1)."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.  The
                ``/api/v1`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/") + "/api/v1"
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        raw: bool = False,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns ``(data, None)`` with the parsed JSON body (or the raw
        bytes when ``raw`` is set), or ``(None, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if raw:
                return response.content, None
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def list_members(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/members/")

    def add_member(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/members/", json_body={"name": name})

    def delete_member(self, member_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/members/{member_id}")
        return error is None, error

    def award_point(
        self, member_id: str, event_id: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Award the given event, or the selected one when ``event_id`` is omitted."""
        return self._request("POST", f"/members/{member_id}/points", json_body={"event_id": event_id})

    def get_history(self, member_id: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/members/{member_id}/history")

    def delete_history_entries(
        self, member_id: str, indices: Sequence[int]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST", f"/members/{member_id}/history/delete", json_body={"indices": list(indices)}
        )

    def reset_all(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("POST", "/members/reset")
        return (data or []), error

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def list_events(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/events/")

    def add_event(
        self, name: str, points: str, emoji: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        body: Dict[str, Any] = {"name": name, "points": str(points)}
        if emoji:
            body["emoji"] = emoji
        return self._request("POST", "/events/", json_body=body)

    def delete_event(self, event_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/events/{event_id}")
        return error is None, error

    def select_event(self, event_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", "/events/selected", json_body={"event_id": event_id})

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------
    def ranking(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/ranking/")

    def download_ranking(self, path: str) -> Tuple[bool, Optional[Error]]:
        """Save the CSV export to ``path``."""
        content, error = self._request("GET", "/ranking/export", raw=True)
        if error:
            return False, error
        try:
            with open(path, "wb") as f:
                f.write(content)
        except OSError as exc:
            logger.error("Could not write %s: %s", path, exc)
            return False, {"status_code": None, "message": str(exc)}
        return True, None


# ----------------------------------------------------------------------
# Command line
# ----------------------------------------------------------------------
def _format_member(member: Dict[str, Any]) -> str:
    return f"{member['id']}  {member['name']}  {member['points']} p"


def _format_event(event: Dict[str, Any]) -> str:
    return f"{event['id']}  {event['emoji']} {event['name']}  {event['points']} p"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Club points command-line client.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("CLUB_POINTS_BASE_URL", "http://localhost:8000"),
        help="API server root (default: $CLUB_POINTS_BASE_URL or http://localhost:8000)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("members", help="List members")
    p = sub.add_parser("add-member", help="Add a member")
    p.add_argument("name")
    p = sub.add_parser("delete-member", help="Delete a member")
    p.add_argument("member_id")

    sub.add_parser("events", help="List events")
    p = sub.add_parser("add-event", help="Add an event")
    p.add_argument("name")
    p.add_argument("points")
    p.add_argument("--emoji")
    p = sub.add_parser("delete-event", help="Delete an event")
    p.add_argument("event_id")
    p = sub.add_parser("select", help="Select the event used for awards")
    p.add_argument("event_id")

    p = sub.add_parser("award", help="Award points to a member")
    p.add_argument("member_id")
    p.add_argument("--event-id")
    p = sub.add_parser("history", help="Show a member's history")
    p.add_argument("member_id")
    p = sub.add_parser("delete-history", help="Delete history entries by index")
    p.add_argument("member_id")
    p.add_argument("indices", nargs="+", type=int)

    sub.add_parser("ranking", help="Show the leaderboard")
    sub.add_parser("reset", help="Reset every member's points")
    p = sub.add_parser("export", help="Download the ranking as CSV")
    p.add_argument("path")
    return ap


def run_command(api: ClubPointsAPI, args: argparse.Namespace) -> Tuple[List[str], Optional[Error]]:
    """Execute one CLI command and return the lines to print."""
    command = args.command
    if command == "members":
        members, error = api.list_members()
        return [_format_member(m) for m in members], error
    if command == "add-member":
        member, error = api.add_member(args.name)
        return ([_format_member(member)] if member else []), error
    if command == "delete-member":
        _, error = api.delete_member(args.member_id)
        return ["deleted"], error
    if command == "events":
        events, error = api.list_events()
        return [_format_event(e) for e in events], error
    if command == "add-event":
        event, error = api.add_event(args.name, args.points, args.emoji)
        return ([_format_event(event)] if event else []), error
    if command == "delete-event":
        _, error = api.delete_event(args.event_id)
        return ["deleted"], error
    if command == "select":
        event, error = api.select_event(args.event_id)
        return ([_format_event(event)] if event else []), error
    if command == "award":
        member, error = api.award_point(args.member_id, args.event_id)
        return ([_format_member(member)] if member else []), error
    if command == "history":
        entries, error = api.get_history(args.member_id)
        return [f"{i}  {e['date']}  {e['event_name']}  +{e['points']}" for i, e in enumerate(entries)], error
    if command == "delete-history":
        member, error = api.delete_history_entries(args.member_id, args.indices)
        return ([_format_member(member)] if member else []), error
    if command == "ranking":
        rows, error = api.ranking()
        return [f"{r['medal']:>3}  {r['name']}  {r['points']} p" for r in rows], error
    if command == "reset":
        members, error = api.reset_all()
        return [f"reset {len(members)} members"], error
    if command == "export":
        _, error = api.download_ranking(args.path)
        return [f"saved {args.path}"], error
    return [], {"status_code": None, "message": f"Unknown command {command}"}


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    args = build_parser().parse_args(argv)
    api = ClubPointsAPI(base_url=args.base_url)
    lines, error = run_command(api, args)
    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
