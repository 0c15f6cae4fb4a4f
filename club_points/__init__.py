"""
Top-level package for the club points service.

Tracks point totals for club members across recurring events.  All
functionality lives in submodules under ``app``;
``club_points.app.main:app`` is the ASGI entry point.
"""

__all__ = []
