"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one domain (members, events,
ranking).  The routers are aggregated in ``router.py``.
"""
