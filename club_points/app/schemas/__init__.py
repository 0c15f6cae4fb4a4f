"""
Pydantic schema definitions for records and API payloads.

``member`` and ``event`` hold the persisted records as well as the
request bodies that create them; ``ranking`` holds the derived
leaderboard rows.
"""
