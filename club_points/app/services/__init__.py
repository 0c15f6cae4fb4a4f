"""
Service layer.

``StorageService`` is the only code touching the database,
``RosterService`` owns the in-memory roster and runs every command,
and ``ExportService`` renders the ranking file.
"""
