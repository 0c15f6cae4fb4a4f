"""
Application package.

``core`` holds settings, logging and database plumbing, ``schemas``
the pydantic records and payloads, ``services`` the storage, roster
and export logic, and ``api`` the versioned HTTP routes.
"""
