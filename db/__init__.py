"""
db/ - Database Layer
====================
Connection pooling for PostgreSQL and the schema bootstrap
(`python -m db.init_db`). Nothing here knows about individual entities.
"""
