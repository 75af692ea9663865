"""
dealbook.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Swapping SQLite for Postgres is a `DEALBOOK_DATABASE_URL` change (asyncpg driver).
