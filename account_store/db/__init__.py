"""Database Infrastructure — SQLAlchemy Base shared by all ORM models.

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
