"""
Database engine, session factory and local schema bootstrap.

DATABASE_URL defaults to a SQLite file for the preview server and seed script;
the CRM's Postgres database in production. Refresh code opens a short-lived
session per operation via get_session().
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from prospect_intel.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


# Hosting providers inject postgres:// but SQLAlchemy 2.x requires postgresql://
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()


def init_db(bind=None):
    """
    Create the prospects, intelligence_items and intelligence_refresh_log tables.

    Local SQLite only (preview server, seed script); deployed databases are
    migrated with Alembic.
    """
    import prospect_intel.models.prospect  # noqa: F401
    import prospect_intel.models.intelligence_item  # noqa: F401
    import prospect_intel.models.refresh_log  # noqa: F401
    Base.metadata.create_all(bind if bind is not None else engine)
