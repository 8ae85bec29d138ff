# crudapp/db.py

"""
Database configuration and session management for the Product Service.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Read DB settings from environment variables, with defaults for local/dev
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# A full DATABASE_URL wins over the individual POSTGRES_* settings
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql://"
    f"{POSTGRES_USER}:{POSTGRES_PASSWORD}@"
    f"{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}",
)


def build_engine(url: str = DATABASE_URL):
    """
    Creates a SQLAlchemy engine for the given URL.
    SQLite connections are shared with the request threadpool, so the
    same-thread check is turned off for them.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    # pool_pre_ping=True helps maintain healthy connections in a pool
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine()

# expire_on_commit=False keeps loaded attributes readable after the
# session that returned an object has been closed.
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

# Base class for the ORM models
Base = declarative_base()


def init_db(bind=engine):
    """Creates the tables for every model registered on `Base`."""
    Base.metadata.create_all(bind=bind)
