"""Database engine, session factory and declarative base."""

import sqlite3

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from groupcart.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement so ON DELETE CASCADE applies in SQLite."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """Yield a database session and close it when the request is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def acquire_write_lock(db: Session) -> None:
    """
    Hold SQLite's write lock until the current transaction ends.

    SQLite ignores ``FOR UPDATE`` and pysqlite defers BEGIN to the first write,
    so membership transitions call this before reading the state they decide
    on. A concurrent transition then waits here instead of committing between
    our reads and writes. Other backends rely on ``with_for_update`` row locks
    and skip this.

    Must run before any write in the transaction; release it with commit or
    rollback.
    """
    if db.get_bind().dialect.name == "sqlite":
        db.execute(text("BEGIN IMMEDIATE"))
