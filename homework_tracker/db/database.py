# /homework-tracker/homework_tracker/db/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm import declarative_base

# Create a Base class. Our database model classes will inherit from this.
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses (and so ON DELETE CASCADE) unless
    # this pragma is set on every new connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_storage_engine(database_url: str) -> Engine:
    """
    Creates the SQLAlchemy engine for the relational backend.
    The 'check_same_thread' argument is only needed for SQLite.
    """
    is_sqlite = database_url.startswith("sqlite")
    engine_args = {"connect_args": {"check_same_thread": False}} if is_sqlite else {}
    engine = create_engine(database_url, **engine_args)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    # Each instance of the returned class is a database session.
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
