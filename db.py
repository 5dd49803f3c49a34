from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine, event
import os


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    """Enforce foreign keys and wait for locks instead of failing immediately."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def make_engine(database_url: str):
    """Create an engine; SQLite URLs get the pragma listener attached."""

    if database_url.startswith("sqlite"):
        eng = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        event.listen(eng, "connect", _set_sqlite_pragmas)
        return eng
    return create_engine(database_url, pool_pre_ping=True)


DB_PATH = os.path.join(os.path.dirname(__file__), "data", "seed.db")
SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DB_PATH}"

if SQLALCHEMY_DATABASE_URL == f"sqlite:///{DB_PATH}":
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)

engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
