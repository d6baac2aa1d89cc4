import logging
import os
import re
import ssl
import time
import urllib.parse
from contextlib import contextmanager
from typing import Callable, List

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from config import DATABASE_URL as CONFIGURED_DATABASE_URL

logger = logging.getLogger(__name__)

# Check if we're in a testing environment
TESTING = os.getenv("TESTING", "false").lower() == "true"


def _resolve_database_url(database_url):
    if not database_url:
        if TESTING:
            # In testing environment, use SQLite in-memory database as fallback
            return "sqlite:///:memory:", None
        raise ValueError("DATABASE_URL environment variable is not set")

    if database_url.startswith("sqlite"):
        return database_url, None

    # If using Heroku/Vercel, convert the postgres:// URL to postgresql://
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    parsed = urllib.parse.urlparse(database_url)
    ssl_mode = urllib.parse.parse_qs(parsed.query).get("sslmode", [None])[0]

    # Use pg8000 instead of psycopg2
    if "postgresql" in database_url and "+" not in parsed.scheme:
        pattern = r"postgresql://([^:]+):([^@]+)@([^:/]+):?(\d*)/?([^?]*)"
        match = re.match(pattern, database_url)
        if match:
            username, password, host, port, dbname = match.groups()
            database_url = (
                f"postgresql+pg8000://{username}:{password}@{host}:{port or '5432'}/{dbname}"
            )
    return database_url, ssl_mode


def install_sqlite_pragmas(_engine):
    """Enable foreign keys and make SAVEPOINT work with pysqlite."""

    @event.listens_for(_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _install_slow_query_logging(_engine):
    threshold_ms = float(os.getenv("SLOW_DB_QUERY_THRESHOLD_MS", "200"))
    if threshold_ms <= 0:
        return

    slow_logger = logging.getLogger("db.slow_query")

    @event.listens_for(_engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._query_start_time = time.perf_counter()

    @event.listens_for(_engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = getattr(context, "_query_start_time", None)
        if start is None:
            return
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if elapsed_ms < threshold_ms:
            return

        stmt = " ".join(str(statement).split())
        if len(stmt) > 500:
            stmt = stmt[:500] + "..."
        slow_logger.warning("SLOW_DB_QUERY | ms=%.1f | stmt=%s", elapsed_ms, stmt)


def build_engine(database_url):
    url, ssl_mode = _resolve_database_url(database_url)
    if url.startswith("sqlite"):
        _engine = create_engine(
            url, echo=False, connect_args={"check_same_thread": False}
        )
        install_sqlite_pragmas(_engine)
        return _engine

    connect_args = {}
    if not (ssl_mode == "disable" or TESTING):
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args["ssl_context"] = ssl_context

    return create_engine(
        url,
        pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "20")),
        pool_timeout=int(os.getenv("DB_POOL_TIMEOUT_SECONDS", "30")),
        pool_recycle=int(os.getenv("DB_POOL_RECYCLE_SECONDS", "300")),
        pool_pre_ping=True,
        echo=False,
        connect_args=connect_args,
    )


engine = build_engine(CONFIGURED_DATABASE_URL)
_install_slow_query_logging(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """Context manager for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class UnitOfWork:
    """One transactional mutation plus the side effects that wait for its commit."""

    def __init__(self, db: Session):
        self.db = db
        self._after_commit: List[Callable[[], None]] = []

    def after_commit(self, fn: Callable, *args, **kwargs) -> None:
        self._after_commit.append(lambda: fn(*args, **kwargs))

    def run_after_commit(self) -> None:
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Post-commit side effect failed")


@contextmanager
def unit_of_work(db: Session):
    uow = UnitOfWork(db)
    try:
        yield uow
        db.commit()
    except Exception:
        db.rollback()
        raise
    uow.run_after_commit()


def insert_if_absent(db: Session, statement) -> bool:
    """Run an INSERT in a savepoint. False means the unique key already exists."""
    try:
        with db.begin_nested():
            db.execute(statement)
    except IntegrityError:
        return False
    return True


def create_tables():
    """Create all tables"""
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
