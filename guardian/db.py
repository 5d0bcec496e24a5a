#This file is responsible for opening a connection to the database
import logging

from fastapi import HTTPException, Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, declarative_base

from guardian import config

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Requests are rejected until ``init()`` has created the tables and
    checked that a connection can be opened.
    """

    def __init__(self, url: str = None, **engine_kwargs):
        url = url or config.DATABASE_URL
        if not url:
            raise ValueError(
                "DATABASE_URL environment variable is not set. "
                "Please create a .env file in the project root with DATABASE_URL."
            )
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_size", 10)
            engine_kwargs.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.ready = False

    def init(self):
        # models must be imported so their tables are registered on Base
        from guardian import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        self.ready = True
        logger.info("Database tables initialized successfully")

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.ready = False
        self.engine.dispose()


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None or not database.ready:
        raise HTTPException(status_code=503, detail="Database not ready. Please wait...")
    return database


def get_db(request: Request):
    database = get_database(request)
    db = database.session()
    try:
        yield db
    finally:
        db.close()
