"""SQLAlchemy engine and session factory definitions."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from despesas.core.settings import get_settings


def build_engine(database_url: str) -> Engine:
    """Create an engine for the hosted Postgres or a local SQLite file."""

    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


engine = build_engine(get_settings().database_url)
SessionFactory = build_session_factory(engine)


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session per request lifecycle."""

    with SessionFactory() as session:
        yield session
