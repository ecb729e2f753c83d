from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from despesas.api.app import create_app
from despesas.db.base import Base, import_orm_models
from despesas.db.models.api_key import ApiKey
from despesas.db.session import build_session_factory, get_db_session

ANA_MAIL = "ana@example.com"
BIA_MAIL = "bia@example.com"
ANA_KEY = "AnaKey0123456789AnaKey0123456789"
BIA_KEY = "BiaKey0123456789BiaKey0123456789"


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = build_session_factory(engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


def seed_api_keys(session: Session) -> None:
    session.add_all(
        [
            ApiKey(user_mail=ANA_MAIL, api_key=ANA_KEY, revoked=False),
            ApiKey(user_mail=BIA_MAIL, api_key=BIA_KEY, revoked=False),
        ]
    )
    session.commit()


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_keys(sqlite_session_factory: sessionmaker[Session]) -> tuple[str, str]:
    with sqlite_session_factory() as session:
        seed_api_keys(session)
    return ANA_KEY, BIA_KEY
