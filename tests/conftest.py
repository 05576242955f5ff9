# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.services.auth.session import UserSessionPrincipal
from infra.db.base import Base
import infra.db.models  # noqa: F401
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    graph = build_service_graph(session)
    graph.user_session.set_principal(UserSessionPrincipal(user_id="owner-1", username="owner"))
    return graph.as_dict()


@pytest.fixture
def project(services):
    return services["project_service"].create_project(
        "owner-1",
        "Warehouse Fit-out",
        baseline_budget=10000.0,
        overhead_percent=10.0,
    )
