import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine
from sqlalchemy.pool import StaticPool

from catalog.core.config import Settings
from catalog.main import create_app
from catalog.repos import JsonServiceStore, SqlServiceStore
from catalog.schemas.services import ServiceCreate


@pytest.fixture
def data_file(tmp_path):
    """Path of a services.json that starts out missing"""
    return tmp_path / "services.json"


@pytest.fixture
def store(data_file):
    json_store = JsonServiceStore(data_file)
    json_store.load()
    return json_store


@pytest.fixture
def sql_engine():
    """In-memory SQLite shared across threads for the SQL store"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_store(sql_engine):
    store = SqlServiceStore(sql_engine)
    store.load()
    return store


@pytest.fixture
def make_service():
    """Build a complete ServiceCreate, overriding any fields given"""

    def _make(app_code: str = "svc-a", **overrides) -> ServiceCreate:
        fields = {
            "app_code": app_code,
            "app_name": f"{app_code} application",
            "env": "prod",
            "cloud": "aws",
            "region": "us-east-1",
            "team_name": "Platform",
            "pm_contact": "pm@example.com",
            "team_contact": "platform@example.com",
        }
        fields.update(overrides)
        return ServiceCreate(**fields)

    return _make


@pytest.fixture
def form_data(make_service):
    """Form-encoded equivalent of make_service"""

    def _form(app_code: str = "svc-a", **overrides) -> dict:
        return make_service(app_code, **overrides).model_dump()

    return _form


@pytest.fixture
def test_app(store):
    return create_app(settings=Settings(), store=store)


@pytest.fixture
def client(test_app):
    """Create a test client around an app backed by a temp-file store"""
    with TestClient(test_app) as test_client:
        yield test_client
