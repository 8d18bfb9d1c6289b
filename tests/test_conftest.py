from fastapi.testclient import TestClient

from catalog.repos import JsonServiceStore


def test_store_fixture(store, data_file):
    """The store fixture is an empty JSON store on a file that doesn't exist yet"""
    assert isinstance(store, JsonServiceStore)
    assert store.path == data_file
    assert store.all() == []
    assert not data_file.exists()


def test_client_fixture(client):
    """The client fixture serves the app and its health endpoint"""
    assert isinstance(client, TestClient)

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_make_service_fixture(make_service):
    service = make_service("svc-x", env="dev")
    assert service.app_code == "svc-x"
    assert service.env == "dev"
    assert service.team_contact == "platform@example.com"
