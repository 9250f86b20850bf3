"""Tests for the health and root endpoints."""


def test_health_check(test_client, api_profile_store):
    response = test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["profile_storage"] == "ok"


def test_health_degraded_when_profiles_unsynced(test_client, api_profile_store, profile_storage):
    profile_storage.fail_writes = True
    api_profile_store.create(label="Me", data={"name": "Sara"})

    body = test_client.get("/health").json()

    assert body["status"] == "degraded"
    assert body["profile_storage"] == "unsynced"


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"
