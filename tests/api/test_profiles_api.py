"""Tests for the saved profile endpoints."""

PROFILES_URL = "/api/v1/profiles"


def _create(client, label, name):
    response = client.post(PROFILES_URL, json={"type": "individual", "label": label, "data": {"name": name}})
    assert response.status_code == 201
    return response.json()["data"]


def test_create_and_list(test_client, api_profile_store):
    first = _create(test_client, "Me", "Sara Khan")
    second = _create(test_client, "Client", "Omar Ali")

    assert first["isDefault"] is True
    assert second["isDefault"] is False

    response = test_client.get(PROFILES_URL)

    data = response.json()["data"]
    assert [p["label"] for p in data["items"]] == ["Me", "Client"]
    assert data["synced"] is True


def test_create_blank_label_is_rejected(test_client, api_profile_store):
    response = test_client.post(PROFILES_URL, json={"label": "", "data": {"name": "Sara"}})

    assert response.status_code == 422
    assert len(api_profile_store) == 0


def test_get_update_delete(test_client, api_profile_store):
    created = _create(test_client, "Me", "Sara Khan")
    url = f"{PROFILES_URL}/{created['id']}"

    assert test_client.get(url).json()["data"]["data"]["name"] == "Sara Khan"

    patched = test_client.patch(url, json={"label": "X", "data": {"phone": "+971500000000"}}).json()["data"]
    assert patched["label"] == "X"
    assert patched["data"]["name"] == "Sara Khan"
    assert patched["data"]["phone"] == "+971500000000"

    assert test_client.delete(url).status_code == 200
    assert test_client.get(url).status_code == 404


def test_missing_profile_returns_404(test_client, api_profile_store):
    for method, suffix in [("get", ""), ("patch", ""), ("delete", ""), ("post", "/default"), ("post", "/favorite")]:
        kwargs = {"json": {"label": "X"}} if method == "patch" else {}
        response = getattr(test_client, method)(f"{PROFILES_URL}/missing{suffix}", **kwargs)

        assert response.status_code == 404
        assert response.json()["detail"]["title"] == "Profile Not Found"


def test_default_and_favorite(test_client, api_profile_store):
    a = _create(test_client, "A", "Alpha")
    b = _create(test_client, "B", "Bravo")
    c = _create(test_client, "C", "Charlie")

    test_client.post(f"{PROFILES_URL}/{b['id']}/favorite")
    listed = test_client.get(PROFILES_URL).json()["data"]["items"]
    assert [p["id"] for p in listed] == [b["id"], a["id"], c["id"]]

    response = test_client.post(f"{PROFILES_URL}/{c['id']}/default")
    assert response.json()["data"]["isDefault"] is True
    assert api_profile_store.get_default().id == c["id"]


def test_delete_default_promotes(test_client, api_profile_store):
    a = _create(test_client, "A", "Alpha")
    b = _create(test_client, "B", "Bravo")

    response = test_client.delete(f"{PROFILES_URL}/{a['id']}")

    assert response.json()["data"]["default"]["id"] == b["id"]
