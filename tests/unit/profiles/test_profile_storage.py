"""Tests for the JSON file profile storage."""

import json

import pytest

from legaldocs.core.exceptions import ProfileStorageError
from legaldocs.services.profiles.profile_store import SavedProfileStore
from legaldocs.services.profiles.storage import JsonFileProfileStorage, ProfileStorage


@pytest.fixture
def file_storage(tmp_path) -> JsonFileProfileStorage:
    return JsonFileProfileStorage(directory=tmp_path, key="test-profiles")


def test_implements_storage_port(file_storage):
    assert isinstance(file_storage, ProfileStorage)


def test_missing_entry_loads_empty(file_storage):
    assert file_storage.load() == []


def test_save_and_load(file_storage):
    records = [{"id": "profile-1", "label": "عميل", "data": {"name": "أحمد"}}]

    file_storage.save_all(records)

    assert file_storage.path.name == "test-profiles.json"
    assert file_storage.load() == records
    assert "عميل" in file_storage.path.read_text(encoding="utf-8")


def test_save_replaces_whole_collection_without_temp_files(file_storage, tmp_path):
    file_storage.save_all([{"id": "1"}, {"id": "2"}])
    file_storage.save_all([{"id": "3"}])

    assert file_storage.load() == [{"id": "3"}]
    assert [p.name for p in tmp_path.iterdir()] == ["test-profiles.json"]


def test_corrupt_entry_raises(file_storage):
    file_storage.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ProfileStorageError):
        file_storage.load()


def test_non_array_entry_raises(file_storage):
    file_storage.path.write_text(json.dumps({"id": "1"}), encoding="utf-8")

    with pytest.raises(ProfileStorageError):
        file_storage.load()


def test_unserializable_records_raise(file_storage):
    with pytest.raises(ProfileStorageError):
        file_storage.save_all([{"id": object()}])

    assert not file_storage.path.exists()


def test_store_survives_corrupt_entry(file_storage):
    file_storage.path.write_text("{not json", encoding="utf-8")

    store = SavedProfileStore(file_storage)
    created = store.create(label="Me", data={"name": "Sara"})

    assert store.list() == [created]
    assert file_storage.load()[0]["label"] == "Me"


def test_store_reload_from_file(file_storage):
    store = SavedProfileStore(file_storage)
    first = store.create(label="Me", data={"name": "Sara"})
    store.create(label="Client", data={"name": "Omar"})
    store.toggle_favorite(first.id)

    reloaded = SavedProfileStore(file_storage)

    assert [p.label for p in reloaded.list()] == ["Me", "Client"]
    assert reloaded.get_default().id == first.id
