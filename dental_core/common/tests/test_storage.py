import json

import pytest

from dental_core.common.storage import (
    CollectionRepository,
    DatabaseSlotStorage,
    LoadState,
    MemorySlotStorage,
    StorageError,
    get_slot_storage,
    slot_key,
)
from dental_core.iam.entities import User
from dental_core.iam.serializers import UserSerializer

SEED = [User(id="u1", name="Seed User", role="admin", email="seed@dentaltrack.com")]


class BrokenStorage(MemorySlotStorage):
    def read(self, key):
        raise StorageError("disk on fire")

    def write(self, key, payload):
        raise StorageError("read-only")


def test_slot_key_uses_prefix():
    assert slot_key("users") == "dentaltrack_users"


def test_memory_backend_selected_in_tests():
    assert isinstance(get_slot_storage(), MemorySlotStorage)


def test_absent_slot_loads_seed_without_writing():
    storage = MemorySlotStorage()
    result = CollectionRepository(storage).load("dentaltrack_users", UserSerializer, SEED)

    assert result.state == LoadState.SEED
    assert result.items == SEED
    assert storage.keys() == []


def test_saved_slot_loads_back():
    storage = MemorySlotStorage()
    repo = CollectionRepository(storage)
    user = User(id="u2", name="Marina", role="dentist", email="marina@dentaltrack.com", specialty="Ortodontia")

    assert repo.save("dentaltrack_users", UserSerializer, [user]) is True
    result = repo.load("dentaltrack_users", UserSerializer, SEED)

    assert result.state == LoadState.LOADED
    assert result.items == [user]


def test_slot_payload_is_camel_case_json_array():
    storage = MemorySlotStorage()
    CollectionRepository(storage).save("dentaltrack_users", UserSerializer, SEED)

    data = json.loads(storage.read("dentaltrack_users"))
    assert data == [
        {"id": "u1", "name": "Seed User", "role": "admin", "email": "seed@dentaltrack.com", "specialty": None}
    ]


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        json.dumps({"id": "x"}),
        json.dumps([{"id": "u9", "name": "No role", "email": "x@dentaltrack.com"}]),
        json.dumps([{"id": "u9", "name": "Bad role", "role": "janitor", "email": "x@dentaltrack.com"}]),
    ],
)
def test_corrupted_slot_falls_back_to_seed(payload, caplog):
    storage = MemorySlotStorage({"dentaltrack_users": payload})

    with caplog.at_level("WARNING", logger="dental_core.common.storage"):
        result = CollectionRepository(storage).load("dentaltrack_users", UserSerializer, SEED)

    assert result.state == LoadState.FALLBACK_TO_SEED
    assert result.is_fallback
    assert result.items == SEED
    assert result.error
    assert "falling back to seed" in caplog.text


def test_unreadable_storage_falls_back_to_seed():
    result = CollectionRepository(BrokenStorage()).load("dentaltrack_users", UserSerializer, SEED)

    assert result.state == LoadState.FALLBACK_TO_SEED
    assert "disk on fire" in result.error


def test_failed_write_is_reported_not_raised(caplog):
    with caplog.at_level("ERROR", logger="dental_core.common.storage"):
        ok = CollectionRepository(BrokenStorage()).save("dentaltrack_users", UserSerializer, SEED)

    assert ok is False
    assert "Failed to persist slot dentaltrack_users" in caplog.text


@pytest.mark.django_db
def test_database_storage_round_trip():
    storage = DatabaseSlotStorage()

    assert storage.read("dentaltrack_users") is None
    storage.write("dentaltrack_users", "[]")
    storage.write("dentaltrack_users", '[{"id": "1"}]')
    assert storage.read("dentaltrack_users") == '[{"id": "1"}]'

    storage.delete("dentaltrack_users")
    assert storage.read("dentaltrack_users") is None


@pytest.mark.django_db
def test_database_storage_one_row_per_key():
    from dental_core.common.models import StorageSlot

    storage = DatabaseSlotStorage()
    storage.write("dentaltrack_users", "[]")
    storage.write("dentaltrack_users", "[]")
    storage.write("dentaltrack_patients", "[]")

    assert StorageSlot.objects.count() == 2
