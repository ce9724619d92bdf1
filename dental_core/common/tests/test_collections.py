import pytest
from rest_framework.exceptions import ValidationError

from dental_core.common.collections import UNSET, EntityCollection, generate_id, get_by_id
from dental_core.iam.entities import User, UserPatch
from dental_core.iam.serializers import UserSerializer


def _user(pk, name="Ana", role="reception"):
    return User(id=pk, name=name, role=role, email=f"{pk}@dentaltrack.com")


@pytest.fixture
def changes():
    return []


@pytest.fixture
def users(changes):
    return EntityCollection(
        name="users",
        codec=UserSerializer,
        seed=lambda: [_user("1")],
        items=[_user("1"), _user("2", name="Bia")],
        on_change=lambda c: changes.append(c.all()),
    )


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(500)}
    assert len(ids) == 500


def test_unset_is_falsy_singleton():
    assert not UNSET
    assert repr(UNSET) == "UNSET"


def test_add_appends_in_insertion_order(users, changes):
    users.add(_user("3", name="Caio"))

    assert [u.id for u in users] == ["1", "2", "3"]
    assert len(changes) == 1


def test_add_rejects_duplicate_id(users, changes):
    with pytest.raises(ValidationError):
        users.add(_user("1"))
    assert changes == []


def test_update_merges_only_given_fields(users):
    updated = users.update("2", UserPatch(specialty="Ortodontia"))

    assert updated.specialty == "Ortodontia"
    assert updated.name == "Bia"
    assert updated.role == "reception"
    assert users.get("2") == updated


def test_update_unknown_id_is_noop(users, changes):
    assert users.update("404", UserPatch(name="Ghost")) is None
    assert changes == []


def test_update_can_clear_optional_field(users):
    users.update("1", UserPatch(specialty="Endodontia"))
    assert users.update("1", UserPatch(specialty=None)).specialty is None


def test_delete_returns_removed_entity(users):
    removed = users.delete("1")

    assert removed.id == "1"
    assert users.get("1") is None
    assert users.delete("1") is None


def test_delete_where_counts(users):
    assert users.delete_where(lambda u: u.role == "reception") == 2
    assert len(users) == 0
    assert users.delete_where(lambda u: True) == 0


def test_reset_restores_seed(users):
    users.add(_user("9"))
    users.reset()
    assert [u.id for u in users] == ["1"]


def test_restore_does_not_persist(users, changes):
    snapshot = users.snapshot()
    users.add(_user("9"))
    users.restore(snapshot)

    assert [u.id for u in users] == ["1", "2"]
    assert len(changes) == 1


def test_get_by_id_never_raises(users):
    assert get_by_id(users, "2").name == "Bia"
    assert get_by_id(users, "missing") is None
    assert get_by_id(users, "") is None
    assert get_by_id(users, None) is None


def test_patch_from_data_ignores_unknown_fields():
    patch = UserPatch.from_data({"name": "Novo", "id": "hijack", "created": "x"})

    assert patch.changes() == {"name": "Novo"}
    assert not patch.is_empty()
    assert UserPatch().is_empty()
