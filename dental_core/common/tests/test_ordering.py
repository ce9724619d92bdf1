from dataclasses import dataclass

import pytest
from rest_framework.exceptions import ValidationError

from dental_core.common.collections import EntityCollection
from dental_core.common.ordering import next_order_index, renumber, siblings, swap_order_index


@dataclass(frozen=True)
class Step:
    id: str
    parent_id: str
    order_index: int


@pytest.fixture
def steps():
    items = [
        Step("a3", "A", 3),
        Step("a1", "A", 1),
        Step("b1", "B", 1),
        Step("a2", "A", 2),
    ]
    return EntityCollection(name="steps", codec=None, seed=lambda: [], items=items)


def _order(collection, parent="A"):
    return [(s.id, s.order_index) for s in siblings(collection, parent_field="parent_id", parent_id=parent)]


def test_siblings_sorted_by_order_index(steps):
    assert _order(steps) == [("a1", 1), ("a2", 2), ("a3", 3)]


def test_next_order_index_appends(steps):
    assert next_order_index(steps, parent_field="parent_id", parent_id="A") == 4
    assert next_order_index(steps, parent_field="parent_id", parent_id="empty") == 1


def test_swap_exchanges_exactly_two_indices(steps):
    first, second = swap_order_index(steps, "a1", "a3", parent_field="parent_id")

    assert (first.order_index, second.order_index) == (3, 1)
    assert _order(steps) == [("a3", 1), ("a2", 2), ("a1", 3)]
    assert steps.get("b1").order_index == 1


def test_swap_twice_is_identity(steps):
    before = _order(steps)
    swap_order_index(steps, "a2", "a3", parent_field="parent_id")
    swap_order_index(steps, "a2", "a3", parent_field="parent_id")
    assert _order(steps) == before


def test_swap_unknown_id_is_noop(steps):
    before = steps.all()
    assert swap_order_index(steps, "a1", "zz", parent_field="parent_id") is None
    assert steps.all() == before


def test_swap_rejects_non_siblings(steps):
    with pytest.raises(ValidationError):
        swap_order_index(steps, "a1", "b1", parent_field="parent_id")


def test_renumber_closes_gaps(steps):
    steps.delete("a2")

    assert renumber(steps, parent_field="parent_id", parent_id="A") == 1
    assert _order(steps) == [("a1", 1), ("a3", 2)]
    assert renumber(steps, parent_field="parent_id", parent_id="A") == 0
