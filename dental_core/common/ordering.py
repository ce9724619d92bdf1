# dental_core/common/ordering.py
from __future__ import annotations

from dataclasses import replace
from typing import Optional, TypeVar

from rest_framework.exceptions import ValidationError

from dental_core.common.collections import EntityCollection

E = TypeVar("E")


def siblings(collection: EntityCollection[E], *, parent_field: str, parent_id: str) -> list[E]:
    """Children of one parent, sorted ascending by order_index."""
    items = collection.filter(lambda s: getattr(s, parent_field) == parent_id)
    return sorted(items, key=lambda s: s.order_index)


def next_order_index(collection: EntityCollection[E], *, parent_field: str, parent_id: str) -> int:
    """Insertion always appends at count + 1."""
    return len(siblings(collection, parent_field=parent_field, parent_id=parent_id)) + 1


def swap_order_index(
    collection: EntityCollection[E],
    first_id: str,
    second_id: str,
    *,
    parent_field: str,
) -> Optional[tuple[E, E]]:
    """
    Exchange the order_index of exactly two sibling items in a single write.

    Returns the two updated items, or None if either id is unknown (no-op).
    Raises ValidationError when the items belong to different parents.
    """
    first = collection.get(first_id)
    second = collection.get(second_id)
    if first is None or second is None:
        return None

    if getattr(first, parent_field) != getattr(second, parent_field):
        raise ValidationError({"detail": "Only stages of the same parent can be swapped."})

    if first_id == second_id:
        return first, second

    first_index, second_index = first.order_index, second.order_index
    collection.update_many(
        {
            first_id: lambda s: replace(s, order_index=second_index),
            second_id: lambda s: replace(s, order_index=first_index),
        }
    )
    return collection.get(first_id), collection.get(second_id)


def renumber(collection: EntityCollection[E], *, parent_field: str, parent_id: str) -> int:
    """
    Rewrite the siblings' order_index as the dense sequence 1..n, keeping their
    relative order. Returns how many items changed.
    """
    ordered = siblings(collection, parent_field=parent_field, parent_id=parent_id)
    changes = {}
    for position, item in enumerate(ordered, start=1):
        if item.order_index != position:
            changes[item.id] = _with_order_index(position)

    if changes:
        collection.update_many(changes)
    return len(changes)


def _with_order_index(order_index: int):
    return lambda item: replace(item, order_index=order_index)
