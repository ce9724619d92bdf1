# dental_core/common/collections.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, Optional, TypeVar

from rest_framework.exceptions import ValidationError

E = TypeVar("E")


def generate_id() -> str:
    """Opaque, globally unique entity id."""
    return uuid.uuid4().hex


# -------------------------------------------------------------------
# Partial updates
# -------------------------------------------------------------------

class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Patch:
    """
    Base for per-entity update types.

    Subclasses declare only the mutable fields of their entity, each defaulting
    to UNSET. Fields left UNSET keep the entity's previous value (merge semantics).
    """

    def changes(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def is_empty(self) -> bool:
        return not self.changes()

    def apply(self, entity: E) -> E:
        return replace(entity, **self.changes())

    @classmethod
    def from_data(cls, data: Mapping[str, Any]):
        """
        Build a patch from validated (snake_case) data, ignoring fields that are
        not mutable on this entity.
        """
        allowed = {f.name for f in fields(cls)}
        values = {k: tuple(v) if isinstance(v, list) else v for k, v in (data or {}).items() if k in allowed}
        return cls(**values)


# -------------------------------------------------------------------
# In-memory collection
# -------------------------------------------------------------------

class EntityCollection(Generic[E]):
    """
    Ordered (insertion order) in-memory collection of frozen entities.

    Every mutation replaces the backing list and then calls `on_change(self)`,
    which is how the owning ClinicState persists the collection.
    """

    def __init__(
        self,
        *,
        name: str,
        codec,
        seed: Callable[[], list[E]],
        items: Iterable[E] = (),
        on_change: Optional[Callable[["EntityCollection[E]"], None]] = None,
    ) -> None:
        self.name = name
        self.codec = codec
        self._seed = seed
        self._items: list[E] = list(items)
        self._on_change = on_change

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> list[E]:
        return list(self._items)

    def get(self, entity_id: str) -> Optional[E]:
        for item in self._items:
            if item.id == entity_id:
                return item
        return None

    def filter(self, predicate: Callable[[E], bool]) -> list[E]:
        return [item for item in self._items if predicate(item)]

    # -------------------------
    # Writes
    # -------------------------
    def add(self, entity: E) -> E:
        if self.get(entity.id) is not None:
            raise ValidationError({"id": f"{self.name}: id {entity.id!r} already exists."})
        self._commit([*self._items, entity])
        return entity

    def update(self, entity_id: str, patch: Patch) -> Optional[E]:
        return self.update_with(entity_id, patch.apply)

    def update_with(self, entity_id: str, fn: Callable[[E], E]) -> Optional[E]:
        """
        Replace the entity with fn(current). Returns the new entity, or None
        when the id is unknown (no-op).
        """
        updated: Optional[E] = None
        items: list[E] = []
        for item in self._items:
            if item.id == entity_id:
                updated = fn(item)
                items.append(updated)
            else:
                items.append(item)

        if updated is None:
            return None

        self._commit(items)
        return updated

    def update_many(self, changes: Mapping[str, Callable[[E], E]]) -> list[E]:
        """Apply several per-id replacements as one write."""
        updated: list[E] = []
        items: list[E] = []
        for item in self._items:
            fn = changes.get(item.id)
            if fn is None:
                items.append(item)
                continue
            new_item = fn(item)
            items.append(new_item)
            updated.append(new_item)

        if updated:
            self._commit(items)
        return updated

    def delete(self, entity_id: str) -> Optional[E]:
        removed = self.get(entity_id)
        if removed is None:
            return None
        self._commit([item for item in self._items if item.id != entity_id])
        return removed

    def delete_where(self, predicate: Callable[[E], bool]) -> int:
        kept = [item for item in self._items if not predicate(item)]
        removed = len(self._items) - len(kept)
        if removed:
            self._commit(kept)
        return removed

    def reset(self) -> None:
        self._commit(self._seed())

    # -------------------------
    # Unit-of-work support
    # -------------------------
    def snapshot(self) -> list[E]:
        return list(self._items)

    def restore(self, items: list[E]) -> None:
        # Rollback path: no persistence
        self._items = list(items)

    def _commit(self, items: list[E]) -> None:
        self._items = items
        if self._on_change is not None:
            self._on_change(self)


def get_by_id(collection: EntityCollection[E], entity_id: Optional[str]) -> Optional[E]:
    """Lookup that never raises; callers must handle None."""
    if not entity_id:
        return None
    return collection.get(entity_id)
