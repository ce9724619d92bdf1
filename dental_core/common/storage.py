# dental_core/common/storage.py
from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import Any, ContextManager, Generic, Iterator, Mapping, Optional, Protocol, Sequence, TypeVar

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, models, transaction

from dental_core.common.models import StorageSlot

logger = logging.getLogger(__name__)

E = TypeVar("E")


class StorageError(Exception):
    """Raised by slot backends when the durable store cannot be read or written."""


class SlotStorage(Protocol):
    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, payload: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def atomic(self) -> ContextManager[Any]: ...


class MemorySlotStorage:
    """
    Process-local slot store. Used by tests and by DENTALTRACK_STORAGE_BACKEND="memory".
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._lock = threading.Lock()
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._slots.get(key)

    def write(self, key: str, payload: str) -> None:
        with self._lock:
            self._slots[key] = payload

    def delete(self, key: str) -> None:
        with self._lock:
            self._slots.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._slots)

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()

    def atomic(self) -> ContextManager[Any]:
        return nullcontext()


class DatabaseSlotStorage:
    """
    Slot store backed by the common_storage_slot table (one row per key).
    """

    def read(self, key: str) -> Optional[str]:
        try:
            return StorageSlot.objects.filter(key=key).values_list("payload", flat=True).first()
        except DatabaseError as exc:
            raise StorageError(f"Cannot read slot {key!r}: {exc}") from exc

    def write(self, key: str, payload: str) -> None:
        # Savepoint so a failed write does not poison an outer transaction
        try:
            with transaction.atomic(savepoint=True):
                StorageSlot.objects.update_or_create(key=key, defaults={"payload": payload})
        except DatabaseError as exc:
            raise StorageError(f"Cannot write slot {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            StorageSlot.objects.filter(key=key).delete()
        except DatabaseError as exc:
            raise StorageError(f"Cannot delete slot {key!r}: {exc}") from exc

    def atomic(self) -> ContextManager[Any]:
        return transaction.atomic()


_MEMORY_STORAGE = MemorySlotStorage()


def get_slot_storage() -> SlotStorage:
    backend = getattr(settings, "DENTALTRACK_STORAGE_BACKEND", "db")
    if backend == "memory":
        return _MEMORY_STORAGE
    if backend == "db":
        return DatabaseSlotStorage()
    raise ImproperlyConfigured(f"Unknown DENTALTRACK_STORAGE_BACKEND: {backend!r}")


def slot_key(name: str) -> str:
    prefix = getattr(settings, "DENTALTRACK_STORAGE_KEY_PREFIX", "dentaltrack_")
    return f"{prefix}{name}"


# -------------------------------------------------------------------
# Collection repository
# -------------------------------------------------------------------

class LoadState(models.TextChoices):
    SEED = "SEED", "Seed (no durable data)"
    LOADED = "LOADED", "Loaded from durable store"
    FALLBACK_TO_SEED = "FALLBACK_TO_SEED", "Corrupted, fell back to seed"


@dataclass(frozen=True)
class LoadResult(Generic[E]):
    key: str
    state: str
    items: list[E] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.state == LoadState.FALLBACK_TO_SEED


class CollectionRepository:
    """
    Reads and writes whole collections to slots.

    load() never raises: an absent slot yields SEED, an unreadable or invalid
    one yields FALLBACK_TO_SEED (logged) with the seed items.
    save() never raises either: a failed write is logged and reported as False,
    the in-memory state stays authoritative.
    """

    def __init__(self, storage: SlotStorage) -> None:
        self.storage = storage

    def load(self, key: str, codec, seed: Sequence[E]) -> LoadResult[E]:
        try:
            raw = self.storage.read(key)
        except StorageError as exc:
            return self._fallback(key, seed, str(exc))

        if raw is None or raw == "":
            return LoadResult(key=key, state=LoadState.SEED, items=list(seed))

        try:
            data = json.loads(raw)
        except ValueError as exc:
            return self._fallback(key, seed, f"invalid JSON: {exc}")

        serializer = codec(data=data, many=True)
        if not serializer.is_valid():
            return self._fallback(key, seed, f"invalid records: {serializer.errors}")

        items = [codec.to_entity(attrs) for attrs in serializer.validated_data]
        return LoadResult(key=key, state=LoadState.LOADED, items=items)

    def save(self, key: str, codec, items: Sequence[E]) -> bool:
        payload = json.dumps(codec(list(items), many=True).data, ensure_ascii=False)
        try:
            self.storage.write(key, payload)
        except StorageError:
            logger.exception("Failed to persist slot %s", key)
            return False
        return True

    def read_raw(self, key: str) -> Optional[str]:
        return self.storage.read(key)

    def restore_raw(self, payloads: Mapping[str, Optional[str]]) -> None:
        """
        Put slots back to earlier raw payloads (None deletes the slot). Used to
        undo partial writes on backends without transactions; failures are
        logged per key.
        """
        for key, raw in payloads.items():
            try:
                if raw is None:
                    self.storage.delete(key)
                else:
                    self.storage.write(key, raw)
            except StorageError:
                logger.exception("Failed to restore slot %s", key)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self.storage.atomic():
            yield

    @staticmethod
    def _fallback(key: str, seed: Sequence[E], error: str) -> LoadResult[E]:
        logger.warning("Slot %s unreadable, falling back to seed data: %s", key, error)
        return LoadResult(key=key, state=LoadState.FALLBACK_TO_SEED, items=list(seed), error=error)
