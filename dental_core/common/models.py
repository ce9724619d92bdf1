# dental_core/common/models.py
from __future__ import annotations

from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all persisted rows.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class StorageSlot(TimeStampedModel):
    """
    Durable key/value slot.

    Each entity collection occupies exactly one row, keyed like
    "dentaltrack_treatments", whose payload is the JSON array of that
    collection. The payload is kept as plain text (not JSONField) so an
    unparseable value can be stored and detected on load.
    """
    key = models.CharField(max_length=128, unique=True)
    payload = models.TextField(blank=True, default="")

    class Meta:
        db_table = "common_storage_slot"

    def __str__(self) -> str:
        return self.key
