# dental_core/common/codecs.py
from __future__ import annotations

from typing import Any

from rest_framework import serializers


class EntityCodec(serializers.Serializer):
    """
    Serializer that maps a frozen entity dataclass to its stored/API shape.

    Field names are the camelCase attribute names of the durable layout;
    `source=` points at the snake_case dataclass attribute. Subclasses set
    Meta.entity to the dataclass they build.
    """

    class Meta:
        entity: type | None = None

    @classmethod
    def to_entity(cls, attrs: dict[str, Any]):
        entity_cls = cls.Meta.entity
        if entity_cls is None:
            raise NotImplementedError(f"{cls.__name__}.Meta.entity is not set")
        values = {k: tuple(v) if isinstance(v, list) else v for k, v in attrs.items()}
        return entity_cls(**values)

    def create(self, validated_data):
        return self.to_entity(validated_data)


def string_list(*, source: str | None = None, **kwargs) -> serializers.ListField:
    """Ordered list of non-empty strings (checklists, attachment filenames)."""
    kwargs.setdefault("required", False)
    kwargs.setdefault("default", list)
    if source:
        kwargs["source"] = source
    return serializers.ListField(child=serializers.CharField(max_length=255), **kwargs)


def money(*, source: str | None = None, **kwargs) -> serializers.DecimalField:
    if source:
        kwargs["source"] = source
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)
