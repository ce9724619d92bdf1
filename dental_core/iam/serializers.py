# dental_core/iam/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import EntityCodec
from dental_core.iam.entities import SessionUser, User, UserRole


class UserSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=UserRole.choices)
    email = serializers.EmailField()
    specialty = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)

    class Meta:
        entity = User


class SessionUserSerializer(EntityCodec):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    role = serializers.CharField(max_length=32)

    class Meta:
        entity = SessionUser
