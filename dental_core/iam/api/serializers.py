# dental_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.iam.entities import UserRole


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class UserWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=UserRole.choices)
    email = serializers.EmailField()
    specialty = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
