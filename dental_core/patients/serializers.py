# dental_core/patients/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import EntityCodec
from dental_core.patients.entities import Patient


class PatientSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    nationalId = serializers.CharField(source="national_id", max_length=32)
    phone = serializers.CharField(max_length=32, allow_blank=True)
    email = serializers.EmailField(allow_blank=True)
    birthDate = serializers.DateField(source="birth_date")
    address = serializers.CharField(max_length=500, allow_blank=True)
    createdAt = serializers.DateField(source="created_at")
    insuranceId = serializers.CharField(
        source="insurance_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    insuranceName = serializers.CharField(
        source="insurance_name", max_length=128, required=False, allow_blank=True, allow_null=True
    )

    class Meta:
        entity = Patient
