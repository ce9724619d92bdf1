# dental_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers


class PatientWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    nationalId = serializers.CharField(source="national_id", max_length=32)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    birthDate = serializers.DateField(source="birth_date")
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    insuranceId = serializers.CharField(
        source="insurance_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    insuranceName = serializers.CharField(
        source="insurance_name", max_length=128, required=False, allow_blank=True, allow_null=True
    )
