# dental_core/billing/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.billing.entities import FinancialRecord, RecordStatus, RecordType, ResponsibleType
from dental_core.common.codecs import EntityCodec, money


class FinancialRecordSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    treatmentId = serializers.CharField(
        source="treatment_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    type = serializers.ChoiceField(choices=RecordType.choices)
    amount = money(min_value=0)
    date = serializers.DateField()
    paymentDate = serializers.DateField(source="payment_date", required=False, allow_null=True)
    description = serializers.CharField(max_length=500, allow_blank=True)
    category = serializers.CharField(max_length=128)
    status = serializers.ChoiceField(choices=RecordStatus.choices)
    responsibleType = serializers.ChoiceField(source="responsible_type", choices=ResponsibleType.choices)
    patientId = serializers.CharField(
        source="patient_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    createdBy = serializers.CharField(source="created_by", max_length=64)

    class Meta:
        entity = FinancialRecord
