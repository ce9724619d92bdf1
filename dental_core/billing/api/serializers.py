# dental_core/billing/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.billing.entities import RecordStatus, RecordType, ResponsibleType
from dental_core.common.codecs import money


class FinancialRecordWriteSerializer(serializers.Serializer):
    treatmentId = serializers.CharField(
        source="treatment_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    type = serializers.ChoiceField(choices=RecordType.choices)
    amount = money()
    date = serializers.DateField()
    paymentDate = serializers.DateField(source="payment_date", required=False, allow_null=True)
    description = serializers.CharField(max_length=500)
    category = serializers.CharField(max_length=128)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False, default=RecordStatus.PENDING)
    responsibleType = serializers.ChoiceField(
        source="responsible_type", choices=ResponsibleType.choices, required=False, default=ResponsibleType.PATIENT
    )
    patientId = serializers.CharField(
        source="patient_id", max_length=64, required=False, allow_blank=True, allow_null=True
    )
    createdBy = serializers.CharField(source="created_by", max_length=64)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value


class FinancialSummarySerializer(serializers.Serializer):
    totalIncome = serializers.DecimalField(source="total_income", max_digits=14, decimal_places=2)
    totalExpense = serializers.DecimalField(source="total_expense", max_digits=14, decimal_places=2)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    pendingAmount = serializers.DecimalField(source="pending_amount", max_digits=14, decimal_places=2)
    incomeByCategory = serializers.DictField(
        source="income_by_category", child=serializers.DecimalField(max_digits=14, decimal_places=2)
    )
