# dental_core/treatments/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import money, string_list
from dental_core.treatments.entities import StageStatus, TreatmentStatus


class TreatmentCreateSerializer(serializers.Serializer):
    patientId = serializers.CharField(source="patient_id", max_length=64)
    templateId = serializers.CharField(source="template_id", max_length=64)
    dentistId = serializers.CharField(source="dentist_id", max_length=64)
    startDate = serializers.DateField(source="start_date")
    totalCost = money(source="total_cost", required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    # {templateStageId: "YYYY-MM-DD"}
    stageDates = serializers.DictField(
        source="stage_dates", child=serializers.DateField(), required=False, default=dict
    )
    createFinancialRecord = serializers.BooleanField(source="create_financial_record", required=False, default=False)

    def validate_totalCost(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Treatment cost must be greater than zero.")
        return value


class TreatmentUpdateSerializer(serializers.Serializer):
    patientId = serializers.CharField(source="patient_id", max_length=64)
    templateId = serializers.CharField(source="template_id", max_length=64)
    dentistId = serializers.CharField(source="dentist_id", max_length=64)
    startDate = serializers.DateField(source="start_date")
    status = serializers.ChoiceField(choices=TreatmentStatus.choices)
    currentStageId = serializers.CharField(source="current_stage_id", max_length=64, allow_blank=True)
    totalCost = money(source="total_cost")
    notes = serializers.CharField(allow_blank=True, allow_null=True)


class TreatmentCreatedSerializer(serializers.Serializer):
    """Response of the instantiation endpoint."""
    treatment = serializers.DictField()
    stages = serializers.ListField(child=serializers.DictField())
    financialRecord = serializers.DictField(allow_null=True)


class ProgressSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completedCount = serializers.IntegerField(source="completed_count")
    inProgressCount = serializers.IntegerField(source="in_progress_count")
    skippedCount = serializers.IntegerField(source="skipped_count")
    percentage = serializers.IntegerField()


class TreatmentStageWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=StageStatus.choices)
    scheduledDate = serializers.DateField(source="scheduled_date", allow_null=True)
    dateCompleted = serializers.DateField(source="date_completed", allow_null=True)
    notes = serializers.CharField(allow_blank=True, allow_null=True)


class TreatmentStageCreateSerializer(serializers.Serializer):
    treatmentId = serializers.CharField(source="treatment_id", max_length=64)
    name = serializers.CharField(max_length=255)
    scheduledDate = serializers.DateField(source="scheduled_date", required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    checklistItems = string_list(source="checklist_items")


class StageStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=StageStatus.choices)


class ChecklistToggleSerializer(serializers.Serializer):
    item = serializers.CharField(max_length=255)


class AttachmentsSerializer(serializers.Serializer):
    filenames = serializers.ListField(child=serializers.CharField(max_length=255), allow_empty=False)
