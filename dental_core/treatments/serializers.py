# dental_core/treatments/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import EntityCodec, money, string_list
from dental_core.treatments.entities import StageStatus, Treatment, TreatmentStage, TreatmentStatus


class TreatmentSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    patientId = serializers.CharField(source="patient_id", max_length=64)
    templateId = serializers.CharField(source="template_id", max_length=64)
    startDate = serializers.DateField(source="start_date")
    status = serializers.ChoiceField(choices=TreatmentStatus.choices)
    currentStageId = serializers.CharField(
        source="current_stage_id", max_length=64, allow_blank=True, required=False, default=""
    )
    dentistId = serializers.CharField(source="dentist_id", max_length=64)
    totalCost = money(source="total_cost", min_value=0)
    notes = serializers.CharField(allow_blank=True, allow_null=True, required=False)

    class Meta:
        entity = Treatment


class TreatmentStageSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    treatmentId = serializers.CharField(source="treatment_id", max_length=64)
    name = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=StageStatus.choices)
    orderIndex = serializers.IntegerField(source="order_index", min_value=1)
    scheduledDate = serializers.DateField(source="scheduled_date", required=False, allow_null=True)
    dateCompleted = serializers.DateField(source="date_completed", required=False, allow_null=True)
    notes = serializers.CharField(allow_blank=True, allow_null=True, required=False)
    attachments = string_list()
    checklistItems = string_list(source="checklist_items")
    completedChecklist = string_list(source="completed_checklist")

    class Meta:
        entity = TreatmentStage
