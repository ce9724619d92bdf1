# dental_core/procedures/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import EntityCodec, money, string_list
from dental_core.procedures.entities import ProcedureTemplate, ProcedureTemplateStage, StageTemplate


class ProcedureTemplateSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=128)
    baseCost = money(source="base_cost", min_value=0)
    estimatedDuration = serializers.CharField(source="estimated_duration", max_length=64, allow_blank=True)
    description = serializers.CharField(allow_blank=True, required=False, default="")

    class Meta:
        entity = ProcedureTemplate


class ProcedureTemplateStageSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    templateId = serializers.CharField(source="template_id", max_length=64)
    name = serializers.CharField(max_length=255)
    orderIndex = serializers.IntegerField(source="order_index", min_value=1)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    checklistItems = string_list(source="checklist_items")

    class Meta:
        entity = ProcedureTemplateStage


class StageTemplateSerializer(EntityCodec):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    defaultDuration = serializers.CharField(
        source="default_duration", max_length=64, allow_blank=True, required=False, default=""
    )
    checklistItems = string_list(source="checklist_items")

    class Meta:
        entity = StageTemplate
