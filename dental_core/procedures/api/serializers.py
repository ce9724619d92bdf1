# dental_core/procedures/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from dental_core.common.codecs import money, string_list
from dental_core.procedures.services import MOVE_DOWN, MOVE_UP


class ProcedureTemplateWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=128)
    baseCost = money(source="base_cost", min_value=0)
    estimatedDuration = serializers.CharField(
        source="estimated_duration", max_length=64, required=False, allow_blank=True, default=""
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")


class TemplateStageAddSerializer(serializers.Serializer):
    """Either stageTemplateId (copy a blueprint) or a custom name."""
    stageTemplateId = serializers.CharField(source="stage_template_id", max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    checklistItems = string_list(source="checklist_items")

    def validate(self, attrs):
        if not attrs.get("stage_template_id") and not (attrs.get("name") or "").strip():
            raise serializers.ValidationError({"name": "Provide stageTemplateId or a custom name."})
        return attrs


class TemplateStageCreateSerializer(TemplateStageAddSerializer):
    templateId = serializers.CharField(source="template_id", max_length=64)


class TemplateStageUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True)
    checklistItems = string_list(source="checklist_items")


class StageMoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=[MOVE_UP, MOVE_DOWN])


class StageSwapSerializer(serializers.Serializer):
    firstId = serializers.CharField(source="first_id", max_length=64)
    secondId = serializers.CharField(source="second_id", max_length=64)


class StageTemplateWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    defaultDuration = serializers.CharField(
        source="default_duration", max_length=64, required=False, allow_blank=True, default=""
    )
    checklistItems = string_list(source="checklist_items")
