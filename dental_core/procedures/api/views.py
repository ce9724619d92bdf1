# dental_core/procedures/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from dental_core.common.api.views import StateViewSet
from dental_core.procedures.api.serializers import (
    ProcedureTemplateWriteSerializer,
    StageMoveSerializer,
    StageSwapSerializer,
    StageTemplateWriteSerializer,
    TemplateStageAddSerializer,
    TemplateStageCreateSerializer,
    TemplateStageUpdateSerializer,
)
from dental_core.procedures.entities import (
    ProcedureTemplatePatch,
    ProcedureTemplateStagePatch,
    StageTemplatePatch,
)
from dental_core.procedures.selectors import (
    get_stage_template,
    get_stages_by_template_id,
    get_template,
    get_template_stage,
    list_templates,
)
from dental_core.procedures.serializers import (
    ProcedureTemplateSerializer,
    ProcedureTemplateStageSerializer,
    StageTemplateSerializer,
)
from dental_core.procedures.services import ProcedureTemplateService, StageTemplateService


@extend_schema(tags=["Procedure templates"])
class ProcedureTemplateViewSet(StateViewSet):
    serializer_class = ProcedureTemplateSerializer
    not_found_message = "Procedure template not found."

    def list(self, request):
        templates = list_templates(
            self.state,
            q=request.query_params.get("q"),
            category=request.query_params.get("category"),
        )
        return self.paginated_response(templates, ProcedureTemplateSerializer)

    def retrieve(self, request, pk=None):
        return Response(ProcedureTemplateSerializer(self.get_or_404(get_template, pk)).data)

    @extend_schema(request=ProcedureTemplateWriteSerializer, responses={201: ProcedureTemplateSerializer})
    def create(self, request):
        ser = ProcedureTemplateWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        template = ProcedureTemplateService.create_template(self.state, **ser.validated_data)
        return Response(ProcedureTemplateSerializer(template).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProcedureTemplateWriteSerializer, responses={200: ProcedureTemplateSerializer})
    def partial_update(self, request, pk=None):
        ser = ProcedureTemplateWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        template = ProcedureTemplateService.update_template(
            self.state, template_id=pk, patch=ProcedureTemplatePatch.from_data(ser.validated_data)
        )
        return Response(ProcedureTemplateSerializer(template).data)

    def destroy(self, request, pk=None):
        ProcedureTemplateService.delete_template(self.state, template_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=["GET"],
        responses={200: ProcedureTemplateStageSerializer(many=True)},
    )
    @extend_schema(
        methods=["POST"],
        request=TemplateStageAddSerializer,
        responses={201: ProcedureTemplateStageSerializer},
    )
    @action(detail=True, methods=["get", "post"], url_path="stages")
    def stages(self, request, pk=None):
        template = self.get_or_404(get_template, pk)

        if request.method == "GET":
            stages = get_stages_by_template_id(self.state, template.id)
            return Response(ProcedureTemplateStageSerializer(stages, many=True).data)

        ser = TemplateStageAddSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = ProcedureTemplateService.add_stage(self.state, template_id=template.id, **ser.validated_data)
        return Response(ProcedureTemplateStageSerializer(stage).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Procedure templates"])
class ProcedureTemplateStageViewSet(StateViewSet):
    serializer_class = ProcedureTemplateStageSerializer
    not_found_message = "Template stage not found."

    def list(self, request):
        template_id = request.query_params.get("template")
        if template_id:
            stages = get_stages_by_template_id(self.state, template_id)
        else:
            stages = self.state.procedure_template_stages.all()
        return self.paginated_response(stages, ProcedureTemplateStageSerializer)

    def retrieve(self, request, pk=None):
        return Response(ProcedureTemplateStageSerializer(self.get_or_404(get_template_stage, pk)).data)

    @extend_schema(request=TemplateStageCreateSerializer, responses={201: ProcedureTemplateStageSerializer})
    def create(self, request):
        ser = TemplateStageCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = ProcedureTemplateService.add_stage(self.state, **ser.validated_data)
        return Response(ProcedureTemplateStageSerializer(stage).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TemplateStageUpdateSerializer, responses={200: ProcedureTemplateStageSerializer})
    def partial_update(self, request, pk=None):
        ser = TemplateStageUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        stage = ProcedureTemplateService.update_stage(
            self.state, stage_id=pk, patch=ProcedureTemplateStagePatch.from_data(ser.validated_data)
        )
        return Response(ProcedureTemplateStageSerializer(stage).data)

    def destroy(self, request, pk=None):
        ProcedureTemplateService.delete_stage(self.state, stage_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=StageMoveSerializer, responses={200: ProcedureTemplateStageSerializer(many=True)})
    @action(detail=True, methods=["post"], url_path="move")
    def move(self, request, pk=None):
        ser = StageMoveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stages = ProcedureTemplateService.move_stage(self.state, stage_id=pk, **ser.validated_data)
        return Response(ProcedureTemplateStageSerializer(stages, many=True).data)

    @extend_schema(request=StageSwapSerializer, responses={200: ProcedureTemplateStageSerializer(many=True)})
    @action(detail=False, methods=["post"], url_path="swap")
    def swap(self, request):
        ser = StageSwapSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        swapped = ProcedureTemplateService.swap_stage_order(self.state, **ser.validated_data)
        return Response(ProcedureTemplateStageSerializer(list(swapped or ()), many=True).data)


@extend_schema(tags=["Stage templates"])
class StageTemplateViewSet(StateViewSet):
    serializer_class = StageTemplateSerializer
    not_found_message = "Stage template not found."

    def list(self, request):
        return self.paginated_response(self.state.stage_templates.all(), StageTemplateSerializer)

    def retrieve(self, request, pk=None):
        return Response(StageTemplateSerializer(self.get_or_404(get_stage_template, pk)).data)

    @extend_schema(request=StageTemplateWriteSerializer, responses={201: StageTemplateSerializer})
    def create(self, request):
        ser = StageTemplateWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        template = StageTemplateService.create_stage_template(self.state, **ser.validated_data)
        return Response(StageTemplateSerializer(template).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=StageTemplateWriteSerializer, responses={200: StageTemplateSerializer})
    def partial_update(self, request, pk=None):
        ser = StageTemplateWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        template = StageTemplateService.update_stage_template(
            self.state, stage_template_id=pk, patch=StageTemplatePatch.from_data(ser.validated_data)
        )
        return Response(StageTemplateSerializer(template).data)

    def destroy(self, request, pk=None):
        StageTemplateService.delete_stage_template(self.state, stage_template_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
