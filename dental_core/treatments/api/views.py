# dental_core/treatments/api/views.py
from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from dental_core.billing.selectors import get_financial_by_treatment_id
from dental_core.billing.serializers import FinancialRecordSerializer
from dental_core.common.api.views import StateViewSet
from dental_core.treatments.api.serializers import (
    AttachmentsSerializer,
    ChecklistToggleSerializer,
    ProgressSerializer,
    StageStatusSerializer,
    TreatmentCreatedSerializer,
    TreatmentCreateSerializer,
    TreatmentStageCreateSerializer,
    TreatmentStageWriteSerializer,
    TreatmentUpdateSerializer,
)
from dental_core.treatments.entities import TreatmentPatch, TreatmentStagePatch
from dental_core.treatments.selectors import (
    get_stages_by_treatment_id,
    get_treatment,
    get_treatment_progress,
    get_treatment_stage,
    list_treatments,
)
from dental_core.treatments.serializers import TreatmentSerializer, TreatmentStageSerializer
from dental_core.treatments.services import TreatmentService, TreatmentStageService


@extend_schema(tags=["Treatments"])
class TreatmentViewSet(StateViewSet):
    serializer_class = TreatmentSerializer
    not_found_message = "Treatment not found."

    @extend_schema(
        parameters=[
            OpenApiParameter("q", str, description="Patient or procedure name"),
            OpenApiParameter("status", str),
            OpenApiParameter("patient", str),
            OpenApiParameter("dentist", str),
        ]
    )
    def list(self, request):
        qp = request.query_params
        treatments = list_treatments(
            self.state,
            q=qp.get("q"),
            status=qp.get("status"),
            patient_id=qp.get("patient"),
            dentist_id=qp.get("dentist"),
        )
        return self.paginated_response(treatments, TreatmentSerializer)

    def retrieve(self, request, pk=None):
        return Response(TreatmentSerializer(self.get_or_404(get_treatment, pk)).data)

    @extend_schema(request=TreatmentCreateSerializer, responses={201: TreatmentCreatedSerializer})
    def create(self, request):
        ser = TreatmentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        treatment, stages, record = TreatmentService.create_treatment(self.state, **ser.validated_data)
        return Response(
            {
                "treatment": TreatmentSerializer(treatment).data,
                "stages": TreatmentStageSerializer(stages, many=True).data,
                "financialRecord": FinancialRecordSerializer(record).data if record else None,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=TreatmentUpdateSerializer, responses={200: TreatmentSerializer})
    def partial_update(self, request, pk=None):
        ser = TreatmentUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        treatment = TreatmentService.update_treatment(
            self.state, treatment_id=pk, patch=TreatmentPatch.from_data(ser.validated_data)
        )
        return Response(TreatmentSerializer(treatment).data)

    def destroy(self, request, pk=None):
        TreatmentService.delete_treatment(self.state, treatment_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: TreatmentStageSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="stages")
    def stages(self, request, pk=None):
        treatment = self.get_or_404(get_treatment, pk)
        return Response(TreatmentStageSerializer(get_stages_by_treatment_id(self.state, treatment.id), many=True).data)

    @extend_schema(responses={200: ProgressSerializer})
    @action(detail=True, methods=["get"], url_path="progress")
    def progress(self, request, pk=None):
        treatment = self.get_or_404(get_treatment, pk)
        return Response(ProgressSerializer(get_treatment_progress(self.state, treatment.id)).data)

    @extend_schema(responses={200: FinancialRecordSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="financial-records")
    def financial_records(self, request, pk=None):
        treatment = self.get_or_404(get_treatment, pk)
        records = get_financial_by_treatment_id(self.state, treatment.id)
        return Response(FinancialRecordSerializer(records, many=True).data)


@extend_schema(tags=["Treatments"])
class TreatmentStageViewSet(StateViewSet):
    serializer_class = TreatmentStageSerializer
    not_found_message = "Treatment stage not found."

    def list(self, request):
        treatment_id = request.query_params.get("treatment")
        if treatment_id:
            stages = get_stages_by_treatment_id(self.state, treatment_id)
        else:
            stages = self.state.treatment_stages.all()
        return self.paginated_response(stages, TreatmentStageSerializer)

    def retrieve(self, request, pk=None):
        return Response(TreatmentStageSerializer(self.get_or_404(get_treatment_stage, pk)).data)

    @extend_schema(request=TreatmentStageCreateSerializer, responses={201: TreatmentStageSerializer})
    def create(self, request):
        ser = TreatmentStageCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = TreatmentStageService.add_stage(self.state, **ser.validated_data)
        return Response(TreatmentStageSerializer(stage).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TreatmentStageWriteSerializer, responses={200: TreatmentStageSerializer})
    def partial_update(self, request, pk=None):
        ser = TreatmentStageWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        stage = TreatmentStageService.update_stage(
            self.state, stage_id=pk, patch=TreatmentStagePatch.from_data(ser.validated_data)
        )
        return Response(TreatmentStageSerializer(stage).data)

    def destroy(self, request, pk=None):
        TreatmentStageService.delete_stage(self.state, stage_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=StageStatusSerializer, responses={200: TreatmentStageSerializer})
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        ser = StageStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = TreatmentStageService.set_status(self.state, stage_id=pk, status=ser.validated_data["status"])
        return Response(TreatmentStageSerializer(stage).data)

    @extend_schema(request=ChecklistToggleSerializer, responses={200: TreatmentStageSerializer})
    @action(detail=True, methods=["post"], url_path="checklist/toggle")
    def toggle_checklist(self, request, pk=None):
        ser = ChecklistToggleSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = TreatmentStageService.toggle_checklist_item(self.state, stage_id=pk, item=ser.validated_data["item"])
        return Response(TreatmentStageSerializer(stage).data)

    @extend_schema(request=AttachmentsSerializer, responses={200: TreatmentStageSerializer})
    @action(detail=True, methods=["post"], url_path="attachments")
    def attachments(self, request, pk=None):
        ser = AttachmentsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        stage = TreatmentStageService.add_attachments(
            self.state, stage_id=pk, filenames=ser.validated_data["filenames"]
        )
        return Response(TreatmentStageSerializer(stage).data)
