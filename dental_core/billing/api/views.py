# dental_core/billing/api/views.py
from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.fields import DateField
from rest_framework.response import Response

from dental_core.billing.api.serializers import FinancialRecordWriteSerializer, FinancialSummarySerializer
from dental_core.billing.entities import FinancialRecordPatch
from dental_core.billing.selectors import get_financial_record, list_financial_records, summarize
from dental_core.billing.serializers import FinancialRecordSerializer
from dental_core.billing.services import FinancialRecordService
from dental_core.common.api.views import StateViewSet

LIST_PARAMETERS = [
    OpenApiParameter("q", str, description="Description contains"),
    OpenApiParameter("type", str),
    OpenApiParameter("category", str),
    OpenApiParameter("status", str),
    OpenApiParameter("date_from", str),
    OpenApiParameter("date_to", str),
]


def _parse_date(value, field_name: str):
    if not value:
        return None
    try:
        return DateField().to_internal_value(value)
    except ValidationError:
        raise ValidationError({field_name: "Invalid date. Use YYYY-MM-DD."})


@extend_schema(tags=["Financial"])
class FinancialRecordViewSet(StateViewSet):
    serializer_class = FinancialRecordSerializer
    not_found_message = "Financial record not found."

    def _filtered(self, request):
        qp = request.query_params
        return list_financial_records(
            self.state,
            q=qp.get("q"),
            record_type=qp.get("type"),
            category=qp.get("category"),
            status=qp.get("status"),
            date_from=_parse_date(qp.get("date_from"), "date_from"),
            date_to=_parse_date(qp.get("date_to"), "date_to"),
        )

    @extend_schema(parameters=LIST_PARAMETERS)
    def list(self, request):
        return self.paginated_response(self._filtered(request), FinancialRecordSerializer)

    def retrieve(self, request, pk=None):
        return Response(FinancialRecordSerializer(self.get_or_404(get_financial_record, pk)).data)

    @extend_schema(request=FinancialRecordWriteSerializer, responses={201: FinancialRecordSerializer})
    def create(self, request):
        ser = FinancialRecordWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        record = FinancialRecordService.create_record(self.state, **ser.validated_data)
        return Response(FinancialRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=FinancialRecordWriteSerializer, responses={200: FinancialRecordSerializer})
    def partial_update(self, request, pk=None):
        ser = FinancialRecordWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        record = FinancialRecordService.update_record(
            self.state, record_id=pk, patch=FinancialRecordPatch.from_data(ser.validated_data)
        )
        return Response(FinancialRecordSerializer(record).data)

    def destroy(self, request, pk=None):
        FinancialRecordService.delete_record(self.state, record_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(parameters=LIST_PARAMETERS, responses={200: FinancialSummarySerializer})
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        return Response(FinancialSummarySerializer(summarize(self._filtered(request))).data)
