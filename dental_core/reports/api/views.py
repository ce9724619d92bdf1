# dental_core/reports/api/views.py
from __future__ import annotations

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from dental_core.reports.api.serializers import DashboardMetricsSerializer
from dental_core.reports.services import build_dashboard_metrics, render_dashboard_report, report_filename
from dental_core.store.middleware import get_clinic_state


class DashboardMetricsView(APIView):
    @extend_schema(responses={200: DashboardMetricsSerializer}, tags=["Dashboard"])
    def get(self, request):
        metrics = build_dashboard_metrics(get_clinic_state(request))
        return Response(DashboardMetricsSerializer(metrics).data)


class DashboardReportView(APIView):
    """Downloadable plain-text snapshot of the dashboard."""

    @extend_schema(responses={(200, "text/plain"): OpenApiTypes.STR}, tags=["Dashboard"])
    def get(self, request):
        metrics = build_dashboard_metrics(get_clinic_state(request))
        response = HttpResponse(render_dashboard_report(metrics), content_type="text/plain; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{report_filename(metrics)}"'
        return response
