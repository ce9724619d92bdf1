# dental_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from dental_core.billing.api.views import FinancialRecordViewSet
from dental_core.iam.api.views import LoginView, LogoutView, MeView, UserViewSet
from dental_core.patients.api.views import PatientViewSet
from dental_core.procedures.api.views import (
    ProcedureTemplateStageViewSet,
    ProcedureTemplateViewSet,
    StageTemplateViewSet,
)
from dental_core.reports.api.views import DashboardMetricsView, DashboardReportView
from dental_core.store.api.views import DataResetView
from dental_core.treatments.api.views import TreatmentStageViewSet, TreatmentViewSet

router = DefaultRouter()

router.register(r"users", UserViewSet, basename="users")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"procedure-templates", ProcedureTemplateViewSet, basename="procedure-templates")
router.register(r"procedure-template-stages", ProcedureTemplateStageViewSet, basename="procedure-template-stages")
router.register(r"stage-templates", StageTemplateViewSet, basename="stage-templates")
router.register(r"treatments", TreatmentViewSet, basename="treatments")
router.register(r"treatment-stages", TreatmentStageViewSet, basename="treatment-stages")
router.register(r"financial-records", FinancialRecordViewSet, basename="financial-records")

urlpatterns = [
    # Demo login gate + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    path("dashboard/metrics/", DashboardMetricsView.as_view(), name="dashboard-metrics"),
    path("dashboard/report/", DashboardReportView.as_view(), name="dashboard-report"),
    path("data/reset/", DataResetView.as_view(), name="data-reset"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
