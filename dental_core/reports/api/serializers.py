# dental_core/reports/api/serializers.py
from __future__ import annotations

from rest_framework import serializers


class ActiveTreatmentRowSerializer(serializers.Serializer):
    treatmentId = serializers.CharField(source="treatment_id")
    patient = serializers.CharField()
    procedure = serializers.CharField()
    category = serializers.CharField()
    dentist = serializers.CharField()
    percentage = serializers.IntegerField()


class DashboardMetricsSerializer(serializers.Serializer):
    asOf = serializers.DateField(source="as_of")
    todayAppointments = serializers.IntegerField(source="today_appointments")
    inProgressTreatments = serializers.IntegerField(source="in_progress_treatments")
    monthRevenue = serializers.DecimalField(source="month_revenue", max_digits=14, decimal_places=2)
    activeTreatments = ActiveTreatmentRowSerializer(source="active_treatments", many=True)
