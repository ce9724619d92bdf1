# dental_core/store/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from dental_core.store.middleware import get_clinic_state


class ResetResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    collections = serializers.DictField(child=serializers.IntegerField())


class DataResetView(APIView):
    """Demo reset: every collection back to the embedded seed."""

    @extend_schema(request=None, responses={200: ResetResponseSerializer}, tags=["Data"])
    def post(self, request):
        state = get_clinic_state(request)
        state.reset_all_data()
        counts = {name: len(collection) for name, collection in state.collections.items()}
        return Response({"detail": "All data reset to seed.", "collections": counts}, status=status.HTTP_200_OK)
