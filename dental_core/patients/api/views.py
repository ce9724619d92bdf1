# dental_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from dental_core.common.api.views import StateViewSet
from dental_core.patients.api.serializers import PatientWriteSerializer
from dental_core.patients.entities import PatientPatch
from dental_core.patients.selectors import get_patient, get_treatments_by_patient_id, search_patients
from dental_core.patients.serializers import PatientSerializer
from dental_core.patients.services import PatientService
from dental_core.treatments.serializers import TreatmentSerializer


@extend_schema(tags=["Patients"])
class PatientViewSet(StateViewSet):
    serializer_class = PatientSerializer
    not_found_message = "Patient not found."

    def list(self, request):
        q = request.query_params.get("q", "").strip()
        return self.paginated_response(search_patients(self.state, q=q), PatientSerializer)

    def retrieve(self, request, pk=None):
        return Response(PatientSerializer(self.get_or_404(get_patient, pk)).data)

    @extend_schema(request=PatientWriteSerializer, responses={201: PatientSerializer})
    def create(self, request):
        ser = PatientWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        patient = PatientService.create_patient(self.state, **ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PatientWriteSerializer, responses={200: PatientSerializer})
    def partial_update(self, request, pk=None):
        ser = PatientWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        patient = PatientService.update_patient(
            self.state, patient_id=pk, patch=PatientPatch.from_data(ser.validated_data)
        )
        return Response(PatientSerializer(patient).data)

    def destroy(self, request, pk=None):
        PatientService.delete_patient(self.state, patient_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: TreatmentSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="treatments")
    def treatments(self, request, pk=None):
        patient = self.get_or_404(get_patient, pk)
        return Response(TreatmentSerializer(get_treatments_by_patient_id(self.state, patient.id), many=True).data)
