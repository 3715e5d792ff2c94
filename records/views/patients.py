"""
Patient management views.

Every handler is scoped to the authenticated user: patients created by
other users are reported as not found, never as forbidden.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from records.context import context_for
from records.responses import success
from records.serializers.patient import PatientWriteSerializer, serialize_patient
from records.services import patients as svc


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients_collection(request):
    ctx = context_for(request)
    if request.method == 'GET':
        patients = [serialize_patient(p) for p in svc.list_patients(ctx)]
        return success({'patients': patients})

    data = PatientWriteSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    patient = svc.create_patient(ctx, data.validated_data)
    return success({'patient': serialize_patient(patient)}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk: int):
    ctx = context_for(request)
    if request.method == 'GET':
        return success({'patient': serialize_patient(svc.get_patient(ctx, pk))})

    if request.method == 'PUT':
        data = PatientWriteSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        patient = svc.update_patient(ctx, pk, data.validated_data)
        return success({'patient': serialize_patient(patient)})

    svc.delete_patient(ctx, pk)
    return success(message='Patient deleted successfully')
