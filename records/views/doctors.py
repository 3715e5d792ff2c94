"""
Doctor views.

Any authenticated user may read doctors; only the user who created a
doctor may change or remove it.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from records.context import context_for
from records.responses import success
from records.serializers.doctor import DoctorWriteSerializer, serialize_doctor
from records.services import doctors as svc


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def doctors_collection(request):
    if request.method == 'GET':
        return success({'doctors': [serialize_doctor(d) for d in svc.list_doctors()]})

    data = DoctorWriteSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    doctor = svc.create_doctor(context_for(request), data.validated_data)
    return success({'doctor': serialize_doctor(doctor)}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def doctor_detail(request, pk: int):
    if request.method == 'GET':
        return success({'doctor': serialize_doctor(svc.get_doctor(pk))})

    ctx = context_for(request)
    if request.method == 'PUT':
        data = DoctorWriteSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        return success({'doctor': serialize_doctor(svc.update_doctor(ctx, pk, data.validated_data))})

    svc.delete_doctor(ctx, pk)
    return success(message='Doctor deleted successfully')
