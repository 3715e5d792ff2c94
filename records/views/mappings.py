"""
Patient-doctor mapping views.

``/api/mappings/<id>`` is shared by two operations: ``GET`` treats the
id as a patient id and lists that patient's active mappings, while
``DELETE`` treats it as a mapping id and deactivates the mapping.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from records.context import context_for
from records.responses import success
from records.serializers.mapping import MappingCreateSerializer, serialize_mapping
from records.services import mappings as svc


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def mappings_collection(request):
    ctx = context_for(request)
    if request.method == 'GET':
        return success({'mappings': [serialize_mapping(m) for m in svc.list_mappings(ctx)]})

    data = MappingCreateSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    mapping = svc.create_mapping(ctx, data.validated_data['patientId'], data.validated_data['doctorId'])
    return success({'mapping': serialize_mapping(mapping)}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def mapping_by_id(request, pk: int):
    ctx = context_for(request)
    if request.method == 'GET':
        mappings = svc.list_mappings(ctx, patient_id=pk)
        return success({'mappings': [serialize_mapping(m) for m in mappings]})

    svc.deactivate_mapping(ctx, pk)
    return success(message='Mapping deleted successfully')
