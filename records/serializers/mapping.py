from rest_framework import serializers

from records.models import Mapping
from .doctor import serialize_doctor
from .patient import serialize_patient


class MappingCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1, error_messages={'invalid': 'Valid patient ID is required'})
    doctorId = serializers.IntegerField(min_value=1, error_messages={'invalid': 'Valid doctor ID is required'})


def serialize_mapping(mapping: Mapping) -> dict:
    return {
        'id': mapping.id,
        'patientId': mapping.patient_id,
        'doctorId': mapping.doctor_id,
        'patient': serialize_patient(mapping.patient),
        'doctor': serialize_doctor(mapping.doctor),
        'status': mapping.status,
        'assignedDate': mapping.assigned_at.isoformat() if mapping.assigned_at else None,
        'createdAt': mapping.created_at.isoformat() if mapping.created_at else None,
        'updatedAt': mapping.updated_at.isoformat() if mapping.updated_at else None,
    }
