from rest_framework import serializers

from records.models import Doctor
from .text import clean_text


def _required(v, label):
    v = clean_text(v)
    if not v:
        raise serializers.ValidationError(f'{label} is required')
    return v


class DoctorWriteSerializer(serializers.Serializer):
    """Create payload; pass ``partial=True`` for updates."""
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    specialization = serializers.CharField(max_length=100)
    licenseNumber = serializers.CharField(source='license_number', max_length=64)
    contactNumber = serializers.CharField(source='contact_number', max_length=32)
    email = serializers.EmailField()

    def validate_firstName(self, v):
        return _required(v, 'First name')

    def validate_lastName(self, v):
        return _required(v, 'Last name')

    def validate_specialization(self, v):
        return _required(v, 'Specialization')

    def validate_licenseNumber(self, v):
        return _required(v, 'License number')

    def validate_contactNumber(self, v):
        return _required(v, 'Contact number')


def serialize_doctor(doctor: Doctor) -> dict:
    return {
        'id': doctor.id,
        'firstName': doctor.first_name,
        'lastName': doctor.last_name,
        'specialization': doctor.specialization,
        'licenseNumber': doctor.license_number,
        'contactNumber': doctor.contact_number,
        'email': doctor.email,
        'userId': doctor.created_by_id,
        'createdAt': doctor.created_at.isoformat() if doctor.created_at else None,
        'updatedAt': doctor.updated_at.isoformat() if doctor.updated_at else None,
    }
