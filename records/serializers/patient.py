from django.utils import timezone
from rest_framework import serializers

from records.models import Patient
from .text import clean_text


class PatientWriteSerializer(serializers.Serializer):
    """Create payload; pass ``partial=True`` for updates."""
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    dateOfBirth = serializers.DateField(source='date_of_birth')
    gender = serializers.ChoiceField(choices=[c for c, _ in Patient.GENDER_CHOICES])
    contactNumber = serializers.CharField(source='contact_number', max_length=32)
    address = serializers.CharField(max_length=255)
    medicalHistory = serializers.CharField(source='medical_history', required=False, allow_blank=True)

    def validate_firstName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('First name is required')
        return v

    def validate_lastName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Last name is required')
        return v

    def validate_contactNumber(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Contact number is required')
        return v

    def validate_dateOfBirth(self, v):
        if v > timezone.localdate():
            raise serializers.ValidationError('Date of birth cannot be in the future')
        return v

    def validate_address(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Address is required')
        return v

    def validate_medicalHistory(self, v):
        return clean_text(v)


def serialize_patient(patient: Patient) -> dict:
    return {
        'id': patient.id,
        'firstName': patient.first_name,
        'lastName': patient.last_name,
        'dateOfBirth': patient.date_of_birth.isoformat() if patient.date_of_birth else None,
        'gender': patient.gender,
        'contactNumber': patient.contact_number,
        'address': patient.address,
        'medicalHistory': patient.medical_history,
        'userId': patient.owner_id,
        'createdAt': patient.created_at.isoformat() if patient.created_at else None,
        'updatedAt': patient.updated_at.isoformat() if patient.updated_at else None,
    }
