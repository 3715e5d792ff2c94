"""
Ownership guard for patients, mappings and doctors.

Ownership is applied as a query predicate: the id and the owner are
matched in the same lookup, so a record that belongs to someone else
comes back exactly like one that does not exist.  The predicate
functions below cover objects that are already loaded.
"""
from __future__ import annotations

from django.db.models import QuerySet

from .models import Doctor, Mapping, Patient


def can_access(user_id: int, patient: Patient) -> bool:
    """True iff ``patient`` belongs to ``user_id``."""
    return patient is not None and patient.owner_id == user_id


def authorize_mapping(user_id: int, mapping: Mapping) -> bool:
    """True iff the mapping's patient belongs to ``user_id``."""
    return mapping is not None and can_access(user_id, mapping.patient)


def can_edit_doctor(user_id: int, doctor: Doctor) -> bool:
    return doctor is not None and doctor.created_by_id == user_id


def owned_patients(user_id: int) -> QuerySet[Patient]:
    return Patient.objects.filter(owner_id=user_id)


def visible_mappings(user_id: int) -> QuerySet[Mapping]:
    """Mappings whose patient is owned by ``user_id``, with both sides loaded."""
    return (
        Mapping.objects
        .select_related('patient', 'doctor')
        .filter(patient__owner_id=user_id)
    )


def editable_doctors(user_id: int) -> QuerySet[Doctor]:
    return Doctor.objects.filter(created_by_id=user_id)
