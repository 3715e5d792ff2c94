"""
Database models for the clinic records backend.

These models capture patients, doctors and the assignments between
them.  Patients belong to the user who created them; a mapping is
owned indirectly through its patient.  Where possible field names
mirror the camelCase keys of the JSON API so the conversion in the
views stays mechanical.
"""
from __future__ import annotations

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import Q
from django.utils import timezone


class User(AbstractUser):
    """Account that owns patients and creates doctors."""

    def __str__(self) -> str:
        return self.username


class Patient(models.Model):
    """A patient record scoped to the user that created it.

    ``owner`` is stamped at creation and never rewritten; every lookup
    filters on it so records of other users behave as if they did not
    exist.
    """
    GENDER_MALE = 'male'
    GENDER_FEMALE = 'female'
    GENDER_OTHER = 'other'
    GENDER_CHOICES = (
        (GENDER_MALE, 'Male'),
        (GENDER_FEMALE, 'Female'),
        (GENDER_OTHER, 'Other'),
    )

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    contact_number = models.CharField(max_length=32)
    address = models.CharField(max_length=255)
    medical_history = models.TextField(blank=True, default='')
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='patients'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Fields a client may change after creation; excludes ``owner``.
    MUTABLE_FIELDS = (
        'first_name', 'last_name', 'date_of_birth', 'gender',
        'contact_number', 'address', 'medical_history',
    )

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['owner', 'id'], name='records_pat_owner_i_5d1c2e_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} (#{self.pk})"


class Doctor(models.Model):
    """A doctor readable by every user but editable only by its creator."""
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    specialization = models.CharField(max_length=100)
    license_number = models.CharField(max_length=64)
    contact_number = models.CharField(max_length=32)
    email = models.EmailField()
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='doctors_created',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    MUTABLE_FIELDS = (
        'first_name', 'last_name', 'specialization',
        'license_number', 'contact_number', 'email',
    )

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"Dr. {self.first_name} {self.last_name} ({self.specialization})"


class Mapping(models.Model):
    """Assignment of a patient to a doctor.

    A mapping starts ``active`` and can only move to ``inactive``; the
    row is kept afterwards.  The database guarantees at most one active
    row per (patient, doctor) pair, so concurrent inserts for the same
    pair cannot both succeed.
    """
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = ((STATUS_ACTIVE, 'active'), (STATUS_INACTIVE, 'inactive'))

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='mappings')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='mappings')
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    assigned_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['patient', 'doctor'],
                condition=Q(status='active'),
                name='uniq_active_mapping_per_pair',
            ),
        ]
        indexes = [
            models.Index(fields=['patient', 'status'], name='records_map_patient_8a0f4b_idx'),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    def __str__(self) -> str:
        return f"mapping p={self.patient_id} d={self.doctor_id} ({self.status})"


class AuditEvent(models.Model):
    """Append-only record of logins and mutations."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='records_aud_action_3e7b91_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='records_aud_object__c42d6a_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
