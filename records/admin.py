"""
Django admin registrations for the records models.

Registering the models here allows administrators to inspect patients,
doctors and mappings via the ``/admin/`` URL during development.
Mappings are shown read-only for status so the admin cannot bypass the
active-to-inactive lifecycle.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import AuditEvent, Doctor, Mapping, Patient, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'is_active', 'is_staff', 'date_joined')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'gender', 'date_of_birth', 'owner', 'created_at')
    list_filter = ('gender',)
    search_fields = ('first_name', 'last_name', 'contact_number', 'owner__username')
    readonly_fields = ('owner',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'specialization', 'license_number', 'created_by')
    list_filter = ('specialization',)
    search_fields = ('first_name', 'last_name', 'license_number', 'email')


@admin.register(Mapping)
class MappingAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'status', 'assigned_at')
    list_filter = ('status',)
    search_fields = ('patient__first_name', 'patient__last_name', 'doctor__last_name')
    readonly_fields = ('status', 'assigned_at')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('user__username',)
