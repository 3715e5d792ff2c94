"""
Lifecycle of patient-doctor mappings.

A mapping is created ``active`` and can only be moved to ``inactive``;
rows are never removed.  The rule that a (patient, doctor) pair has at
most one active mapping is enforced by the ``uniq_active_mapping_per_pair``
database constraint.  Creation therefore inserts directly and turns a
constraint violation into :class:`MappingConflict`; there is no
existence check before the insert, so two concurrent requests for the
same pair resolve to one success and one conflict.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from records.context import CallerContext
from records.exceptions import MappingConflict
from records.models import Doctor, Mapping
from records.permissions import owned_patients, visible_mappings
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def create_mapping(ctx: CallerContext, patient_id: int, doctor_id: int) -> Mapping:
    patient = owned_patients(ctx.user_id).filter(pk=patient_id).first()
    if patient is None:
        raise NotFound('Patient not found')
    doctor = Doctor.objects.filter(pk=doctor_id).first()
    if doctor is None:
        raise NotFound('Doctor not found')

    try:
        with transaction.atomic():
            mapping = Mapping.objects.create(
                patient=patient,
                doctor=doctor,
                status=Mapping.STATUS_ACTIVE,
                assigned_at=timezone.now(),
            )
            log_action(user=ctx.user, action='mapping_create', object_type='mapping', object_id=mapping.id,
                       detail={'patientId': patient.id, 'doctorId': doctor.id, 'ip': ctx.ip})
    except IntegrityError:
        # Only the active-pair constraint is a conflict; anything else (a
        # patient or doctor deleted mid-request) is re-raised.
        if Mapping.objects.filter(patient_id=patient.id, doctor_id=doctor.id,
                                  status=Mapping.STATUS_ACTIVE).exists():
            logger.warning('mapping conflict patient=%s doctor=%s user=%s', patient.id, doctor.id, ctx.user_id)
            raise MappingConflict()
        raise

    logger.info('mapping created id=%s patient=%s doctor=%s', mapping.id, patient.id, doctor.id)
    return mapping


def list_mappings(ctx: CallerContext, patient_id: Optional[int] = None):
    """Mappings visible to the caller, ordered by id.

    With ``patient_id`` only that patient's active mappings are returned;
    a patient the caller does not own yields an empty result.
    """
    qs = visible_mappings(ctx.user_id)
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id, status=Mapping.STATUS_ACTIVE)
    return qs.order_by('id')


def get_mapping(ctx: CallerContext, mapping_id: int) -> Mapping:
    mapping = visible_mappings(ctx.user_id).filter(pk=mapping_id).first()
    if mapping is None:
        raise NotFound('Mapping not found')
    return mapping


def deactivate_mapping(ctx: CallerContext, mapping_id: int) -> Mapping:
    """Soft-delete a mapping by moving it to ``inactive``.

    The current status is not checked, so repeating the call on an
    inactive mapping succeeds and leaves it inactive.
    """
    with transaction.atomic():
        mapping = get_mapping(ctx, mapping_id)
        mapping.status = Mapping.STATUS_INACTIVE
        mapping.save(update_fields=['status', 'updated_at'])
        log_action(user=ctx.user, action='mapping_deactivate', object_type='mapping', object_id=mapping.id,
                   detail={'ip': ctx.ip})
    logger.info('mapping deactivated id=%s user=%s', mapping.id, ctx.user_id)
    return mapping
