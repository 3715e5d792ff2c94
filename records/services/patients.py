import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from records.context import CallerContext
from records.models import Patient
from records.permissions import owned_patients
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def list_patients(ctx: CallerContext):
    return owned_patients(ctx.user_id).order_by('id')


def get_patient(ctx: CallerContext, patient_id: int) -> Patient:
    patient = owned_patients(ctx.user_id).filter(pk=patient_id).first()
    if patient is None:
        raise NotFound('Patient not found')
    return patient


def create_patient(ctx: CallerContext, data: dict) -> Patient:
    fields = {k: v for k, v in data.items() if k in Patient.MUTABLE_FIELDS}
    with transaction.atomic():
        patient = Patient.objects.create(owner=ctx.user, **fields)
        log_action(user=ctx.user, action='patient_create', object_type='patient', object_id=patient.id,
                   detail={'ip': ctx.ip})
    logger.info('patient created id=%s owner=%s', patient.id, ctx.user_id)
    return patient


def update_patient(ctx: CallerContext, patient_id: int, changes: dict) -> Patient:
    """Apply a partial update; fields missing from ``changes`` stay as they are.

    An empty change set returns the record untouched without writing.
    """
    with transaction.atomic():
        patient = owned_patients(ctx.user_id).select_for_update().filter(pk=patient_id).first()
        if patient is None:
            raise NotFound('Patient not found')
        changed = [k for k in Patient.MUTABLE_FIELDS if k in changes]
        if not changed:
            return patient
        for field in changed:
            setattr(patient, field, changes[field])
        patient.save(update_fields=changed + ['updated_at'])
        log_action(user=ctx.user, action='patient_update', object_type='patient', object_id=patient.id,
                   detail={'fields': changed, 'ip': ctx.ip})
    logger.info('patient updated id=%s fields=%s', patient.id, ','.join(changed))
    return patient


def delete_patient(ctx: CallerContext, patient_id: int) -> None:
    with transaction.atomic():
        deleted, _ = owned_patients(ctx.user_id).filter(pk=patient_id).delete()
        if not deleted:
            raise NotFound('Patient not found')
        log_action(user=ctx.user, action='patient_delete', object_type='patient', object_id=patient_id,
                   detail={'ip': ctx.ip})
    logger.info('patient deleted id=%s owner=%s', patient_id, ctx.user_id)
