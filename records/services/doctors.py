import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from records.context import CallerContext
from records.models import Doctor
from records.permissions import editable_doctors
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def list_doctors():
    return Doctor.objects.order_by('id')


def get_doctor(doctor_id: int) -> Doctor:
    doctor = Doctor.objects.filter(pk=doctor_id).first()
    if doctor is None:
        raise NotFound('Doctor not found')
    return doctor


def create_doctor(ctx: CallerContext, data: dict) -> Doctor:
    fields = {k: v for k, v in data.items() if k in Doctor.MUTABLE_FIELDS}
    with transaction.atomic():
        doctor = Doctor.objects.create(created_by=ctx.user, **fields)
        log_action(user=ctx.user, action='doctor_create', object_type='doctor', object_id=doctor.id,
                   detail={'ip': ctx.ip})
    logger.info('doctor created id=%s by=%s', doctor.id, ctx.user_id)
    return doctor


def update_doctor(ctx: CallerContext, doctor_id: int, changes: dict) -> Doctor:
    with transaction.atomic():
        doctor = editable_doctors(ctx.user_id).select_for_update().filter(pk=doctor_id).first()
        if doctor is None:
            raise NotFound('Doctor not found')
        changed = [k for k in Doctor.MUTABLE_FIELDS if k in changes]
        if not changed:
            return doctor
        for field in changed:
            setattr(doctor, field, changes[field])
        doctor.save(update_fields=changed + ['updated_at'])
        log_action(user=ctx.user, action='doctor_update', object_type='doctor', object_id=doctor.id,
                   detail={'fields': changed, 'ip': ctx.ip})
    logger.info('doctor updated id=%s fields=%s', doctor.id, ','.join(changed))
    return doctor


def delete_doctor(ctx: CallerContext, doctor_id: int) -> None:
    with transaction.atomic():
        deleted, _ = editable_doctors(ctx.user_id).filter(pk=doctor_id).delete()
        if not deleted:
            raise NotFound('Doctor not found')
        log_action(user=ctx.user, action='doctor_delete', object_type='doctor', object_id=doctor_id,
                   detail={'ip': ctx.ip})
    logger.info('doctor deleted id=%s by=%s', doctor_id, ctx.user_id)
