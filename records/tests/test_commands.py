import pytest
from django.core.management import call_command

from records.models import Doctor, Mapping, Patient, User

pytestmark = pytest.mark.django_db


def test_seed_demo_is_idempotent():
    call_command('seed_demo')
    call_command('seed_demo')

    user = User.objects.get(username='demo')
    assert user.check_password('DemoPass!2024')
    assert Patient.objects.filter(owner=user).count() == 1
    assert Doctor.objects.filter(created_by=user).count() == 1
    assert Mapping.objects.filter(patient__owner=user, status=Mapping.STATUS_ACTIVE).count() == 1


def test_seed_demo_resets_password():
    User.objects.create_user(username='demo', password='something-else')
    call_command('seed_demo', '--password', 'N3w!Passw0rd')
    assert User.objects.get(username='demo').check_password('N3w!Passw0rd')
