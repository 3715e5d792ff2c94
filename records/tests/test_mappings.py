from datetime import date

import pytest
from django.db import IntegrityError, transaction
from rest_framework.test import APIClient

from records.models import AuditEvent, Doctor, Mapping, Patient, User

pytestmark = pytest.mark.django_db


@pytest.fixture
def alice():
    return User.objects.create_user(username='alice', password='P@ssw0rd1')


@pytest.fixture
def bob():
    return User.objects.create_user(username='bob', password='P@ssw0rd1')


@pytest.fixture
def patient(alice):
    return Patient.objects.create(
        owner=alice, first_name='Jane', last_name='Doe', date_of_birth=date(1990, 1, 1),
        gender='female', contact_number='555-1234', address='1 Main St',
    )


@pytest.fixture
def doctor(alice):
    return Doctor.objects.create(
        created_by=alice, first_name='John', last_name='Smith', specialization='Cardiology',
        license_number='LIC1', contact_number='555-9999', email='smith@x.com',
    )


def client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def test_assign_duplicate_and_deactivate(alice, patient, doctor):
    client = client_for(alice)
    payload = {'patientId': patient.id, 'doctorId': doctor.id}

    r = client.post('/api/mappings', payload, format='json')
    assert r.status_code == 201
    mapping = r.data['data']['mapping']
    assert mapping['status'] == 'active'
    assert mapping['patientId'] == patient.id
    assert mapping['doctor']['lastName'] == 'Smith'
    assert mapping['assignedDate']

    r = client.post('/api/mappings', payload, format='json')
    assert r.status_code == 409
    assert r.data == {'status': 'error', 'message': 'Mapping already exists'}
    assert Mapping.objects.count() == 1

    r = client.get(f'/api/mappings/{patient.id}')
    assert [m['id'] for m in r.data['data']['mappings']] == [mapping['id']]

    r = client.delete(f"/api/mappings/{mapping['id']}")
    assert r.status_code == 200
    assert r.data == {'status': 'success', 'message': 'Mapping deleted successfully'}

    # The row survives as inactive
    r = client.get('/api/mappings')
    assert [(m['id'], m['status']) for m in r.data['data']['mappings']] == [(mapping['id'], 'inactive')]
    assert Mapping.objects.get(pk=mapping['id']).status == Mapping.STATUS_INACTIVE

    r = client.get(f'/api/mappings/{patient.id}')
    assert r.data['data']['mappings'] == []

    actions = list(AuditEvent.objects.filter(object_type='mapping').values_list('action', flat=True))
    assert actions == ['mapping_create', 'mapping_deactivate']


def test_constraint_rejects_second_active_row(patient, doctor):
    Mapping.objects.create(patient=patient, doctor=doctor)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Mapping.objects.create(patient=patient, doctor=doctor)
    # Inactive rows do not count against the pair
    Mapping.objects.create(patient=patient, doctor=doctor, status=Mapping.STATUS_INACTIVE)
    assert Mapping.objects.filter(patient=patient, doctor=doctor).count() == 2


def test_reassign_after_deactivate_creates_new_row(alice, patient, doctor):
    client = client_for(alice)
    payload = {'patientId': patient.id, 'doctorId': doctor.id}
    first = client.post('/api/mappings', payload, format='json').data['data']['mapping']
    client.delete(f"/api/mappings/{first['id']}")

    r = client.post('/api/mappings', payload, format='json')
    assert r.status_code == 201
    second = r.data['data']['mapping']
    assert second['id'] != first['id']
    assert Mapping.objects.filter(patient=patient, doctor=doctor, status=Mapping.STATUS_ACTIVE).count() == 1


def test_mapping_requires_owned_patient_and_existing_doctor(bob, patient, doctor):
    client = client_for(bob)
    r = client.post('/api/mappings', {'patientId': patient.id, 'doctorId': doctor.id}, format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'Patient not found'

    own = Patient.objects.create(
        owner=bob, first_name='Tom', last_name='Roe', date_of_birth=date(1985, 6, 15),
        gender='male', contact_number='555-0000', address='2 Side St',
    )
    r = client.post('/api/mappings', {'patientId': own.id, 'doctorId': 987654}, format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'Doctor not found'

    # Doctors are shared, so bob can assign alice's doctor to his own patient
    r = client.post('/api/mappings', {'patientId': own.id, 'doctorId': doctor.id}, format='json')
    assert r.status_code == 201


@pytest.mark.parametrize('payload', [
    {'patientId': 'abc', 'doctorId': 1},
    {'patientId': 0, 'doctorId': 1},
    {'doctorId': 1},
])
def test_mapping_create_validates_ids(alice, payload):
    r = client_for(alice).post('/api/mappings', payload, format='json')
    assert r.status_code == 400
    assert r.data['status'] == 'error'
    assert 'patientId' in r.data['errors']


def test_other_user_cannot_see_or_deactivate(alice, bob, patient, doctor):
    mapping = Mapping.objects.create(patient=patient, doctor=doctor)
    client = client_for(bob)

    assert client.get('/api/mappings').data['data']['mappings'] == []
    assert client.get(f'/api/mappings/{patient.id}').data['data']['mappings'] == []

    r = client.delete(f'/api/mappings/{mapping.id}')
    assert r.status_code == 404
    assert r.data['message'] == 'Mapping not found'
    mapping.refresh_from_db()
    assert mapping.is_active


def test_repeated_deactivate_succeeds(alice, patient, doctor):
    mapping = Mapping.objects.create(patient=patient, doctor=doctor)
    client = client_for(alice)
    assert client.delete(f'/api/mappings/{mapping.id}').status_code == 200
    assert client.delete(f'/api/mappings/{mapping.id}').status_code == 200
    mapping.refresh_from_db()
    assert mapping.status == Mapping.STATUS_INACTIVE


def test_deleting_patient_removes_its_mappings(alice, patient, doctor):
    Mapping.objects.create(patient=patient, doctor=doctor)
    r = client_for(alice).delete(f'/api/patients/{patient.id}')
    assert r.status_code == 200
    assert not Mapping.objects.exists()


def test_unexpected_error_returns_generic_500(alice, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError('db exploded')

    monkeypatch.setattr('records.services.mappings.list_mappings', boom)
    r = client_for(alice).get('/api/mappings')
    assert r.status_code == 500
    assert r.data == {'status': 'error', 'message': 'Something went wrong!'}
