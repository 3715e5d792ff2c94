from datetime import timedelta

import jwt
import pytest
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from records.models import AuditEvent, User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')


def bearer(client, token):
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client


def test_login_returns_access_and_refresh_tokens():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    r = login(APIClient(), 'u1', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['status'] == 'success'
    assert r.data['data']['token'] and r.data['data']['refresh']
    assert r.data['data']['user']['username'] == 'u1'
    assert AuditEvent.objects.filter(action='login', detail__result='ok').exists()


def test_login_with_wrong_password_is_rejected_and_audited():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    r = login(APIClient(), 'u1', 'wrong')
    assert r.status_code == 400
    assert r.data == {'status': 'error', 'message': 'Invalid credentials'}
    assert AuditEvent.objects.filter(action='login', user__isnull=True, detail__result='fail').exists()


def test_register_creates_user_and_issues_tokens():
    client = APIClient()
    r = client.post(reverse('register_view'), {
        'username': 'newbie', 'password': 'Str0ng!Passw0rd', 'email': 'n@x.com', 'firstName': 'New',
    }, format='json')
    assert r.status_code == 201
    assert User.objects.get(username='newbie').check_password('Str0ng!Passw0rd')
    token = r.data['data']['token']
    assert bearer(client, token).get('/api/patients').status_code == 200


def test_register_rejects_weak_password_and_duplicate_username():
    User.objects.create_user(username='taken', password='P@ssw0rd1')
    client = APIClient()
    r = client.post(reverse('register_view'), {'username': 'someone', 'password': '123'}, format='json')
    assert r.status_code == 400
    assert 'password' in r.data['errors']
    r = client.post(reverse('register_view'), {'username': 'Taken', 'password': 'Str0ng!Passw0rd'}, format='json')
    assert r.status_code == 400
    assert 'username' in r.data['errors']


def test_bearer_token_authenticates_requests():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    client = APIClient()
    token = login(client, 'u1', 'P@ssw0rd1').data['data']['token']
    r = bearer(client, token).get('/api/patients')
    assert r.status_code == 200
    assert r.data == {'status': 'success', 'data': {'patients': []}}


def test_missing_credential():
    r = APIClient().get('/api/patients')
    assert r.status_code == 401
    assert r.data['status'] == 'error'
    assert r.data['reason'] == 'missing'


@pytest.mark.parametrize('header', ['Token abc', 'Bearer', 'Bearer a b'])
def test_malformed_credential(header):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=header)
    r = client.get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'malformed'


def test_invalid_credential():
    r = bearer(APIClient(), 'not.a.jwt').get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'invalid'


def test_token_signed_with_other_key_is_invalid():
    forged = jwt.encode({'token_type': 'access', 'user_id': 1, 'jti': 'x', 'exp': 9999999999}, 'other-key',
                        algorithm='HS256')
    r = bearer(APIClient(), forged).get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'invalid'


def test_expired_credential():
    u = User.objects.create_user(username='u1', password='P@ssw0rd1')
    token = AccessToken.for_user(u)
    token.set_exp(lifetime=-timedelta(seconds=30))
    r = bearer(APIClient(), str(token)).get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'expired'
    assert r.data['message'] == 'Token expired'


def test_token_for_inactive_or_deleted_user_is_invalid():
    u = User.objects.create_user(username='u1', password='P@ssw0rd1')
    token = str(AccessToken.for_user(u))
    u.is_active = False
    u.save()
    r = bearer(APIClient(), token).get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'invalid'

    u.delete()
    r = bearer(APIClient(), token).get('/api/doctors')
    assert r.status_code == 401
    assert r.data['reason'] == 'invalid'


def test_refresh_and_logout_flow():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    client = APIClient()
    data = login(client, 'u1', 'P@ssw0rd1').data['data']

    r = client.post(reverse('refresh_view'), {'refresh': data['refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['data']['token']

    bearer(client, data['token'])
    r = client.post(reverse('logout_view'), {'refresh': data['refresh']}, format='json')
    assert r.status_code == 200

    r = APIClient().post(reverse('refresh_view'), {'refresh': data['refresh']}, format='json')
    assert r.status_code == 401
    assert r.data['reason'] == 'invalid'


def test_logout_rejects_refresh_token_of_another_user():
    a = User.objects.create_user(username='a', password='P@ssw0rd1')
    b = User.objects.create_user(username='b', password='P@ssw0rd1')
    client = bearer(APIClient(), str(AccessToken.for_user(a)))
    r = client.post(reverse('logout_view'), {'refresh': str(RefreshToken.for_user(b))}, format='json')
    assert r.status_code == 400
    assert 'refresh' in r.data['errors']
