"""
Authentication views.

Registration, username/password login, access token refresh and
logout.  Tokens are simplejwt access/refresh pairs; the access token is
what clients send as ``Authorization: Bearer <token>``.  Logins, failed
logins and registrations are written to the audit trail.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from records.models import User
from records.responses import success
from records.serializers.auth import LoginSerializer, RefreshSerializer, RegisterSerializer, serialize_user
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def _token_payload(user: User) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        'user': serialize_user(user),
        'token': str(refresh.access_token),
        'refresh': str(refresh),
    }


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    with transaction.atomic():
        user = User.objects.create_user(
            username=vd['username'],
            password=vd['password'],
            email=vd.get('email', ''),
            first_name=vd.get('first_name', ''),
            last_name=vd.get('last_name', ''),
        )
        log_action(user=user, action='register', object_type='user', object_id=user.id,
                   detail={'ip': request.META.get('REMOTE_ADDR')})
    logger.info('user registered id=%s', user.id)
    return success(_token_payload(user), status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    ip = request.META.get('REMOTE_ADDR')

    user = authenticate(request, username=username, password=s.validated_data['password'])
    if not user:
        # Only the username is recorded for failed attempts
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': ip})
        logger.warning('login failed username=%s ip=%s', username, ip)
        return Response({'status': 'error', 'message': 'Invalid credentials'}, status=status.HTTP_400_BAD_REQUEST)

    update_last_login(None, user)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})
    return success(_token_payload(user))


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def refresh_view(request):
    """Return a new access token for a valid refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as exc:
        logger.info('refresh rejected: %s', exc)
        return Response({'status': 'error', 'message': 'Invalid refresh token', 'reason': 'invalid'},
                        status=status.HTTP_401_UNAUTHORIZED)
    return success({'token': s.validated_data['access']})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist the given refresh token so it can no longer mint access tokens."""
    s = RefreshSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        token = RefreshToken(s.validated_data['refresh'])
    except TokenError:
        raise ValidationError({'refresh': ['Invalid refresh token']})
    if str(token.get('user_id')) != str(request.user.pk):
        raise ValidationError({'refresh': ['Invalid refresh token']})
    token.blacklist()
    logger.info('refresh token blacklisted user=%s', request.user.pk)
    return success(message='Logged out successfully')
