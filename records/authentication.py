"""
Bearer token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication``
that reports *why* a credential was rejected.  Every failure raised
from here carries a ``reason`` of ``malformed``, ``invalid`` or
``expired``; a request without any credential is left unauthenticated
and reported as ``missing`` by the exception handler.  Expiry is told
apart from other failures by decoding the token again with PyJWT.
"""
from __future__ import annotations

import logging

import jwt
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

logger = logging.getLogger(__name__)


class CredentialError(exceptions.AuthenticationFailed):
    """Authentication failure with a machine readable reason code."""

    def __init__(self, reason: str, detail: str):
        self.reason = reason
        super().__init__(detail=detail, code=reason)


def is_expired(raw_token: bytes) -> bool:
    """True when the token's signature verifies but its ``exp`` has passed."""
    key = api_settings.VERIFYING_KEY or api_settings.SIGNING_KEY
    try:
        jwt.decode(
            raw_token,
            key,
            algorithms=[api_settings.ALGORITHM],
            options={'verify_aud': False},
            leeway=api_settings.LEEWAY,
        )
    except jwt.ExpiredSignatureError:
        return True
    except jwt.InvalidTokenError:
        return False
    return False


class BearerAuthentication(JWTAuthentication):
    """``Authorization: Bearer <jwt>`` resolved to an active user."""

    www_authenticate_realm = 'api'

    def get_raw_token(self, header: bytes):
        parts = header.split()
        if not parts:
            return None
        keywords = {t.encode() for t in api_settings.AUTH_HEADER_TYPES}
        if parts[0] not in keywords or len(parts) != 2:
            raise CredentialError('malformed', 'Authorization header must be "Bearer <token>"')
        return parts[1]

    def get_validated_token(self, raw_token: bytes):
        try:
            return super().get_validated_token(raw_token)
        except InvalidToken:
            if is_expired(raw_token):
                raise CredentialError('expired', 'Token expired')
            raise CredentialError('invalid', 'Invalid token')

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except (InvalidToken, exceptions.AuthenticationFailed) as exc:
            logger.info('token rejected for user claim: %s', exc)
            raise CredentialError('invalid', 'User not found')
