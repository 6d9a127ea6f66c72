"""
Bearer token issuing and verification (HS256 JWT)
"""
from datetime import timedelta

import jwt
from django.conf import settings
from django.utils import timezone


def generate_token(user):
    now = timezone.now()
    payload = {
        'user_id': str(user.id),
        'email': user.email,
        'role': user.role,
        'iat': now,
        'exp': now + timedelta(hours=settings.JWT_EXPIRES_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token):
    """Decode and verify a token. Raises jwt.InvalidTokenError (or a subclass) on failure."""
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
