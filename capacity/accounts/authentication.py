"""
Bearer JWT authentication for the REST API
"""
import logging
import uuid

import jwt
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .models import UserProfile
from .tokens import decode_token

logger = logging.getLogger(__name__)


class JWTAuthentication(BaseAuthentication):
    """
    Reads `Authorization: Bearer <token>`, verifies the signature and expiry,
    and resolves the token's user_id to an active UserProfile.

    Requests without a bearer header are left anonymous so the permission
    layer can answer 401.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith(f'{self.keyword} '):
            return None

        token = auth_header[len(self.keyword) + 1:].strip()
        if not token:
            return None

        try:
            payload = decode_token(token)
        except jwt.InvalidTokenError:
            raise AuthenticationFailed('Invalid or expired token')

        try:
            user_id = uuid.UUID(str(payload.get('user_id')))
        except (TypeError, ValueError):
            raise AuthenticationFailed('Invalid or expired token')

        user = UserProfile.objects.select_related('organization').filter(id=user_id).first()
        if user is None or not user.is_active:
            logger.warning("Token presented for missing or inactive user %s", user_id)
            raise AuthenticationFailed('User not found or inactive')

        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
