"""
Authentication endpoints - register, login, token refresh and current user
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from capacity.exceptions import BadRequest
from .models import ParticipantProfile, UserProfile
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer
from .tokens import generate_token

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Create an account.

    Request body:
    {
        "email": "user@example.com",
        "password": "at least 8 chars",
        "first_name": "Jane",
        "last_name": "Doe",
        "role": "PARTICIPANT",          (optional)
        "organization_id": "uuid"       (optional)
    }

    Participants get an empty participant profile. Responds 201 with the user
    and a bearer token.
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if UserProfile.objects.filter(email__iexact=data['email']).exists():
        raise BadRequest('Email already registered')

    role = data.get('role') or UserProfile.ROLE_PARTICIPANT
    with transaction.atomic():
        user = UserProfile(
            email=data['email'],
            first_name=data['first_name'].strip(),
            last_name=data['last_name'].strip(),
            role=role,
            organization_id=data.get('organization_id'),
        )
        user.set_password(data['password'])
        user.save()

        if role == UserProfile.ROLE_PARTICIPANT:
            ParticipantProfile.objects.create(user=user)

    logger.info("Registered %s user %s", role, user.email)
    return Response(
        {'user': UserSerializer(user).data, 'token': generate_token(user)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Exchange email + password for a bearer token.

    Unknown email, wrong password and deactivated accounts all answer 401
    with the same message.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email']
    password = serializer.validated_data['password']

    user = (
        UserProfile.objects.select_related('organization', 'participant_profile')
        .filter(email__iexact=email)
        .first()
    )
    if user is None or not user.is_active or not user.check_password(password):
        logger.warning("Failed login attempt for %s", email)
        raise AuthenticationFailed('Invalid credentials')

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return Response({'user': UserSerializer(user).data, 'token': generate_token(user)})


@api_view(['POST'])
def refresh(request):
    """Issue a fresh token for the authenticated user."""
    return Response({'token': generate_token(request.user)})


@api_view(['GET'])
def me(request):
    """Current user with organization and participant profile."""
    return Response(UserSerializer(request.user).data)
