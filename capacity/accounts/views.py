"""
User and organization management views
"""
import logging

from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from capacity.utils import paginate, parse_uuid
from .models import Organization, ParticipantProfile, UserProfile
from .permissions import IsAdminOrFacilitator, IsOrganizationManager, can_access_organization
from .serializers import (
    OrganizationDetailSerializer, OrganizationSerializer, ParticipantProfileSerializer,
    UserSerializer, UserUpdateSerializer,
)

logger = logging.getLogger(__name__)


# ============ Users ============

@api_view(['GET', 'PUT'])
def user_me(request):
    """Read or update the current user's name and free-form profile"""
    user = request.user
    if request.method == 'PUT':
        serializer = UserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
    return Response(UserSerializer(user).data)


@api_view(['PUT'])
def participant_profile(request):
    """Create or update the current user's participant profile"""
    profile, created = ParticipantProfile.objects.get_or_create(user=request.user)
    serializer = ParticipantProfileSerializer(profile, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    if created:
        logger.info("Created participant profile for %s", request.user.email)
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([IsAdminOrFacilitator])
def user_list(request):
    """
    Paginated user listing.

    Query params: organization_id, role, page, limit (default 20)
    """
    qs = UserProfile.objects.select_related('organization').order_by('-created_at')

    organization_id = request.query_params.get('organization_id')
    if organization_id:
        qs = qs.filter(organization_id=parse_uuid(organization_id, 'organization_id'))
    role = request.query_params.get('role')
    if role:
        qs = qs.filter(role=role)

    users, pagination = paginate(qs, request)
    return Response({
        'users': UserSerializer(users, many=True).data,
        'pagination': pagination,
    })


@api_view(['GET'])
@permission_classes([IsAdminOrFacilitator])
def user_detail(request, user_id):
    user = get_object_or_404(UserProfile.objects.select_related('organization'), id=user_id)
    return Response(UserSerializer(user).data)


# ============ Organizations ============

class OrganizationViewSet(viewsets.ModelViewSet):
    """
    Organizations.

    Admins and facilitators see and create every organization; other users
    only see their own. Client admins may update their own organization.
    """
    serializer_class = OrganizationSerializer
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_permissions(self):
        if self.action == 'create':
            return [IsAdminOrFacilitator()]
        if self.action in ('update', 'partial_update'):
            return [IsOrganizationManager()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return OrganizationDetailSerializer
        return OrganizationSerializer

    def get_queryset(self):
        qs = Organization.objects.all()
        user = self.request.user

        if self.action == 'list':
            qs = qs.annotate(
                user_count=Count('users', distinct=True),
                project_count=Count('projects', distinct=True),
            )
            org_type = self.request.query_params.get('type')
            if org_type:
                qs = qs.filter(type=org_type)
            country = self.request.query_params.get('country')
            if country:
                qs = qs.filter(country__iexact=country)
            if not user.sees_all_organizations:
                qs = qs.filter(id=user.organization_id)
        elif self.action == 'retrieve':
            qs = qs.prefetch_related('users', 'projects')

        return qs

    def retrieve(self, request, *args, **kwargs):
        organization = self.get_object()
        if not can_access_organization(request.user, organization.id):
            raise PermissionDenied('Access denied')
        return Response(self.get_serializer(organization).data)

    def perform_create(self, serializer):
        organization = serializer.save()
        logger.info("Organization %s created by %s", organization.name, self.request.user.email)

    def perform_update(self, serializer):
        user = self.request.user
        if user.role == UserProfile.ROLE_CLIENT_ADMIN and serializer.instance.id != user.organization_id:
            raise PermissionDenied('Access denied')
        serializer.save()
