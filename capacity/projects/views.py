"""
Project views - CRUD, enrolment and cohort gap analysis
"""
import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from accounts.permissions import IsAdminOrFacilitator, can_access_organization
from capacity.utils import paginate, parse_uuid
from .models import Project
from .serializers import (
    InviteSerializer, ProjectDetailSerializer, ProjectSerializer, ProjectUpdateSerializer,
)
from .services import ProjectService

logger = logging.getLogger(__name__)


class ProjectViewSet(viewsets.ModelViewSet):
    """
    Capacity-building projects.

    Admins and facilitators manage every project. Other users only see the
    projects of their own organization.
    """
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_permissions(self):
        if self.action in ('create', 'update', 'partial_update', 'invite'):
            return [IsAdminOrFacilitator()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProjectDetailSerializer
        if self.action in ('update', 'partial_update'):
            return ProjectUpdateSerializer
        return ProjectSerializer

    def get_queryset(self):
        return Project.objects.select_related('organization', 'domain', 'created_by')

    def get_project(self):
        """Fetch the project from the URL and enforce organization access."""
        project = self.get_object()
        if not can_access_organization(self.request.user, project.organization_id):
            raise PermissionDenied('Access denied')
        return project

    def list(self, request, *args, **kwargs):
        qs = self.get_queryset().order_by('-created_at')
        organization_id = request.query_params.get('organization_id')
        if organization_id:
            qs = qs.filter(organization_id=parse_uuid(organization_id, 'organization_id'))
        project_status = request.query_params.get('status')
        if project_status:
            qs = qs.filter(status=project_status)
        if not request.user.sees_all_organizations:
            qs = qs.filter(organization_id=request.user.organization_id)

        projects, pagination = paginate(qs, request)
        return Response({
            'projects': ProjectSerializer(projects, many=True).data,
            'pagination': pagination,
        })

    def retrieve(self, request, *args, **kwargs):
        return Response(self.get_serializer(self.get_project()).data)

    def perform_create(self, serializer):
        project = serializer.save(created_by=self.request.user)
        logger.info("Project %s created by %s", project.name, self.request.user.email)

    @action(detail=True, methods=['post'])
    def invite(self, request, pk=None):
        """Enrol users by id; already-enrolled users are skipped."""
        project = self.get_object()
        serializer = InviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        count = ProjectService.invite(project, serializer.validated_data['user_ids'])
        return Response({'message': f'{count} participant(s) invited', 'count': count})

    @action(detail=True, methods=['get'])
    def participants(self, request, pk=None):
        project = self.get_project()
        return Response(ProjectService.participants_with_status(project))

    @action(detail=True, methods=['get'], url_path='gap-analysis')
    def gap_analysis(self, request, pk=None):
        project = self.get_project()
        return Response(ProjectService.gap_summary(project))
