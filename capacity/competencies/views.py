"""
Competency framework views - taxonomy, instruments and role targets
"""
import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from accounts.permissions import IsSystemAdmin
from capacity.utils import parse_uuid
from .models import (
    AssessmentInstrument, CompetencyArea, CompetencyDomain, CompetencyLevel, RoleTargetLevel,
)
from .serializers import (
    AssessmentInstrumentDetailSerializer, AssessmentInstrumentSerializer,
    CompetencyAreaDetailSerializer, CompetencyAreaSerializer, CompetencyDomainDetailSerializer,
    CompetencyDomainSerializer, CompetencyItemSerializer, CompetencyLevelSerializer,
    RoleTargetLevelSerializer,
)

logger = logging.getLogger(__name__)


class SystemAdminCreateMixin:
    """Reads for any authenticated user, creation for system admins only"""

    def get_permissions(self):
        if self.action == 'create':
            return [IsSystemAdmin()]
        return super().get_permissions()


class CompetencyDomainViewSet(SystemAdminCreateMixin,
                              mixins.ListModelMixin,
                              mixins.RetrieveModelMixin,
                              mixins.CreateModelMixin,
                              viewsets.GenericViewSet):
    queryset = CompetencyDomain.objects.all()

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return CompetencyDomainDetailSerializer
        return CompetencyDomainSerializer

    def get_queryset(self):
        qs = CompetencyDomain.objects.all()
        if self.action == 'list':
            qs = qs.filter(is_active=True)
        return qs

    def perform_create(self, serializer):
        domain = serializer.save()
        logger.info("Competency domain %s created", domain.code)


class CompetencyLevelViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = CompetencyLevel.objects.order_by('level_number')
    serializer_class = CompetencyLevelSerializer


class CompetencyAreaViewSet(SystemAdminCreateMixin,
                            mixins.ListModelMixin,
                            mixins.RetrieveModelMixin,
                            mixins.CreateModelMixin,
                            viewsets.GenericViewSet):

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return CompetencyAreaDetailSerializer
        return CompetencyAreaSerializer

    def get_queryset(self):
        qs = CompetencyArea.objects.select_related('domain').order_by('sort_order')
        domain_id = self.request.query_params.get('domain_id')
        if domain_id:
            qs = qs.filter(domain_id=parse_uuid(domain_id, 'domain_id'))
        if self.action == 'retrieve':
            qs = qs.prefetch_related('items__level')
        return qs


class AssessmentInstrumentViewSet(viewsets.ReadOnlyModelViewSet):

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return AssessmentInstrumentDetailSerializer
        return AssessmentInstrumentSerializer

    def get_queryset(self):
        qs = AssessmentInstrument.objects.all()
        domain_id = self.request.query_params.get('domain_id')
        if domain_id:
            qs = qs.filter(domain_id=parse_uuid(domain_id, 'domain_id'))
        active = self.request.query_params.get('active')
        if active is not None:
            qs = qs.filter(is_active=active.lower() in ('1', 'true', 'yes'))
        return qs


@api_view(['POST'])
@permission_classes([IsSystemAdmin])
def item_create(request):
    """Add a competency item to an area at a given level"""
    serializer = CompetencyItemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    item = serializer.save()
    logger.info("Competency item %s created", item.code)
    return Response(serializer.data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def role_target_list(request):
    qs = RoleTargetLevel.objects.select_related('level')
    role_type = request.query_params.get('role_type')
    if role_type:
        qs = qs.filter(role_type=role_type)
    return Response(RoleTargetLevelSerializer(qs, many=True).data)
