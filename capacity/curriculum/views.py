"""
Curriculum views - learning units, recommendations and curricula
"""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.response import Response

from accounts.permissions import IsAdminOrFacilitator, can_access_organization
from capacity.utils import parse_uuid
from projects.models import Project
from .models import Curriculum, CurriculumRecommendation, LearningUnit
from .serializers import (
    CurriculumCreateSerializer, CurriculumSerializer, CurriculumUpdateSerializer,
    GenerateRecommendationsSerializer, LearningUnitDetailSerializer, LearningUnitSerializer,
    RecommendationSerializer, RecommendationStatusSerializer,
)
from .services.curricula import CurriculumService
from .services.recommendations import RecommendationService

logger = logging.getLogger(__name__)


def _curriculum_queryset():
    return Curriculum.objects.select_related('project', 'created_by', 'approved_by')


def _check_project_access(user, project):
    if not can_access_organization(user, project.organization_id):
        raise PermissionDenied('Access denied')


# ============ Learning units ============

@api_view(['GET'])
def learning_unit_list(request):
    """Query params: domain_id, level_id"""
    qs = LearningUnit.objects.select_related('domain', 'level_appropriate').prefetch_related(
        'competency_areas', 'prerequisites'
    ).order_by('code')
    domain_id = request.query_params.get('domain_id')
    if domain_id:
        qs = qs.filter(domain_id=parse_uuid(domain_id, 'domain_id'))
    level_id = request.query_params.get('level_id')
    if level_id:
        qs = qs.filter(level_appropriate_id=parse_uuid(level_id, 'level_id'))
    return Response(LearningUnitSerializer(qs, many=True).data)


@api_view(['GET'])
def learning_unit_detail(request, unit_id):
    unit = LearningUnit.objects.select_related('domain', 'level_appropriate').filter(id=unit_id).first()
    if unit is None:
        raise NotFound('Learning unit not found')
    return Response(LearningUnitDetailSerializer(unit).data)


# ============ Recommendations ============

@api_view(['GET', 'PUT'])
def recommendations(request, object_id):
    """
    GET lists a project's recommendations (object_id is the project).
    PUT changes the status of one recommendation (object_id is the recommendation).
    """
    if request.method == 'PUT':
        if not IsAdminOrFacilitator().has_permission(request, None):
            raise PermissionDenied('Insufficient permissions')
        return _update_recommendation(request, object_id)
    return _list_recommendations(request, object_id)


def _list_recommendations(request, project_id):
    """Query params: participant_id, status. Ordered by priority rank."""
    project = get_object_or_404(Project, id=project_id)
    _check_project_access(request.user, project)

    qs = CurriculumRecommendation.objects.filter(project=project).select_related(
        'learning_unit__level_appropriate', 'participant'
    ).order_by('priority_rank')
    participant_id = request.query_params.get('participant_id')
    if participant_id:
        qs = qs.filter(participant_id=parse_uuid(participant_id, 'participant_id'))
    rec_status = request.query_params.get('status')
    if rec_status:
        qs = qs.filter(status=rec_status)
    return Response(RecommendationSerializer(qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAdminOrFacilitator])
def generate_recommendations(request, project_id):
    """
    Rebuild recommendations from completed baseline gaps.

    Request body (optional):
    {
        "for_participant_id": "uuid"
    }
    """
    serializer = GenerateRecommendationsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    count = RecommendationService.generate(project_id, serializer.validated_data.get('for_participant_id'))
    return Response({'message': f'Generated {count} recommendations', 'count': count})


def _update_recommendation(request, recommendation_id):
    recommendation = get_object_or_404(
        CurriculumRecommendation.objects.select_related('learning_unit'), id=recommendation_id
    )
    serializer = RecommendationStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    recommendation.status = serializer.validated_data['status']
    recommendation.save(update_fields=['status'])
    return Response(RecommendationSerializer(recommendation).data)


# ============ Curricula ============

@api_view(['POST'])
@permission_classes([IsAdminOrFacilitator])
def curriculum_create(request):
    """
    Create a curriculum from an ordered list of learning units.

    Request body:
    {
        "project_id": "uuid",
        "name": "Cohort 1 programme",
        "description": "...",               (optional)
        "learning_unit_ids": ["uuid", ...],
        "delivery_schedule": {...}          (optional)
    }
    """
    serializer = CurriculumCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    curriculum = CurriculumService.create(
        request.user,
        data['project_id'],
        data['name'],
        data['learning_unit_ids'],
        description=data.get('description', ''),
        delivery_schedule=data.get('delivery_schedule'),
    )
    return Response(CurriculumSerializer(curriculum).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT'])
def curriculum_detail(request, curriculum_id):
    curriculum = _curriculum_queryset().filter(id=curriculum_id).first()
    if curriculum is None:
        raise NotFound('Curriculum not found')

    if request.method == 'PUT':
        if not IsAdminOrFacilitator().has_permission(request, None):
            raise PermissionDenied('Insufficient permissions')
        serializer = CurriculumUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        curriculum = CurriculumService.update(curriculum, request.user, serializer.validated_data)
    else:
        _check_project_access(request.user, curriculum.project)

    return Response(CurriculumSerializer(curriculum).data)


@api_view(['GET'])
def project_curricula(request, project_id):
    project = get_object_or_404(Project, id=project_id)
    _check_project_access(request.user, project)
    qs = _curriculum_queryset().filter(project=project).order_by('-created_at')
    return Response(CurriculumSerializer(qs, many=True).data)
