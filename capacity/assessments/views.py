"""
Assessment views - taking an assessment and reading its results
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from accounts.models import UserProfile
from capacity.utils import parse_uuid
from .models import Assessment
from .serializers import (
    AssessmentDetailSerializer, AssessmentListSerializer, CompletedAssessmentSerializer,
    GapAnalysisSerializer, StartAssessmentSerializer, SubmitResponsesSerializer,
)
from .services.assessment_service import AssessmentService

logger = logging.getLogger(__name__)


def _hide_answers(user, assessment):
    return user.role == UserProfile.ROLE_PARTICIPANT and not assessment.is_completed


@api_view(['GET'])
def assessment_list(request):
    """
    List assessments, newest first.

    Query params: project_id, status, type. Participants only see their own.
    """
    qs = Assessment.objects.select_related('project', 'instrument', 'participant').order_by('-created_at')

    project_id = request.query_params.get('project_id')
    if project_id:
        qs = qs.filter(project_id=parse_uuid(project_id, 'project_id'))
    assessment_status = request.query_params.get('status')
    if assessment_status:
        qs = qs.filter(status=assessment_status)
    assessment_type = request.query_params.get('type')
    if assessment_type:
        qs = qs.filter(assessment_type=assessment_type)
    if request.user.role == UserProfile.ROLE_PARTICIPANT:
        qs = qs.filter(participant=request.user)

    return Response(AssessmentListSerializer(qs, many=True).data)


@api_view(['POST'])
def assessment_start(request):
    """
    Start an assessment for the current user.

    Request body:
    {
        "project_id": "uuid",
        "assessment_type": "BASELINE" | "POST_TRAINING"
    }

    Returns 201 with the new assessment and its questions, or 200 with the
    assessment already in progress.
    """
    serializer = StartAssessmentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    assessment, created = AssessmentService.start(
        request.user,
        serializer.validated_data['project_id'],
        serializer.validated_data['assessment_type'],
    )
    data = AssessmentDetailSerializer(
        assessment, context={'hide_answers': _hide_answers(request.user, assessment)}
    ).data
    return Response(data, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['GET'])
def assessment_detail(request, assessment_id):
    assessment = AssessmentService.get_for_user(assessment_id, request.user)
    data = AssessmentDetailSerializer(
        assessment, context={'hide_answers': _hide_answers(request.user, assessment)}
    ).data
    return Response(data)


@api_view(['POST'])
def assessment_responses(request, assessment_id):
    """
    Save answers.

    Request body:
    {
        "responses": [
            {"question_id": "uuid", "response_value": "B", "time_spent_seconds": 40}
        ]
    }
    """
    assessment = AssessmentService.get_for_user(assessment_id, request.user, owner_only=True)
    serializer = SubmitResponsesSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    count = AssessmentService.save_responses(assessment, serializer.validated_data['responses'])
    return Response({'message': 'Responses saved', 'count': count})


@api_view(['POST'])
def assessment_complete(request, assessment_id):
    """Complete the assessment and generate its gap analysis."""
    assessment = AssessmentService.get_for_user(assessment_id, request.user)
    is_owner = assessment.participant_id == request.user.id
    if not is_owner and not request.user.sees_all_organizations:
        raise PermissionDenied('Access denied')

    assessment = AssessmentService.complete(assessment)
    return Response({
        'message': 'Assessment completed',
        'assessment': CompletedAssessmentSerializer(assessment).data,
    })


@api_view(['GET'])
def assessment_results(request, assessment_id):
    """Score summary plus the per-area gap analysis in area order."""
    assessment = AssessmentService.get_for_user(assessment_id, request.user)
    gaps = assessment.gap_analyses.select_related(
        'competency_area', 'current_level', 'target_level'
    ).order_by('competency_area__sort_order')

    participant = assessment.participant
    return Response({
        'assessment': {
            'id': str(assessment.id),
            'type': assessment.assessment_type,
            'status': assessment.status,
            'started_at': assessment.started_at,
            'completed_at': assessment.completed_at,
            'time_taken_minutes': assessment.time_taken_minutes,
        },
        'participant': {
            'id': str(participant.id),
            'first_name': participant.first_name,
            'last_name': participant.last_name,
        },
        'project': {'id': str(assessment.project_id), 'name': assessment.project.name},
        'summary': AssessmentService.results(assessment),
        'gap_analysis': GapAnalysisSerializer(gaps, many=True).data,
    })
