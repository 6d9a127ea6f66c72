"""
Report views
"""
import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.response import Response

from accounts.models import UserProfile
from accounts.permissions import IsAdminOrFacilitator, IsOrganizationManager, can_access_organization
from assessments.models import Assessment
from competencies.models import CompetencyDomain
from projects.models import Project
from .models import ImpactReport
from .serializers import ImpactReportSerializer, SaveReportSerializer
from .services.pdf import render_impact_report
from .services.reports import ReportService

logger = logging.getLogger(__name__)


def _get_project(project_id):
    project = Project.objects.select_related('organization', 'domain').filter(id=project_id).first()
    if project is None:
        raise NotFound('Project not found')
    return project


@api_view(['GET'])
def individual_report(request, participant_id, project_id):
    """Baseline vs post-training progress of one participant. Participants only see their own."""
    user = request.user
    if user.role == UserProfile.ROLE_PARTICIPANT and user.id != participant_id:
        raise PermissionDenied('Access denied')

    participant = (
        UserProfile.objects.select_related('organization').filter(id=participant_id).first()
    )
    if participant is None:
        raise NotFound('Participant not found')
    project = _get_project(project_id)
    if not can_access_organization(user, project.organization_id) and user.id != participant_id:
        raise PermissionDenied('Access denied')

    return Response(ReportService.individual(participant, project))


@api_view(['GET'])
@permission_classes([IsOrganizationManager])
def institutional_report(request, project_id):
    """Cohort impact report. Client admins only for their own organization."""
    project = _get_project(project_id)
    if not can_access_organization(request.user, project.organization_id):
        raise PermissionDenied('Access denied')
    return Response(ReportService.institutional(project))


@api_view(['POST'])
@permission_classes([IsAdminOrFacilitator])
def save_report(request):
    """
    Persist a generated report.

    Request body:
    {
        "project_id": "uuid",
        "participant_id": "uuid",     (optional, omit for a cohort report)
        "report_data": {...}          (the individual or institutional report)
    }
    """
    serializer = SaveReportSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    project = _get_project(data['project_id'])
    participant_id = data.get('participant_id')
    if participant_id and not UserProfile.objects.filter(id=participant_id).exists():
        raise NotFound('Participant not found')
    report_data = data['report_data']

    completed = Assessment.objects.filter(project=project, status=Assessment.STATUS_COMPLETED)
    if participant_id:
        completed = completed.filter(participant_id=participant_id)
    baseline = completed.filter(assessment_type=Assessment.TYPE_BASELINE).first()
    post = completed.filter(assessment_type=Assessment.TYPE_POST_TRAINING).first()

    report = ImpactReport.objects.create(
        project=project,
        participant_id=participant_id,
        baseline_assessment=baseline,
        post_assessment=post,
        overall_improvement_percent=report_data.get('overall_improvement'),
        area_improvements=report_data.get('improvements') or report_data.get('area_stats') or {},
        level_changes=report_data.get('level_changes') or {},
        recommendations=report_data.get('recommendations'),
        report_data=report_data,
    )
    logger.info("Saved impact report %s for project %s", report.id, project.id)
    return Response(ImpactReportSerializer(report).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def download_report(request, report_id):
    """Saved report as JSON, or as a PDF attachment with ?format=pdf."""
    report = (
        ImpactReport.objects.select_related(
            'project__organization', 'project__domain', 'participant',
            'baseline_assessment', 'post_assessment',
        ).filter(id=report_id).first()
    )
    if report is None:
        raise NotFound('Report not found')

    user = request.user
    if user.role == UserProfile.ROLE_PARTICIPANT:
        if report.participant_id != user.id:
            raise PermissionDenied('Access denied')
    elif not can_access_organization(user, report.project.organization_id):
        raise PermissionDenied('Access denied')

    if request.query_params.get('format') == 'pdf':
        response = HttpResponse(render_impact_report(report), content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="impact_report_{report.id}.pdf"'
        return response

    return Response(ImpactReportSerializer(report).data)


@api_view(['GET'])
def benchmarks(request, domain_id):
    domain = CompetencyDomain.objects.filter(id=domain_id).first()
    if domain is None:
        raise NotFound('Domain not found')
    return Response(ReportService.benchmarks(domain))
