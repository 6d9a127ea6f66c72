"""
Impact report serializers
"""
import math

from rest_framework import serializers

from .models import ImpactReport


class SaveReportSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    participant_id = serializers.UUIDField(required=False, allow_null=True)
    report_data = serializers.DictField()

    def validate_report_data(self, value):
        improvement = value.get('overall_improvement')
        if improvement is None:
            return value
        is_number = isinstance(improvement, (int, float)) and not isinstance(improvement, bool)
        if not is_number or not math.isfinite(improvement):
            raise serializers.ValidationError('overall_improvement must be a number or null')
        return value


class ImpactReportSerializer(serializers.ModelSerializer):
    project = serializers.SerializerMethodField()
    participant = serializers.SerializerMethodField()
    baseline_assessment = serializers.SerializerMethodField()
    post_assessment = serializers.SerializerMethodField()

    class Meta:
        model = ImpactReport
        fields = [
            'id', 'project', 'participant', 'baseline_assessment', 'post_assessment',
            'overall_improvement_percent', 'area_improvements', 'level_changes',
            'recommendations', 'report_data', 'generated_at',
        ]

    def get_project(self, obj):
        project = obj.project
        return {
            'id': str(project.id),
            'name': project.name,
            'organization': {'id': str(project.organization_id), 'name': project.organization.name},
            'domain': {'id': str(project.domain_id), 'code': project.domain.code, 'name': project.domain.name},
        }

    def get_participant(self, obj):
        user = obj.participant
        if user is None:
            return None
        return {'id': str(user.id), 'first_name': user.first_name, 'last_name': user.last_name, 'email': user.email}

    def _assessment(self, assessment):
        if assessment is None:
            return None
        return {
            'id': str(assessment.id),
            'completed_at': assessment.completed_at,
            'time_taken_minutes': assessment.time_taken_minutes,
        }

    def get_baseline_assessment(self, obj):
        return self._assessment(obj.baseline_assessment)

    def get_post_assessment(self, obj):
        return self._assessment(obj.post_assessment)
