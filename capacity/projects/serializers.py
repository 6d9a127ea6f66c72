"""
Project serializers
"""
from rest_framework import serializers

from accounts.models import Organization
from competencies.models import CompetencyDomain
from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    organization_id = serializers.PrimaryKeyRelatedField(
        queryset=Organization.objects.all(), source='organization'
    )
    domain_id = serializers.PrimaryKeyRelatedField(
        queryset=CompetencyDomain.objects.all(), source='domain'
    )
    organization = serializers.SerializerMethodField()
    domain = serializers.SerializerMethodField()
    created_by = serializers.SerializerMethodField()
    participant_count = serializers.SerializerMethodField()
    assessment_count = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'status', 'start_date', 'end_date', 'settings',
            'organization_id', 'domain_id', 'organization', 'domain', 'created_by',
            'participant_count', 'assessment_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name is required')
        return value

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date'})
        return attrs

    def get_organization(self, obj):
        return {'id': str(obj.organization_id), 'name': obj.organization.name}

    def get_domain(self, obj):
        return {'id': str(obj.domain_id), 'code': obj.domain.code, 'name': obj.domain.name}

    def get_created_by(self, obj):
        if obj.created_by is None:
            return None
        return {
            'id': str(obj.created_by_id),
            'first_name': obj.created_by.first_name,
            'last_name': obj.created_by.last_name,
        }

    def get_participant_count(self, obj):
        return obj.participants.count()

    def get_assessment_count(self, obj):
        return obj.assessments.count()


class ProjectUpdateSerializer(ProjectSerializer):
    """Organization and domain are fixed once a project exists"""

    class Meta(ProjectSerializer.Meta):
        read_only_fields = ProjectSerializer.Meta.read_only_fields + ['organization_id', 'domain_id']


class ProjectDetailSerializer(ProjectSerializer):
    areas = serializers.SerializerMethodField()
    curriculum_count = serializers.SerializerMethodField()

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['areas', 'curriculum_count']

    def get_areas(self, obj):
        return [
            {'id': str(area.id), 'code': area.code, 'name': area.name, 'sort_order': area.sort_order}
            for area in obj.domain.areas.order_by('sort_order')
        ]

    def get_curriculum_count(self, obj):
        return obj.curricula.count()


class InviteSerializer(serializers.Serializer):
    user_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
