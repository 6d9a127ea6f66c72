"""
Curriculum serializers
"""
from rest_framework import serializers

from competencies.serializers import CompetencyAreaSummarySerializer, CompetencyLevelSerializer
from .models import Curriculum, CurriculumRecommendation, LearningUnit


def _person(user):
    if user is None:
        return None
    return {'id': str(user.id), 'first_name': user.first_name, 'last_name': user.last_name}


class LearningUnitSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = LearningUnit
        fields = ['id', 'code', 'name', 'duration_hours']


class LearningUnitSerializer(serializers.ModelSerializer):
    domain = serializers.SerializerMethodField()
    level_appropriate = CompetencyLevelSerializer(read_only=True)
    competency_areas = CompetencyAreaSummarySerializer(many=True, read_only=True)
    prerequisites = LearningUnitSummarySerializer(many=True, read_only=True)

    class Meta:
        model = LearningUnit
        fields = [
            'id', 'code', 'name', 'description', 'duration_hours', 'delivery_methods',
            'learning_outcomes', 'domain', 'level_appropriate', 'competency_areas', 'prerequisites',
        ]

    def get_domain(self, obj):
        return {'id': str(obj.domain_id), 'code': obj.domain.code, 'name': obj.domain.name}


class LearningUnitDetailSerializer(LearningUnitSerializer):
    prerequisite_for = LearningUnitSummarySerializer(many=True, read_only=True)

    class Meta(LearningUnitSerializer.Meta):
        fields = LearningUnitSerializer.Meta.fields + ['prerequisite_for']


class RecommendationSerializer(serializers.ModelSerializer):
    learning_unit = serializers.SerializerMethodField()
    participant = serializers.SerializerMethodField()
    gap_analyses = serializers.SerializerMethodField()

    class Meta:
        model = CurriculumRecommendation
        fields = [
            'id', 'project_id', 'priority_rank', 'rationale', 'status',
            'learning_unit', 'participant', 'gap_analyses', 'created_at',
        ]

    def get_learning_unit(self, obj):
        unit = obj.learning_unit
        return {
            'id': str(unit.id),
            'code': unit.code,
            'name': unit.name,
            'duration_hours': unit.duration_hours,
            'level_appropriate': CompetencyLevelSerializer(unit.level_appropriate).data if unit.level_appropriate else None,
            'competency_areas': CompetencyAreaSummarySerializer(unit.competency_areas.all(), many=True).data,
        }

    def get_participant(self, obj):
        return _person(obj.participant)

    def get_gap_analyses(self, obj):
        return [
            {
                'id': str(gap.id),
                'area_code': gap.competency_area.code,
                'gap_score': gap.gap_score,
                'priority': gap.priority,
            }
            for gap in obj.gap_analyses.select_related('competency_area')
        ]


class RecommendationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CurriculumRecommendation.STATUS_CHOICES)


class GenerateRecommendationsSerializer(serializers.Serializer):
    for_participant_id = serializers.UUIDField(required=False, allow_null=True)


class CurriculumSerializer(serializers.ModelSerializer):
    learning_units = serializers.SerializerMethodField()
    project = serializers.SerializerMethodField()
    created_by = serializers.SerializerMethodField()
    approved_by = serializers.SerializerMethodField()

    class Meta:
        model = Curriculum
        fields = [
            'id', 'name', 'description', 'total_hours', 'delivery_schedule', 'status',
            'project', 'learning_units', 'created_by', 'approved_by', 'created_at', 'updated_at',
        ]

    def get_project(self, obj):
        return {
            'id': str(obj.project_id),
            'name': obj.project.name,
            'organization_id': str(obj.project.organization_id),
        }

    def get_learning_units(self, obj):
        return [
            {
                'sort_order': entry.sort_order,
                'learning_unit': LearningUnitSerializer(entry.learning_unit).data,
            }
            for entry in obj.units.select_related(
                'learning_unit__domain', 'learning_unit__level_appropriate'
            ).order_by('sort_order')
        ]

    def get_created_by(self, obj):
        return _person(obj.created_by)

    def get_approved_by(self, obj):
        return _person(obj.approved_by)


class CurriculumCreateSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    learning_unit_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    delivery_schedule = serializers.DictField(required=False, default=dict)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name is required')
        return value


class CurriculumUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Curriculum.STATUS_CHOICES, required=False)
    delivery_schedule = serializers.DictField(required=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name must not be empty')
        return value
