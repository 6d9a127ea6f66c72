"""
Competency framework serializers
"""
from rest_framework import serializers

from .models import (
    AssessmentInstrument, AssessmentQuestion, CompetencyArea, CompetencyDomain,
    CompetencyItem, CompetencyLevel, RoleTargetLevel,
)


class CompetencyLevelSerializer(serializers.ModelSerializer):
    class Meta:
        model = CompetencyLevel
        fields = ['id', 'level_number', 'name', 'description', 'benchmark_score']


class CompetencyAreaSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = CompetencyArea
        fields = ['id', 'code', 'name', 'sort_order']


class CompetencyItemSerializer(serializers.ModelSerializer):
    level = CompetencyLevelSerializer(read_only=True)
    level_id = serializers.PrimaryKeyRelatedField(
        queryset=CompetencyLevel.objects.all(), source='level', write_only=True
    )
    area_id = serializers.PrimaryKeyRelatedField(
        queryset=CompetencyArea.objects.all(), source='area', write_only=True
    )

    class Meta:
        model = CompetencyItem
        fields = ['id', 'code', 'description', 'sort_order', 'level', 'level_id', 'area_id']


class CompetencyAreaSerializer(serializers.ModelSerializer):
    domain_id = serializers.PrimaryKeyRelatedField(
        queryset=CompetencyDomain.objects.all(), source='domain'
    )
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = CompetencyArea
        fields = ['id', 'domain_id', 'code', 'name', 'description', 'sort_order', 'weight', 'item_count']

    def get_item_count(self, obj):
        return obj.items.count()


class CompetencyAreaDetailSerializer(CompetencyAreaSerializer):
    items = CompetencyItemSerializer(many=True, read_only=True)
    domain = serializers.SerializerMethodField()

    class Meta(CompetencyAreaSerializer.Meta):
        fields = CompetencyAreaSerializer.Meta.fields + ['domain', 'items']

    def get_domain(self, obj):
        return {'id': str(obj.domain_id), 'code': obj.domain.code, 'name': obj.domain.name}


class AssessmentInstrumentSerializer(serializers.ModelSerializer):
    question_count = serializers.SerializerMethodField()

    class Meta:
        model = AssessmentInstrument
        fields = ['id', 'domain', 'name', 'type', 'version', 'is_active', 'question_count', 'created_at']

    def get_question_count(self, obj):
        return obj.questions.count()


class CompetencyDomainSerializer(serializers.ModelSerializer):
    area_count = serializers.SerializerMethodField()
    instrument_count = serializers.SerializerMethodField()
    learning_unit_count = serializers.SerializerMethodField()

    class Meta:
        model = CompetencyDomain
        fields = [
            'id', 'code', 'name', 'description', 'framework_alignment', 'is_active',
            'area_count', 'instrument_count', 'learning_unit_count', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def get_area_count(self, obj):
        return obj.areas.count()

    def get_instrument_count(self, obj):
        return obj.instruments.count()

    def get_learning_unit_count(self, obj):
        return obj.learning_units.count()


class CompetencyDomainDetailSerializer(CompetencyDomainSerializer):
    """Full tree: areas with their items, active instruments and learning units"""
    areas = serializers.SerializerMethodField()
    instruments = serializers.SerializerMethodField()
    learning_units = serializers.SerializerMethodField()

    class Meta(CompetencyDomainSerializer.Meta):
        fields = CompetencyDomainSerializer.Meta.fields + ['areas', 'instruments', 'learning_units']

    def get_areas(self, obj):
        areas = obj.areas.prefetch_related('items__level').order_by('sort_order')
        return CompetencyAreaDetailSerializer(areas, many=True).data

    def get_instruments(self, obj):
        return AssessmentInstrumentSerializer(obj.instruments.filter(is_active=True), many=True).data

    def get_learning_units(self, obj):
        return [
            {
                'id': str(unit.id),
                'code': unit.code,
                'name': unit.name,
                'duration_hours': unit.duration_hours,
                'level_number': unit.level_appropriate.level_number if unit.level_appropriate else None,
            }
            for unit in obj.learning_units.select_related('level_appropriate').order_by('code')
        ]


class AssessmentQuestionSerializer(serializers.ModelSerializer):
    """
    Question with its competency item, area and level.

    Pass context={'hide_answers': True} to drop correct_answer and rationale.
    """
    competency_item = serializers.SerializerMethodField()

    class Meta:
        model = AssessmentQuestion
        fields = [
            'id', 'question_type', 'question_text', 'options', 'correct_answer', 'points',
            'difficulty_level', 'sort_order', 'rationale', 'competency_item',
        ]

    def get_competency_item(self, obj):
        item = obj.competency_item
        return {
            'id': str(item.id),
            'code': item.code,
            'description': item.description,
            'area': CompetencyAreaSummarySerializer(item.area).data,
            'level': CompetencyLevelSerializer(item.level).data,
        }

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if self.context.get('hide_answers'):
            data.pop('correct_answer', None)
            data.pop('rationale', None)
        return data


class AssessmentInstrumentDetailSerializer(AssessmentInstrumentSerializer):
    questions = serializers.SerializerMethodField()

    class Meta(AssessmentInstrumentSerializer.Meta):
        fields = AssessmentInstrumentSerializer.Meta.fields + ['questions']

    def get_questions(self, obj):
        questions = obj.questions.select_related(
            'competency_item__area', 'competency_item__level'
        ).order_by('sort_order')
        return AssessmentQuestionSerializer(questions, many=True, context=self.context).data


class RoleTargetLevelSerializer(serializers.ModelSerializer):
    level = CompetencyLevelSerializer(read_only=True)

    class Meta:
        model = RoleTargetLevel
        fields = ['id', 'role_type', 'area_code', 'level']
