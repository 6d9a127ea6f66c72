"""
Assessment serializers
"""
from rest_framework import serializers

from competencies.models import AssessmentQuestion
from competencies.serializers import (
    AssessmentQuestionSerializer, CompetencyAreaSummarySerializer, CompetencyLevelSerializer,
)
from .models import Assessment, AssessmentResponse, GapAnalysis


def _participant(user):
    return {
        'id': str(user.id),
        'first_name': user.first_name,
        'last_name': user.last_name,
        'email': user.email,
    }


class StartAssessmentSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    assessment_type = serializers.ChoiceField(choices=Assessment.TYPE_CHOICES)


class ResponseEntrySerializer(serializers.Serializer):
    question_id = serializers.UUIDField()
    response_value = serializers.JSONField()
    time_spent_seconds = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class SubmitResponsesSerializer(serializers.Serializer):
    responses = ResponseEntrySerializer(many=True, allow_empty=False)


class GapAnalysisSerializer(serializers.ModelSerializer):
    area = CompetencyAreaSummarySerializer(source='competency_area', read_only=True)
    current_level = CompetencyLevelSerializer(read_only=True)
    target_level = CompetencyLevelSerializer(read_only=True)

    class Meta:
        model = GapAnalysis
        fields = [
            'id', 'area', 'self_rating_score', 'knowledge_score', 'gap_score',
            'priority', 'current_level', 'target_level',
        ]


class AssessmentResponseSerializer(serializers.ModelSerializer):
    class Meta:
        model = AssessmentResponse
        fields = ['id', 'question_id', 'response_value', 'score', 'time_spent_seconds', 'answered_at']


class AssessmentListSerializer(serializers.ModelSerializer):
    project = serializers.SerializerMethodField()
    instrument = serializers.SerializerMethodField()
    participant = serializers.SerializerMethodField()
    response_count = serializers.SerializerMethodField()
    gap_analysis_count = serializers.SerializerMethodField()

    class Meta:
        model = Assessment
        fields = [
            'id', 'assessment_type', 'status', 'started_at', 'completed_at', 'time_taken_minutes',
            'project', 'instrument', 'participant', 'response_count', 'gap_analysis_count', 'created_at',
        ]

    def get_project(self, obj):
        return {'id': str(obj.project_id), 'name': obj.project.name}

    def get_instrument(self, obj):
        return {'id': str(obj.instrument_id), 'name': obj.instrument.name, 'type': obj.instrument.type}

    def get_participant(self, obj):
        return _participant(obj.participant)

    def get_response_count(self, obj):
        return obj.responses.count()

    def get_gap_analysis_count(self, obj):
        return obj.gap_analyses.count()


class AssessmentDetailSerializer(AssessmentListSerializer):
    """
    Assessment with the instrument's questions and the answers given so far.

    Pass context={'hide_answers': True} to strip correct answers and
    rationales from the questions.
    """
    questions = serializers.SerializerMethodField()
    responses = AssessmentResponseSerializer(many=True, read_only=True)

    class Meta(AssessmentListSerializer.Meta):
        fields = AssessmentListSerializer.Meta.fields + ['questions', 'responses']

    def get_questions(self, obj):
        questions = AssessmentQuestion.objects.filter(instrument_id=obj.instrument_id).select_related(
            'competency_item__area', 'competency_item__level'
        ).order_by('sort_order')
        return AssessmentQuestionSerializer(questions, many=True, context=self.context).data


class CompletedAssessmentSerializer(serializers.ModelSerializer):
    gap_analyses = serializers.SerializerMethodField()

    class Meta:
        model = Assessment
        fields = [
            'id', 'assessment_type', 'status', 'started_at', 'completed_at',
            'time_taken_minutes', 'gap_analyses',
        ]

    def get_gap_analyses(self, obj):
        gaps = obj.gap_analyses.select_related(
            'competency_area', 'current_level', 'target_level'
        ).order_by('competency_area__sort_order')
        return GapAnalysisSerializer(gaps, many=True).data
