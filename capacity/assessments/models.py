"""
Assessment models - a participant's attempt, their answers and the
per-area gap analysis written when the attempt is completed
"""
from django.db import models
from django.utils import timezone
import uuid


class Assessment(models.Model):
    TYPE_BASELINE = 'BASELINE'
    TYPE_POST_TRAINING = 'POST_TRAINING'

    TYPE_CHOICES = [
        (TYPE_BASELINE, 'Baseline'),
        (TYPE_POST_TRAINING, 'Post Training'),
    ]

    STATUS_NOT_STARTED = 'NOT_STARTED'
    STATUS_IN_PROGRESS = 'IN_PROGRESS'
    STATUS_COMPLETED = 'COMPLETED'

    STATUS_CHOICES = [
        (STATUS_NOT_STARTED, 'Not Started'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='assessment_id')
    participant = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.CASCADE, related_name='assessments', db_column='participant_id'
    )
    project = models.ForeignKey(
        'projects.Project', on_delete=models.CASCADE, related_name='assessments', db_column='project_id'
    )
    instrument = models.ForeignKey(
        'competencies.AssessmentInstrument', on_delete=models.PROTECT,
        related_name='assessments', db_column='instrument_id'
    )
    assessment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_column='assessment_type')
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_NOT_STARTED, db_column='status'
    )
    started_at = models.DateTimeField(blank=True, null=True, db_column='started_at')
    completed_at = models.DateTimeField(blank=True, null=True, db_column='completed_at')
    time_taken_minutes = models.IntegerField(blank=True, null=True, db_column='time_taken_minutes')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'assessments'
        unique_together = [('participant', 'project', 'assessment_type')]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.assessment_type} {self.participant} ({self.status})"

    @property
    def is_completed(self):
        return self.status == self.STATUS_COMPLETED


class AssessmentResponse(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='response_id')
    assessment = models.ForeignKey(
        Assessment, on_delete=models.CASCADE, related_name='responses', db_column='assessment_id'
    )
    question = models.ForeignKey(
        'competencies.AssessmentQuestion', on_delete=models.CASCADE,
        related_name='responses', db_column='question_id'
    )
    response_value = models.JSONField(blank=True, null=True, db_column='response_value')
    score = models.FloatField(blank=True, null=True, db_column='score')
    time_spent_seconds = models.PositiveIntegerField(blank=True, null=True, db_column='time_spent_seconds')
    answered_at = models.DateTimeField(default=timezone.now, db_column='answered_at')

    class Meta:
        db_table = 'assessment_responses'
        unique_together = [('assessment', 'question')]

    def __str__(self):
        return f"{self.question_id}: {self.response_value}"


class GapAnalysis(models.Model):
    PRIORITY_CRITICAL = 'CRITICAL'
    PRIORITY_HIGH = 'HIGH'
    PRIORITY_MEDIUM = 'MEDIUM'
    PRIORITY_LOW = 'LOW'

    PRIORITY_CHOICES = [
        (PRIORITY_CRITICAL, 'Critical'),
        (PRIORITY_HIGH, 'High'),
        (PRIORITY_MEDIUM, 'Medium'),
        (PRIORITY_LOW, 'Low'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='gap_analysis_id')
    assessment = models.ForeignKey(
        Assessment, on_delete=models.CASCADE, related_name='gap_analyses', db_column='assessment_id'
    )
    competency_area = models.ForeignKey(
        'competencies.CompetencyArea', on_delete=models.CASCADE,
        related_name='gap_analyses', db_column='competency_area_id'
    )
    self_rating_score = models.FloatField(blank=True, null=True, db_column='self_rating_score')
    knowledge_score = models.FloatField(blank=True, null=True, db_column='knowledge_score')
    gap_score = models.FloatField(default=0, db_column='gap_score')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, db_column='priority')
    current_level = models.ForeignKey(
        'competencies.CompetencyLevel', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='+', db_column='current_level_id'
    )
    target_level = models.ForeignKey(
        'competencies.CompetencyLevel', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='+', db_column='target_level_id'
    )
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'gap_analyses'
        unique_together = [('assessment', 'competency_area')]

    def __str__(self):
        return f"{self.competency_area_id}: gap {self.gap_score} ({self.priority})"
