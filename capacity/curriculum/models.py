"""
Curriculum models - the learning unit catalogue, gap-driven recommendations
and the curricula built from them
"""
from django.db import models
from django.utils import timezone
import uuid


class LearningUnit(models.Model):
    DELIVERY_METHODS = ['LECTURE', 'CASE_STUDY', 'WORKSHOP', 'PRACTICAL', 'PEER_REVIEW', 'E_LEARNING']

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='learning_unit_id')
    domain = models.ForeignKey(
        'competencies.CompetencyDomain', on_delete=models.CASCADE,
        related_name='learning_units', db_column='domain_id'
    )
    code = models.CharField(max_length=30, unique=True, db_column='code')
    name = models.CharField(max_length=255, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    duration_hours = models.FloatField(default=0, db_column='duration_hours')
    delivery_methods = models.JSONField(default=list, blank=True, db_column='delivery_methods')
    learning_outcomes = models.JSONField(default=list, blank=True, db_column='learning_outcomes')
    level_appropriate = models.ForeignKey(
        'competencies.CompetencyLevel', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='learning_units', db_column='level_appropriate_id'
    )
    competency_areas = models.ManyToManyField(
        'competencies.CompetencyArea', through='LearningUnitCompetency', related_name='learning_units'
    )
    prerequisites = models.ManyToManyField(
        'self', symmetrical=False, blank=True, related_name='prerequisite_for',
        db_table='learning_unit_prerequisites'
    )
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'learning_units'
        ordering = ['code']

    def __str__(self):
        return f"{self.code} {self.name}"

    @property
    def level_number(self):
        """Units without a level are treated as foundation level."""
        return self.level_appropriate.level_number if self.level_appropriate else 1


class LearningUnitCompetency(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='learning_unit_competency_id')
    learning_unit = models.ForeignKey(LearningUnit, on_delete=models.CASCADE, db_column='learning_unit_id')
    competency_area = models.ForeignKey(
        'competencies.CompetencyArea', on_delete=models.CASCADE, db_column='competency_area_id'
    )

    class Meta:
        db_table = 'learning_unit_competencies'
        unique_together = [('learning_unit', 'competency_area')]


class CurriculumRecommendation(models.Model):
    STATUS_RECOMMENDED = 'RECOMMENDED'
    STATUS_ACCEPTED = 'ACCEPTED'

    STATUS_CHOICES = [
        (STATUS_RECOMMENDED, 'Recommended'),
        (STATUS_ACCEPTED, 'Accepted'),
        ('REJECTED', 'Rejected'),
        ('DELIVERED', 'Delivered'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='recommendation_id')
    project = models.ForeignKey(
        'projects.Project', on_delete=models.CASCADE, related_name='recommendations', db_column='project_id'
    )
    # null for cohort-wide recommendations
    participant = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.CASCADE, null=True, blank=True,
        related_name='recommendations', db_column='participant_id'
    )
    learning_unit = models.ForeignKey(
        LearningUnit, on_delete=models.CASCADE, related_name='recommendations', db_column='learning_unit_id'
    )
    priority_rank = models.PositiveIntegerField(db_column='priority_rank')
    rationale = models.TextField(blank=True, default='', db_column='rationale')
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_RECOMMENDED, db_column='status'
    )
    gap_analyses = models.ManyToManyField(
        'assessments.GapAnalysis', blank=True, related_name='recommendations',
        db_table='curriculum_recommendation_gaps'
    )
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'curriculum_recommendations'
        ordering = ['priority_rank']

    def __str__(self):
        return f"#{self.priority_rank} {self.learning_unit_id} ({self.status})"


class Curriculum(models.Model):
    STATUS_DRAFT = 'DRAFT'
    STATUS_APPROVED = 'APPROVED'

    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_APPROVED, 'Approved'),
        ('DELIVERED', 'Delivered'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='curriculum_id')
    project = models.ForeignKey(
        'projects.Project', on_delete=models.CASCADE, related_name='curricula', db_column='project_id'
    )
    name = models.CharField(max_length=255, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    total_hours = models.FloatField(default=0, db_column='total_hours')
    delivery_schedule = models.JSONField(default=dict, blank=True, db_column='delivery_schedule')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_column='status')
    created_by = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='created_curricula', db_column='created_by'
    )
    approved_by = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='approved_curricula', db_column='approved_by'
    )
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'curricula'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class CurriculumLearningUnit(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='curriculum_learning_unit_id')
    curriculum = models.ForeignKey(
        Curriculum, on_delete=models.CASCADE, related_name='units', db_column='curriculum_id'
    )
    learning_unit = models.ForeignKey(
        LearningUnit, on_delete=models.PROTECT, related_name='curriculum_entries', db_column='learning_unit_id'
    )
    sort_order = models.IntegerField(default=0, db_column='sort_order')

    class Meta:
        db_table = 'curriculum_learning_units'
        ordering = ['sort_order']

    def __str__(self):
        return f"{self.curriculum_id} #{self.sort_order}"
