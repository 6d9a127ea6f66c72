"""
Competency framework models

Domain -> Area -> Item, each item pinned to a proficiency Level. Instruments
hold the question bank; RoleTargetLevel maps a job role to the level expected
in each area.
"""
from django.db import models
from django.utils import timezone
import uuid

from accounts.models import ROLE_TYPE_CHOICES


class CompetencyLevel(models.Model):
    """Proficiency tier with the knowledge score needed to reach it"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='level_id')
    level_number = models.PositiveSmallIntegerField(unique=True, db_column='level_number')
    name = models.CharField(max_length=100, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    benchmark_score = models.FloatField(db_column='benchmark_score')

    class Meta:
        db_table = 'competency_levels'
        ordering = ['level_number']

    def __str__(self):
        return f"L{self.level_number} {self.name}"


class CompetencyDomain(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='domain_id')
    code = models.CharField(max_length=20, unique=True, db_column='code')
    name = models.CharField(max_length=255, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    framework_alignment = models.JSONField(default=list, blank=True, db_column='framework_alignment')
    is_active = models.BooleanField(default=True, db_column='is_active')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'competency_domains'
        ordering = ['code']

    def __str__(self):
        return f"{self.code} {self.name}"


class CompetencyArea(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='area_id')
    domain = models.ForeignKey(CompetencyDomain, on_delete=models.CASCADE, related_name='areas', db_column='domain_id')
    code = models.CharField(max_length=20, unique=True, db_column='code')
    name = models.CharField(max_length=255, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    sort_order = models.IntegerField(default=0, db_column='sort_order')
    weight = models.FloatField(default=1.0, db_column='weight')

    class Meta:
        db_table = 'competency_areas'
        ordering = ['sort_order', 'code']

    def __str__(self):
        return f"{self.code} {self.name}"


class CompetencyItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='item_id')
    area = models.ForeignKey(CompetencyArea, on_delete=models.CASCADE, related_name='items', db_column='area_id')
    level = models.ForeignKey(CompetencyLevel, on_delete=models.PROTECT, related_name='items', db_column='level_id')
    code = models.CharField(max_length=30, unique=True, db_column='code')
    description = models.TextField(db_column='description')
    sort_order = models.IntegerField(default=0, db_column='sort_order')

    class Meta:
        db_table = 'competency_items'
        ordering = ['code']

    def __str__(self):
        return self.code


class AssessmentInstrument(models.Model):
    """Versioned question bank for a domain"""
    TYPE_CHOICES = [
        ('SELF_ASSESSMENT', 'Self Assessment'),
        ('KNOWLEDGE_TEST', 'Knowledge Test'),
        ('COMBINED', 'Combined'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='instrument_id')
    domain = models.ForeignKey(
        CompetencyDomain, on_delete=models.CASCADE, related_name='instruments', db_column='domain_id'
    )
    name = models.CharField(max_length=255, db_column='name')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='COMBINED', db_column='type')
    version = models.CharField(max_length=20, default='1.0', db_column='version')
    is_active = models.BooleanField(default=True, db_column='is_active')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'assessment_instruments'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} v{self.version}"


class AssessmentQuestion(models.Model):
    SELF_RATING = 'SELF_RATING'
    MULTIPLE_CHOICE = 'MULTIPLE_CHOICE'
    TRUE_FALSE = 'TRUE_FALSE'
    SCENARIO = 'SCENARIO'

    TYPE_CHOICES = [
        (SELF_RATING, 'Self Rating'),
        (MULTIPLE_CHOICE, 'Multiple Choice'),
        (TRUE_FALSE, 'True / False'),
        (SCENARIO, 'Scenario'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='question_id')
    instrument = models.ForeignKey(
        AssessmentInstrument, on_delete=models.CASCADE, related_name='questions', db_column='instrument_id'
    )
    competency_item = models.ForeignKey(
        CompetencyItem, on_delete=models.PROTECT, related_name='questions', db_column='competency_item_id'
    )
    question_type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_column='question_type')
    question_text = models.TextField(db_column='question_text')
    options = models.JSONField(default=list, blank=True, db_column='options')
    # a single value or a list of accepted values
    correct_answer = models.JSONField(blank=True, null=True, db_column='correct_answer')
    points = models.PositiveIntegerField(default=1, db_column='points')
    difficulty_level = models.PositiveSmallIntegerField(default=1, db_column='difficulty_level')
    sort_order = models.IntegerField(default=0, db_column='sort_order')
    rationale = models.TextField(blank=True, default='', db_column='rationale')

    class Meta:
        db_table = 'assessment_questions'
        ordering = ['sort_order']

    def __str__(self):
        return f"{self.question_type} #{self.sort_order}"

    @property
    def is_self_rating(self):
        return self.question_type == self.SELF_RATING


class RoleTargetLevel(models.Model):
    """Level a job role is expected to reach in a competency area (by area code)"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='role_target_id')
    role_type = models.CharField(max_length=20, choices=ROLE_TYPE_CHOICES, db_column='role_type')
    area_code = models.CharField(max_length=20, db_column='area_code')
    level = models.ForeignKey(
        CompetencyLevel, on_delete=models.PROTECT, related_name='role_targets', db_column='level_id'
    )

    class Meta:
        db_table = 'role_target_levels'
        unique_together = [('role_type', 'area_code')]
        ordering = ['role_type', 'area_code']

    def __str__(self):
        return f"{self.role_type} {self.area_code} -> L{self.level.level_number}"
