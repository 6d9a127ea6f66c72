"""
Capacity-building projects and their enrolled participants
"""
from django.db import models
from django.utils import timezone
import uuid


class Project(models.Model):
    STATUS_SETUP = 'SETUP'
    STATUS_ACTIVE = 'ACTIVE'

    STATUS_CHOICES = [
        (STATUS_SETUP, 'Setup'),
        (STATUS_ACTIVE, 'Active'),
        ('DELIVERY', 'Delivery'),
        ('EVALUATION', 'Evaluation'),
        ('COMPLETED', 'Completed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='project_id')
    organization = models.ForeignKey(
        'accounts.Organization', on_delete=models.CASCADE, related_name='projects', db_column='organization_id'
    )
    domain = models.ForeignKey(
        'competencies.CompetencyDomain', on_delete=models.PROTECT, related_name='projects', db_column='domain_id'
    )
    name = models.CharField(max_length=255, db_column='name')
    description = models.TextField(blank=True, default='', db_column='description')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SETUP, db_column='status')
    start_date = models.DateField(blank=True, null=True, db_column='start_date')
    end_date = models.DateField(blank=True, null=True, db_column='end_date')
    settings = models.JSONField(default=dict, blank=True, db_column='settings')
    created_by = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='created_projects', db_column='created_by'
    )
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class ProjectParticipant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='project_participant_id')
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='participants', db_column='project_id')
    user = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.CASCADE, related_name='project_memberships', db_column='user_id'
    )
    invited_at = models.DateTimeField(default=timezone.now, db_column='invited_at')

    class Meta:
        db_table = 'project_participants'
        unique_together = [('project', 'user')]
        ordering = ['invited_at']

    def __str__(self):
        return f"{self.user} in {self.project}"
