"""
Saved impact reports
"""
from django.db import models
from django.utils import timezone
import uuid


class ImpactReport(models.Model):
    """Snapshot of an individual or institutional report, baseline vs post-training"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='report_id')
    project = models.ForeignKey(
        'projects.Project', on_delete=models.CASCADE, related_name='impact_reports', db_column='project_id'
    )
    participant = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.CASCADE, null=True, blank=True,
        related_name='impact_reports', db_column='participant_id'
    )
    baseline_assessment = models.ForeignKey(
        'assessments.Assessment', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='+', db_column='baseline_assessment_id'
    )
    post_assessment = models.ForeignKey(
        'assessments.Assessment', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='+', db_column='post_assessment_id'
    )
    overall_improvement_percent = models.FloatField(blank=True, null=True, db_column='overall_improvement_percent')
    area_improvements = models.JSONField(default=dict, blank=True, db_column='area_improvements')
    level_changes = models.JSONField(default=dict, blank=True, db_column='level_changes')
    recommendations = models.JSONField(blank=True, null=True, db_column='recommendations')
    report_data = models.JSONField(default=dict, blank=True, db_column='report_data')
    generated_at = models.DateTimeField(default=timezone.now, db_column='generated_at')

    class Meta:
        db_table = 'impact_reports'
        ordering = ['-generated_at']

    def __str__(self):
        scope = self.participant or 'cohort'
        return f"Impact report {self.project} / {scope}"
