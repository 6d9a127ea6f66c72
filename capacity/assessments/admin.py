from django.contrib import admin
from .models import Assessment, AssessmentResponse, GapAnalysis


@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
	list_display = ('participant', 'project', 'assessment_type', 'status', 'completed_at')
	list_filter = ('assessment_type', 'status', 'project')


@admin.register(AssessmentResponse)
class AssessmentResponseAdmin(admin.ModelAdmin):
	list_display = ('assessment', 'question', 'score', 'answered_at')


@admin.register(GapAnalysis)
class GapAnalysisAdmin(admin.ModelAdmin):
	list_display = ('assessment', 'competency_area', 'knowledge_score', 'gap_score', 'priority')
	list_filter = ('priority',)
