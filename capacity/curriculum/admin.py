from django.contrib import admin
from .models import Curriculum, CurriculumLearningUnit, CurriculumRecommendation, LearningUnit


class CurriculumLearningUnitInline(admin.TabularInline):
	model = CurriculumLearningUnit
	extra = 0


@admin.register(LearningUnit)
class LearningUnitAdmin(admin.ModelAdmin):
	list_display = ('code', 'name', 'domain', 'level_appropriate', 'duration_hours')
	list_filter = ('domain', 'level_appropriate')
	search_fields = ('code', 'name')


@admin.register(CurriculumRecommendation)
class CurriculumRecommendationAdmin(admin.ModelAdmin):
	list_display = ('project', 'participant', 'learning_unit', 'priority_rank', 'status')
	list_filter = ('status', 'project')


@admin.register(Curriculum)
class CurriculumAdmin(admin.ModelAdmin):
	list_display = ('name', 'project', 'status', 'total_hours', 'created_at')
	list_filter = ('status',)
	inlines = [CurriculumLearningUnitInline]
