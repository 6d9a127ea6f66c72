from django.contrib import admin
from .models import (
    AssessmentInstrument, AssessmentQuestion, CompetencyArea, CompetencyDomain,
    CompetencyItem, CompetencyLevel, RoleTargetLevel,
)


@admin.register(CompetencyLevel)
class CompetencyLevelAdmin(admin.ModelAdmin):
	list_display = ('level_number', 'name', 'benchmark_score')


@admin.register(CompetencyDomain)
class CompetencyDomainAdmin(admin.ModelAdmin):
	list_display = ('code', 'name', 'is_active')


@admin.register(CompetencyArea)
class CompetencyAreaAdmin(admin.ModelAdmin):
	list_display = ('code', 'name', 'domain', 'sort_order')
	list_filter = ('domain',)


@admin.register(CompetencyItem)
class CompetencyItemAdmin(admin.ModelAdmin):
	list_display = ('code', 'area', 'level')
	list_filter = ('area__domain', 'level')
	search_fields = ('code', 'description')


@admin.register(AssessmentInstrument)
class AssessmentInstrumentAdmin(admin.ModelAdmin):
	list_display = ('name', 'domain', 'type', 'version', 'is_active')


@admin.register(AssessmentQuestion)
class AssessmentQuestionAdmin(admin.ModelAdmin):
	list_display = ('sort_order', 'question_type', 'competency_item', 'points')
	list_filter = ('instrument', 'question_type')


@admin.register(RoleTargetLevel)
class RoleTargetLevelAdmin(admin.ModelAdmin):
	list_display = ('role_type', 'area_code', 'level')
	list_filter = ('role_type',)
