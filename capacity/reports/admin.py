from django.contrib import admin
from .models import ImpactReport


@admin.register(ImpactReport)
class ImpactReportAdmin(admin.ModelAdmin):
	list_display = ('project', 'participant', 'overall_improvement_percent', 'generated_at')
	list_filter = ('project',)
