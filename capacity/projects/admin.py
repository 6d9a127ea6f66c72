from django.contrib import admin
from .models import Project, ProjectParticipant


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
	list_display = ('name', 'organization', 'domain', 'status', 'start_date', 'end_date')
	list_filter = ('status', 'organization')
	search_fields = ('name',)


@admin.register(ProjectParticipant)
class ProjectParticipantAdmin(admin.ModelAdmin):
	list_display = ('project', 'user', 'invited_at')
	list_filter = ('project',)
