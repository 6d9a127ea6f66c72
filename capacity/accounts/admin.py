from django.contrib import admin
from .models import Organization, ParticipantProfile, UserProfile


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
	list_display = ('name', 'type', 'country', 'created_at')
	list_filter = ('type',)
	search_fields = ('name', 'country')


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
	list_display = ('email', 'first_name', 'last_name', 'role', 'organization', 'is_active')
	list_filter = ('role', 'is_active')
	search_fields = ('email', 'first_name', 'last_name')
	exclude = ('password_hash',)


@admin.register(ParticipantProfile)
class ParticipantProfileAdmin(admin.ModelAdmin):
	list_display = ('user', 'job_title', 'current_role_type', 'education_level')
	list_filter = ('current_role_type',)
