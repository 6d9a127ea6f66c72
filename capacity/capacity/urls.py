"""
URL configuration for the capacity project.

All API routes live under /api/, one prefix per app.
"""
from django.contrib import admin
from django.urls import include, path

from .health_check import health_check, liveness_check, readiness_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', health_check, name='health-check'),
    path('api/health/ready/', readiness_check, name='readiness-check'),
    path('api/health/alive/', liveness_check, name='liveness-check'),
    path('api/auth/', include('accounts.auth_urls')),
    path('api/users/', include('accounts.user_urls')),
    path('api/organizations/', include('accounts.organization_urls')),
    path('api/competencies/', include('competencies.urls')),
    path('api/projects/', include('projects.urls')),
    path('api/assessments/', include('assessments.urls')),
    path('api/curriculum/', include('curriculum.urls')),
    path('api/reports/', include('reports.urls')),
    path('api/investments/', include('investments.urls')),
]
