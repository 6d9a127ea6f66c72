from django.urls import path

from . import views

urlpatterns = [
    path('individual/<uuid:participant_id>/<uuid:project_id>/', views.individual_report, name='individual-report'),
    path('institutional/<uuid:project_id>/', views.institutional_report, name='institutional-report'),
    path('save/', views.save_report, name='save-report'),
    path('download/<uuid:report_id>/', views.download_report, name='download-report'),
    path('benchmarks/<uuid:domain_id>/', views.benchmarks, name='benchmarks'),
]
