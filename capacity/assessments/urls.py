from django.urls import path

from . import views

urlpatterns = [
    path('', views.assessment_list, name='assessment-list'),
    path('start/', views.assessment_start, name='assessment-start'),
    path('<uuid:assessment_id>/', views.assessment_detail, name='assessment-detail'),
    path('<uuid:assessment_id>/responses/', views.assessment_responses, name='assessment-responses'),
    path('<uuid:assessment_id>/complete/', views.assessment_complete, name='assessment-complete'),
    path('<uuid:assessment_id>/results/', views.assessment_results, name='assessment-results'),
]
