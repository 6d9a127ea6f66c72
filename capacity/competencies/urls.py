"""
Competency framework URL configuration
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AssessmentInstrumentViewSet, CompetencyAreaViewSet, CompetencyDomainViewSet,
    CompetencyLevelViewSet, item_create, role_target_list,
)

router = DefaultRouter()
router.register(r'domains', CompetencyDomainViewSet, basename='competency-domain')
router.register(r'levels', CompetencyLevelViewSet, basename='competency-level')
router.register(r'areas', CompetencyAreaViewSet, basename='competency-area')
router.register(r'instruments', AssessmentInstrumentViewSet, basename='assessment-instrument')

urlpatterns = [
    path('items/', item_create, name='competency-item-create'),
    path('role-targets/', role_target_list, name='role-target-list'),
    path('', include(router.urls)),
]
