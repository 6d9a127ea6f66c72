from django.urls import path

from . import views

urlpatterns = [
    path('', views.curriculum_create, name='curriculum-create'),
    path('learning-units/', views.learning_unit_list, name='learning-unit-list'),
    path('learning-units/<uuid:unit_id>/', views.learning_unit_detail, name='learning-unit-detail'),
    path('recommendations/<uuid:object_id>/', views.recommendations, name='recommendations'),
    path('generate-recommendations/<uuid:project_id>/', views.generate_recommendations,
         name='generate-recommendations'),
    path('project/<uuid:project_id>/', views.project_curricula, name='project-curricula'),
    path('<uuid:curriculum_id>/', views.curriculum_detail, name='curriculum-detail'),
]
