from django.urls import path

from . import views

urlpatterns = [
    path('', views.user_list, name='user-list'),
    path('me/', views.user_me, name='user-me'),
    path('me/participant-profile/', views.participant_profile, name='user-participant-profile'),
    path('<uuid:user_id>/', views.user_detail, name='user-detail'),
]
