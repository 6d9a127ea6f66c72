from django.urls import path

from . import auth

urlpatterns = [
    path('register/', auth.register, name='auth-register'),
    path('login/', auth.login, name='auth-login'),
    path('refresh/', auth.refresh, name='auth-refresh'),
    path('me/', auth.me, name='auth-me'),
]
