from django.urls import path
from . import views

urlpatterns = [
    path('', views.dashboard_view, name='dream_dashboard'),
    path('<int:pk>/health/', views.dream_health_view, name='dream_health'),
]
