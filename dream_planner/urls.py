# dream_planner/urls.py
from django.urls import path, include


urlpatterns = [
    # Tutaj podpinamy nasze aplikacje:
    path('dreams/', include('apps.dreams.urls')),
]
