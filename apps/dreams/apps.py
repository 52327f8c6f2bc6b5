from django.apps import AppConfig

class DreamsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.dreams'  # Ważne: pełna ścieżka z 'apps.'
    label = 'dreams'      # Ważne: krótka nazwa, żeby Django widziało to jako 'dreams'
    verbose_name = 'Dreams'
