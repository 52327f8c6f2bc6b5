# apps/dreams/conf.py
from django.conf import settings

DEFAULTS = {
    'HEALTH_WEIGHTS': {
        'progress': 50,
        'timeline': 30,
        'budget': 15,
        'activity': 5,
    },
    'ACTIVITY_WINDOW_DAYS': 7,
    'DUE_SOON_DAYS': 3,
    'UNDER_BUDGET_MIN_EXPENSES': 5,
    'CURRENCY_SYMBOL': '€',
    'ALERT_DISPLAY_LIMIT': 3,
    'PHASE_KEYWORD_FALLBACK': True,  # dopasowanie zadań legacy po słowach kluczowych
}


def get_dreams_config() -> dict:
    """settings.DREAMS nadpisuje wartości domyślne (wagi łączone per składnik)."""
    overrides = getattr(settings, 'DREAMS', None) or {}
    config = {**DEFAULTS, **overrides}
    config['HEALTH_WEIGHTS'] = {**DEFAULTS['HEALTH_WEIGHTS'], **overrides.get('HEALTH_WEIGHTS', {})}
    return config
