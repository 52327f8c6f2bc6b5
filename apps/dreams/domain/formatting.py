# apps/dreams/domain/formatting.py
from typing import Optional

from apps.dreams.domain.values import round_half_up


def format_amount(amount: float) -> str:
    """1234.5 -> '1,234.5', 100.0 -> '100'."""
    text = f"{abs(amount):,.2f}".rstrip('0').rstrip('.')
    # -0.001 zaokrągla się do zera - bez minusa
    return f"-{text}" if amount < 0 and text != '0' else text


def format_currency(amount: Optional[float], symbol: str = '€') -> str:
    if amount is None:
        return '—'
    return f"{symbol}{format_amount(amount)}"


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_days_remaining(days: Optional[int]) -> str:
    """Czytelna forma liczby dni do terminu (do wyświetlenia na kafelku)."""
    if days is None:
        return '—'
    if days < 0:
        return f"{abs(days)} days overdue"
    if days == 0:
        return 'Due today'
    if days == 1:
        return '1 day'
    if days <= 7:
        return f"{days} days"
    if days <= 30:
        return f"{round_half_up(days / 7)} weeks"
    return f"{round_half_up(days / 30)} months"
