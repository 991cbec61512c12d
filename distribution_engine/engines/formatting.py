"""Yuvarlama ve görüntüleme yardımcıları."""

from __future__ import annotations

import math


def round_half_up(value: float, decimals: int = 0) -> float:
    """x.5 değerlerini yukarı yuvarlar (Python'un round() davranışından farklı)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def format_currency(amount: float, include_cents: bool = False) -> str:
    """AUD tutarını gösterim için biçimlendirir: ``$1,234`` / ``-$398``."""
    decimals = 2 if include_cents else 0
    sign = "-" if amount < 0 else ""
    # Yarım değerler sıfırdan uzağa yuvarlanır: 2.5 -> $3, -2.5 -> -$3
    rounded = round_half_up(abs(amount), decimals)
    return f"{sign}${rounded:,.{decimals}f}"


def format_percentage(percentage: float, decimals: int = 0) -> str:
    return f"{percentage:.{decimals}f}%"
