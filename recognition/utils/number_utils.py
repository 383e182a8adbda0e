# Standard library imports
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """
    Round ``value`` to ``places`` decimals, halves away from zero.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    so the value goes through ``Decimal`` via its shortest repr instead.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int, places: int = 2) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 100, places)
