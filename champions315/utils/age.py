"""Age calculation for the league's age-sum rule."""
from datetime import date
from typing import Union


def parse_birth_date(value: Union[date, str]) -> date:
    """
    Parse a birth date given either as a ``date`` or a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If the string is not an ISO date
    """
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def calc_age(birth_date: Union[date, str], reference_year: int) -> int:
    """
    Calculate a player's age for league purposes.

    Only the year counts: month and day are ignored, so everyone born in
    the same year has the same age for the whole season.

    Args:
        birth_date: Date of birth (``date`` or ``YYYY-MM-DD``)
        reference_year: Year the age is computed against

    Returns:
        ``reference_year - birth_year``

    Example:
        >>> calc_age("1984-12-31", 2026)
        42
    """
    return reference_year - parse_birth_date(birth_date).year
