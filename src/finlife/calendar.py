"""
Turn calendar.

A turn is one week. Every fourth week of the calendar year is a
*monthly close*, which gives thirteen accounting months per 52-week year.
Week numbers restart on January 1st while turn numbers run on from the
game start.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

TurnType = Literal["weekly", "monthly_close"]

DAYS_PER_TURN = 7
WEEKS_PER_CLOSE = 4

_DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(slots=True, frozen=True)
class GameTurn:
    turn_number: int
    week_number: int
    month_number: int
    year: int
    day_of_week: str
    turn_type: TurnType

    @property
    def is_monthly_close(self) -> bool:
        return self.turn_type == "monthly_close"


def calculate_turn_info(current_date: date, game_start_date: date) -> GameTurn:
    """
    Derive the turn position of *current_date*.

    Parameters
    ----------
    current_date : date
        Simulated "today".
    game_start_date : date
        Day the game began.

    Returns
    -------
    GameTurn
        Turn and week numbers are 1-indexed. ``month_number`` is the
        calendar month of *current_date*.

    Examples
    --------
    >>> calculate_turn_info(date(2024, 1, 22), date(2024, 1, 1)).turn_type
    'monthly_close'
    """
    days_since_year_start = (current_date - date(current_date.year, 1, 1)).days
    days_since_start = (current_date - game_start_date).days

    week_number = days_since_year_start // DAYS_PER_TURN + 1
    turn_number = days_since_start // DAYS_PER_TURN + 1
    turn_type: TurnType = (
        "monthly_close" if week_number % WEEKS_PER_CLOSE == 0 else "weekly"
    )

    return GameTurn(
        turn_number=turn_number,
        week_number=week_number,
        month_number=current_date.month,
        year=current_date.year,
        day_of_week=_DAY_NAMES[current_date.weekday()],
        turn_type=turn_type,
    )


def advance(current_date: date, days: int = DAYS_PER_TURN) -> date:
    """Return *current_date* moved forward by one turn."""
    return current_date + timedelta(days=days)


def add_months(start: date, months: int) -> date:
    """Approximate maturity date: 30 days per month."""
    return start + timedelta(days=30 * months)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from *start* to *end* (never negative)."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(0, months)
