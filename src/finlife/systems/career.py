# src/finlife/systems/career.py
"""
Job performance and the monthly review.

The review can promote, cut the salary of, or lay off the player. The
three checks run in that order and do not short-circuit one another.
"""

from __future__ import annotations

from finlife import logging
from finlife.state import Impact, JobMetrics, PlayerState, clamp
from finlife.typing import Rng

log = logging.getLogger(__name__)

HISTORY_LENGTH = 12


def calculate_job_performance(
    previous: float,
    happiness: float,
    stress: float,
    education_level: int = 0,
    job_difficulty: float = 50.0,
) -> float:
    """
    Next month's performance score in ``[0, 100]``.

    Multiplicative happiness and stress bands are applied first, then the
    education bonus (2 per level, capped at 20), then skill growth (+3)
    or decay (-4), and finally a 10 % penalty on jobs harder than 70.

    Examples
    --------
    >>> calculate_job_performance(75.0, happiness=70, stress=30)
    78.0
    """
    perf = previous

    if happiness < 20:
        perf *= 0.6
    elif happiness < 40:
        perf *= 0.8
    elif happiness < 50:
        perf *= 0.9
    elif happiness > 75:
        perf *= 1.15

    if stress > 90:
        perf *= 0.7
    elif stress > 75:
        perf *= 0.85
    elif stress > 60:
        perf *= 0.95

    perf += min(20, education_level * 2)

    if happiness > 60 and stress < 50:
        perf += 3
    elif happiness < 40 or stress > 75:
        perf -= 4

    if job_difficulty > 70:
        perf *= 0.9

    return clamp(perf, 0.0, 100.0)


def _mean_last(values: list[float], n: int) -> float:
    window = values[-n:]
    return sum(window) / len(window) if window else 0.0


def monthly_job_review(
    state: PlayerState,
    rng: Rng,
    *,
    minimum_wage: float = 600.0,
    unemployment_benefit: float = 300.0,
) -> None:
    """
    Score the month, update the rolling metrics and apply consequences.

    Rules
    -----
    - promotion: last three scores all above 75 and prospects above 60
    - salary cut: last two scores both below 40
    - layoff: performance below 20, or stress above 95 with performance
      below 30, or happiness below 20 with performance below 35; then
      happens with probability ``risk_of_layoff / 100``
    """
    metrics = state.job_metrics
    metrics.current_performance = calculate_job_performance(
        metrics.current_performance,
        state.happiness,
        state.stress,
        state.education_level,
        metrics.job_difficulty,
    )

    history = metrics.monthly_performance_history
    history.append(metrics.current_performance)
    del history[:-HISTORY_LENGTH]

    metrics.months_at_current_job += 1
    metrics.last_review_date = state.current_date

    metrics.promotion_eligibility = max(0.0, _mean_last(history, 6) - 50)
    metrics.risk_of_layoff = max(0.0, 100 - _mean_last(history, 3))

    log.debug(
        f"  performance={metrics.current_performance:.1f} "
        f"eligibility={metrics.promotion_eligibility:.1f} "
        f"risk={metrics.risk_of_layoff:.1f}"
    )

    if len(history) >= 3 and all(p > 75 for p in history[-3:]) and state.prospects > 60:
        trigger_promotion(state)

    if len(history) >= 2 and all(p < 40 for p in history[-2:]):
        trigger_salary_cut(state, minimum_wage=minimum_wage)

    perf = metrics.current_performance
    at_risk = (
        perf < 20
        or (state.stress > 95 and perf < 30)
        or (state.happiness < 20 and perf < 35)
    )
    if at_risk and float(rng.random()) < metrics.risk_of_layoff / 100:
        trigger_layoff(state, unemployment_benefit=unemployment_benefit)


def trigger_promotion(state: PlayerState) -> None:
    """15 % raise, +15 prospects, +25 happiness, +5 stress."""
    raise_amount = state.income * 0.15
    state.income += raise_amount
    state.adjust_prospects(15)
    state.adjust_happiness(25)
    state.adjust_stress(5)
    state.add_event(
        "career",
        "Promoted",
        f"Three strong months in a row earned you a raise of "
        f"${raise_amount:,.0f}. New salary: ${state.income:,.0f}/mo.",
        impact=Impact(income=raise_amount, happiness=25, stress=5),
    )
    log.info(f"Promotion: income now {state.income:,.2f}")


def trigger_salary_cut(state: PlayerState, *, minimum_wage: float = 600.0) -> None:
    """10 % cut floored at *minimum_wage*, +25 stress, -15 happiness."""
    new_income = max(minimum_wage, round(state.income * 0.9))
    cut = state.income - new_income
    state.income = new_income
    state.adjust_stress(25)
    state.adjust_happiness(-15)
    state.add_event(
        "career",
        "Salary Reduced",
        f"Due to poor performance your salary was reduced by ${cut:,.0f}. "
        f"New salary: ${state.income:,.0f}/mo.",
        impact=Impact(income=-cut, stress=25, happiness=-15),
    )
    log.info(f"Salary cut: income now {state.income:,.2f}")


def trigger_layoff(state: PlayerState, *, unemployment_benefit: float = 300.0) -> None:
    """Income drops to the unemployment benefit and wellbeing bottoms out."""
    metrics: JobMetrics = state.job_metrics
    state.income = unemployment_benefit
    state.stress = 100.0
    state.happiness = 0.0
    metrics.current_performance = 0.0
    metrics.months_at_current_job = 0
    state.adjust_prospects(-20)
    state.adjust_credit_score(-50)
    state.add_event(
        "career",
        "Laid Off",
        f"You were laid off due to performance/risk exposure. Monthly income "
        f"set to unemployment benefit of ${unemployment_benefit:,.0f}/mo.",
    )
    log.warning("Player laid off")
