# src/finlife/systems/investments.py
"""Weekly price walk and monthly dividends for held investments."""

from __future__ import annotations

from finlife import logging
from finlife.state import PlayerState
from finlife.typing import Rng

log = logging.getLogger(__name__)

# annual -> weekly volatility, roughly sqrt(52) / sqrt(12)
WEEKLY_VOLATILITY_DIVISOR = 2.08


def update_investment_prices(
    state: PlayerState,
    rng: Rng,
    *,
    market_factor: float = 0.0,
    weeks_per_month: float = 4.33,
) -> float:
    """
    Move every holding one step along its random walk.

    Rule
    ----
        sigma_w = volatility / 2.08
        r_w     = U(-0.5, 0.5) * sigma_w + market_factor / weeks_per_month
        p_t     = p_{t-1} * (1 + r_w)

    Returns
    -------
    float
        Portfolio value after the update.
    """
    for inv in state.investments:
        weekly_vol = inv.volatility / WEEKLY_VOLATILITY_DIVISOR
        weekly_return = (float(rng.random()) - 0.5) * weekly_vol
        weekly_return += market_factor / weeks_per_month

        old_price = inv.share_price
        inv.revalue(old_price * (1 + weekly_return))
        inv.last_price_update = state.current_date

        log.debug(
            f"  {inv.symbol}: {old_price:,.2f} -> {inv.share_price:,.2f} "
            f"({weekly_return * 100:+.2f}%)"
        )

    return state.portfolio_value


def pay_monthly_dividends(state: PlayerState) -> float:
    """
    Credit one month of dividends from yield-bearing holdings to savings.

    A holding pays ``total_value * dividend_yield / 12``.
    """
    total = 0.0
    for inv in state.investments:
        if inv.dividend_yield and inv.dividend_yield > 0:
            dividend = inv.total_value * inv.dividend_yield / 12
            state.balance_virtual += dividend
            state.record_transaction(f"Dividend: {inv.symbol}", dividend, "Investments")
            total += dividend
    return total
