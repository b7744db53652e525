"""Investment stages: the weekly price walk and monthly dividends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.investments import pay_monthly_dividends, update_investment_prices

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class UpdateInvestmentPrices:
    """
    Move every holding one step along its random walk.

    Rule
    ----
        σ_w = σ / 2.08
        r_w = U(-0.5, 0.5) · σ_w + m / w
        p  ← p · (1 + r_w)

    σ: annual volatility, m: market drift, w: weeks per month
    """

    def execute(self, sim: Simulation) -> None:
        if not sim.state.investments:
            return
        value = update_investment_prices(
            sim.state,
            sim.rng,
            market_factor=sim.config.market_drift,
            weeks_per_month=sim.config.weeks_per_month,
        )
        self.get_logger().info(f"  Portfolio value: {value:,.2f}")


@event
class PayMonthlyDividends:
    """
    Credit one month of dividends from yield-bearing holdings to savings.

    Rule
    ----
        V += Σ value · yield / 12
    """

    def execute(self, sim: Simulation) -> None:
        total = pay_monthly_dividends(sim.state)
        if total:
            self.get_logger().info(f"  Dividends credited: {total:,.2f}")
