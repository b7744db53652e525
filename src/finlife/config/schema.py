"""
Configuration dataclass for simulation parameters.

Config instances are created by Simulation.init() after merging the
packaged defaults, the user config and keyword overrides, and after
ConfigValidator has accepted the merged dict.

See Also
--------
ConfigValidator : Centralized validation for configuration parameters
finlife.simulation.Simulation.init : Creates Config from merged parameters
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from typing import Any


@dataclass(slots=True, frozen=True)
class Config:
    """
    Immutable configuration of one simulated life.

    Parameters
    ----------
    start_date : date
        First day of the game.
    player_name, job_title : str
        Identity of the starting player.
    balance_debit, balance_virtual : float
        Starting checking and savings balances.
    income : float
        Starting monthly salary.
    rent, groceries, loan_payment, utilities : float
        Starting monthly expenses. ``loan_payment`` is debt service owed
        outside any tracked loan.
    happiness, stress, prospects : float
        Starting wellbeing, each in [0, 100].
    credit_score : float
        Starting credit score in [300, 850].
    starting_housing : str
        Catalog id of the starting (rented) home.
    savings_rate, overdraft_rate : float
        Annual rates accrued weekly on savings and on overdrafts.
    weeks_per_month : float
        Weeks per month used to prorate weekly figures.
    market_drift : float
        Global annual market factor added to every weekly price step.
    minimum_wage, unemployment_benefit : float
        Salary floor after cuts and the income after a layoff.
    delinquency_limit : float
        Checking balance below which a month's loan payments count as missed.
    red_zone_penalty : float
        Monthly overdraft penalty while in the red zone.
    bankruptcy_offer_days : int
        Days in the red zone before bankruptcy protection is offered.
    game_over_months : int
        Consecutive months of negative net worth that end the game.
    down_payment_rate : float
        Share of a purchase price paid up front for houses and financed cars.
    mortgage_months, auto_loan_months : int
        Terms of originated mortgages and auto loans.
    auto_loan_min_credit : float
        Credit score required to finance a vehicle.
    max_job_stress : float
        Stress above which job applications are refused.
    vehicle_repair_cost : float
        Cost of a vehicle breakdown.
    education_level : int
        Education level feeding the job-performance bonus.
    """

    start_date: date
    player_name: str = "Player"
    job_title: str = "Software Developer"

    balance_debit: float = 500.0
    balance_virtual: float = 10.0
    income: float = 3200.0
    rent: float = 1200.0
    groceries: float = 1100.0
    loan_payment: float = 600.0
    utilities: float = 200.0

    happiness: float = 60.0
    stress: float = 30.0
    prospects: float = 50.0
    credit_score: float = 700.0
    starting_housing: str = "rental_1bed"
    education_level: int = 0

    # Rates
    savings_rate: float = 0.02
    overdraft_rate: float = 0.05
    weeks_per_month: float = 4.33
    market_drift: float = 0.0

    # Career
    minimum_wage: float = 600.0
    unemployment_benefit: float = 300.0
    max_job_stress: float = 80.0

    # Debt and crisis
    delinquency_limit: float = -500.0
    red_zone_penalty: float = 50.0
    bankruptcy_offer_days: int = 90
    game_over_months: int = 3

    # Purchases
    down_payment_rate: float = 0.2
    mortgage_months: int = 360
    auto_loan_months: int = 60
    auto_loan_min_credit: float = 550.0
    vehicle_repair_cost: float = 400.0

    @classmethod
    def from_dict(cls, params: dict[str, Any]) -> Config:
        """Build a Config from the subset of *params* that are Config fields."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in params.items() if k in names})
