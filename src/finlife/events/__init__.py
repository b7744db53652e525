"""Turn stages for the finlife engine.

Every stage is an Event subclass wrapping one system function from
``finlife.systems``. Stages are auto-registered via __init_subclass__ and
composed into the ``weekly`` and ``monthly_close`` pipelines.

Each event module corresponds to a system concern:
- decisions.py → systems/scheduled.py
- cashflow.py → systems/cashflow.py
- markets.py → systems/investments.py
- debt.py → systems/loans.py, systems/credit.py
- assets.py → systems/assets.py
- career.py → systems/career.py, systems/social.py
- random_events.py → systems/expenses.py, systems/random_events.py
- crisis.py → systems/crisis.py
"""

# Import all events to trigger auto-registration
from finlife.events.assets import ApplyHousingCosts, ApplyVehicleCosts
from finlife.events.career import (
    ApplyReputationEffects,
    MonthlyJobReview,
    UpdateNpcRelationships,
)
from finlife.events.cashflow import (
    AccrueWeeklyInterest,
    CollectMonthlyIncome,
    PayMandatoryExpenses,
    RecordMonthlyHistory,
)
from finlife.events.crisis import EvaluateCrisis
from finlife.events.debt import ProcessLoanDelinquency, ServiceLoans, UpdateCreditScore
from finlife.events.decisions import ApplyScheduledEffects
from finlife.events.markets import PayMonthlyDividends, UpdateInvestmentPrices
from finlife.events.random_events import (
    ApplyWeeklyRandomExpenses,
    GenerateMonthlyMajorEvents,
    GenerateWeeklyMinorEvents,
)

__all__ = [
    # Weekly stages (6)
    "ApplyScheduledEffects",
    "AccrueWeeklyInterest",
    "UpdateInvestmentPrices",
    "ProcessLoanDelinquency",
    "ApplyWeeklyRandomExpenses",
    "GenerateWeeklyMinorEvents",
    # Monthly close stages (13)
    "CollectMonthlyIncome",
    "PayMandatoryExpenses",
    "ServiceLoans",
    "ApplyHousingCosts",
    "ApplyVehicleCosts",
    "PayMonthlyDividends",
    "UpdateCreditScore",
    "MonthlyJobReview",
    "UpdateNpcRelationships",
    "ApplyReputationEffects",
    "GenerateMonthlyMajorEvents",
    "EvaluateCrisis",
    "RecordMonthlyHistory",
]
