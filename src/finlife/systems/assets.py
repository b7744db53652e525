# src/finlife/systems/assets.py
"""
Housing and vehicle upkeep plus the sale helpers used when the player
moves house or replaces a car.
"""

from __future__ import annotations

from finlife import logging
from finlife.catalogs import Catalog, HousingTier
from finlife.state import CurrentHousing, Impact, PlayerState
from finlife.typing import Rng

log = logging.getLogger(__name__)

MILES_PER_WEEK = 250.0


def housing_cost(tier: HousingTier, housing: CurrentHousing) -> float:
    """Monthly cost of living in *tier*: rent, or upkeep when owned."""
    if housing.is_owned:
        return tier.maintenance_cost + tier.property_tax
    return tier.monthly_rent


def apply_monthly_housing_costs(state: PlayerState, catalog: Catalog) -> float:
    """
    Settle this month's housing cost.

    Mandatory expenses have already charged ``expenses.rent``; the
    difference to the actual cost is charged (or refunded) here and the
    actual cost is written back into ``expenses.rent``. A sublet owned
    unit also pays its rental income into checking.

    Returns
    -------
    float
        Actual housing cost for the month.
    """
    tier = catalog.find_housing(state.current_housing.housing_id)
    if tier is None:
        log.warning(f"Unknown housing '{state.current_housing.housing_id}'")
        return 0.0

    cost = housing_cost(tier, state.current_housing)
    adjustment = cost - state.expenses.rent
    if adjustment:
        state.balance_debit -= adjustment
        state.record_transaction("Housing Adjustment", -adjustment, "Housing")
    state.expenses.rent = cost

    if state.current_housing.is_rented_out and tier.rental_income:
        state.balance_debit += tier.rental_income
        state.record_transaction("Rental Income", tier.rental_income, "Housing")

    return cost


def apply_monthly_vehicle_costs(
    state: PlayerState,
    catalog: Catalog,
    rng: Rng,
    *,
    weeks_per_month: float = 4.33,
    repair_cost: float = 400.0,
) -> float:
    """
    Charge maintenance and fuel for the current vehicle and roll for a
    breakdown (``breakdown_chance`` is a monthly percentage).

    Returns
    -------
    float
        Total charged, including any repair.
    """
    vehicle = state.current_vehicle
    if vehicle is None:
        return 0.0
    tier = catalog.find_vehicle(vehicle.vehicle_id)
    if tier is None:
        log.warning(f"Unknown vehicle '{vehicle.vehicle_id}'")
        return 0.0

    running = tier.maintenance_cost + tier.fuel_cost * weeks_per_month
    state.balance_debit -= running
    state.record_transaction(f"{tier.name} upkeep", -running, "Transport")
    vehicle.mileage += MILES_PER_WEEK * weeks_per_month
    total = running

    if float(rng.random()) * 100 < tier.breakdown_chance:
        state.balance_debit -= repair_cost
        state.adjust_stress(10)
        state.record_transaction("Breakdown Repair", -repair_cost, "Transport")
        state.add_event(
            "crisis",
            "Vehicle Breakdown",
            f"Your {tier.name} broke down. Repair: ${repair_cost:,.0f}",
            impact=Impact(balance=-repair_cost, stress=10),
        )
        total += repair_cost

    return total


def housing_sale_value(state: PlayerState, catalog: Catalog) -> float:
    """Proceeds of selling the current home net of its mortgage (0 if rented)."""
    housing = state.current_housing
    if not housing.is_owned:
        return 0.0
    tier = catalog.find_housing(housing.housing_id)
    gross = housing.current_resale_value or (tier.resale_value if tier else 0.0) or 0.0
    loan = state.find_loan(housing.loan_id)
    return gross - (loan.remaining_balance if loan else 0.0)


def vehicle_sale_value(state: PlayerState, catalog: Catalog) -> float:
    """Proceeds of selling the current vehicle net of its loan (0 if none)."""
    vehicle = state.current_vehicle
    if vehicle is None:
        return 0.0
    tier = catalog.find_vehicle(vehicle.vehicle_id)
    gross = vehicle.current_resale_value or (tier.resale_value if tier else 0.0)
    loan = state.find_loan(vehicle.loan_id)
    return gross - (loan.remaining_balance if loan else 0.0)


def sell_current_housing(state: PlayerState, catalog: Catalog) -> float:
    """Sell an owned home, settle its mortgage and credit the net proceeds."""
    net = housing_sale_value(state, catalog)
    loan = state.find_loan(state.current_housing.loan_id)
    if loan is not None:
        state.remove_loan(loan)
    state.balance_debit += net
    state.record_transaction("Home Sale", net, "Housing", "transfer")
    return net


def sell_current_vehicle(state: PlayerState, catalog: Catalog) -> float:
    """Sell the vehicle, settle its loan and credit the net proceeds."""
    net = vehicle_sale_value(state, catalog)
    vehicle = state.current_vehicle
    loan = state.find_loan(vehicle.loan_id) if vehicle else None
    if loan is not None:
        state.remove_loan(loan)
    state.current_vehicle = None
    state.balance_debit += net
    state.record_transaction("Vehicle Sale", net, "Transport", "transfer")
    return net
