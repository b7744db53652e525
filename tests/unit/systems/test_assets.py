# tests/unit/systems/test_assets.py
from __future__ import annotations

import pytest

from finlife.state import CurrentHousing
from finlife.systems.assets import (
    apply_monthly_housing_costs,
    apply_monthly_vehicle_costs,
    housing_cost,
    housing_sale_value,
    sell_current_vehicle,
    vehicle_sale_value,
)
from tests.helpers.factories import (
    START,
    attach_loan,
    mock_loan,
    mock_player,
    mock_vehicle,
)
from tests.helpers.fixed_rng import FixedRNG


def _owned_starter(loan_id=None, rented_out=False) -> CurrentHousing:
    return CurrentHousing(
        housing_id="owned_starter",
        tier=3,
        is_owned=True,
        purchase_date=START,
        loan_id=loan_id,
        current_resale_value=120_000.0,
        is_rented_out=rented_out,
    )


# ---------------------------------------------------------------------------
# housing
# ---------------------------------------------------------------------------
def test_housing_cost_rent_vs_upkeep(catalog) -> None:
    rental = catalog.find_housing("rental_1bed")
    owned = catalog.find_housing("owned_starter")

    assert housing_cost(rental, CurrentHousing("rental_1bed", 2, False)) == 1200
    assert housing_cost(owned, _owned_starter()) == 300 + 200


def test_rent_already_charged_needs_no_adjustment(catalog) -> None:
    state = mock_player()
    assert apply_monthly_housing_costs(state, catalog) == 1200
    assert state.transactions == []
    assert state.balance_debit == 500.0


def test_owned_home_refunds_difference(catalog) -> None:
    state = mock_player(current_housing=_owned_starter())

    cost = apply_monthly_housing_costs(state, catalog)

    assert cost == 500
    assert state.balance_debit == pytest.approx(500 + 700)
    assert state.expenses.rent == 500
    assert state.transactions[-1].title == "Housing Adjustment"


def test_sublet_home_earns_rental_income(catalog) -> None:
    state = mock_player(current_housing=_owned_starter(rented_out=True))
    state.expenses.rent = 500.0

    apply_monthly_housing_costs(state, catalog)

    assert state.balance_debit == pytest.approx(500 + 1500)
    assert state.transactions[-1].title == "Rental Income"


def test_unknown_housing_is_skipped(catalog) -> None:
    state = mock_player(current_housing=CurrentHousing("igloo", 1, False))
    assert apply_monthly_housing_costs(state, catalog) == 0.0
    assert state.balance_debit == 500.0


def test_housing_sale_value_nets_mortgage(catalog) -> None:
    state = mock_player()
    assert housing_sale_value(state, catalog) == 0.0

    loan = attach_loan(
        state, mock_loan(type="asset_mortgage", remaining_balance=100_000.0)
    )
    state.current_housing = _owned_starter(loan_id=loan.id)
    assert housing_sale_value(state, catalog) == pytest.approx(20_000.0)


# ---------------------------------------------------------------------------
# vehicles
# ---------------------------------------------------------------------------
def test_no_vehicle_costs_nothing(catalog) -> None:
    state = mock_player()
    assert apply_monthly_vehicle_costs(state, catalog, FixedRNG([])) == 0.0


def test_vehicle_running_costs(catalog) -> None:
    state = mock_player(current_vehicle=mock_vehicle())

    total = apply_monthly_vehicle_costs(state, catalog, FixedRNG([0.5]))

    assert total == pytest.approx(80 + 35 * 4.33)
    assert state.balance_debit == pytest.approx(500 - total)
    assert state.current_vehicle.mileage == pytest.approx(250 * 4.33)
    assert state.game_events == []


def test_vehicle_breakdown(catalog) -> None:
    state = mock_player(current_vehicle=mock_vehicle())

    total = apply_monthly_vehicle_costs(
        state, catalog, FixedRNG([0.01]), repair_cost=400.0
    )

    assert total == pytest.approx(80 + 35 * 4.33 + 400)
    assert state.stress == 40.0
    assert state.game_events[-1].title == "Vehicle Breakdown"


def test_vehicle_sale_settles_loan(catalog) -> None:
    state = mock_player(current_vehicle=mock_vehicle(is_financed=True))
    loan = attach_loan(state, mock_loan(remaining_balance=5000.0))
    state.current_vehicle.loan_id = loan.id

    assert vehicle_sale_value(state, catalog) == pytest.approx(3000.0)
    assert sell_current_vehicle(state, catalog) == pytest.approx(3000.0)
    assert state.current_vehicle is None
    assert state.loans == []
    assert state.balance_debit == pytest.approx(3500.0)
    assert state.transactions[-1].kind == "transfer"
