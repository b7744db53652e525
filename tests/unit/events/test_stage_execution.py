"""Every built-in stage runs against a live simulation."""

import pytest

from finlife.core.default_pipeline import create_default_pipelines
from finlife.core.registry import get_event
from finlife.state import DelayedImpact, ScheduledEffect
from tests.helpers.factories import attach_loan, mock_investment, mock_loan
from tests.helpers.invariants import assert_state_invariants

ALL_STAGES = [
    name
    for pipeline in create_default_pipelines().values()
    for name in pipeline.names
]


@pytest.fixture
def busy_sim(sim):
    """Simulation whose player holds a loan and an investment."""
    sim.state.investments.append(mock_investment())
    attach_loan(sim.state, mock_loan())
    return sim


@pytest.mark.parametrize("name", ALL_STAGES)
def test_stage_executes(busy_sim, name):
    stage = get_event(name)()
    stage.execute(busy_sim)
    assert_state_invariants(busy_sim.state)


@pytest.mark.parametrize("name", ALL_STAGES)
def test_stage_logger_name(name):
    assert get_event(name)().get_logger().name == f"finlife.events.{name}"


def test_scheduled_effect_fires_on_its_turn(sim):
    sim.state.scheduled_effects.append(
        ScheduledEffect(
            id="eff-1",
            description="Colleague returns the favour",
            trigger_turn=sim.turn.turn_number,
            triggered_by="help_colleague",
            impact=DelayedImpact(metrics={"prospects": 10.0}),
        )
    )

    get_event("apply_scheduled_effects")().execute(sim)

    assert sim.state.scheduled_effects == []
    assert sim.state.prospects == 60.0


def test_dividends_credited_to_savings(busy_sim):
    before = busy_sim.state.balance_virtual
    get_event("pay_monthly_dividends")().execute(busy_sim)
    assert busy_sim.state.balance_virtual == pytest.approx(before + 1000 * 0.015 / 12)


def test_price_walk_keeps_value_consistent(busy_sim):
    get_event("update_investment_prices")().execute(busy_sim)
    inv = busy_sim.state.investments[0]
    assert inv.total_value == pytest.approx(inv.share_price * inv.shares_owned)


def test_price_walk_skipped_without_holdings(sim):
    state_before = sim.rng.bit_generator.state
    get_event("update_investment_prices")().execute(sim)
    assert sim.rng.bit_generator.state == state_before


def test_evaluate_crisis_stores_level(sim):
    get_event("evaluate_crisis")().execute(sim)
    assert sim.crisis_level == "active"


def test_evaluate_crisis_uses_configured_penalty(sim):
    sim.state.balance_debit = -1200.0
    sim.state.balance_virtual = 0.0

    get_event("evaluate_crisis")().execute(sim)

    assert sim.crisis_level == "red_zone"
    assert sim.state.balance_debit == -1200.0 - sim.config.red_zone_penalty


def test_record_monthly_history_appends(sim):
    get_event("record_monthly_history")().execute(sim)
    assert sim.state.balance_history == [500.0, 500.0]
    assert len(sim.state.stress_history) == 2


def test_collect_then_pay(sim):
    get_event("collect_monthly_income")().execute(sim)
    get_event("pay_mandatory_expenses")().execute(sim)
    assert sim.state.balance_debit == pytest.approx(600.0)
