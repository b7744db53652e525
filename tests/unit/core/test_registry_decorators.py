"""Tests for the event registry and the @event decorator."""

import pytest

from finlife.core import Event, event, get_event, list_events
from finlife.core.registry import clear_registry


class TestEventDecorator:
    """Test the @event decorator."""

    def test_event_decorator_without_parens(self, clean_registry):
        """Test @event without parentheses (no inheritance)."""

        @event
        class PayBonus:  # ← No (Event) inheritance
            """Pay a bonus."""

            def execute(self, sim):
                sim.state.balance_debit += 100.0

        # Should be an Event and a slotted dataclass
        assert issubclass(PayBonus, Event)
        assert hasattr(PayBonus, "__dataclass_fields__")
        assert hasattr(PayBonus, "__slots__")
        assert PayBonus.__doc__ == "Pay a bonus."

        # Should be registered under the snake_case name
        assert PayBonus.name == "pay_bonus"
        assert get_event("pay_bonus") is PayBonus

    def test_event_decorator_with_custom_name(self, clean_registry):
        """Test @event(name=...) registers under the custom name."""

        @event(name="bonus_day")
        class PayBonus:
            def execute(self, sim):
                pass

        assert PayBonus.name == "bonus_day"
        assert get_event("bonus_day") is PayBonus
        assert list_events() == ["bonus_day"]

    def test_event_decorator_on_event_subclass(self, clean_registry):
        """Explicit inheritance still works."""

        @event
        class ChargeFee(Event):
            def execute(self, sim):
                pass

        assert get_event("charge_fee") is ChargeFee
        assert not hasattr(ChargeFee(), "__dict__")

    def test_decorated_event_fields(self, clean_registry):
        """Annotated fields become dataclass fields."""

        @event
        class PayBonus:
            amount: float = 100.0

            def execute(self, sim):
                sim.state.balance_debit += self.amount

        assert PayBonus().amount == 100.0
        assert PayBonus(amount=250.0).amount == 250.0

    def test_decorated_event_runs_in_simulation(self, sim):
        """A custom stage can be inserted into the default pipeline."""

        @event(name="test_weekly_allowance")
        class WeeklyAllowance:
            def execute(self, sim):
                sim.state.balance_virtual += 25.0

        sim.pipelines["weekly"].remove("apply_weekly_random_expenses")
        sim.pipelines["weekly"].remove("generate_weekly_minor_events")
        sim.pipelines["weekly"].insert_after(
            "accrue_weekly_interest", "test_weekly_allowance"
        )
        before = sim.state.balance_virtual

        sim.next_turn()

        assert sim.state.balance_virtual >= before + 25.0
        assert "test_weekly_allowance" in sim.pipelines["weekly"].names


class TestRegistry:
    def test_builtin_stages_registered(self):
        names = list_events()
        assert "accrue_weekly_interest" in names
        assert "evaluate_crisis" in names
        assert names == sorted(names)

    def test_get_event_unknown(self):
        with pytest.raises(KeyError, match="Available events"):
            get_event("not_a_stage")

    def test_clear_registry(self, clean_registry):
        clear_registry()
        assert list_events() == []

    def test_clean_registry_restores(self):
        # the previous test cleared the registry inside the fixture
        assert "service_loans" in list_events()
