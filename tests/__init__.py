# tests/__init__.py

from tests.helpers.factories import mock_investment, mock_loan, mock_player
from tests.helpers.invariants import assert_state_invariants

__all__ = [
    "mock_player",
    "mock_loan",
    "mock_investment",
    "assert_state_invariants",
]
