"""
Type aliases for the finlife engine.

Examples
--------
>>> from finlife.typing import Money, Rng
>>> def charge(balance: Money, amount: Money) -> Money:
...     return balance - amount
"""

from datetime import date
from typing import TypeAlias

from numpy.random import Generator

Money: TypeAlias = float
"""Dollar amount (may be negative for overdrafts and outflows)."""

Rng: TypeAlias = Generator
"""Random source threaded explicitly through every stochastic system."""

Day: TypeAlias = date
"""Calendar day of the simulation clock."""

__all__ = ["Day", "Money", "Rng"]
