from __future__ import annotations

from typing import Sequence


# Deterministic stub RNG for unit-tests
class FixedRNG:
    """
    Tiny deterministic stand-in for `numpy.random.Generator`.

    Only the subset of the NumPy API required by the production code is
    implemented:

    * `random`
    * `integers`

    Both draw from the *fixed* sequence supplied at construction, in
    order, so a test states exactly which roll every draw sees.
    """

    _buffer: list[float]
    _cursor: int

    def __init__(self, data: Sequence[float]) -> None:
        self._buffer = list(data)
        self._cursor = 0

    # helpers
    def _next(self) -> float:
        if self._cursor >= len(self._buffer):
            raise RuntimeError("FixedRNG exhausted – enlarge the seed vector")
        out = self._buffer[self._cursor]
        self._cursor += 1
        return out

    @property
    def remaining(self) -> int:
        """Values not consumed yet."""
        return len(self._buffer) - self._cursor

    # public API subset
    def random(self) -> float:
        """Next value, expected in ``[0, 1)``."""
        return float(self._next())

    def integers(self, low: int, high: int | None = None) -> int:
        """
        Deterministic stand-in for `Generator.integers`.

        *Ignores* the `low`/`high` range – the value comes straight from
        the fixed buffer.
        """
        return int(self._next())
