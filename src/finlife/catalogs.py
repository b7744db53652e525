"""
Read-only catalogs: housing tiers, vehicle tiers, job listings and
investable securities.

The packaged ``catalog.yml`` is parsed once per :class:`Catalog`. Every
lookup is an exact id match that returns ``None`` when nothing matches;
callers turn that into a failed action rather than an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml

from finlife.state import AssetType, RiskLevel


@dataclass(slots=True, frozen=True)
class HousingTier:
    id: str
    tier: int
    name: str
    monthly_rent: float = 0.0
    purchase_price: float | None = None
    maintenance_cost: float = 0.0
    property_tax: float = 0.0
    happiness_bonus: float = 0.0
    stress_reduction: float = 0.0
    commute_damage: float = 0.0
    resale_value: float | None = None
    can_rent: bool = False
    rental_income: float = 0.0

    @property
    def is_purchase(self) -> bool:
        return bool(self.purchase_price)


@dataclass(slots=True, frozen=True)
class VehicleTier:
    id: str
    tier: int
    name: str
    purchase_price: float
    maintenance_cost: float
    fuel_cost: float
    breakdown_chance: float
    resale_value: float
    happiness_bonus: float = 0.0
    stress_reduction: float = 0.0


@dataclass(slots=True, frozen=True)
class JobListing:
    id: str
    title: str
    company: str
    salary: float
    hours_per_week: int = 40
    tier: int = 1
    difficulty: float = 50.0
    success_chance: float = 50.0
    required_credit_score: float = 0.0
    required_housing_tier: int = 0


@dataclass(slots=True, frozen=True)
class InvestmentCatalogItem:
    symbol: str
    name: str
    type: AssetType
    share_price: float
    risk_level: RiskLevel
    volatility: float
    expected_return: float
    dividend_yield: float | None = None
    description: str = ""


def _build(cls: type, rows: Any, section: str) -> tuple[Any, ...]:
    if not isinstance(rows, list):
        raise ValueError(f"Catalog section '{section}' must be a list")
    known = {f.name for f in fields(cls)}
    out = []
    for row in rows:
        unknown = set(row) - known
        if unknown:
            raise ValueError(
                f"Unknown field(s) {sorted(unknown)} in catalog section '{section}'"
            )
        out.append(cls(**row))
    return tuple(out)


@dataclass(slots=True, frozen=True)
class Catalog:
    """All static reference tables used by the engine."""

    housing: tuple[HousingTier, ...]
    vehicles: tuple[VehicleTier, ...]
    jobs: tuple[JobListing, ...]
    securities: tuple[InvestmentCatalogItem, ...]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Catalog:
        return cls(
            housing=_build(HousingTier, data.get("housing", []), "housing"),
            vehicles=_build(VehicleTier, data.get("vehicles", []), "vehicles"),
            jobs=_build(JobListing, data.get("jobs", []), "jobs"),
            securities=_build(
                InvestmentCatalogItem, data.get("securities", []), "securities"
            ),
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> Catalog:
        """Load *path*, or the packaged catalog.yml when *path* is None."""
        if path is None:
            txt = resources.files("finlife").joinpath("catalog.yml").read_text()
        else:
            txt = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(txt) or {}
        if not isinstance(data, Mapping):
            raise TypeError(f"catalog root must be mapping, got {type(data)!r}")
        return cls.from_mapping(data)

    def find_housing(self, housing_id: str) -> HousingTier | None:
        return next((h for h in self.housing if h.id == housing_id), None)

    def find_vehicle(self, vehicle_id: str) -> VehicleTier | None:
        return next((v for v in self.vehicles if v.id == vehicle_id), None)

    def find_job(self, job_id: str) -> JobListing | None:
        return next((j for j in self.jobs if j.id == job_id), None)

    def find_security(self, symbol: str) -> InvestmentCatalogItem | None:
        return next((s for s in self.securities if s.symbol == symbol), None)

    def cheapest_rental(self) -> HousingTier:
        """Lowest-tier rental, used as the fallback home after foreclosure."""
        rentals = [h for h in self.housing if not h.is_purchase]
        if not rentals:
            raise ValueError("Catalog has no rental housing")
        return min(rentals, key=lambda h: h.tier)
