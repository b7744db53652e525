"""Tests for the Config dataclass and configuration precedence."""

import dataclasses
from datetime import date

import pytest
import yaml

from finlife.config import Config
from finlife.simulation import Simulation


def test_config_is_frozen():
    cfg = Config(start_date=date(2024, 1, 1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.income = 1.0  # type: ignore[misc]


def test_from_dict_ignores_unknown_keys():
    cfg = Config.from_dict(
        {"start_date": date(2024, 1, 1), "income": 4100.0, "logging": {}, "seed": 3}
    )
    assert cfg.income == 4100.0


def test_defaults_match_starting_player():
    cfg = Config(start_date=date(2024, 1, 1))
    assert cfg.balance_debit == 500.0
    assert cfg.balance_virtual == 10.0
    assert cfg.income == 3200.0
    assert cfg.rent == 1200.0
    assert cfg.starting_housing == "rental_1bed"


def test_package_defaults_loaded_by_init():
    sim = Simulation.init(seed=0)
    assert sim.config.start_date == date(2024, 1, 1)
    assert sim.config.weeks_per_month == 4.33
    assert sim.state.income == 3200.0


def test_kwargs_override_yaml_file(tmp_path):
    path = tmp_path / "life.yml"
    path.write_text(yaml.safe_dump({"income": 4000.0, "player_name": "Ada"}))

    sim = Simulation.init(config=path, income=4500.0, seed=0)

    assert sim.config.income == 4500.0
    assert sim.config.player_name == "Ada"
    assert sim.state.name == "Ada"


def test_mapping_config():
    sim = Simulation.init({"balance_debit": 2000.0}, seed=0)
    assert sim.state.balance_debit == 2000.0


def test_start_date_string_is_parsed():
    sim = Simulation.init(start_date="2025-03-03", seed=0)
    assert sim.state.start_date == date(2025, 3, 3)
    assert sim.turn.turn_number == 1


def test_yaml_root_must_be_mapping(tmp_path):
    path = tmp_path / "life.yml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(TypeError, match="mapping"):
        Simulation.init(config=path)


def test_invalid_value_rejected_at_init():
    with pytest.raises(ValueError, match="credit_score"):
        Simulation.init(credit_score=1000.0)


def test_unknown_starting_housing():
    with pytest.raises(ValueError, match="unknown housing"):
        Simulation.init(starting_housing="castle")


def test_starting_housing_must_be_rental():
    with pytest.raises(ValueError, match="must be a rental"):
        Simulation.init(starting_housing="owned_starter")


def test_starting_housing_sets_tier():
    sim = Simulation.init(starting_housing="rental_studio", rent=800.0, seed=0)
    assert sim.state.current_housing.tier == 1
    assert sim.state.expenses.rent == 800.0


def test_custom_catalog_path(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "housing:\n"
        "  - {id: rental_1bed, tier: 1, name: Room, monthly_rent: 700}\n"
    )
    sim = Simulation.init(catalog_path=str(path), seed=0)
    assert sim.catalog.find_housing("rental_1bed").monthly_rent == 700
    assert sim.catalog.jobs == ()
