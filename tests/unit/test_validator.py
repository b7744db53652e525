"""Tests for configuration validation."""

import warnings
from datetime import date

import numpy as np
import pytest

from finlife.config import ConfigValidator
from finlife.simulation import Simulation, _package_defaults


class TestTypeValidation:
    """Test type checking for configuration parameters."""

    def test_packaged_defaults_are_valid(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ConfigValidator.validate_config(_package_defaults())

    def test_integer_params_reject_float(self):
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types({"game_over_months": 2.5})

    def test_integer_params_reject_bool(self):
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types({"mortgage_months": True})

    def test_seed_accepts_none_int_and_generator(self):
        ConfigValidator._validate_types({"seed": None})
        ConfigValidator._validate_types({"seed": 7})
        ConfigValidator._validate_types({"seed": np.random.default_rng(0)})

    def test_float_params_accept_int(self):
        ConfigValidator._validate_types({"income": 3000, "stress": 10})

    def test_float_params_reject_string(self):
        with pytest.raises(ValueError, match="must be float"):
            ConfigValidator._validate_types({"income": "lots"})

    def test_string_params_reject_numbers(self):
        with pytest.raises(ValueError, match="must be str"):
            ConfigValidator._validate_types({"starting_housing": 2})

    def test_path_params_accept_none_and_string(self):
        ConfigValidator._validate_types({"pipeline_path": None})
        ConfigValidator._validate_types({"catalog_path": "/tmp/catalog.yml"})

    def test_path_params_reject_numbers(self):
        with pytest.raises(ValueError, match="must be str or None"):
            ConfigValidator._validate_types({"catalog_path": 3})

    def test_start_date_accepts_iso_string_and_date(self):
        ConfigValidator._validate_types({"start_date": "2024-05-01"})
        ConfigValidator._validate_types({"start_date": date(2024, 5, 1)})

    def test_start_date_rejects_garbage(self):
        with pytest.raises(ValueError, match="ISO date"):
            ConfigValidator._validate_types({"start_date": "next tuesday"})
        with pytest.raises(ValueError, match="must be date"):
            ConfigValidator._validate_types({"start_date": 20240101})


class TestRangeValidation:
    """Test range checks for configuration parameters."""

    @pytest.mark.parametrize(
        "key, value",
        [
            ("happiness", 150.0),
            ("stress", -1.0),
            ("credit_score", 200.0),
            ("credit_score", 900.0),
            ("balance_virtual", -5.0),
            ("down_payment_rate", 1.5),
            ("delinquency_limit", 10.0),
            ("game_over_months", 0),
        ],
    )
    def test_out_of_range_rejected(self, key, value):
        with pytest.raises(ValueError, match=key):
            ConfigValidator._validate_ranges({key: value})

    def test_negative_checking_allowed(self):
        ConfigValidator._validate_ranges({"balance_debit": -2000.0})

    def test_bounds_are_inclusive(self):
        ConfigValidator._validate_ranges({"credit_score": 300.0, "happiness": 100.0})


class TestRelationshipWarnings:
    """Legal but suspicious combinations warn instead of failing."""

    def test_stress_above_application_limit(self):
        with pytest.warns(UserWarning, match="max_job_stress"):
            ConfigValidator._validate_relationships(
                {"stress": 90.0, "max_job_stress": 80.0}
            )

    def test_income_below_minimum_wage(self):
        with pytest.warns(UserWarning, match="minimum_wage"):
            ConfigValidator._validate_relationships(
                {"income": 100.0, "minimum_wage": 600.0}
            )

    def test_benefit_above_minimum_wage(self):
        with pytest.warns(UserWarning, match="unemployment_benefit"):
            ConfigValidator._validate_relationships(
                {"unemployment_benefit": 900.0, "minimum_wage": 600.0}
            )

    def test_warning_surfaces_through_init(self):
        with pytest.warns(UserWarning, match="max_job_stress"):
            sim = Simulation.init(stress=90.0, seed=1)
        assert sim.state.stress == 90.0


class TestLoggingValidation:
    def test_valid_logging_config(self):
        ConfigValidator._validate_logging(
            {"default_level": "debug", "events": {"service_loans": "DEEP_DEBUG"}}
        )

    def test_logging_must_be_dict(self):
        with pytest.raises(ValueError, match="must be dict"):
            ConfigValidator._validate_logging("DEBUG")

    def test_invalid_default_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            ConfigValidator._validate_logging({"default_level": "LOUD"})

    def test_invalid_event_level(self):
        with pytest.raises(ValueError, match="service_loans"):
            ConfigValidator._validate_logging({"events": {"service_loans": "LOUD"}})

    def test_events_must_be_dict(self):
        with pytest.raises(ValueError, match="events must be dict"):
            ConfigValidator._validate_logging({"events": ["service_loans"]})


class TestPipelineValidation:
    def test_missing_path(self, tmp_path):
        with pytest.raises(ValueError, match="does not exist"):
            ConfigValidator.validate_pipeline_path(tmp_path / "nope.yml")

    def test_directory_path(self, tmp_path):
        with pytest.raises(ValueError, match="not a file"):
            ConfigValidator.validate_pipeline_path(tmp_path)

    def test_unexpected_extension_warns(self, tmp_path):
        path = tmp_path / "pipeline.txt"
        path.write_text("weekly: []\nmonthly_close: []\n")
        with pytest.warns(UserWarning, match="extension"):
            ConfigValidator.validate_pipeline_path(path)

    def test_valid_yaml(self, tmp_path):
        path = tmp_path / "pipeline.yml"
        path.write_text(
            "weekly:\n  - accrue_weekly_interest\n"
            "monthly_close:\n  - collect_monthly_income\n"
        )
        ConfigValidator.validate_pipeline_yaml(path)

    def test_missing_section(self, tmp_path):
        path = tmp_path / "pipeline.yml"
        path.write_text("weekly:\n  - accrue_weekly_interest\n")
        with pytest.raises(ValueError, match="monthly_close"):
            ConfigValidator.validate_pipeline_yaml(path)

    def test_unknown_stage(self, tmp_path):
        path = tmp_path / "pipeline.yml"
        path.write_text("weekly:\n  - win_lottery\nmonthly_close: []\n")
        with pytest.raises(ValueError, match="win_lottery"):
            ConfigValidator.validate_pipeline_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "pipeline.yml"
        path.write_text("- accrue_weekly_interest\n")
        with pytest.raises(ValueError, match="dictionary"):
            ConfigValidator.validate_pipeline_yaml(path)
