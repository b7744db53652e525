"""Centralized configuration validation for the finlife engine."""

from __future__ import annotations

import warnings
from datetime import date
from pathlib import Path
from typing import Any

import yaml


class ConfigValidator:
    """
    Centralized validation for simulation configuration.

    All validation happens once at Simulation.init() to ensure:
    - Type correctness
    - Valid parameter ranges
    - Relationship constraints between parameters
    - Clear error messages with actionable feedback
    """

    VALID_LOG_LEVELS = {"DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    INT_PARAMS = (
        "seed",
        "education_level",
        "bankruptcy_offer_days",
        "game_over_months",
        "mortgage_months",
        "auto_loan_months",
    )

    FLOAT_PARAMS = (
        "balance_debit",
        "balance_virtual",
        "income",
        "rent",
        "groceries",
        "loan_payment",
        "utilities",
        "happiness",
        "stress",
        "prospects",
        "credit_score",
        "savings_rate",
        "overdraft_rate",
        "weeks_per_month",
        "market_drift",
        "minimum_wage",
        "unemployment_benefit",
        "max_job_stress",
        "delinquency_limit",
        "red_zone_penalty",
        "down_payment_rate",
        "auto_loan_min_credit",
        "vehicle_repair_cost",
    )

    STR_PARAMS = ("player_name", "job_title", "starting_housing")

    OPTIONAL_PATH_PARAMS = ("pipeline_path", "catalog_path")

    # (min_val, max_val); None means unbounded
    RANGES: dict[str, tuple[float | None, float | None]] = {
        "balance_virtual": (0.0, None),
        "income": (0.0, None),
        "rent": (0.0, None),
        "groceries": (0.0, None),
        "loan_payment": (0.0, None),
        "utilities": (0.0, None),
        "happiness": (0.0, 100.0),
        "stress": (0.0, 100.0),
        "prospects": (0.0, 100.0),
        "credit_score": (300.0, 850.0),
        "education_level": (0, 10),
        "savings_rate": (0.0, 1.0),
        "overdraft_rate": (0.0, 1.0),
        "weeks_per_month": (1.0, None),
        "market_drift": (-1.0, 1.0),
        "minimum_wage": (0.0, None),
        "unemployment_benefit": (0.0, None),
        "max_job_stress": (0.0, 100.0),
        "delinquency_limit": (None, 0.0),
        "red_zone_penalty": (0.0, None),
        "bankruptcy_offer_days": (0, None),
        "game_over_months": (1, None),
        "down_payment_rate": (0.0, 1.0),
        "mortgage_months": (1, None),
        "auto_loan_months": (1, None),
        "auto_loan_min_credit": (300.0, 850.0),
        "vehicle_repair_cost": (0.0, None),
    }

    @staticmethod
    def validate_config(cfg: dict[str, Any]) -> None:
        """
        Validate all configuration parameters.

        Parameters
        ----------
        cfg : dict
            Configuration dictionary to validate.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        ConfigValidator._validate_types(cfg)
        ConfigValidator._validate_ranges(cfg)
        ConfigValidator._validate_relationships(cfg)

        if "logging" in cfg:
            ConfigValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """
        Ensure correct types for configuration parameters.

        Raises
        ------
        ValueError
            If any parameter has incorrect type.
        """
        for key in ConfigValidator.INT_PARAMS:
            if key not in cfg:
                continue
            val = cfg[key]
            if key == "seed" and val is not None and hasattr(val, "bit_generator"):
                continue
            if val is not None and (isinstance(val, bool) or not isinstance(val, int)):
                raise ValueError(
                    f"Config parameter '{key}' must be int, got {type(val).__name__}"
                )

        for key in ConfigValidator.FLOAT_PARAMS:
            if key not in cfg:
                continue
            val = cfg[key]
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(
                    f"Config parameter '{key}' must be float, got {type(val).__name__}"
                )

        for key in ConfigValidator.STR_PARAMS:
            if key in cfg and not isinstance(cfg[key], str):
                raise ValueError(
                    f"Config parameter '{key}' must be str, "
                    f"got {type(cfg[key]).__name__}"
                )

        for key in ConfigValidator.OPTIONAL_PATH_PARAMS:
            if key not in cfg:
                continue
            val = cfg[key]
            if val is not None and not isinstance(val, (str, Path)):
                raise ValueError(
                    f"Config parameter '{key}' must be str or None, "
                    f"got {type(val).__name__}"
                )

        if "start_date" in cfg:
            val = cfg["start_date"]
            if isinstance(val, str):
                try:
                    date.fromisoformat(val)
                except ValueError:
                    raise ValueError(
                        f"Config parameter 'start_date' must be an ISO date, "
                        f"got {val!r}"
                    ) from None
            elif not isinstance(val, date):
                raise ValueError(
                    f"Config parameter 'start_date' must be date, "
                    f"got {type(val).__name__}"
                )

    @staticmethod
    def _validate_ranges(cfg: dict[str, Any]) -> None:
        """
        Ensure parameters are in valid ranges.

        Raises
        ------
        ValueError
            If any parameter is out of valid range.
        """
        for key, (min_val, max_val) in ConfigValidator.RANGES.items():
            if key not in cfg or cfg[key] is None:
                continue

            val = cfg[key]

            if min_val is not None and val < min_val:
                raise ValueError(
                    f"Config parameter '{key}' must be >= {min_val}, got {val}"
                )

            if max_val is not None and val > max_val:
                raise ValueError(
                    f"Config parameter '{key}' must be <= {max_val}, got {val}"
                )

    @staticmethod
    def _validate_relationships(cfg: dict[str, Any]) -> None:
        """Warn about legal but suspicious combinations of parameters."""
        stress = cfg.get("stress", 0.0)
        max_job_stress = cfg.get("max_job_stress", 100.0)
        if stress > max_job_stress:
            warnings.warn(
                f"stress ({stress}) > max_job_stress ({max_job_stress}). "
                "The player cannot apply for jobs until stress drops.",
                UserWarning,
                stacklevel=3,
            )

        income = cfg.get("income", float("inf"))
        minimum_wage = cfg.get("minimum_wage", 0.0)
        if income < minimum_wage:
            warnings.warn(
                f"income ({income}) < minimum_wage ({minimum_wage}). "
                "Salary cuts will raise the income to the minimum wage.",
                UserWarning,
                stacklevel=3,
            )

        benefit = cfg.get("unemployment_benefit", 0.0)
        if benefit > minimum_wage:
            warnings.warn(
                f"unemployment_benefit ({benefit}) > minimum_wage ({minimum_wage}). "
                "A layoff would pay more than the lowest salary.",
                UserWarning,
                stacklevel=3,
            )

    @staticmethod
    def _validate_logging(log_config: dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Parameters
        ----------
        log_config : dict
            Logging configuration dictionary with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - events: dict[str, str] (per-event overrides)

        Raises
        ------
        ValueError
            If logging configuration is invalid.
        """
        if not isinstance(log_config, dict):
            raise ValueError(
                f"Logging config must be dict, got {type(log_config).__name__}"
            )

        if "default_level" in log_config:
            level = log_config["default_level"]
            if not isinstance(level, str):
                raise ValueError(
                    f"Logging default_level must be str, got {type(level).__name__}"
                )
            if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}'. "
                    f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                )

        events = log_config.get("events") or {}
        if not isinstance(events, dict):
            raise ValueError(
                f"Logging events must be dict, got {type(events).__name__}"
            )

        for event_name, level in events.items():
            if not isinstance(event_name, str):
                raise ValueError(
                    f"Event name must be str, got {type(event_name).__name__}"
                )
            if not isinstance(level, str):
                raise ValueError(
                    f"Log level for event '{event_name}' must be str, "
                    f"got {type(level).__name__}"
                )
            if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}' for event '{event_name}'. "
                    f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                )

    @staticmethod
    def validate_pipeline_path(pipeline_path: str | Path) -> None:
        """
        Validate pipeline path exists and is readable.

        Raises
        ------
        ValueError
            If path does not exist or is not a file.
        """
        path = Path(pipeline_path)

        if not path.exists():
            raise ValueError(f"Pipeline path '{pipeline_path}' does not exist")

        if not path.is_file():
            raise ValueError(f"Pipeline path '{pipeline_path}' is not a file")

        if path.suffix not in (".yml", ".yaml"):
            warnings.warn(
                f"Pipeline path '{pipeline_path}' does not have .yml/.yaml extension",
                UserWarning,
                stacklevel=2,
            )

    @staticmethod
    def validate_pipeline_yaml(
        yaml_path: str | Path, sections: tuple[str, ...] = ("weekly", "monthly_close")
    ) -> None:
        """
        Validate pipeline YAML structure and stage references.

        Raises
        ------
        ValueError
            If a section is missing or references an unregistered stage.
        """
        from finlife.core.registry import list_events

        with open(Path(yaml_path)) as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise ValueError(
                f"Pipeline YAML must be a dictionary, got {type(config).__name__}"
            )

        registered = set(list_events())
        for section in sections:
            if section not in config:
                raise ValueError(
                    f"Pipeline YAML must have '{section}' key: {yaml_path}"
                )
            names = config[section]
            if not isinstance(names, list):
                raise ValueError(
                    f"Pipeline '{section}' must be a list, got {type(names).__name__}"
                )
            for i, name in enumerate(names):
                if not isinstance(name, str):
                    raise ValueError(
                        f"Event spec at index {i} of '{section}' must be str, "
                        f"got {type(name).__name__}"
                    )
                if name.strip() not in registered:
                    raise ValueError(
                        f"Event '{name}' (in '{section}') not found in registry. "
                        f"Available events: {sorted(registered)}"
                    )
