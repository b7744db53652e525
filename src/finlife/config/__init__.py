"""Configuration module for the finlife engine."""

from finlife.config.schema import Config
from finlife.config.validator import ConfigValidator

__all__ = ["Config", "ConfigValidator"]
