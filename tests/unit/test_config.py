"""Tests for converter configuration.

Covers:
- Default values
- Loading from environment variables
- Type coercion (string env vars to int/bool fields)
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from fir_converter.core.config import ConfigValidationError, ConverterConfig, validate_config


class TestConverterConfigDefaults:
    """Verify default configuration values."""

    def test_default_identifier_property(self) -> None:
        assert ConverterConfig().identifier_property == "ICAO"

    def test_default_precision(self) -> None:
        assert ConverterConfig().coordinate_precision == 6

    def test_winding_enforced_by_default(self) -> None:
        assert ConverterConfig().enforce_winding is True

    def test_frozen(self) -> None:
        cfg = ConverterConfig()
        with pytest.raises(AttributeError):
            cfg.coordinate_precision = 3  # type: ignore[misc]


class TestConverterConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "FIR_IDENTIFIER_PROPERTY": "id",
            "FIR_COORDINATE_PRECISION": "4",
            "FIR_ENFORCE_WINDING": "false",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = ConverterConfig.from_env()

        assert cfg.identifier_property == "id"
        assert cfg.coordinate_precision == 4
        assert cfg.enforce_winding is False

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = ConverterConfig.from_env()
        assert cfg == ConverterConfig()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("YES", True), (" on ", True), ("0", False), ("No", False), ("off", False)],
    )
    def test_boolean_spellings(self, raw: str, expected: bool) -> None:
        with patch.dict(os.environ, {"FIR_ENFORCE_WINDING": raw}, clear=True):
            assert ConverterConfig.from_env().enforce_winding is expected


class TestConfigValidation:
    """Fail-fast validation of configuration values."""

    @pytest.mark.parametrize("precision", ["-1", "16", "100"])
    def test_precision_out_of_range(self, precision: str) -> None:
        with patch.dict(os.environ, {"FIR_COORDINATE_PRECISION": precision}, clear=True), pytest.raises(
            ConfigValidationError, match="FIR_COORDINATE_PRECISION"
        ):
            ConverterConfig.from_env()

    @pytest.mark.parametrize("precision", ["0", "15"])
    def test_precision_bounds_inclusive(self, precision: str) -> None:
        with patch.dict(os.environ, {"FIR_COORDINATE_PRECISION": precision}, clear=True):
            assert ConverterConfig.from_env().coordinate_precision == int(precision)

    def test_precision_not_an_integer(self) -> None:
        with patch.dict(os.environ, {"FIR_COORDINATE_PRECISION": "six"}, clear=True), pytest.raises(
            ValueError
        ):
            ConverterConfig.from_env()

    def test_bad_boolean(self) -> None:
        with patch.dict(os.environ, {"FIR_ENFORCE_WINDING": "maybe"}, clear=True), pytest.raises(
            ConfigValidationError, match="must be a boolean"
        ) as exc_info:
            ConverterConfig.from_env()
        assert exc_info.value.key == "FIR_ENFORCE_WINDING"
        assert exc_info.value.value == "maybe"

    @pytest.mark.parametrize("prop", ["", "   "])
    def test_empty_identifier_property(self, prop: str) -> None:
        with pytest.raises(ConfigValidationError, match="must not be empty"):
            validate_config(ConverterConfig(identifier_property=prop))

    def test_error_is_config_category(self) -> None:
        err = ConfigValidationError("FIR_COORDINATE_PRECISION", 99, "too big")
        assert err.category == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.to_error_dict()["stage"] == "config"
