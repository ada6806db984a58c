"""Converter configuration loaded from environment variables.

All configuration values have sensible defaults; the environment only
needs to be set to talk to a client that uses a different identifier
property or precision.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  This catches bad configuration before any file
    is read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from fir_converter.core.constants import (
    DEFAULT_COORDINATE_PRECISION,
    DEFAULT_IDENTIFIER_PROPERTY,
    MAX_COORDINATE_PRECISION,
)
from fir_converter.core.exceptions import FirConverterError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(FirConverterError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")

    @property
    def category(self) -> str:
        return "config"


@dataclass(frozen=True, slots=True)
class ConverterConfig:
    """Immutable converter configuration.

    Attributes:
        identifier_property: GeoJSON Feature property holding the FIR identifier.
        coordinate_precision: Decimal places written for every coordinate.
        enforce_winding: Rewind rings on write (clockwise for DAT,
            counter-clockwise for GeoJSON).
    """

    identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY
    coordinate_precision: int = DEFAULT_COORDINATE_PRECISION
    enforce_winding: bool = True

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If ``FIR_COORDINATE_PRECISION`` is not an integer.
        """
        config = cls(
            identifier_property=os.getenv("FIR_IDENTIFIER_PROPERTY", DEFAULT_IDENTIFIER_PROPERTY),
            coordinate_precision=int(
                os.getenv("FIR_COORDINATE_PRECISION", str(DEFAULT_COORDINATE_PRECISION))
            ),
            enforce_winding=_parse_bool("FIR_ENFORCE_WINDING", os.getenv("FIR_ENFORCE_WINDING", "true")),
        )
        validate_config(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def validate_config(config: ConverterConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.identifier_property.strip():
        raise ConfigValidationError(
            "FIR_IDENTIFIER_PROPERTY",
            config.identifier_property,
            "must not be empty",
        )

    if not 0 <= config.coordinate_precision <= MAX_COORDINATE_PRECISION:
        raise ConfigValidationError(
            "FIR_COORDINATE_PRECISION",
            config.coordinate_precision,
            f"must be between 0 and {MAX_COORDINATE_PRECISION} (decimal places)",
        )
