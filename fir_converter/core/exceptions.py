"""Unified converter exception taxonomy.

Every error the engine raises inherits from ``FirConverterError`` and
carries structured context fields (stage, code) so the CLI can report
failures consistently.

Taxonomy categories
-------------------
- ``CodecError``: input could not be parsed or written.
- ``InvalidCoordinateError``: a latitude/longitude outside WGS 84 bounds.
- ``ConfigValidationError``: see ``fir_converter.core.config``.

Validation findings (duplicate identifiers, unclosed rings, ...) are
*not* exceptions: they are reported as data by the validator.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class FirConverterError(Exception):
    """Base exception for all converter errors.

    Attributes:
        message: Human-readable error description.
        stage: Engine stage where the error occurred
            (e.g. ``"parse_dat"``, ``"parse_geojson"``).
        code: Machine-readable error code (e.g. ``"DAT_MALFORMED_LINE"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, CodecError):
            return "codec"
        if isinstance(self, InvalidCoordinateError):
            return "validation"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class CodecError(FirConverterError):
    """A document could not be parsed from, or written to, an external format."""

    default_code = "CODEC_FAILED"


class InvalidCoordinateError(FirConverterError, ValueError):
    """Raised when a coordinate is outside valid WGS 84 bounds."""

    default_stage = "model"
    default_code = "COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------


class UnsupportedFormatError(CodecError):
    """Raised when a file extension maps to no known boundary format."""

    default_stage = "format"
    default_code = "FORMAT_UNSUPPORTED"


class MalformedLineError(CodecError):
    """Raised when a DAT line has the wrong shape or an invalid value.

    Attributes:
        line_number: 1-based line number of the offending line.
        line: Raw text of the offending line (without line ending).
    """

    default_stage = "parse_dat"
    default_code = "DAT_MALFORMED_LINE"

    def __init__(self, line_number: int, reason: str, line: str = "") -> None:
        self.line_number = line_number
        self.reason = reason
        self.line = line
        super().__init__(f"Line {line_number}: {reason}")

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["line_number"] = self.line_number
        return payload


class GeoJsonParseError(CodecError):
    """Raised when GeoJSON text is not valid JSON or not a FeatureCollection."""

    default_stage = "parse_geojson"
    default_code = "GEOJSON_PARSE_FAILED"


class MissingIdentifierError(GeoJsonParseError):
    """Raised when a Feature lacks the boundary identifier property."""

    default_code = "GEOJSON_MISSING_IDENTIFIER"


class UnsupportedGeometryError(GeoJsonParseError):
    """Raised for non-polygon geometry or polygons with interior rings."""

    default_code = "GEOJSON_UNSUPPORTED_GEOMETRY"
