"""Tagged-line classifier for the DAT format.

Every input line is classified on its own, by shape, into one of:

- ``BLANK`` / ``COMMENT``: ignored by the parser.
- ``HEADER``: starts a ring; either the full ten-field form or a bare
  identifier.
- ``COORDINATE``: a ``lat|lon`` (or ``lat:lon``) pair.

Anything else raises ``MalformedLineError`` with the 1-based line number.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from fir_converter.codecs.dat._constants import (
    ALT_COORDINATE_DELIMITER,
    COMMENT_PREFIXES,
    COORDINATE_FIELD_COUNT,
    FIELD_DELIMITER,
    FLAG_FALSE,
    FLAG_TRUE,
    HEADER_FIELD_COUNT,
    IDENTIFIER_PATTERN,
)
from fir_converter.core.exceptions import InvalidCoordinateError, MalformedLineError
from fir_converter.models.boundary import Point


class LineKind(enum.Enum):
    BLANK = "blank"
    COMMENT = "comment"
    HEADER = "header"
    COORDINATE = "coordinate"


@dataclass(frozen=True, slots=True)
class DatHeader:
    """Decoded header line.

    Attributes:
        identifier: FIR identifier.
        is_oceanic: ``IsOceanic`` flag (``False`` for bare headers).
        is_extension: ``IsExtension`` flag; set on every ring after the first.
        point_count: Declared number of coordinate lines, if given.
        label: Label position, if given.
    """

    identifier: str
    is_oceanic: bool = False
    is_extension: bool = False
    point_count: int | None = None
    label: Point | None = None


@dataclass(frozen=True, slots=True)
class DatLine:
    """One classified input line."""

    kind: LineKind
    number: int
    header: DatHeader | None = None
    point: Point | None = None


def classify_line(text: str, number: int) -> DatLine:
    """Classify a single line of DAT input.

    Args:
        text: Raw line text (line ending optional).
        number: 1-based line number, used in error messages.

    Raises:
        MalformedLineError: If the line is neither blank, a comment, a
            header nor a coordinate pair, or holds an invalid value.
    """
    stripped = text.strip()
    if not stripped:
        return DatLine(LineKind.BLANK, number)
    if stripped.startswith(COMMENT_PREFIXES):
        return DatLine(LineKind.COMMENT, number)

    fields = _split_fields(stripped)
    if len(fields) == HEADER_FIELD_COUNT:
        return DatLine(LineKind.HEADER, number, header=_parse_full_header(fields, number, text))

    if len(fields) == COORDINATE_FIELD_COUNT:
        lat = _parse_number(fields[0], "latitude", number, text)
        lon = _parse_number(fields[1], "longitude", number, text)
        return DatLine(LineKind.COORDINATE, number, point=_make_point(lat, lon, number, text))

    if len(fields) == 1 and not _is_number(fields[0]):
        identifier = _parse_identifier(fields[0], number, text)
        return DatLine(LineKind.HEADER, number, header=DatHeader(identifier=identifier))

    msg = (
        f"expected {COORDINATE_FIELD_COUNT} (coordinate) or {HEADER_FIELD_COUNT} (header) "
        f"fields, got {len(fields)}"
    )
    raise MalformedLineError(number, msg, text)


def looks_like_header(text: str) -> bool:
    """Whether a (possibly malformed) line was meant as a header.

    A line with exactly two fields is always a (possibly mistyped)
    coordinate.  Otherwise a header is recognised by a non-numeric first
    field.
    """
    fields = _split_fields(text.strip())
    if len(fields) == COORDINATE_FIELD_COUNT:
        return False
    return bool(fields[0]) and not _is_number(fields[0])


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------


def _split_fields(stripped: str) -> list[str]:
    fields = [part.strip() for part in stripped.split(FIELD_DELIMITER)]
    if len(fields) == 1:
        fields = [part.strip() for part in stripped.split(ALT_COORDINATE_DELIMITER)]
    return fields


def _parse_full_header(fields: list[str], number: int, text: str) -> DatHeader:
    identifier = _parse_identifier(fields[0], number, text)
    is_oceanic = _parse_flag(fields[1], "IsOceanic", number, text)
    is_extension = _parse_flag(fields[2], "IsExtension", number, text)

    try:
        point_count = int(fields[3])
    except ValueError:
        point_count = -1
    if point_count < 0:
        msg = f"PointCount must be a non-negative integer, got {fields[3]!r}"
        raise MalformedLineError(number, msg, text)

    min_lat, min_lon, max_lat, max_lon, label_lat, label_lon = (
        _parse_number(value, name, number, text)
        for value, name in zip(
            fields[4:],
            ("MinLat", "MinLon", "MaxLat", "MaxLon", "LabelLat", "LabelLon"),
        )
    )
    # bounding box is recomputed on write; only its range is checked here
    _make_point(min_lat, min_lon, number, text)
    _make_point(max_lat, max_lon, number, text)

    return DatHeader(
        identifier=identifier,
        is_oceanic=is_oceanic,
        is_extension=is_extension,
        point_count=point_count,
        label=_make_point(label_lat, label_lon, number, text),
    )


def _parse_identifier(value: str, number: int, text: str) -> str:
    if not IDENTIFIER_PATTERN.match(value):
        msg = f"invalid boundary identifier {value!r}"
        raise MalformedLineError(number, msg, text)
    return value


def _parse_flag(value: str, name: str, number: int, text: str) -> bool:
    if value == FLAG_TRUE:
        return True
    if value == FLAG_FALSE:
        return False
    msg = f"{name} must be '{FLAG_FALSE}' or '{FLAG_TRUE}', got {value!r}"
    raise MalformedLineError(number, msg, text)


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def _parse_number(value: str, name: str, number: int, text: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        msg = f"{name} is not a number: {value!r}"
        raise MalformedLineError(number, msg, text) from exc
    if not math.isfinite(parsed):
        msg = f"{name} is not finite: {value!r}"
        raise MalformedLineError(number, msg, text)
    return parsed


def _make_point(lat: float, lon: float, number: int, text: str) -> Point:
    try:
        return Point(lat=lat, lon=lon)
    except InvalidCoordinateError as exc:
        raise MalformedLineError(number, exc.message, text) from exc
