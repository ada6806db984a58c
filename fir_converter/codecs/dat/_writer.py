"""DAT writer.

Each ring is written as one full header followed by its coordinate
lines.  Rings are closed, and wound clockwise unless winding enforcement
is disabled, before being written.
"""

from __future__ import annotations

import logging

from fir_converter.codecs.dat._constants import (
    FIELD_DELIMITER,
    FLAG_FALSE,
    FLAG_TRUE,
    IDENTIFIER_PATTERN,
)
from fir_converter.core.constants import DEFAULT_COORDINATE_PRECISION
from fir_converter.core.exceptions import CodecError
from fir_converter.core.geometry import (
    Winding,
    bounding_box,
    close,
    label_point,
    with_winding,
)
from fir_converter.models.boundary import Boundary, Document, Point, Ring

logger = logging.getLogger("fir_converter.codecs.dat")


def serialize_dat(
    document: Document,
    *,
    precision: int = DEFAULT_COORDINATE_PRECISION,
    enforce_winding: bool = True,
) -> str:
    """Serialize a document to DAT text.

    Boundaries without rings produce no output (and a warning).  An
    empty document produces an empty string.

    Raises:
        CodecError: If a boundary identifier cannot be written as a DAT
            header (e.g. it contains a delimiter or whitespace).
    """
    lines: list[str] = []
    for boundary in document:
        if not IDENTIFIER_PATTERN.fullmatch(boundary.identifier):
            msg = f"Boundary identifier {boundary.identifier!r} cannot be written to DAT"
            raise CodecError(msg, stage="serialize_dat", code="DAT_INVALID_IDENTIFIER")
        if not boundary.rings:
            logger.warning("Boundary '%s' has no rings; nothing written", boundary.identifier)
            continue
        lines.extend(_boundary_lines(boundary, precision, enforce_winding))

    logger.info("Serialized %d boundary(ies) to DAT", len(document))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def _boundary_lines(boundary: Boundary, precision: int, enforce_winding: bool) -> list[str]:
    label = boundary.label or label_point(boundary.rings)
    lines: list[str] = []
    for index, ring in enumerate(boundary.rings):
        ring = close(ring)
        if enforce_winding:
            ring = with_winding(ring, Winding.CLOCKWISE)
        lines.append(_header_line(boundary, ring, index > 0, label, precision))
        lines.extend(_point_line(point, precision) for point in ring)
    return lines


def _header_line(
    boundary: Boundary,
    ring: Ring,
    is_extension: bool,
    label: Point | None,
    precision: int,
) -> str:
    box = bounding_box([ring]) or (0.0, 0.0, 0.0, 0.0)
    label_lat, label_lon = (label.lat, label.lon) if label is not None else (0.0, 0.0)
    fields = [
        boundary.identifier,
        FLAG_TRUE if boundary.is_oceanic else FLAG_FALSE,
        FLAG_TRUE if is_extension else FLAG_FALSE,
        str(len(ring)),
        *(_format(value, precision) for value in box),
        _format(label_lat, precision),
        _format(label_lon, precision),
    ]
    return FIELD_DELIMITER.join(fields)


def _point_line(point: Point, precision: int) -> str:
    return f"{_format(point.lat, precision)}{FIELD_DELIMITER}{_format(point.lon, precision)}"


def _format(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"
