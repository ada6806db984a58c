"""GeoJSON boundary codec.

Maps an RFC 7946 FeatureCollection of Polygon / MultiPolygon features
to and from a ``Document``:

- one Feature per Boundary, identifier in a configurable property
  (``"ICAO"`` by default);
- each polygon's outer ring becomes one Ring; interior rings (holes)
  are rejected, since FIR boundaries are modelled as simple polygons;
- coordinates are ``[lon, lat]`` on the wire and ``Point(lat, lon)`` in
  the model.

On write, rings are closed and wound counter-clockwise (right-hand rule).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fir_converter.core.constants import (
    DEFAULT_COORDINATE_PRECISION,
    DEFAULT_IDENTIFIER_PROPERTY,
    LABEL_PROPERTY,
    OCEANIC_PROPERTY,
)
from fir_converter.core.exceptions import (
    GeoJsonParseError,
    InvalidCoordinateError,
    MissingIdentifierError,
    UnsupportedGeometryError,
)
from fir_converter.core.geometry import Winding, close, label_point, with_winding
from fir_converter.models.boundary import Boundary, Document, Point, Ring

logger = logging.getLogger("fir_converter.codecs.geojson")

_POLYGON = "Polygon"
_MULTI_POLYGON = "MultiPolygon"


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------


def parse_geojson(
    text: str,
    *,
    identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY,
    strict: bool = True,
) -> Document:
    """Parse GeoJSON text into a ``Document``.

    Args:
        text: Decoded GeoJSON content (a FeatureCollection or a single Feature).
        identifier_property: Feature property holding the FIR identifier.
        strict: When ``False``, a Feature that fails to convert is logged,
            recorded in ``Document.skipped_lines`` and skipped.

    Raises:
        GeoJsonParseError: If the text is not JSON or not a Feature/FeatureCollection.
        MissingIdentifierError: If a Feature lacks the identifier property.
        UnsupportedGeometryError: If a Feature is not a hole-free (Multi)Polygon.
        InvalidCoordinateError: If a coordinate is outside WGS 84 bounds.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        # JSONDecodeError, or an integer literal past the digit limit
        msg = f"Not valid JSON: {exc}"
        raise GeoJsonParseError(msg) from exc

    features = _features_of(data)
    document = Document()
    for index, feature in enumerate(features):
        try:
            document.boundaries.append(_feature_to_boundary(feature, index, identifier_property))
        except (GeoJsonParseError, InvalidCoordinateError) as exc:
            if strict:
                raise
            logger.warning("Skipping feature %d: %s", index, exc)
            document.skipped_lines.append(exc)

    logger.info(
        "Parsed %d boundary(ies) from GeoJSON input (%d feature(s) skipped)",
        len(document),
        len(document.skipped_lines),
    )
    return document


def _features_of(data: object) -> list[object]:
    if not isinstance(data, dict):
        msg = f"Top-level GeoJSON value must be an object, got {type(data).__name__}"
        raise GeoJsonParseError(msg)

    kind = data.get("type")
    if kind == "Feature":
        return [data]
    if kind != "FeatureCollection":
        msg = f"Expected a FeatureCollection or Feature, got type {kind!r}"
        raise GeoJsonParseError(msg)

    features = data.get("features")
    if not isinstance(features, list):
        msg = "FeatureCollection has no 'features' array"
        raise GeoJsonParseError(msg)
    return features


def _feature_to_boundary(feature: object, index: int, identifier_property: str) -> Boundary:
    """Convert one GeoJSON Feature into a Boundary."""
    if not isinstance(feature, dict) or feature.get("type") != "Feature":
        msg = f"Feature {index} is not a GeoJSON Feature object"
        raise GeoJsonParseError(msg)

    properties = feature.get("properties") or {}
    if not isinstance(properties, dict):
        msg = f"Feature {index} has non-object properties"
        raise GeoJsonParseError(msg)

    identifier = properties.get(identifier_property)
    if not isinstance(identifier, str) or not identifier.strip():
        msg = f"Feature {index} has no '{identifier_property}' identifier property"
        raise MissingIdentifierError(msg)
    identifier = identifier.strip()

    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        msg = f"Feature '{identifier}' has no geometry"
        raise UnsupportedGeometryError(msg)

    geom_type = geometry.get("type")
    coordinates = geometry.get("coordinates")
    if geom_type == _POLYGON:
        polygons = [coordinates]
    elif geom_type == _MULTI_POLYGON:
        polygons = coordinates if isinstance(coordinates, list) else None
    else:
        msg = f"Feature '{identifier}' has unsupported geometry type {geom_type!r}"
        raise UnsupportedGeometryError(msg)
    if polygons is None:
        msg = f"Feature '{identifier}' has malformed {geom_type} coordinates"
        raise GeoJsonParseError(msg)

    rings: list[Ring] = []
    for part, polygon in enumerate(polygons):
        if not isinstance(polygon, list):
            msg = f"Feature '{identifier}' polygon {part} is not an array of rings"
            raise GeoJsonParseError(msg)
        if len(polygon) > 1:
            msg = (
                f"Feature '{identifier}' polygon {part} has {len(polygon) - 1} interior "
                "ring(s); polygons with holes are not supported"
            )
            raise UnsupportedGeometryError(msg)
        if polygon:
            rings.append(_coords_to_ring(polygon[0], identifier))

    return Boundary(
        identifier=identifier,
        rings=rings,
        is_oceanic=_read_flag(properties.get(OCEANIC_PROPERTY, False)),
        label=_read_label(properties.get(LABEL_PROPERTY), identifier),
    )


def _coords_to_ring(raw_coords: object, identifier: str) -> Ring:
    """Convert a ``[[lon, lat], ...]`` array to a Ring, dropping altitude.

    Raises:
        GeoJsonParseError: If any coordinate element is malformed.
        InvalidCoordinateError: If any coordinate is out of bounds.
    """
    if not isinstance(raw_coords, list):
        msg = f"Feature '{identifier}' ring is not a coordinate array"
        raise GeoJsonParseError(msg)
    return Ring([_coord_to_point(c, idx, identifier) for idx, c in enumerate(raw_coords)])


def _coord_to_point(raw: object, idx: int, identifier: str) -> Point:
    if not isinstance(raw, list | tuple) or len(raw) < 2:
        msg = f"Malformed coordinate at index {idx} in Feature '{identifier}': {raw!r}"
        raise GeoJsonParseError(msg)
    try:
        lon = float(raw[0])
        lat = float(raw[1])
    except (TypeError, ValueError, OverflowError) as exc:
        msg = (
            f"Malformed coordinate at index {idx} in Feature '{identifier}': "
            f"cannot convert to float (lon={raw[0]!r}, lat={raw[1]!r})"
        )
        raise GeoJsonParseError(msg) from exc
    try:
        return Point.from_lon_lat(lon, lat)
    except InvalidCoordinateError as exc:
        msg = f"{exc.message} at index {idx} in Feature '{identifier}'"
        raise InvalidCoordinateError(msg) from exc


def _read_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _read_label(value: object, identifier: str) -> Point | None:
    if value is None:
        return None
    return _coord_to_point(value, 0, identifier)


# ---------------------------------------------------------------------------
# Serialize
# ---------------------------------------------------------------------------


def serialize_geojson(
    document: Document,
    *,
    identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY,
    precision: int = DEFAULT_COORDINATE_PRECISION,
    enforce_winding: bool = True,
) -> str:
    """Serialize a document to a pretty-printed GeoJSON FeatureCollection."""
    features = [
        _boundary_to_feature(boundary, identifier_property, precision, enforce_winding)
        for boundary in document
    ]
    collection = {"type": "FeatureCollection", "features": features}
    logger.info("Serialized %d boundary(ies) to GeoJSON", len(features))
    return json.dumps(collection, indent=2) + "\n"


def _boundary_to_feature(
    boundary: Boundary,
    identifier_property: str,
    precision: int,
    enforce_winding: bool,
) -> dict[str, Any]:
    rings = [_ring_coords(ring, precision, enforce_winding) for ring in boundary.rings]
    if len(rings) == 1:
        geometry: dict[str, Any] = {"type": _POLYGON, "coordinates": [rings[0]]}
    else:
        if not rings:
            logger.warning("Boundary '%s' has no rings; writing empty geometry", boundary.identifier)
        geometry = {"type": _MULTI_POLYGON, "coordinates": [[ring] for ring in rings]}

    properties: dict[str, Any] = {
        identifier_property: boundary.identifier,
        OCEANIC_PROPERTY: boundary.is_oceanic,
    }
    label = boundary.label or label_point(boundary.rings)
    if label is not None:
        properties[LABEL_PROPERTY] = _position(label, precision)

    return {"type": "Feature", "properties": properties, "geometry": geometry}


def _ring_coords(ring: Ring, precision: int, enforce_winding: bool) -> list[list[float]]:
    ring = close(ring)
    if enforce_winding:
        ring = with_winding(ring, Winding.COUNTER_CLOCKWISE)
    return [_position(point, precision) for point in ring]


def _position(point: Point, precision: int) -> list[float]:
    return [round(point.lon, precision), round(point.lat, precision)]
