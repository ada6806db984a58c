"""Shared converter constants.

Centralises coordinate bounds, file extensions and property names
used by the codecs, the validator and the CLI.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Longitude span above which a bounding box is assumed to cross the antimeridian
ANTIMERIDIAN_SPAN = 180.0

# A ring needs 3 distinct points to enclose any area
MIN_DISTINCT_POINTS = 3

# ---------------------------------------------------------------------------
# File formats
# ---------------------------------------------------------------------------

DAT_EXTENSIONS: frozenset[str] = frozenset({".dat"})
GEOJSON_EXTENSIONS: frozenset[str] = frozenset({".geojson", ".json"})

# ---------------------------------------------------------------------------
# GeoJSON properties
# ---------------------------------------------------------------------------

DEFAULT_IDENTIFIER_PROPERTY: str = "ICAO"
"""Feature property carrying the FIR identifier."""

OCEANIC_PROPERTY: str = "IsOceanic"
LABEL_PROPERTY: str = "Label"

# ---------------------------------------------------------------------------
# Output precision
# ---------------------------------------------------------------------------

DEFAULT_COORDINATE_PRECISION = 6
MAX_COORDINATE_PRECISION = 15
