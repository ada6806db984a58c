"""Shared constants for the DAT boundary format."""

from __future__ import annotations

import re

# ICAO|IsOceanic|IsExtension|PointCount|MinLat|MinLon|MaxLat|MaxLon|LabelLat|LabelLon
HEADER_FIELD_COUNT = 10
COORDINATE_FIELD_COUNT = 2

FIELD_DELIMITER = "|"
# Accepted on read only; the writer always emits FIELD_DELIMITER
ALT_COORDINATE_DELIMITER = ":"

COMMENT_PREFIXES = (";", "#", "//")

FLAG_TRUE = "1"
FLAG_FALSE = "0"

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_\-]*$")
