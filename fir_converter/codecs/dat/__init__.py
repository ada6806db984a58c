"""DAT boundary codec.

Reads and writes the line-oriented FIR boundary format used by radar
clients::

    ; comment
    ICAO|IsOceanic|IsExtension|PointCount|MinLat|MinLon|MaxLat|MaxLon|LabelLat|LabelLon
    lat|lon
    lat|lon
    ...

The codec is split into focused stages:
- **_lines**: classifies each line as blank, comment, header or coordinate
- **_parser**: state machine grouping coordinates into rings and boundaries
- **_writer**: serializes a document back to DAT text

A bare identifier line (``EGLL``) is accepted as a header, and
``lat:lon`` as a coordinate, so hand-written files parse too.
"""

from __future__ import annotations

from fir_converter.codecs.dat._constants import (
    COMMENT_PREFIXES,
    FIELD_DELIMITER,
    HEADER_FIELD_COUNT,
)
from fir_converter.codecs.dat._lines import (
    DatHeader,
    DatLine,
    LineKind,
    classify_line,
    looks_like_header,
)
from fir_converter.codecs.dat._parser import DatParser, ParserState, parse_dat
from fir_converter.codecs.dat._writer import serialize_dat

__all__ = [
    "COMMENT_PREFIXES",
    "FIELD_DELIMITER",
    "HEADER_FIELD_COUNT",
    "DatHeader",
    "DatLine",
    "DatParser",
    "LineKind",
    "ParserState",
    "classify_line",
    "looks_like_header",
    "parse_dat",
    "serialize_dat",
]
