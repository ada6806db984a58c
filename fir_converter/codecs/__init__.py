"""Boundary codecs and format dispatch.

``parse`` and ``serialize`` are the byte-level entry points used by the
CLI; they pick the DAT or GeoJSON codec from a ``BoundaryFormat`` and
apply the converter configuration.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

from fir_converter.codecs.dat import parse_dat, serialize_dat
from fir_converter.codecs.geojson import parse_geojson, serialize_geojson
from fir_converter.core.config import ConverterConfig
from fir_converter.core.constants import DAT_EXTENSIONS, GEOJSON_EXTENSIONS
from fir_converter.core.exceptions import CodecError, UnsupportedFormatError
from fir_converter.models.boundary import Document

logger = logging.getLogger("fir_converter.codecs")

__all__ = [
    "BoundaryFormat",
    "parse",
    "parse_dat",
    "parse_geojson",
    "serialize",
    "serialize_dat",
    "serialize_geojson",
]


class BoundaryFormat(enum.Enum):
    DAT = "dat"
    GEOJSON = "geojson"

    @classmethod
    def from_path(cls, path: Path | str) -> BoundaryFormat:
        """Select a format from a file extension (case-insensitive).

        Raises:
            UnsupportedFormatError: If the extension is not ``.dat``,
                ``.geojson`` or ``.json``.
        """
        suffix = Path(path).suffix.lower()
        if suffix in DAT_EXTENSIONS:
            return cls.DAT
        if suffix in GEOJSON_EXTENSIONS:
            return cls.GEOJSON
        msg = f"Unsupported file type '{suffix or Path(path).name}': expected .dat, .geojson or .json"
        raise UnsupportedFormatError(msg)


def parse(
    fmt: BoundaryFormat,
    data: bytes | str,
    *,
    config: ConverterConfig | None = None,
    strict: bool = True,
) -> Document:
    """Parse raw input into a ``Document``.

    Args:
        fmt: Input format.
        data: Raw UTF-8 bytes (a leading BOM is ignored) or decoded text.
        config: Converter configuration (defaults apply when omitted).
        strict: Raise on the first malformed line/feature instead of
            skipping it.

    Raises:
        CodecError: If the input cannot be decoded or parsed.
        InvalidCoordinateError: If a GeoJSON coordinate is out of range.
    """
    config = config or ConverterConfig()
    text = _decode(fmt, data)
    if fmt is BoundaryFormat.DAT:
        return parse_dat(text, strict=strict)
    return parse_geojson(text, identifier_property=config.identifier_property, strict=strict)


def serialize(
    fmt: BoundaryFormat,
    document: Document,
    *,
    config: ConverterConfig | None = None,
) -> bytes:
    """Serialize a document to UTF-8 bytes in ``fmt``.

    Raises:
        CodecError: If the document cannot be represented in ``fmt``.
    """
    config = config or ConverterConfig()
    if fmt is BoundaryFormat.DAT:
        text = serialize_dat(
            document,
            precision=config.coordinate_precision,
            enforce_winding=config.enforce_winding,
        )
    else:
        text = serialize_geojson(
            document,
            identifier_property=config.identifier_property,
            precision=config.coordinate_precision,
            enforce_winding=config.enforce_winding,
        )
    return text.encode("utf-8")


def _decode(fmt: BoundaryFormat, data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"{fmt.value} input is not valid UTF-8: {exc}"
        raise CodecError(msg, stage=f"parse_{fmt.value}", code="DECODE_FAILED") from exc
