"""Unified in-memory boundary model.

Both codecs parse into, and serialize from, the same ``Document``:

- ``Point``: latitude/longitude pair in decimal degrees (value type).
- ``Ring``: ordered sequence of points describing one loop.
- ``Boundary``: one named FIR region made of one or more rings.
- ``Document``: ordered sequence of boundaries for one conversion run.

A document owns its boundaries, a boundary owns its rings and a ring
owns its points; nothing is shared between documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fir_converter.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from fir_converter.core.exceptions import InvalidCoordinateError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from fir_converter.core.exceptions import FirConverterError


@dataclass(frozen=True, slots=True)
class Point:
    """A WGS 84 position, latitude first.

    Raises:
        InvalidCoordinateError: If latitude or longitude is out of range.
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (MIN_LATITUDE <= self.lat <= MAX_LATITUDE):
            msg = f"Latitude {self.lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
            raise InvalidCoordinateError(msg)
        if not (MIN_LONGITUDE <= self.lon <= MAX_LONGITUDE):
            msg = f"Longitude {self.lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
            raise InvalidCoordinateError(msg)

    @classmethod
    def from_lon_lat(cls, lon: float, lat: float) -> Point:
        """Build a point from GeoJSON (longitude-first) order."""
        return cls(lat=lat, lon=lon)

    def to_lon_lat(self) -> tuple[float, float]:
        """Return ``(lon, lat)``, the order GeoJSON and shapely expect."""
        return (self.lon, self.lat)


@dataclass(slots=True)
class Ring:
    """One polygonal loop of points."""

    points: list[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @classmethod
    def from_lat_lon(cls, pairs: Iterable[tuple[float, float]]) -> Ring:
        """Build a ring from ``(lat, lon)`` tuples."""
        return cls([Point(lat, lon) for lat, lon in pairs])


@dataclass(slots=True)
class Boundary:
    """A single FIR region.

    Attributes:
        identifier: ICAO-style identifier (e.g. ``"EGTT"``).
        rings: Outer rings of the region; disjoint parts are separate rings.
        is_oceanic: Whether the FIR is an oceanic control area.
        label: Position where clients draw the identifier, if known.
    """

    identifier: str
    rings: list[Ring] = field(default_factory=list)
    is_oceanic: bool = False
    label: Point | None = None

    @property
    def point_count(self) -> int:
        """Total number of points across all rings."""
        return sum(len(ring) for ring in self.rings)


@dataclass(slots=True)
class Document:
    """Ordered collection of boundaries produced by one parse.

    Attributes:
        boundaries: Boundaries in input order.
        skipped_lines: Errors for input skipped by a lenient parse.
    """

    boundaries: list[Boundary] = field(default_factory=list)
    skipped_lines: list[FirConverterError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.boundaries)

    def __iter__(self) -> Iterator[Boundary]:
        return iter(self.boundaries)

    @property
    def identifiers(self) -> list[str]:
        """Boundary identifiers in document order (duplicates included)."""
        return [boundary.identifier for boundary in self.boundaries]

    @property
    def is_empty(self) -> bool:
        return not self.boundaries
