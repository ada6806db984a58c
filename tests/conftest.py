"""Shared pytest fixtures for the FIR converter test suite."""

from pathlib import Path

import pytest

from fir_converter.models.boundary import Boundary, Document, Ring

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


# ---------------------------------------------------------------------------
# Sample file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def canonical_dat(data_dir: Path) -> Path:
    """DAT file exactly as the writer emits it (3 FIRs, EGPX has 2 rings)."""
    return data_dir / "firs_canonical.dat"


@pytest.fixture()
def defects_dat(data_dir: Path) -> Path:
    """Hand-edited DAT with an unclosed ring, a repeated point,
    a degenerate ring and a duplicate identifier."""
    return data_dir / "firs_defects.dat"


@pytest.fixture()
def sample_geojson(data_dir: Path) -> Path:
    """FeatureCollection with a Polygon (EGTT) and a MultiPolygon (EGPX)."""
    return data_dir / "firs.geojson"


# ---------------------------------------------------------------------------
# In-memory documents
# ---------------------------------------------------------------------------

# Clockwise square over southern England, (lat, lon)
SQUARE = [(50.0, -2.0), (52.0, -2.0), (52.0, 0.0), (50.0, 0.0), (50.0, -2.0)]

# Clockwise triangle, open
TRIANGLE_OPEN = [(51.0, 0.0), (53.0, -1.0), (52.0, 1.0)]


def make_boundary(identifier: str, *rings: list[tuple[float, float]]) -> Boundary:
    """Build a boundary from ``(lat, lon)`` ring lists."""
    return Boundary(identifier=identifier, rings=[Ring.from_lat_lon(ring) for ring in rings])


@pytest.fixture()
def valid_document() -> Document:
    """Two valid single-ring boundaries."""
    return Document(
        [
            make_boundary("EGTT", SQUARE),
            make_boundary(
                "EGPX",
                [(55.0, -6.0), (58.0, -6.0), (58.0, -2.0), (55.0, -2.0), (55.0, -6.0)],
            ),
        ]
    )
