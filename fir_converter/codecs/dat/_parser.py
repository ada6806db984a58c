"""DAT parser state machine.

Classified lines (see ``_lines``) drive a small explicit state machine:

- ``EXPECT_HEADER``: nothing read yet; a coordinate line is an error.
- ``ACCUMULATE``: coordinates append to the active ring.  A header with
  the active boundary's identifier starts a new ring on that boundary;
  any other header starts a new boundary.
- ``SKIP_BOUNDARY``: lenient mode only, entered after a malformed
  header; coordinates are dropped until the next valid header.

Strict parsing stops at the first malformed line.  Lenient parsing logs
and records each malformed line in ``Document.skipped_lines`` and goes on.
"""

from __future__ import annotations

import enum
import logging

from fir_converter.codecs.dat._lines import (
    DatHeader,
    DatLine,
    LineKind,
    classify_line,
    looks_like_header,
)
from fir_converter.core.exceptions import MalformedLineError
from fir_converter.models.boundary import Boundary, Document, Ring

logger = logging.getLogger("fir_converter.codecs.dat")


class ParserState(enum.Enum):
    EXPECT_HEADER = "expect_header"
    ACCUMULATE = "accumulate"
    SKIP_BOUNDARY = "skip_boundary"


class DatParser:
    """Incremental DAT parser; feed classified lines, then call ``finish()``."""

    def __init__(self) -> None:
        self.state = ParserState.EXPECT_HEADER
        self.document = Document()
        self._boundary: Boundary | None = None
        self._ring: Ring | None = None
        self._header: DatLine | None = None

    def feed(self, line: DatLine) -> None:
        """Advance the state machine by one line.

        Raises:
            MalformedLineError: If a coordinate line appears before any header.
        """
        if line.kind in (LineKind.BLANK, LineKind.COMMENT):
            return

        if line.kind is LineKind.HEADER:
            self._finish_ring()
            self._start_ring(line)
            self.state = ParserState.ACCUMULATE
            return

        if self.state is ParserState.SKIP_BOUNDARY:
            logger.debug("Line %d: coordinate dropped with its malformed header", line.number)
            return

        if self.state is ParserState.EXPECT_HEADER or self._ring is None:
            msg = "coordinate line before any boundary header"
            raise MalformedLineError(line.number, msg)

        if line.point is not None:
            self._ring.points.append(line.point)

    def skip_boundary(self) -> None:
        """Drop coordinates until the next header (after a malformed header)."""
        self._finish_ring()
        self._boundary = None
        self.state = ParserState.SKIP_BOUNDARY

    def finish(self) -> Document:
        self._finish_ring()
        return self.document

    # -- internals ----------------------------------------------------------

    def _start_ring(self, line: DatLine) -> None:
        header: DatHeader | None = line.header
        if header is None:
            return
        if self._boundary is None or self._boundary.identifier != header.identifier:
            self._boundary = Boundary(
                identifier=header.identifier,
                is_oceanic=header.is_oceanic,
                label=header.label,
            )
            self.document.boundaries.append(self._boundary)
        self._ring = Ring()
        self._boundary.rings.append(self._ring)
        self._header = line

    def _finish_ring(self) -> None:
        if self._ring is None or self._header is None or self._header.header is None:
            return
        declared = self._header.header.point_count
        if declared is not None and declared != len(self._ring):
            logger.warning(
                "Line %d: header for '%s' declares %d point(s), found %d",
                self._header.number,
                self._header.header.identifier,
                declared,
                len(self._ring),
            )
        self._ring = None
        self._header = None


def parse_dat(text: str, *, strict: bool = True) -> Document:
    """Parse DAT text into a ``Document``.

    Args:
        text: Decoded DAT content.
        strict: When ``False``, malformed lines are skipped and recorded in
            ``Document.skipped_lines`` instead of raising.

    Raises:
        MalformedLineError: In strict mode, on the first malformed line.
    """
    parser = DatParser()
    for number, raw in enumerate(text.splitlines(), start=1):
        try:
            parser.feed(classify_line(raw, number))
        except MalformedLineError as exc:
            if strict:
                raise
            logger.warning("Skipping malformed DAT line: %s", exc)
            parser.document.skipped_lines.append(exc)
            if looks_like_header(raw):
                parser.skip_boundary()

    document = parser.finish()
    logger.info(
        "Parsed %d boundary(ies) from DAT input (%d line(s) skipped)",
        len(document),
        len(document.skipped_lines),
    )
    return document
