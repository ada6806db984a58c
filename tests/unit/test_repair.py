"""Tests for deterministic repair.

Covers:
- Closing, deduping, dropping rings and boundaries
- Duplicate identifier renaming (suffix collisions)
- Note order and resolved flags
- Idempotence: validate after repair reports nothing
- Stale findings are ignored
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fir_converter.codecs.dat import parse_dat
from fir_converter.models.boundary import Boundary, Document, Point, Ring
from fir_converter.models.report import Finding, FindingKind, RepairAction, RepairNote, Report
from fir_converter.operations import repair, validate

if TYPE_CHECKING:
    from pathlib import Path

SQUARE = [(50.0, -2.0), (52.0, -2.0), (52.0, 0.0), (50.0, 0.0), (50.0, -2.0)]
DEGENERATE = [(45.0, 8.0), (46.0, 9.0), (45.0, 8.0)]


def boundary(identifier: str, *rings: list[tuple[float, float]]) -> Boundary:
    return Boundary(identifier, rings=[Ring.from_lat_lon(ring) for ring in rings])


def fix(document: Document) -> tuple[Document, list[RepairNote]]:
    return repair(document, validate(document))


class TestRingFixes:
    """Closing and deduping rings in place."""

    def test_concrete_unclosed_triangle(self) -> None:
        doc, notes = fix(parse_dat("EGLL\n51.0:0.0\n52.0:1.0\n53.0:-1.0\n"))
        (ring,) = doc.boundaries[0].rings
        assert len(ring) == 4
        assert ring.points[0] == ring.points[-1] == Point(51.0, 0.0)
        assert [(n.action, n.resolved) for n in notes] == [(RepairAction.CLOSED, True)]

    def test_dedupe(self) -> None:
        ring = [SQUARE[0], SQUARE[1], SQUARE[1], SQUARE[1], *SQUARE[2:]]
        doc, notes = fix(Document([boundary("EGTT", ring)]))
        assert doc.boundaries[0].rings[0] == Ring.from_lat_lon(SQUARE)
        (note,) = notes
        assert note.action is RepairAction.DEDUPED
        assert "removed 2 repeated point(s)" in note.message

    def test_dedupe_runs_before_close(self) -> None:
        # trailing repeat would otherwise survive as a repeat of the closing point
        ring = [SQUARE[0], SQUARE[1], SQUARE[2], SQUARE[3], SQUARE[3]]
        doc, notes = fix(Document([boundary("EGTT", ring)]))
        assert doc.boundaries[0].rings[0] == Ring.from_lat_lon(SQUARE)
        assert [n.action for n in notes] == [RepairAction.DEDUPED, RepairAction.CLOSED]
        assert validate(doc).is_valid

    def test_valid_document_untouched(self, valid_document: Document) -> None:
        before = [list(b.rings) for b in valid_document]
        doc, notes = fix(valid_document)
        assert notes == []
        assert [b.rings for b in doc] == before


class TestDrops:
    """Degenerate rings and empty boundaries."""

    def test_degenerate_ring_dropped_boundary_kept(self) -> None:
        doc, notes = fix(Document([boundary("EGPX", SQUARE, DEGENERATE)]))
        assert len(doc.boundaries[0].rings) == 1
        (note,) = notes
        assert note.action is RepairAction.DROPPED_RING
        assert note.ring_index == 1
        assert note.resolved

    def test_sole_degenerate_ring_drops_boundary(self) -> None:
        doc, notes = fix(Document([boundary("EGTT", SQUARE), boundary("LIMM", DEGENERATE)]))
        assert doc.identifiers == ["EGTT"]
        assert [(n.action, n.identifier, n.resolved) for n in notes] == [
            (RepairAction.DROPPED_RING, "LIMM", True),
            (RepairAction.DROPPED_BOUNDARY, "LIMM", False),
        ]

    def test_empty_boundary_dropped_unresolved(self) -> None:
        doc, notes = fix(Document([Boundary("LFFF"), boundary("EGTT", SQUARE)]))
        assert doc.identifiers == ["EGTT"]
        (note,) = notes
        assert note.action is RepairAction.DROPPED_BOUNDARY
        assert not note.resolved
        assert str(note) == "[UNRESOLVED] LFFF: dropped boundary: it has no rings"


class TestRenames:
    """Duplicate identifiers get numeric suffixes."""

    def test_later_occurrences_renamed(self) -> None:
        doc, notes = fix(Document([boundary("A", SQUARE), boundary("A", SQUARE), boundary("A", SQUARE)]))
        assert doc.identifiers == ["A", "A-2", "A-3"]
        assert [n.message for n in notes] == [
            "renamed duplicate 'A' to 'A-2'",
            "renamed duplicate 'A' to 'A-3'",
        ]

    def test_suffix_skips_existing_identifier(self) -> None:
        doc, _ = fix(Document([boundary("A", SQUARE), boundary("A-2", SQUARE), boundary("A", SQUARE)]))
        assert doc.identifiers == ["A", "A-2", "A-3"]
        assert validate(doc).is_valid

    def test_dropped_duplicate_not_renamed(self) -> None:
        doc, notes = fix(Document([boundary("A", SQUARE), boundary("A", DEGENERATE)]))
        assert doc.identifiers == ["A"]
        assert RepairAction.RENAMED not in {n.action for n in notes}


class TestWholeDocument:
    """Repair of a multi-defect file."""

    def test_defects_file(self, defects_dat: Path) -> None:
        doc, notes = fix(parse_dat(defects_dat.read_text(encoding="utf-8")))
        assert doc.identifiers == ["LFFF", "EDGG", "LFFF-2"]
        assert [(n.action, n.identifier) for n in notes] == [
            (RepairAction.CLOSED, "LFFF"),
            (RepairAction.DEDUPED, "EDGG"),
            (RepairAction.DROPPED_RING, "LIMM"),
            (RepairAction.DROPPED_BOUNDARY, "LIMM"),
            (RepairAction.RENAMED, "LFFF"),
        ]
        assert validate(doc).is_valid

    def test_idempotent(self, defects_dat: Path) -> None:
        doc, _ = fix(parse_dat(defects_dat.read_text(encoding="utf-8")))
        snapshot = [(b.identifier, list(b.rings)) for b in doc]
        doc, notes = fix(doc)
        assert notes == []
        assert [(b.identifier, b.rings) for b in doc] == snapshot

    def test_empty_report_is_noop(self, defects_dat: Path) -> None:
        doc = parse_dat(defects_dat.read_text(encoding="utf-8"))
        _, notes = repair(doc, Report())
        assert notes == []
        assert len(doc) == 4


class TestStaleFindings:
    """Findings that no longer describe the document are skipped."""

    def test_unknown_boundary_index(self, valid_document: Document) -> None:
        report = Report([Finding(FindingKind.EMPTY_BOUNDARY, "EGTT", 7)])
        _, notes = repair(valid_document, report)
        assert notes == []
        assert len(valid_document) == 2

    def test_identifier_mismatch(self, valid_document: Document) -> None:
        report = Report([Finding(FindingKind.UNCLOSED_RING, "ZZZZ", 0, 0)])
        _, notes = repair(valid_document, report)
        assert notes == []
        assert len(valid_document.boundaries[0].rings[0]) == 5

    def test_unknown_ring_index(self, valid_document: Document) -> None:
        report = Report([Finding(FindingKind.DEGENERATE_RING, "EGTT", 0, 3)])
        _, notes = repair(valid_document, report)
        assert notes == []
        assert len(valid_document.boundaries[0].rings) == 1
