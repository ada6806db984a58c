"""Deterministic repair of validation findings.

Given a document and the validator's report, applies one fix per
finding kind, mutating the document in place:

- Duplicate identifier: later boundary renamed ``<id>-2``, ``<id>-3``, ...
- Consecutive duplicates: removed (before closing).
- Unclosed ring: first point appended.
- Degenerate ring: dropped; a boundary left without rings is dropped too.
- Empty boundary: dropped.

A dropped boundary cannot be brought back, so it is recorded as an
unresolved note.  Repair never raises, and validating a repaired
document yields no findings.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from fir_converter.core.geometry import close, dedupe_consecutive
from fir_converter.models.report import Finding, FindingKind, RepairAction, RepairNote

if TYPE_CHECKING:
    from fir_converter.models.boundary import Document
    from fir_converter.models.report import Report

logger = logging.getLogger("fir_converter.operations.repair")


def repair(document: Document, report: Report) -> tuple[Document, list[RepairNote]]:
    """Fix ``document`` in place according to ``report``.

    Returns:
        The same document and the list of notes describing every action,
        in application order.
    """
    findings = [f for f in report if _matches(document, f)]
    notes: list[RepairNote] = []

    dropped_rings = _repair_rings(document, findings, notes)
    dropped_boundaries = _drop_rings(document, dropped_rings, notes)
    dropped_boundaries |= _drop_empty_boundaries(document, findings, notes)
    _rename_duplicates(document, findings, dropped_boundaries, notes)

    document.boundaries = [
        boundary
        for index, boundary in enumerate(document.boundaries)
        if index not in dropped_boundaries
    ]

    unresolved = sum(1 for note in notes if not note.resolved)
    logger.info(
        "Repair applied %d action(s), %d unresolved",
        len(notes),
        unresolved,
    )
    return document, notes


def _matches(document: Document, finding: Finding) -> bool:
    """Ignore findings that do not describe this document (stale reports)."""
    if not 0 <= finding.boundary_index < len(document.boundaries):
        logger.warning("Ignoring finding for unknown boundary: %s", finding)
        return False
    boundary = document.boundaries[finding.boundary_index]
    if boundary.identifier != finding.identifier:
        logger.warning("Ignoring finding for renamed boundary: %s", finding)
        return False
    if finding.ring_index is not None and not 0 <= finding.ring_index < len(boundary.rings):
        logger.warning("Ignoring finding for unknown ring: %s", finding)
        return False
    return True


# ---------------------------------------------------------------------------
# Ring fixes
# ---------------------------------------------------------------------------


def _repair_rings(
    document: Document,
    findings: list[Finding],
    notes: list[RepairNote],
) -> dict[int, set[int]]:
    """Dedupe and close flagged rings; return degenerate rings per boundary."""
    kinds_by_ring: dict[tuple[int, int], set[FindingKind]] = defaultdict(set)
    for finding in findings:
        if finding.ring_index is not None:
            kinds_by_ring[(finding.boundary_index, finding.ring_index)].add(finding.kind)

    degenerate: dict[int, set[int]] = defaultdict(set)
    for (b_index, r_index), kinds in sorted(kinds_by_ring.items()):
        boundary = document.boundaries[b_index]
        if FindingKind.DEGENERATE_RING in kinds:
            degenerate[b_index].add(r_index)
            continue

        ring = boundary.rings[r_index]
        if FindingKind.CONSECUTIVE_DUPLICATES in kinds:
            before = len(ring)
            ring = dedupe_consecutive(ring)
            notes.append(
                RepairNote(
                    RepairAction.DEDUPED,
                    boundary.identifier,
                    r_index,
                    message=f"removed {before - len(ring)} repeated point(s) from ring {r_index}",
                )
            )
        if FindingKind.UNCLOSED_RING in kinds:
            ring = close(ring)
            notes.append(
                RepairNote(
                    RepairAction.CLOSED,
                    boundary.identifier,
                    r_index,
                    message=f"closed ring {r_index}",
                )
            )
        boundary.rings[r_index] = ring
    return degenerate


def _drop_rings(
    document: Document,
    degenerate: dict[int, set[int]],
    notes: list[RepairNote],
) -> set[int]:
    """Remove degenerate rings; return boundaries left with no rings."""
    emptied: set[int] = set()
    for b_index in sorted(degenerate):
        boundary = document.boundaries[b_index]
        for r_index in sorted(degenerate[b_index]):
            notes.append(
                RepairNote(
                    RepairAction.DROPPED_RING,
                    boundary.identifier,
                    r_index,
                    message=f"dropped degenerate ring {r_index}",
                )
            )
        boundary.rings = [
            ring for r_index, ring in enumerate(boundary.rings) if r_index not in degenerate[b_index]
        ]
        if not boundary.rings:
            emptied.add(b_index)
            notes.append(
                RepairNote(
                    RepairAction.DROPPED_BOUNDARY,
                    boundary.identifier,
                    resolved=False,
                    message="dropped boundary: every ring was degenerate",
                )
            )
            logger.warning("Dropped boundary '%s': every ring was degenerate", boundary.identifier)
    return emptied


def _drop_empty_boundaries(
    document: Document,
    findings: list[Finding],
    notes: list[RepairNote],
) -> set[int]:
    dropped: set[int] = set()
    for finding in findings:
        if finding.kind is not FindingKind.EMPTY_BOUNDARY or finding.boundary_index in dropped:
            continue
        dropped.add(finding.boundary_index)
        notes.append(
            RepairNote(
                RepairAction.DROPPED_BOUNDARY,
                finding.identifier,
                resolved=False,
                message="dropped boundary: it has no rings",
            )
        )
        logger.warning("Dropped boundary '%s': it has no rings", finding.identifier)
    return dropped


# ---------------------------------------------------------------------------
# Identifier fixes
# ---------------------------------------------------------------------------


def _rename_duplicates(
    document: Document,
    findings: list[Finding],
    dropped: set[int],
    notes: list[RepairNote],
) -> None:
    """Rename later duplicates, skipping suffixes that are already taken."""
    taken = {
        boundary.identifier
        for index, boundary in enumerate(document.boundaries)
        if index not in dropped
    }
    next_suffix: dict[str, int] = {}

    for finding in findings:
        if finding.kind is not FindingKind.DUPLICATE_IDENTIFIER:
            continue
        if finding.boundary_index in dropped:
            continue
        boundary = document.boundaries[finding.boundary_index]
        base = boundary.identifier
        suffix = next_suffix.get(base, 2)
        while f"{base}-{suffix}" in taken:
            suffix += 1
        new_identifier = f"{base}-{suffix}"
        next_suffix[base] = suffix + 1
        taken.add(new_identifier)

        boundary.identifier = new_identifier
        notes.append(
            RepairNote(
                RepairAction.RENAMED,
                base,
                message=f"renamed duplicate '{base}' to '{new_identifier}'",
            )
        )
