"""Boundary document validation.

Walks a ``Document`` and reports every structural violation without
mutating it.  Checks run as independent passes, in this order:

1. Duplicate identifier across boundaries (identifier pass).
2. Ring not closed.
3. Ring with consecutive duplicate points.
4. Degenerate ring (fewer than 3 distinct points, or zero area).
5. Empty boundary (no rings).

Passes 2-4 form the geometry pass and run ring by ring.  All findings
are accumulated, so a single run reports every defect.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fir_converter.core.constants import MIN_DISTINCT_POINTS
from fir_converter.core.geometry import (
    distinct_point_count,
    has_consecutive_duplicates,
    is_closed,
    is_degenerate,
)
from fir_converter.models.report import Finding, FindingKind, Report

if TYPE_CHECKING:
    from fir_converter.models.boundary import Document

logger = logging.getLogger("fir_converter.operations.validate")


def validate(document: Document) -> Report:
    """Return a report of all structural violations in ``document``."""
    findings: list[Finding] = []
    findings.extend(check_identifiers(document))
    findings.extend(check_geometry(document))
    findings.extend(check_empty_boundaries(document))

    for finding in findings:
        logger.debug("Finding: %s", finding)
    logger.info(
        "Validated %d boundary(ies): %d finding(s)",
        len(document),
        len(findings),
    )
    return Report(findings)


# ---------------------------------------------------------------------------
# Identifier pass
# ---------------------------------------------------------------------------


def check_identifiers(document: Document) -> list[Finding]:
    """Flag every occurrence of an identifier after its first (case-sensitive)."""
    findings: list[Finding] = []
    first_seen: dict[str, int] = {}
    for index, boundary in enumerate(document):
        if boundary.identifier in first_seen:
            findings.append(
                Finding(
                    kind=FindingKind.DUPLICATE_IDENTIFIER,
                    identifier=boundary.identifier,
                    boundary_index=index,
                    message=(
                        f"identifier already used by boundary {first_seen[boundary.identifier]}"
                    ),
                )
            )
        else:
            first_seen[boundary.identifier] = index
    return findings


# ---------------------------------------------------------------------------
# Geometry pass
# ---------------------------------------------------------------------------


def check_geometry(document: Document) -> list[Finding]:
    """Closure, consecutive-duplicate and degeneracy checks for every ring."""
    findings: list[Finding] = []
    for b_index, boundary in enumerate(document):
        for r_index, ring in enumerate(boundary.rings):
            problems: list[tuple[FindingKind, str]] = []
            if not is_closed(ring):
                problems.append((FindingKind.UNCLOSED_RING, "first and last points differ"))
            if has_consecutive_duplicates(ring):
                problems.append(
                    (FindingKind.CONSECUTIVE_DUPLICATES, "ring repeats a point consecutively")
                )
            if is_degenerate(ring):
                distinct = distinct_point_count(ring)
                if distinct < MIN_DISTINCT_POINTS:
                    reason = f"only {distinct} distinct point(s)"
                else:
                    reason = "ring encloses no area"
                problems.append((FindingKind.DEGENERATE_RING, reason))

            findings.extend(
                Finding(kind, boundary.identifier, b_index, r_index, message)
                for kind, message in problems
            )
    return findings


# ---------------------------------------------------------------------------
# Empty boundary pass
# ---------------------------------------------------------------------------


def check_empty_boundaries(document: Document) -> list[Finding]:
    return [
        Finding(
            kind=FindingKind.EMPTY_BOUNDARY,
            identifier=boundary.identifier,
            boundary_index=index,
            message="boundary has no rings",
        )
        for index, boundary in enumerate(document)
        if not boundary.rings
    ]
