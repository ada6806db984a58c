"""Validation report and repair note models.

A ``Report`` is the validator's output: a list of ``Finding`` objects,
each tagged with the offending boundary and ring.  Findings are data,
never exceptions, so callers can either print them or hand them to the
repairer.

A ``RepairNote`` records one action the repairer took, and whether the
defect was resolved in place or had to be dropped.
"""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class FindingKind(enum.Enum):
    """Structural violations, in the order the validator checks them."""

    DUPLICATE_IDENTIFIER = "DuplicateIdentifier"
    UNCLOSED_RING = "UnclosedRing"
    CONSECUTIVE_DUPLICATES = "ConsecutiveDuplicates"
    DEGENERATE_RING = "DegenerateRing"
    EMPTY_BOUNDARY = "EmptyBoundary"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single structural violation.

    Attributes:
        kind: What is wrong.
        identifier: Identifier of the offending boundary.
        boundary_index: Zero-based position of the boundary in the document.
        ring_index: Zero-based ring position, or ``None`` for boundary-level findings.
        message: Human-readable description.
    """

    kind: FindingKind
    identifier: str
    boundary_index: int
    ring_index: int | None = None
    message: str = ""

    def __str__(self) -> str:
        location = self.identifier
        if self.ring_index is not None:
            location = f"{location} ring {self.ring_index}"
        return f"[{self.kind.value}] {location}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "identifier": self.identifier,
            "boundary_index": self.boundary_index,
            "ring_index": self.ring_index,
            "message": self.message,
        }


@dataclass(slots=True)
class Report:
    """Validator output.  An empty report means the document is valid."""

    findings: list[Finding] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)

    @property
    def is_valid(self) -> bool:
        return not self.findings

    def of_kind(self, kind: FindingKind) -> list[Finding]:
        """Findings of a single kind, in report order."""
        return [finding for finding in self.findings if finding.kind is kind]

    def counts(self) -> dict[FindingKind, int]:
        """Number of findings per kind (kinds with no findings omitted)."""
        return dict(Counter(finding.kind for finding in self.findings))


class RepairAction(enum.Enum):
    RENAMED = "renamed"
    DEDUPED = "deduped"
    CLOSED = "closed"
    DROPPED_RING = "dropped_ring"
    DROPPED_BOUNDARY = "dropped_boundary"


@dataclass(frozen=True, slots=True)
class RepairNote:
    """One repair action.

    Attributes:
        action: What the repairer did.
        identifier: Boundary identifier before the action.
        ring_index: Ring the action applied to, if any.
        resolved: ``False`` when the defect could only be dropped, not fixed.
        message: Human-readable description.
    """

    action: RepairAction
    identifier: str
    ring_index: int | None = None
    resolved: bool = True
    message: str = ""

    def __str__(self) -> str:
        status = "fixed" if self.resolved else "UNRESOLVED"
        return f"[{status}] {self.identifier}: {self.message}"
