"""Data models.

Defines the data structures shared by codecs and operations:
- Point, Ring, Boundary, Document: the unified boundary model
- Finding, Report: validator output
- RepairNote: repairer output
"""

from fir_converter.models.boundary import Boundary, Document, Point, Ring
from fir_converter.models.report import (
    Finding,
    FindingKind,
    RepairAction,
    RepairNote,
    Report,
)

__all__ = [
    "Boundary",
    "Document",
    "Finding",
    "FindingKind",
    "Point",
    "RepairAction",
    "RepairNote",
    "Report",
    "Ring",
]
