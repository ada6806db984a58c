"""Engine operations applied to a parsed boundary document.

- validate: report structural violations without mutating the document
- repair: deterministically fix the violations a report describes
"""

from fir_converter.operations.repair import repair
from fir_converter.operations.validate import (
    check_empty_boundaries,
    check_geometry,
    check_identifiers,
    validate,
)

__all__ = [
    "check_empty_boundaries",
    "check_geometry",
    "check_identifiers",
    "repair",
    "validate",
]
