"""
IR — Intermediate Representation

Matches are what rules extract. Diagnostics are what rules report.
"""

from edval.ir.enums import (
    DiagnosticCode,
    Severity,
    ValidationStatus,
)
from edval.ir.matches import AnnotationMatch, ImageMatch
from edval.ir.schema import (
    IR_VERSION,
    CorrectionProposal,
    Diagnostic,
    Position,
    TextRange,
    ValidationResult,
)

__all__ = [
    # Enums
    "DiagnosticCode",
    "Severity",
    "ValidationStatus",
    # Matches
    "AnnotationMatch",
    "ImageMatch",
    # Schema
    "IR_VERSION",
    "CorrectionProposal",
    "Diagnostic",
    "Position",
    "TextRange",
    "ValidationResult",
]
