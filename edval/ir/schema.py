"""
IR Schema — Pydantic models for validation output.

Diagnostics are produced with character offsets by the rules. The
engine fills in line/column ranges using the document's position mapper.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from edval.ir.enums import DiagnosticCode, Severity, ValidationStatus

IR_VERSION = "0.1.0"

DEFAULT_SOURCE = "Educational Validator"


class Position(BaseModel):
    """A zero-based line/column location in a document."""

    line: int = Field(..., ge=0)
    column: int = Field(..., ge=0)


class TextRange(BaseModel):
    """A span between two positions (end exclusive)."""

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        """Inclusive containment, matching how editors test ranges."""
        after_start = (position.line, position.column) >= (self.start.line, self.start.column)
        before_end = (position.line, position.column) <= (self.end.line, self.end.column)
        return after_start and before_end


class CorrectionProposal(BaseModel):
    """A text substitution that would resolve a diagnostic."""

    start_offset: int = Field(..., ge=0, description="Replacement start")
    end_offset: int = Field(..., ge=0, description="Replacement end (exclusive)")
    replacement: str = Field(..., description="Text to put in place of the range")
    range: Optional[TextRange] = Field(None, description="Mapped range, set by the engine")


class Diagnostic(BaseModel):
    """A single finding reported by a rule."""

    severity: Severity
    code: DiagnosticCode
    message: str
    source: str = DEFAULT_SOURCE
    rule: str = Field(..., description="Which rule produced this")
    start_offset: int = Field(..., ge=0)
    end_offset: int = Field(..., ge=0)
    range: Optional[TextRange] = Field(None, description="Mapped range, set by the engine")
    fix: Optional[CorrectionProposal] = None

    def covers(self, offset: int) -> bool:
        """Check if an offset falls inside this diagnostic (inclusive)."""
        return self.start_offset <= offset <= self.end_offset


class ValidationResult(BaseModel):
    """The complete output of one validation pass over a document."""

    version: str = Field(default=IR_VERSION, description="IR schema version")
    document: str = Field(..., description="Document name or URI")
    timestamp: datetime = Field(..., description="When validation ran")
    status: ValidationStatus
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    failed_rules: list[str] = Field(
        default_factory=list,
        description="Rules that raised and contributed no diagnostics",
    )
    processing_duration_ms: float = Field(
        0.0, description="Total wall-clock time for validation"
    )

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)
