"""Output helpers for EDVAL hosts."""

from edval.output.edits import apply_fixes, select_fixes
from edval.output.text import format_diagnostic, format_diagnostics

__all__ = [
    "apply_fixes",
    "format_diagnostic",
    "format_diagnostics",
    "select_fixes",
]
