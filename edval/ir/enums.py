"""
IR Enums — Severities, diagnostic codes, and statuses.

No stringly-typed constants scattered across rules.
"""

from enum import Enum


class Severity(str, Enum):
    """
    Severity of a finding.

    - ERROR: the document is almost certainly broken as authored
    - WARNING: a likely quality issue that leaves the markup valid
    - INFO: reserved for advisory findings
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DiagnosticCode(str, Enum):
    """Stable identifiers for every finding a rule can emit."""

    # r10_marks
    MARK_TERM = "mark-term"                       # "1 marks" / "3 mark"

    # r20_images
    IMAGE_TAG_TYPO = "image-tag-typo"             # <im src=...>, <imge ...>
    IMAGE_PATH_OUTSIDE_TAG = "image-path-outside-tag"
    IMAGE_FOLDER = "image-folder"                 # src not in <doc>_files
    IMAGE_DUPLICATE_NUMBER = "image-duplicate-number"
    IMAGE_NUMBER_START = "image-number-start"     # first image is not 01
    IMAGE_NUMBER_GAP = "image-number-gap"


class ValidationStatus(str, Enum):
    """Overall outcome of a validation pass."""

    CLEAN = "clean"       # No findings
    ISSUES = "issues"     # Findings reported
    PARTIAL = "partial"   # At least one rule failed to run
