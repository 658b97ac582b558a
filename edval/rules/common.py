"""
Shared extraction helpers for rules.

Rules work on raw text with regular expressions. These helpers cover
the parts every rule repeats: scanning, context windows, and building
offset-based diagnostics.
"""

import re
from typing import Iterator, Optional

from edval.config.models import ValidatorSettings
from edval.ir.enums import DiagnosticCode, Severity
from edval.ir.schema import CorrectionProposal, Diagnostic

# Rest of a tag after a partial match: any attributes, then ">"
_TAG_REMAINDER = re.compile(r"[^<>]*>")


def scan(pattern: re.Pattern, text: str) -> Iterator[re.Match]:
    """Yield every non-overlapping match, left to right."""
    yield from pattern.finditer(text)


def context_window(text: str, start: int, end: int, radius: int) -> tuple[int, str]:
    """
    Cut a window of ``radius`` characters on each side of [start, end).

    Returns:
        (offset of the window in ``text``, window text)
    """
    window_start = max(0, start - radius)
    window_end = min(len(text), end + radius)
    return window_start, text[window_start:window_end]


def padded_span(text: str, start: int, end: int, padding: int) -> tuple[int, int]:
    """Widen [start, end) by ``padding`` on each side, clamped to the text."""
    return max(0, start - padding), min(len(text), end + padding)


def tag_end(text: str, offset: int) -> int:
    """
    Find where the tag that continues at ``offset`` closes.

    Returns the offset just past the closing ``>``, or ``offset`` itself
    when the tag is not closed before the next ``<``.
    """
    m = _TAG_REMAINDER.match(text, offset)
    return m.end() if m else offset


def zero_pad(number: int, width: int = 2) -> str:
    """Format an image number the way worksheets name files: 1 -> "01"."""
    return str(number).zfill(width)


def make_fix(start: int, end: int, replacement: str) -> CorrectionProposal:
    """Build a correction for the text between two offsets."""
    return CorrectionProposal(start_offset=start, end_offset=end, replacement=replacement)


def make_diagnostic(
    rule: str,
    severity: Severity,
    code: DiagnosticCode,
    message: str,
    start: int,
    end: int,
    settings: Optional[ValidatorSettings] = None,
    fix: Optional[CorrectionProposal] = None,
) -> Diagnostic:
    """Build an offset-based diagnostic; the engine maps it to a range later."""
    settings = settings or ValidatorSettings()
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        source=settings.source,
        rule=rule,
        start_offset=start,
        end_offset=end,
        fix=fix,
    )
