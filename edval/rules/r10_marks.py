"""
Rule 10 — Grading Annotations

Checks the right-aligned "(Total for question = N mark(s))" line that
closes each question. One mark is "mark", more than one is "marks".
Zero has no correct form and is always reported.
"""

import re
from typing import Optional

from edval.config.models import ValidatorSettings
from edval.core.contracts import Document
from edval.core.logging import LogChannel, get_rule_logger
from edval.ir.enums import DiagnosticCode, Severity
from edval.ir.matches import AnnotationMatch
from edval.ir.schema import Diagnostic
from edval.rules.common import make_diagnostic, make_fix, scan

RULE_NAME = "r10_marks"
log = get_rule_logger(RULE_NAME)
extract_log = get_rule_logger(RULE_NAME, LogChannel.EXTRACT)

ANNOTATION_PATTERN = re.compile(
    r'<p\s+align="right"><b>\(Total for question\s*=\s*(\d+)\s*(mark|marks)\)</b></p>',
    re.IGNORECASE,
)

ANNOTATION_TEMPLATE = '<p align="right"><b>(Total for question = {points} {term})</b></p>'


def extract_annotations(text: str) -> list[AnnotationMatch]:
    """Find every grading annotation, left to right."""
    return [
        AnnotationMatch(
            full_text=m.group(0),
            points=int(m.group(1)),
            term=m.group(2).lower(),
            start=m.start(),
        )
        for m in scan(ANNOTATION_PATTERN, text)
    ]


def is_correct_usage(points: int, term: str) -> bool:
    """Check that the unit agrees with the number of points."""
    return (points == 1 and term == "mark") or (points > 1 and term == "marks")


def correct_term(points: int) -> str:
    return "mark" if points == 1 else "marks"


def corrected_annotation(points: int) -> str:
    """The canonical annotation markup for a number of points."""
    return ANNOTATION_TEMPLATE.format(points=points, term=correct_term(points))


def validate(document: Document, settings: Optional[ValidatorSettings] = None) -> list[Diagnostic]:
    """
    Report every annotation whose unit disagrees with its value.

    Each finding carries a fix that rewrites the whole annotation in the
    canonical markup with the right unit.
    """
    settings = settings or ValidatorSettings()
    matches = extract_annotations(document.text)
    extract_log.debug("annotations_extracted", count=len(matches))

    diagnostics: list[Diagnostic] = []
    for match in matches:
        if is_correct_usage(match.points, match.term):
            continue

        term = correct_term(match.points)
        plural = "s" if match.points > 1 else ""
        diagnostics.append(make_diagnostic(
            RULE_NAME,
            Severity.WARNING,
            DiagnosticCode.MARK_TERM,
            f'Use "{term}" for {match.points} point{plural}',
            match.start,
            match.end,
            settings,
            fix=make_fix(match.start, match.end, corrected_annotation(match.points)),
        ))
        log.verbose("mark_term_mismatch",
            points=match.points,
            found=match.term,
            expected=term,
            offset=match.start,
        )

    return diagnostics
