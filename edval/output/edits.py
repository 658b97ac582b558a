"""
Edits — Apply correction proposals to a text snapshot.

This is host-side code: the rules only describe fixes. Editors apply
them through their own edit APIs; the CLI uses this module.
"""

from edval.core.logging import LogChannel, get_logger
from edval.ir.schema import CorrectionProposal, Diagnostic

log = get_logger(LogChannel.FIX)


def _overlaps(a: CorrectionProposal, b: CorrectionProposal) -> bool:
    if a.start_offset == b.start_offset:
        return True
    return a.start_offset < b.end_offset and b.start_offset < a.end_offset


def select_fixes(diagnostics: list[Diagnostic]) -> list[CorrectionProposal]:
    """
    Pick the fixes that can be applied together.

    Earlier diagnostics win when two fixes touch the same text.
    """
    selected: list[CorrectionProposal] = []
    for diag in diagnostics:
        if diag.fix is None:
            continue
        if any(_overlaps(diag.fix, other) for other in selected):
            log.verbose("fix_skipped_overlap",
                code=diag.code.value,
                start=diag.fix.start_offset,
                end=diag.fix.end_offset,
            )
            continue
        selected.append(diag.fix)
    return selected


def apply_fixes(text: str, diagnostics: list[Diagnostic]) -> tuple[str, int]:
    """
    Apply every non-overlapping fix.

    Returns:
        (new text, number of fixes applied)
    """
    fixes = select_fixes(diagnostics)

    # Back to front so earlier offsets stay valid
    for fix in sorted(fixes, key=lambda f: f.start_offset, reverse=True):
        text = text[:fix.start_offset] + fix.replacement + text[fix.end_offset:]
        log.debug("fix_applied",
            start=fix.start_offset,
            end=fix.end_offset,
            replacement=fix.replacement[:50],
        )

    return text, len(fixes)
