"""
Unit tests for applying correction proposals.
"""

from edval.ir.enums import DiagnosticCode, Severity
from edval.ir.schema import CorrectionProposal, Diagnostic
from edval.output.edits import apply_fixes, select_fixes


def _diag(start: int, end: int, replacement: str = None) -> Diagnostic:
    fix = None
    if replacement is not None:
        fix = CorrectionProposal(start_offset=start, end_offset=end, replacement=replacement)
    return Diagnostic(
        severity=Severity.WARNING,
        code=DiagnosticCode.IMAGE_FOLDER,
        message="test",
        rule="test",
        start_offset=start,
        end_offset=end,
        fix=fix,
    )


class TestSelectFixes:
    """Tests for choosing compatible fixes."""

    def test_skips_diagnostics_without_fix(self):
        fixes = select_fixes([_diag(0, 3), _diag(4, 6, "x")])

        assert [f.start_offset for f in fixes] == [4]

    def test_earlier_diagnostic_wins_overlap(self):
        fixes = select_fixes([_diag(2, 8, "first"), _diag(5, 10, "second")])

        assert [f.replacement for f in fixes] == ["first"]

    def test_adjacent_fixes_both_kept(self):
        fixes = select_fixes([_diag(0, 4, "a"), _diag(4, 8, "b")])

        assert len(fixes) == 2

    def test_same_start_counts_as_overlap(self):
        """Verify two insertions at one offset do not both apply."""
        fixes = select_fixes([_diag(3, 3, "a"), _diag(3, 3, "b")])

        assert [f.replacement for f in fixes] == ["a"]


class TestApplyFixes:
    """Tests for rewriting text."""

    def test_no_fixes(self):
        assert apply_fixes("unchanged", [_diag(0, 2)]) == ("unchanged", 0)

    def test_multiple_fixes_keep_offsets_valid(self):
        text = "one two three"
        diagnostics = [_diag(0, 3, "ONE"), _diag(8, 13, "3")]

        assert apply_fixes(text, diagnostics) == ("ONE two 3", 2)

    def test_growing_replacement_before_later_fix(self):
        text = "ab cd"
        diagnostics = [_diag(0, 2, "abcdef"), _diag(3, 5, "x")]

        assert apply_fixes(text, diagnostics) == ("abcdef x", 2)

    def test_overlapping_fix_not_counted(self):
        text = "abcdef"
        new_text, applied = apply_fixes(text, [_diag(0, 4, "X"), _diag(2, 6, "Y")])

        assert new_text == "Xef"
        assert applied == 1
