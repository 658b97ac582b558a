"""
Integration tests for the full validator.

Runs realistic worksheets through the stock engine.
"""

import pytest

from edval.core.document import TextDocument
from edval.core.engine import Engine, Rule, run_all_rules, setup_default_rules
from edval.ir.enums import DiagnosticCode, Severity, ValidationStatus
from edval.output.edits import apply_fixes

CLEAN_WORKSHEET = """<html>
<body>
<h1>Lesson 5: Forces</h1>
<p>1. Look at the diagram.</p>
<img src="lesson5_files/01.png" alt="diagram">
<p align="right"><b>(Total for question = 1 mark)</b></p>
<p>2. Label the arrows.</p>
<img src="lesson5_files/02.png">
<img src="lesson5_files/03.png">
<p align="right"><b>(Total for question = 4 marks)</b></p>
</body>
</html>
"""


@pytest.fixture
def engine():
    eng = Engine()
    setup_default_rules(eng)
    return eng


def _validate(engine, text, name="lesson5.html"):
    return engine.validate(TextDocument(text, name))


def _codes(result):
    return [d.code for d in result.diagnostics]


class TestCleanWorksheet:

    def test_no_diagnostics(self, engine):
        result = _validate(engine, CLEAN_WORKSHEET)

        assert result.status == ValidationStatus.CLEAN
        assert result.diagnostics == []

    def test_windows_path_name(self, engine):
        result = _validate(engine, CLEAN_WORKSHEET, "C:\\courses\\lesson5.html")

        assert result.diagnostics == []


class TestNumbering:
    """End-to-end numbering scenarios."""

    def _doc(self, *numbers):
        return "\n".join(f'<img src="lesson5_files/{n:02d}.png">' for n in numbers)

    def test_duplicate(self, engine):
        result = _validate(engine, self._doc(1, 2, 2, 3))
        errors = [d for d in result.diagnostics if d.severity == Severity.ERROR]

        assert len(errors) == 1
        assert errors[0].message == "Duplicate image number: 2 is used 2 times"

    def test_wrong_start(self, engine):
        result = _validate(engine, self._doc(2, 3, 4))

        assert _codes(result) == [DiagnosticCode.IMAGE_NUMBER_START]
        assert result.diagnostics[0].message == "Image numbering should start with 01, found 02"

    def test_gap(self, engine):
        result = _validate(engine, self._doc(1, 2, 4))

        assert _codes(result) == [DiagnosticCode.IMAGE_NUMBER_GAP]
        assert result.diagnostics[0].message == (
            "Image numbering is not sequential. Expected 03, found 04"
        )


class TestFolderAndTypos:

    def test_wrong_folder(self, engine):
        result = _validate(engine, '<img src="wrong_files/01.png">')

        assert _codes(result) == [DiagnosticCode.IMAGE_FOLDER]
        diag = result.diagnostics[0]
        assert diag.message == 'Image source should be in "lesson5_files" folder'
        assert diag.fix.replacement == '<img src="lesson5_files/01.png">'

    def test_tag_typo(self, engine):
        result = _validate(engine, '<im src="lesson5_files/01.png">')

        assert _codes(result) == [DiagnosticCode.IMAGE_TAG_TYPO]
        assert result.diagnostics[0].severity == Severity.ERROR
        assert result.diagnostics[0].fix.replacement == '<img src="lesson5_files/01.png">'

    def test_sc_attribute_counts_as_image(self, engine):
        text = '<img sc="lesson5_files/01.png">\n<img src="lesson5_files/02.png">'

        assert _validate(engine, text).diagnostics == []


class TestFixesClearFindings:
    """Applying every fix should leave only findings that have no fix."""

    def test_messy_worksheet(self, engine):
        text = (
            "<p>1. Read the graph.</p>\n"
            '<im src="lesson5_files/01.png">\n'
            '<img src="old_files/02.png">\n'
            '<p align="right"><b>(Total for question = 3 mark)</b></p>\n'
        )
        result = _validate(engine, text)

        assert _codes(result) == [
            DiagnosticCode.MARK_TERM,
            DiagnosticCode.IMAGE_TAG_TYPO,
            DiagnosticCode.IMAGE_FOLDER,
            DiagnosticCode.IMAGE_NUMBER_START,
        ]

        fixed, applied = apply_fixes(text, result.diagnostics)

        assert applied == 3
        assert _validate(engine, fixed).diagnostics == []

    def test_marks_fix_is_stable(self, engine):
        text = '<p align="right"><b>(Total for question = 1 marks)</b></p>'
        fixed, _ = apply_fixes(text, _validate(engine, text).diagnostics)

        assert apply_fixes(fixed, _validate(engine, fixed).diagnostics) == (fixed, 0)


class TestIsolation:

    def test_raising_rule_keeps_other_findings(self, engine):
        def explode(document, settings):
            raise KeyError("boom")

        engine.register_rule(Rule(name="r05_broken", fn=explode))
        result = _validate(engine, '<img src="lesson5_files/02.png">')

        assert result.status == ValidationStatus.PARTIAL
        assert result.failed_rules == ["r05_broken"]
        assert _codes(result) == [DiagnosticCode.IMAGE_NUMBER_START]


def test_run_all_rules_entry_point():
    diagnostics = run_all_rules(TextDocument(CLEAN_WORKSHEET.replace("02.png", "05.png"), "lesson5.html"))

    assert [d.code for d in diagnostics] == [DiagnosticCode.IMAGE_NUMBER_GAP, DiagnosticCode.IMAGE_NUMBER_GAP]
