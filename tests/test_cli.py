"""
Tests for the edval command-line host.
"""

import json

import pytest

from edval.cli.main import EXIT_FINDINGS, EXIT_IO_ERROR, EXIT_OK, main

TYPO_DOC = '<p>Figure</p>\n<im src="lesson5_files/01.png">\n'
MARKS_DOC = '<p align="right"><b>(Total for question = 2 mark)</b></p>\n'
CLEAN_DOC = '<img src="lesson5_files/01.png">\n<img src="lesson5_files/02.png">\n'


@pytest.fixture
def write(tmp_path):
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestCheck:
    """Tests for ``edval check``."""

    def test_clean_document(self, write, capsys):
        path = write("lesson5.html", CLEAN_DOC)

        assert main(["check", str(path), "--log-level", "silent"]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_errors_set_exit_code(self, write, capsys):
        path = write("lesson5.html", TYPO_DOC)

        code = main(["check", str(path), "--log-level", "silent"])

        out = capsys.readouterr().out
        assert code == EXIT_FINDINGS
        assert f"{path}:2:1: error [image-tag-typo]" in out

    def test_warnings_only_exit_ok(self, write, capsys):
        path = write("lesson5.html", MARKS_DOC)

        assert main(["check", str(path), "--log-level", "silent"]) == EXIT_OK
        assert 'Use "marks" for 2 points (fix available)' in capsys.readouterr().out

    def test_json_output(self, write, capsys):
        path = write("lesson5.html", MARKS_DOC)

        main(["check", str(path), "--format", "json", "--log-level", "silent"])

        data = json.loads(capsys.readouterr().out)
        assert data[0]["document"] == str(path)
        assert data[0]["diagnostics"][0]["code"] == "mark-term"

    def test_non_html_skipped(self, write, capsys):
        path = write("notes.txt", TYPO_DOC)

        assert main(["check", str(path), "--log-level", "silent"]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_missing_file(self, tmp_path, capsys):
        code = main(["check", str(tmp_path / "gone.html"), "--log-level", "silent"])

        assert code == EXIT_IO_ERROR
        assert "cannot read" in capsys.readouterr().err

    def test_profile_disables_rule(self, write, capsys):
        path = write("lesson5.html", MARKS_DOC)

        main(["check", str(path), "--profile", "images_only", "--log-level", "silent"])

        assert capsys.readouterr().out == ""

    def test_bad_config(self, write, capsys):
        path = write("lesson5.html", CLEAN_DOC)
        config = write("bad.yaml", "- not\n- a mapping\n")

        code = main(["check", str(path), "--config", str(config), "--log-level", "silent"])

        assert code == EXIT_IO_ERROR
        assert "mapping" in capsys.readouterr().err

    def test_config_section_of_wrong_shape(self, write, capsys):
        path = write("lesson5.html", CLEAN_DOC)
        config = write("shape.yaml", "documents: [html]\n")

        code = main(["check", str(path), "--config", str(config), "--log-level", "silent"])

        assert code == EXIT_IO_ERROR
        assert "'documents' must be a mapping" in capsys.readouterr().err


class TestFix:
    """Tests for ``edval fix``."""

    def test_rewrites_file(self, write, capsys):
        path = write("lesson5.html", TYPO_DOC + MARKS_DOC)

        assert main(["fix", str(path), "--log-level", "silent"]) == EXIT_OK

        fixed = path.read_text(encoding="utf-8")
        assert '<img src="lesson5_files/01.png">' in fixed
        assert "<im " not in fixed
        assert "= 2 marks)" in fixed
        assert "applied 2 fixes" in capsys.readouterr().out

    def test_dry_run_leaves_file(self, write, capsys):
        path = write("lesson5.html", MARKS_DOC)

        main(["fix", str(path), "--dry-run", "--log-level", "silent"])

        assert path.read_text(encoding="utf-8") == MARKS_DOC
        assert "would apply 1 fix" in capsys.readouterr().out

    def test_preserves_crlf(self, tmp_path):
        path = tmp_path / "lesson5.html"
        path.write_bytes(MARKS_DOC.replace("\n", "\r\n").encode("utf-8"))

        main(["fix", str(path), "--log-level", "silent"])

        assert path.read_bytes().endswith(b"</p>\r\n")

    def test_write_failure_reported(self, write, capsys, monkeypatch):
        path = write("lesson5.html", MARKS_DOC)
        real_open = open

        def failing_open(file, mode="r", *args, **kwargs):
            if "w" in mode:
                raise PermissionError("read-only file system")
            return real_open(file, mode, *args, **kwargs)

        monkeypatch.setattr("edval.cli.main.open", failing_open, raising=False)

        code = main(["fix", str(path), "--log-level", "silent"])

        captured = capsys.readouterr()
        assert code == EXIT_IO_ERROR
        assert f"cannot write {path}" in captured.err
        assert "applied" not in captured.out
        assert path.read_text(encoding="utf-8") == MARKS_DOC


def test_no_command_prints_help(capsys):
    assert main([]) == EXIT_OK
    assert "usage" in capsys.readouterr().out
