"""
Text output — One line per diagnostic, compiler style.
"""

from edval.ir.schema import Diagnostic


def format_diagnostic(document_name: str, diag: Diagnostic) -> str:
    """Render ``path:line:col: severity [code] message`` (1-based)."""
    if diag.range is not None:
        where = f"{diag.range.start.line + 1}:{diag.range.start.column + 1}"
    else:
        where = f"@{diag.start_offset}"
    fixable = " (fix available)" if diag.fix is not None else ""
    return f"{document_name}:{where}: {diag.severity.value} [{diag.code.value}] {diag.message}{fixable}"


def format_diagnostics(document_name: str, diagnostics: list[Diagnostic]) -> str:
    """Render all diagnostics for a document, one per line."""
    return "\n".join(format_diagnostic(document_name, d) for d in diagnostics)
