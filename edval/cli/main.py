"""
EDVAL CLI — Command-line host for the validator.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from edval import __version__
from edval.config.loader import ConfigError, get_settings, list_profiles, load_settings_from_path
from edval.config.models import ValidatorSettings
from edval.core.document import TextDocument
from edval.core.engine import Engine, setup_default_rules
from edval.core.logging import LogChannel, configure_logging, get_logger
from edval.ir.enums import Severity
from edval.ir.schema import ValidationResult
from edval.output.edits import apply_fixes
from edval.output.text import format_diagnostics

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_IO_ERROR = 2


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="edval",
        description="Educational Content Validator - check worksheet HTML for authoring mistakes",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"edval {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    check_parser = subparsers.add_parser("check", help="Report problems in documents")
    _add_common_arguments(check_parser)
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    fix_parser = subparsers.add_parser("fix", help="Apply suggested fixes to documents")
    _add_common_arguments(fix_parser)
    fix_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report how many fixes would be applied without writing files",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    configure_logging(
        level=args.log_level,
        channels=[ch.strip() for ch in args.log_channel.split(",")] if args.log_channel else None,
        force=True,
    )

    try:
        engine = build_engine(args.profile, args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"edval: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    if args.command == "check":
        return run_check(engine, args.paths, args.format)
    if args.command == "fix":
        return run_fix(engine, args.paths, args.dry_run)

    return EXIT_OK


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("paths", nargs="+", type=Path, help="Documents to validate")
    parser.add_argument(
        "--profile",
        type=str,
        default="default",
        choices=list_profiles(),
        help="Bundled settings profile (default: default)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML settings file (overrides --profile)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or EDVAL_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (engine,extract,rule,fix,system). Default: all",
    )


def build_engine(profile: str = "default", config: Optional[Path] = None) -> Engine:
    """Create an engine with the stock rules and the chosen settings."""
    settings: ValidatorSettings
    if config is not None:
        settings = load_settings_from_path(config)
    else:
        settings = get_settings(profile)

    engine = Engine(settings)
    setup_default_rules(engine)
    return engine


def _load_documents(paths: list[Path], settings: ValidatorSettings) -> tuple[list[TextDocument], bool]:
    """Read the HTML-like documents among ``paths``. Returns (documents, all_read)."""
    log = get_logger(LogChannel.SYSTEM)
    documents = []
    all_read = True

    for path in paths:
        try:
            document = TextDocument.from_path(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"edval: cannot read {path}: {e}", file=sys.stderr)
            all_read = False
            continue

        if not document.is_html_like(settings):
            log.verbose("document_skipped", document=str(path), reason="not_html")
            continue
        documents.append(document)

    return documents, all_read


def run_check(engine: Engine, paths: list[Path], output_format: str = "text") -> int:
    """Validate documents and print their diagnostics."""
    documents, all_read = _load_documents(paths, engine.settings)
    results: list[ValidationResult] = [engine.validate(doc) for doc in documents]

    if output_format == "json":
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
    else:
        for result in results:
            if result.diagnostics:
                print(format_diagnostics(result.document, result.diagnostics))
            for rule_name in result.failed_rules:
                print(f"{result.document}: rule {rule_name} failed to run", file=sys.stderr)

    if not all_read:
        return EXIT_IO_ERROR
    has_errors = any(
        d.severity == Severity.ERROR for r in results for d in r.diagnostics
    )
    return EXIT_FINDINGS if has_errors else EXIT_OK


def run_fix(engine: Engine, paths: list[Path], dry_run: bool = False) -> int:
    """Apply every available fix and write documents back."""
    documents, all_read = _load_documents(paths, engine.settings)
    all_written = True

    for document in documents:
        result = engine.validate(document)
        new_text, applied = apply_fixes(document.text, result.diagnostics)

        if applied and not dry_run:
            try:
                with open(document.name, "w", encoding="utf-8", newline="") as f:
                    f.write(new_text)
            except OSError as e:
                print(f"edval: cannot write {document.name}: {e}", file=sys.stderr)
                all_written = False
                continue

        verb = "would apply" if dry_run else "applied"
        print(f"{document.name}: {verb} {applied} fix{'es' if applied != 1 else ''}")

    return EXIT_OK if all_read and all_written else EXIT_IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
