"""
Engine — Rule orchestration.

The engine runs the registered rules over one document, keeps a failing
rule from taking the others down, maps offsets to line/column ranges,
and packages the result.

The engine is NOT where domain logic lives.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from edval.config.models import ValidatorSettings
from edval.core.contracts import Document, PositionMapper, RuleFn
from edval.core.logging import ValidationLogger
from edval.ir.enums import ValidationStatus
from edval.ir.schema import Diagnostic, TextRange, ValidationResult


@dataclass
class Rule:
    """A named validation rule."""

    name: str
    fn: RuleFn


def locate(diagnostics: list[Diagnostic], mapper: PositionMapper) -> list[Diagnostic]:
    """Return copies of the diagnostics with line/column ranges filled in."""
    def _range(start: int, end: int) -> TextRange:
        return TextRange(
            start=mapper.offset_to_position(start),
            end=mapper.offset_to_position(end),
        )

    located = []
    for diag in diagnostics:
        update = {"range": _range(diag.start_offset, diag.end_offset)}
        if diag.fix is not None:
            update["fix"] = diag.fix.model_copy(
                update={"range": _range(diag.fix.start_offset, diag.fix.end_offset)}
            )
        located.append(diag.model_copy(update=update))
    return located


class Engine:
    """
    Rule orchestrator.

    Runs rules in registration order. Each rule returns its own list of
    diagnostics; the engine concatenates them.
    """

    def __init__(self, settings: Optional[ValidatorSettings] = None) -> None:
        self.settings = settings or ValidatorSettings()
        self._rules: list[Rule] = []

    def register_rule(self, rule: Rule) -> None:
        """Register a rule. Re-registering a name replaces it in place."""
        for i, existing in enumerate(self._rules):
            if existing.name == rule.name:
                self._rules[i] = rule
                return
        self._rules.append(rule)

    def list_rules(self) -> list[str]:
        """List registered rule names."""
        return [r.name for r in self._rules]

    def validate(self, document: Document) -> ValidationResult:
        """
        Run every enabled rule over a document.

        Args:
            document: Text, name and position mapping supplied by the host

        Returns:
            ValidationResult with located diagnostics
        """
        started = datetime.now()
        vlog = ValidationLogger(document.name)

        diagnostics: list[Diagnostic] = []
        failed_rules: list[str] = []

        for rule in self._rules:
            if not self.settings.is_enabled(rule.name):
                continue
            try:
                vlog.rule_start(rule.name)
                found = rule.fn(document, self.settings)
                vlog.rule_end(rule.name, diagnostics=len(found))
            except Exception as e:
                # A broken rule must not hide the other rules' findings
                vlog.rule_error(rule.name, e)
                failed_rules.append(rule.name)
                continue
            diagnostics.extend(found)

        diagnostics = locate(diagnostics, document)

        if failed_rules:
            status = ValidationStatus.PARTIAL
        elif diagnostics:
            status = ValidationStatus.ISSUES
        else:
            status = ValidationStatus.CLEAN

        result = ValidationResult(
            document=document.name,
            timestamp=started,
            status=status,
            diagnostics=diagnostics,
            failed_rules=failed_rules,
            processing_duration_ms=(datetime.now() - started).total_seconds() * 1000,
        )

        vlog.validation_complete(
            status=status.value,
            diagnostics=len(diagnostics),
            errors=result.error_count,
            warnings=result.warning_count,
        )
        return result


def setup_default_rules(engine: Engine) -> None:
    """Register the stock rules on an engine."""
    from edval.rules import RULES

    for name, fn in RULES.items():
        engine.register_rule(Rule(name=name, fn=fn))


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine with the stock rules."""
    global _engine
    if _engine is None:
        _engine = Engine()
        setup_default_rules(_engine)
    return _engine


def run_all_rules(document: Document) -> list[Diagnostic]:
    """
    Validate a document with every stock rule.

    Args:
        document: Text, name and position mapping supplied by the host

    Returns:
        Located diagnostics from all rules
    """
    return get_engine().validate(document).diagnostics
