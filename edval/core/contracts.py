"""
Contracts — Type definitions and interfaces for validation components.
"""

from typing import Protocol

from edval.config.models import ValidatorSettings
from edval.ir.schema import Diagnostic, Position


class PositionMapper(Protocol):
    """Anything that can turn a character offset into a line/column."""

    def offset_to_position(self, offset: int) -> Position:
        ...


class Document(PositionMapper, Protocol):
    """
    The host's view of a document.

    The core reads ``text`` and ``name`` and maps offsets. It never
    mutates the document.
    """

    @property
    def text(self) -> str:
        ...

    @property
    def name(self) -> str:
        ...


class RuleFn(Protocol):
    """Protocol for validation rules."""

    def __call__(self, document: Document, settings: ValidatorSettings) -> list[Diagnostic]:
        """Return this rule's findings for the document."""
        ...
