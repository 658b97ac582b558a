"""
TextDocument — In-memory document with offset/position mapping.

The host hands the core a document. Editors have their own; this one
backs the CLI and the tests.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from edval.config.models import ValidatorSettings
from edval.ir.schema import Position

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class TextDocument:
    """A snapshot of document text plus its identity."""

    text: str
    name: str = "untitled"
    language_id: Optional[str] = None
    _line_starts: list[int] = field(init=False, repr=False, compare=False)
    _line_ends: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        ends = []
        for m in _LINE_BREAK.finditer(self.text):
            ends.append(m.start())
            starts.append(m.end())
        ends.append(len(self.text))
        self._line_starts = starts
        self._line_ends = ends

    @classmethod
    def from_path(cls, path: Union[str, Path], language_id: Optional[str] = None) -> "TextDocument":
        """Read a document from disk."""
        path = Path(path)
        # Keep line endings as written so fixes round-trip
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
        return cls(
            text=text,
            name=str(path),
            language_id=language_id,
        )

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_to_position(self, offset: int) -> Position:
        """
        Convert a character offset to a zero-based line/column.

        Offsets outside the text are clamped to its bounds.
        """
        offset = max(0, min(offset, len(self.text)))
        line = bisect_right(self._line_starts, offset) - 1
        # An offset inside a "\r\n" pair belongs to the end of the line
        column = min(offset, self._line_ends[line]) - self._line_starts[line]
        return Position(line=line, column=column)

    def position_to_offset(self, position: Position) -> int:
        """
        Convert a line/column back to a character offset.

        Lines past the end map to the end of the text; columns past the
        end of a line map to the end of that line.
        """
        if position.line >= self.line_count:
            return len(self.text)
        start = self._line_starts[position.line]
        end = self._line_ends[position.line]
        return min(start + position.column, end)

    def is_html_like(self, settings: Optional[ValidatorSettings] = None) -> bool:
        """Check if the document should be validated at all."""
        settings = settings or ValidatorSettings()
        if self.language_id and self.language_id.lower() in settings.html_language_ids:
            return True
        lowered = self.name.lower()
        return any(lowered.endswith(ext.lower()) for ext in settings.html_extensions)
