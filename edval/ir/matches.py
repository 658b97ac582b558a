"""
Matches — Immutable records of pattern occurrences.

A match carries the exact text that matched, the fields a rule needs,
and the offset where it starts. Matches live for one validation pass.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageMatch:
    """One well-formed <img> tag."""

    full_text: str
    src: str
    start: int
    # True when the tag used the near-miss ``sc`` attribute instead of ``src``
    has_sc_attribute: bool = False

    @property
    def end(self) -> int:
        return self.start + len(self.full_text)


@dataclass(frozen=True)
class AnnotationMatch:
    """One "(Total for question = N mark(s))" annotation."""

    full_text: str
    points: int
    term: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.full_text)
