"""
Interface of the text-editing surface the annotator draws on.

A host exposes addressable character ranges (code point offsets, end
exclusive) and a set of styled, range-bound annotations. Each annotation
carries an owner tag so one tool can bulk-remove its own annotations without
touching decorations created by anything else.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TextRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class DocumentAnnotation:
    start: int
    end: int
    style: str
    tooltip: str
    owner: str | None = None


class DocumentHost(Protocol):
    @property
    def document_id(self) -> str:
        ...

    def selection(self) -> TextRange | None:
        """Active selection, or None when nothing is selected."""
        ...

    def extent(self) -> TextRange:
        """Range covering the whole document."""
        ...

    def text(self, text_range: TextRange) -> str:
        ...

    def add_annotation(self, annotation: DocumentAnnotation) -> None:
        ...

    def remove_annotations(self, owner: str) -> int:
        """Remove every annotation tagged with ``owner``; return how many were removed."""
        ...

    def annotations(self, owner: str | None = None) -> list[DocumentAnnotation]:
        ...

    def is_live(self) -> bool:
        """False once the document has been closed or discarded."""
        ...
