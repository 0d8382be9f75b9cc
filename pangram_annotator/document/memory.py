"""In-memory document used by the command line and the tests."""
import uuid

from pangram_annotator.document.host import DocumentAnnotation, TextRange


class InMemoryDocument:
    """Simple string-backed document with an annotation layer"""

    def __init__(
        self,
        content: str,
        selection: TextRange | None = None,
        document_id: str | None = None,
    ) -> None:
        self._content = content
        self._document_id = document_id or str(uuid.uuid4())[:8]
        self._annotations: list[DocumentAnnotation] = []
        self._live = True
        self._selection: TextRange | None = None
        if selection is not None:
            self.select(selection)

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def content(self) -> str:
        return self._content

    def select(self, text_range: TextRange | None) -> None:
        """Set or clear the active selection"""
        if text_range is not None and text_range.end > len(self._content):
            raise ValueError(
                f"Selection [{text_range.start}, {text_range.end}) exceeds document length {len(self._content)}"
            )
        self._selection = text_range

    def selection(self) -> TextRange | None:
        return self._selection

    def extent(self) -> TextRange:
        return TextRange(0, len(self._content))

    def text(self, text_range: TextRange) -> str:
        return self._content[text_range.start:text_range.end]

    def add_annotation(self, annotation: DocumentAnnotation) -> None:
        self._annotations.append(annotation)

    def remove_annotations(self, owner: str) -> int:
        kept = [a for a in self._annotations if a.owner != owner]
        removed = len(self._annotations) - len(kept)
        self._annotations = kept
        return removed

    def annotations(self, owner: str | None = None) -> list[DocumentAnnotation]:
        if owner is None:
            return list(self._annotations)
        return [a for a in self._annotations if a.owner == owner]

    def close(self) -> None:
        """Discard the document; later liveness checks fail"""
        self._live = False

    def is_live(self) -> bool:
        return self._live
