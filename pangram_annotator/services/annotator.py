"""Maps classification windows onto document ranges and renders them as annotations."""
from pangram_annotator.core.exceptions import StaleTargetError
from pangram_annotator.core.logging import get_logger
from pangram_annotator.document.host import DocumentAnnotation, DocumentHost
from pangram_annotator.dtos.analysis_dto import (
    AnnotationCategory,
    AnnotationDTO,
    ClassificationWindowDTO,
)

logger = get_logger(__name__)

_AI_MARKER = "AI Generated"
_HUMAN_MARKER = "Human"
_PLACEHOLDER = "n/a"

CATEGORY_STYLES = {
    AnnotationCategory.AI: "pangram-ai",
    AnnotationCategory.AI_ASSISTED: "pangram-ai-assisted",
}


def classify_label(label: str) -> AnnotationCategory | None:
    """Return the annotation category for a window label, or None for human text.

    Any label that is neither AI generated nor human counts as AI assisted.
    """
    if _AI_MARKER in label:
        return AnnotationCategory.AI
    if _HUMAN_MARKER in label:
        return None
    return AnnotationCategory.AI_ASSISTED


def format_tooltip(window: ClassificationWindowDTO) -> str:
    score = (
        f"{window.ai_assistance_score:.2f}"
        if window.ai_assistance_score is not None
        else _PLACEHOLDER
    )
    confidence = window.confidence or _PLACEHOLDER
    return f"{window.label} | score: {score} | confidence: {confidence}"


def map_windows(
    windows: list[ClassificationWindowDTO],
    base_offset: int,
    limit: int | None = None,
) -> list[AnnotationDTO]:
    """Translate response-relative windows into document annotations.

    ``limit`` is the document position just past the submitted text; windows
    reaching beyond it are clamped, and windows left empty are dropped.
    """
    annotations: list[AnnotationDTO] = []
    for window in windows:
        category = classify_label(window.label)
        if category is None:
            continue

        start = base_offset + window.start_index
        end = base_offset + window.end_index
        if limit is not None:
            start = min(start, limit)
            end = min(end, limit)
        if end <= start:
            logger.debug("empty_window_skipped", start_index=window.start_index, end_index=window.end_index)
            continue

        annotations.append(AnnotationDTO(
            range_start=start,
            range_end=end,
            category=category,
            tooltip=format_tooltip(window),
        ))
    return annotations


class Annotator:
    """Applies annotations to a document under a single owner tag."""

    def __init__(self, owner_tag: str = "pangram") -> None:
        self.owner_tag = owner_tag

    def clear(self, document: DocumentHost) -> int:
        """Remove every annotation this tool created in the document."""
        if not document.is_live():
            raise StaleTargetError(f"Document {document.document_id} is no longer available")
        removed = document.remove_annotations(self.owner_tag)
        logger.info("annotations_cleared", removed=removed)
        return removed

    def apply(self, document: DocumentHost, annotations: list[AnnotationDTO]) -> None:
        """Replace this tool's annotations in the document with ``annotations``.

        Raises:
            StaleTargetError: If the document was closed before the call
        """
        if not document.is_live():
            logger.warning("annotation_target_stale", document_id=document.document_id)
            raise StaleTargetError(f"Document {document.document_id} is no longer available")

        removed = document.remove_annotations(self.owner_tag)
        for annotation in annotations:
            document.add_annotation(DocumentAnnotation(
                start=annotation.range_start,
                end=annotation.range_end,
                style=CATEGORY_STYLES[annotation.category],
                tooltip=annotation.tooltip,
                owner=self.owner_tag,
            ))
        logger.info("annotations_applied", removed=removed, added=len(annotations))

    def annotate(
        self,
        document: DocumentHost,
        windows: list[ClassificationWindowDTO],
        base_offset: int,
        limit: int | None = None,
    ) -> list[AnnotationDTO]:
        """Map windows to annotations and apply them in one step."""
        annotations = map_windows(windows, base_offset, limit)
        self.apply(document, annotations)
        return annotations
