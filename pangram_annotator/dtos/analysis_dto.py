from dataclasses import dataclass, field
from enum import Enum


class AnnotationCategory(str, Enum):
    AI = "AI"
    AI_ASSISTED = "AI_ASSISTED"


@dataclass
class ClassificationWindowDTO:
    start_index: int
    end_index: int
    label: str
    ai_assistance_score: float | None = None
    confidence: str | None = None


@dataclass
class AnalysisResultDTO:
    headline: str
    fraction_ai: float
    fraction_ai_assisted: float
    fraction_human: float
    windows: list[ClassificationWindowDTO] = field(default_factory=list)


@dataclass
class AnnotationDTO:
    range_start: int
    range_end: int
    category: AnnotationCategory
    tooltip: str


@dataclass
class AnalysisOutcomeDTO:
    """Result-or-error of one analysis session."""
    request_id: str
    result: AnalysisResultDTO | None = None
    annotations: list[AnnotationDTO] = field(default_factory=list)
    summary: str | None = None
    applied: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

