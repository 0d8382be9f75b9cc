"""
Data Transfer Objects (DTOs) package.

DTOs are simple dataclasses used to transfer data between layers.
"""

from pangram_annotator.dtos.analysis_dto import (
    AnalysisOutcomeDTO,
    AnalysisResultDTO,
    AnnotationCategory,
    AnnotationDTO,
    ClassificationWindowDTO,
)

__all__ = [
    "AnalysisOutcomeDTO",
    "AnalysisResultDTO",
    "AnnotationCategory",
    "AnnotationDTO",
    "ClassificationWindowDTO",
]
