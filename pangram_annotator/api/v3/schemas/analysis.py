from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AnalysisRequest(BaseModel):
    text: str = Field(min_length=1)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject text that is empty once whitespace is stripped."""
        if not v.strip():
            raise ValueError("Text must contain non-whitespace characters")
        return v


class Window(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start_index: int = Field(ge=0, strict=True)
    end_index: int = Field(ge=0, strict=True)
    label: str
    ai_assistance_score: float | None = Field(default=None, strict=True)
    confidence: str | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "Window":
        if self.end_index < self.start_index:
            raise ValueError(
                f"end_index {self.end_index} precedes start_index {self.start_index}"
            )
        return self


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    windows: list[Window]
    headline: str
    fraction_ai: float = Field(ge=0.0, le=1.0, strict=True)
    fraction_ai_assisted: float = Field(ge=0.0, le=1.0, strict=True)
    fraction_human: float = Field(ge=0.0, le=1.0, strict=True)

    @model_validator(mode="after")
    def validate_no_overlap(self) -> "AnalysisResponse":
        """Windows may leave gaps but must never overlap."""
        ordered = sorted(self.windows, key=lambda w: (w.start_index, w.end_index))
        for previous, current in zip(ordered, ordered[1:]):
            if current.start_index < previous.end_index:
                raise ValueError(
                    f"window [{current.start_index}, {current.end_index}) overlaps "
                    f"[{previous.start_index}, {previous.end_index})"
                )
        return self
