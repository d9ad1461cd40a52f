from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


# ---- Tone analyzer response ----

class Tone(BaseModel):
    model_config = ConfigDict(frozen=True)

    tone_id: str  # anger, fear, joy, sadness, analytical, confident, tentative
    tone_name: str
    score: float = Field(ge=0, le=1)


class SentenceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    sentence_id: int
    text: str
    tones: List[Tone] = Field(default_factory=list)

    @field_validator("tones", mode="before")
    @classmethod
    def empty_tones_for_null(cls, v):
        return [] if v is None else v


class DocumentTone(BaseModel):
    model_config = ConfigDict(frozen=True)

    tones: List[Tone] = Field(default_factory=list)

    @field_validator("tones", mode="before")
    @classmethod
    def empty_tones_for_null(cls, v):
        return [] if v is None else v


class AnalysisResult(BaseModel):
    # sentences_tone is omitted by the service for single-sentence input
    model_config = ConfigDict(frozen=True)

    document_tone: DocumentTone = Field(default_factory=DocumentTone)
    sentences_tone: List[SentenceResult] = Field(default_factory=list)

    # The service may send null where it means "nothing"
    @field_validator("document_tone", mode="before")
    @classmethod
    def empty_document_tone_for_null(cls, v):
        return {} if v is None else v

    @field_validator("sentences_tone", mode="before")
    @classmethod
    def empty_sentences_for_null(cls, v):
        return [] if v is None else v


# ---- Rendered output ----

class _Rendered(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RenderedSpan(_Rendered):
    text: str
    tone_id: str
    tone_name: str
    score: float
    color: str

    def tooltip(self) -> str:
        return f"{self.tone_name} {self.score * 100:g} %"


class LegendEntry(_Rendered):
    tone_id: str
    color: str


class Projection(_Rendered):
    overall_tone: str = ""
    spans: List[RenderedSpan] = Field(default_factory=list)
    legend: List[LegendEntry] = Field(default_factory=list)


# ---- API ----

class TextRequest(BaseModel):
    text: str


class AnalyzeResponse(Projection):
    analyzed: bool = False


class TextResponse(BaseModel):
    output: Optional[str] = None
    latency_ms: int
