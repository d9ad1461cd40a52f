# tonelens/projector.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from .schemas import AnalysisResult, LegendEntry, Projection, RenderedSpan, SentenceResult
from .tones import LEGEND_TONES, color_for_tone

ResultLike = Union[AnalysisResult, Mapping[str, Any], None]

UNKNOWN_TONE_ID = "unknown"
UNKNOWN_TONE_NAME = "Unknown"


def _coerce(result: ResultLike) -> Optional[AnalysisResult]:
    if result is None or isinstance(result, AnalysisResult):
        return result
    return AnalysisResult.model_validate(result)


def overall_tone(result: ResultLike) -> str:
    """Name of the dominant document tone, or "" when there is none."""
    res = _coerce(result)
    if res is None or not res.document_tone.tones:
        return ""
    return res.document_tone.tones[0].tone_name


def render_sentence(sentence: SentenceResult) -> RenderedSpan:
    # The service ranks tones; the first one is taken as dominant as-is.
    if sentence.tones:
        top = sentence.tones[0]
        tone_id, tone_name, score = top.tone_id, top.tone_name, top.score
    else:
        tone_id, tone_name, score = UNKNOWN_TONE_ID, UNKNOWN_TONE_NAME, 1
    return RenderedSpan(
        text=sentence.text,
        tone_id=tone_id,
        tone_name=tone_name,
        score=score,
        color=color_for_tone(tone_id, score),
    )


def project_sentences(result: ResultLike) -> List[RenderedSpan]:
    res = _coerce(result)
    if res is None:
        return []
    return [render_sentence(s) for s in res.sentences_tone]


def legend() -> List[LegendEntry]:
    return [LegendEntry(tone_id=t, color=color_for_tone(t, 1)) for t in LEGEND_TONES]


def project(result: ResultLike) -> Projection:
    """Everything the page needs to draw one analysis result."""
    res = _coerce(result)
    return Projection(
        overall_tone=overall_tone(res),
        spans=project_sentences(res),
        legend=legend(),
    )
