from tonelens.projector import legend, overall_tone, project, project_sentences
from tonelens.schemas import AnalysisResult, RenderedSpan


def _result(document_tones=None, sentences=None):
    return {
        "document_tone": {"tones": document_tones or []},
        "sentences_tone": sentences or [],
    }


SENTENCES = [
    {
        "sentence_id": 0,
        "text": "I am furious.",
        "tones": [
            {"tone_id": "anger", "tone_name": "Anger", "score": 0.5},
            {"tone_id": "tentative", "tone_name": "Tentative", "score": 0.9},
        ],
    },
    {"sentence_id": 1, "text": "The sky is blue.", "tones": []},
    {
        "sentence_id": 2,
        "text": "What a lovely day!",
        "tones": [{"tone_id": "joy", "tone_name": "Joy", "score": 0.8}],
    },
]


def test_overall_tone_empty_when_no_document_tones():
    assert overall_tone(_result()) == ""


def test_overall_tone_uses_first_document_tone():
    res = _result(document_tones=[
        {"tone_id": "joy", "tone_name": "Joy", "score": 0.8},
        {"tone_id": "fear", "tone_name": "Fear", "score": 0.9},
    ])
    assert overall_tone(res) == "Joy"


def test_absent_result_renders_nothing():
    assert overall_tone(None) == ""
    assert project_sentences(None) == []
    proj = project(None)
    assert proj.overall_tone == ""
    assert proj.spans == []
    assert len(proj.legend) == 7


def test_sentences_tone_may_be_missing():
    res = {"document_tone": {"tones": [{"tone_id": "joy", "tone_name": "Joy", "score": 0.6}]}}
    assert project_sentences(res) == []
    assert overall_tone(res) == "Joy"


def test_sentence_without_tones_is_unknown():
    span = project_sentences(_result(sentences=SENTENCES))[1]
    assert span.tone_id == "unknown"
    assert span.tone_name == "Unknown"
    assert span.score == 1
    assert span.color == "rgba(255,255,255,0)"


def test_first_sentence_tone_is_dominant_even_if_not_highest():
    span = project_sentences(_result(sentences=SENTENCES))[0]
    assert span.tone_id == "anger"
    assert span.score == 0.5
    assert span.color == "rgba(245,66,66,0.5)"


def test_projection_preserves_order_and_count():
    spans = project_sentences(_result(sentences=SENTENCES))
    assert len(spans) == len(SENTENCES)
    assert [s.text for s in spans] == [s["text"] for s in SENTENCES]


def test_accepts_model_and_mapping_alike():
    raw = _result(sentences=SENTENCES)
    assert project(raw) == project(AnalysisResult.model_validate(raw))


def test_legend_is_fixed_and_opaque():
    entries = legend()
    assert [e.tone_id for e in entries] == [
        "anger", "fear", "joy", "sadness", "analytical", "confident", "tentative"
    ]
    assert all(e.color.endswith(",1)") for e in entries)
    assert entries[0].color == "rgba(245,66,66,1)"


def test_span_serializes_with_camel_case_keys():
    span = project_sentences(_result(sentences=SENTENCES))[2]
    assert span.model_dump(by_alias=True) == {
        "text": "What a lovely day!",
        "toneId": "joy",
        "toneName": "Joy",
        "score": 0.8,
        "color": "rgba(60,255,0,0.8)",
    }


def test_tooltip():
    span = RenderedSpan(text="x", tone_id="joy", tone_name="Joy", score=0.75, color="c")
    assert span.tooltip() == "Joy 75 %"


def test_null_containers_render_nothing():
    proj = project({"document_tone": None, "sentences_tone": None})
    assert proj.overall_tone == ""
    assert proj.spans == []
    assert len(proj.legend) == 7


def test_null_document_tones_give_empty_overall_tone():
    res = {"document_tone": {"tones": None}, "sentences_tone": []}
    assert overall_tone(res) == ""
    assert project_sentences(res) == []


def test_null_sentence_tones_are_unknown():
    res = _result(sentences=[{"sentence_id": 0, "text": "Hm.", "tones": None}])
    span = project_sentences(res)[0]
    assert span.tone_id == "unknown"
    assert span.score == 1
    assert span.color == "rgba(255,255,255,0)"
