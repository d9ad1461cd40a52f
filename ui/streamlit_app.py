# ui/streamlit_app.py
import os
import requests
import streamlit as st

from tonelens.models import response_output
from tonelens.projector import legend
from tonelens.render import legend_html, spans_html
from tonelens.schemas import AnalyzeResponse

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

st.set_page_config(page_title="Tonelens", page_icon="🎨", layout="wide")

# --- Header / health ---
st.title("🎨 Tonelens")
with st.sidebar:
    st.markdown("**Backend:** " + BACKEND_URL)
    try:
        r = requests.get(f"{BACKEND_URL}/healthz", timeout=5)
        if r.ok:
            st.success("API: healthy")
        else:
            st.warning(f"API: {r.status_code}")
    except requests.RequestException as e:
        st.error(f"API not reachable: {e}")

st.session_state.setdefault("text", "")
st.session_state.setdefault("analysis", None)
st.session_state.setdefault("analyzed_text", None)


def _replace_text(endpoint: str) -> None:
    # Only a successful response replaces the text
    try:
        resp = requests.post(
            f"{BACKEND_URL}{endpoint}",
            json={"text": st.session_state["text"]},
            timeout=90,
        )
    except requests.RequestException as e:
        st.session_state["flash"] = f"Request failed: {e}"
        return
    output = response_output(resp)
    if resp.ok and output:
        st.session_state["text"] = output
    else:
        st.session_state["flash"] = f"Error {resp.status_code}: {resp.text}"


def _analyse(text: str):
    resp = requests.post(f"{BACKEND_URL}/v1/tone", json={"text": text}, timeout=60)
    if not resp.ok:
        try:
            msg = resp.json().get("detail", resp.text)
        except ValueError:
            msg = resp.text
        st.warning(f"Tone analysis unavailable ({resp.status_code}): {msg}")
        return None
    return AnalyzeResponse.model_validate(resp.json())


left, right = st.columns(2)

with left:
    col_a, col_b = st.columns(2)
    with col_a:
        st.button("Summarize", on_click=_replace_text, args=("/v1/summarize",))
    with col_b:
        st.button("Generate", on_click=_replace_text, args=("/v1/generate",))
    if "flash" in st.session_state:
        st.warning(st.session_state.pop("flash"))
    st.text_area("Text", key="text", height=400, placeholder="Type or paste some text...")

text = st.session_state["text"]

# Re-analyse whenever the text changed; the latest response wins
if text != st.session_state["analyzed_text"]:
    st.session_state["analyzed_text"] = text
    try:
        with st.spinner("Analysing tone..."):
            analysis = _analyse(text)
    except requests.RequestException as e:
        st.warning(f"Request failed: {e}")
        analysis = None
    if analysis is not None and analysis.analyzed:
        st.session_state["analysis"] = analysis

with right:
    analysis = st.session_state["analysis"]
    st.subheader(f"Overall tone: {analysis.overall_tone if analysis else ''}")
    st.markdown(legend_html(analysis.legend if analysis else legend()), unsafe_allow_html=True)
    if analysis:
        st.markdown(spans_html(analysis.spans), unsafe_allow_html=True)

st.markdown("---")
st.caption("Tone analysis by IBM Watson Tone Analyzer. Summarize / Generate use DeepAI, "
           "with an optional OpenAI-compatible fallback.")
