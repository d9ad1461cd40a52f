# tonelens/render.py
from __future__ import annotations

from html import escape
from typing import Iterable

from .schemas import LegendEntry, RenderedSpan


def span_html(span: RenderedSpan) -> str:
    return (
        f'<span title="{escape(span.tooltip())}" '
        f'style="background:{span.color};">{escape(span.text)}</span>'
    )


def spans_html(spans: Iterable[RenderedSpan]) -> str:
    """Highlighted sentences, joined the way the service split them."""
    return '<div class="sentenceResultContainer">' + " ".join(span_html(s) for s in spans) + "</div>"


def _chip(entry: LegendEntry) -> str:
    return (
        '<span class="legendItem" style="margin-right:12px;">'
        f'<span style="background:{entry.color}; display:inline-block; '
        'width:12px; height:12px; border-radius:3px; margin-right:4px;"></span>'
        f"<strong>{escape(entry.tone_id)}</strong></span>"
    )


def legend_html(entries: Iterable[LegendEntry]) -> str:
    return '<div class="legend">' + "".join(_chip(e) for e in entries) + "</div>"
