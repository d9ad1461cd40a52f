# tonelens/tones.py
"""
Tone palette.

Every known tone has a fixed base RGB triple; the confidence score becomes the
alpha channel so weak tones render faint and strong tones render solid.
"""

import math
import re
from decimal import Decimal
from typing import Dict, Tuple

RGB = Tuple[int, int, int]

# Order matters: this is the order the legend is drawn in.
LEGEND_TONES: Tuple[str, ...] = (
    "anger",
    "fear",
    "joy",
    "sadness",
    "analytical",
    "confident",
    "tentative",
)

TONE_COLORS: Dict[str, RGB] = {
    "anger": (245, 66, 66),
    "fear": (255, 225, 0),
    "joy": (60, 255, 0),
    "sadness": (77, 77, 77),
    "analytical": (0, 255, 251),
    "confident": (8, 0, 255),
    "tentative": (158, 255, 223),
}

# Unrecognized tones are not highlighted at all, whatever their score.
DEFAULT_COLOR = "rgba(255,255,255,0)"


def format_alpha(score: float) -> str:
    # Print numbers like a JS template literal would: 1 -> "1", 0.5 -> "0.5",
    # 0.00001 -> "0.00001", 1e-7 -> "1e-7"
    value = float(score)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if abs(value) >= 1e21 or abs(value) < 1e-6:
        return re.sub(r"e([+-])0*(\d)", r"e\1\2", repr(value))
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def color_for_tone(tone_id: str, score: float) -> str:
    """Return the rgba() color for a tone with alpha equal to ``score``.

    The score is not clamped. Identifiers outside the palette get
    ``DEFAULT_COLOR``.
    """
    rgb = TONE_COLORS.get(tone_id)
    if rgb is None:
        return DEFAULT_COLOR
    r, g, b = rgb
    return f"rgba({r},{g},{b},{format_alpha(score)})"
