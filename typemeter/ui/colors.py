"""Theme colors and color utilities for the UI."""

from typemeter.core.session import CharState


class Palette:
    """Dark theme palette."""

    BG = "#111827"
    CARD_BG = "#1f2937"
    CARD_BORDER = "#374151"

    PRIMARY = "#9333ea"
    PRIMARY_LIGHT = "#c084fc"

    EASY = "#4ade80"
    MEDIUM = "#facc15"
    HARD = "#f87171"

    TEXT_PRIMARY = "#f9fafb"
    TEXT_SECONDARY = "#9ca3af"
    TEXT_MUTED = "#6b7280"

    SUCCESS = "#22c55e"
    ERROR = "#ef4444"


STATE_COLORS = {
    CharState.UNTYPED: Palette.TEXT_MUTED,
    CharState.CURRENT: Palette.TEXT_PRIMARY,
    CharState.CORRECT: Palette.SUCCESS,
    CharState.INCORRECT: Palette.ERROR,
}

CATEGORY_COLORS = {
    "easy": Palette.EASY,
    "medium": Palette.MEDIUM,
    "hard": Palette.HARD,
}


def color_for_state(state: CharState) -> str:
    return STATE_COLORS.get(state, Palette.TEXT_MUTED)


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
