"""Theme colors and color utilities for the UI."""

from memorypath.core.engine import TileState


class GameColors:
    """Dark night-sky palette for the memory grid screen."""

    PRIMARY_BACKGROUND = "#1b2438"
    SECONDARY_BACKGROUND = "#2c3a57"
    HIGHLIGHT_YELLOW = "#ffd166"
    ACCENT_GREEN = "#6fd08c"
    SOFT_ORANGE = "#ff9f6e"

    TEXT_PRIMARY = "#f4f1e8"
    TEXT_SECONDARY = "#aab4c8"
    TILE_BORDER = "rgba(255, 255, 255, 0.12)"


TILE_COLORS = {
    TileState.NORMAL: GameColors.SECONDARY_BACKGROUND,
    TileState.HIGHLIGHTED: GameColors.HIGHLIGHT_YELLOW,
    TileState.CORRECT: GameColors.ACCENT_GREEN,
    TileState.WRONG: GameColors.SOFT_ORANGE,
}

TILE_ICONS = {
    TileState.NORMAL: "",
    TileState.HIGHLIGHTED: "◆",
    TileState.CORRECT: "✓",
    TileState.WRONG: "✗",
}


HOVER_LIFT = 0.12


def tile_fill(state: TileState, hovered: bool = False) -> str:
    """Fill color for a tile as #RRGGBB.

    A hovered Normal tile is mixed ``HOVER_LIFT`` of the way toward the
    primary text color; marked tiles ignore hover.
    """
    base = TILE_COLORS[state]
    if not hovered or state is not TileState.NORMAL:
        return base
    lo = bytes.fromhex(base[1:])
    hi = bytes.fromhex(GameColors.TEXT_PRIMARY[1:])
    mixed = bytes(int(a + (b - a) * HOVER_LIFT) for a, b in zip(lo, hi))
    return "#" + mixed.hex().upper()
