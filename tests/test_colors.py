"""Tests for memorypath.ui.colors – palette and color blending."""

from __future__ import annotations

from memorypath.core.engine import TileState
from memorypath.ui.colors import TILE_COLORS, TILE_ICONS, GameColors, tile_fill


# ===========================================================================
# Palette
# ===========================================================================

class TestPalette:
    def test_every_tile_state_has_color_and_icon(self):
        for state in TileState:
            assert TILE_COLORS[state].startswith("#")
            assert state in TILE_ICONS

    def test_normal_tile_has_no_icon(self):
        assert TILE_ICONS[TileState.NORMAL] == ""

    def test_state_colors(self):
        assert TILE_COLORS[TileState.HIGHLIGHTED] == GameColors.HIGHLIGHT_YELLOW
        assert TILE_COLORS[TileState.CORRECT] == GameColors.ACCENT_GREEN
        assert TILE_COLORS[TileState.WRONG] == GameColors.SOFT_ORANGE


# ===========================================================================
# tile_fill
# ===========================================================================

class TestTileFill:
    def test_plain(self):
        assert tile_fill(TileState.CORRECT) == GameColors.ACCENT_GREEN

    def test_hover_lifts_normal_tile(self):
        # #2c3a57 moved 12% of the way toward #f4f1e8
        assert tile_fill(TileState.NORMAL, hovered=True) == "#444F68"

    def test_hover_ignored_for_marked_tiles(self):
        assert tile_fill(TileState.WRONG, hovered=True) == GameColors.SOFT_ORANGE
