"""
Game-select menu (also where construction errors are reported).
"""
from __future__ import annotations

from typing import Optional

from config import COLOR_ERROR, COLOR_MENU_ACCENT, COLOR_MENU_BG, COLOR_MENU_TEXT, GAME_IDS
from game.sim.contracts import Action

GAME_TITLES = {
    "snake": "Snake",
    "breakout": "Breakout",
    "flappy": "Flappy Bird",
}


class GameSelectMenu:
    """Vertical list of games; UP/DOWN move, PRIMARY picks."""

    def __init__(self, game_ids=GAME_IDS):
        self.game_ids = tuple(game_ids)
        self.selected = 0
        self.error: Optional[str] = None

    @property
    def selected_game(self) -> str:
        return self.game_ids[self.selected]

    def show_error(self, message: str):
        self.error = message

    def handle_action(self, action: Action) -> Optional[str]:
        """Returns the chosen game id on PRIMARY, else None."""
        if action == Action.UP:
            self.selected = (self.selected - 1) % len(self.game_ids)
        elif action == Action.DOWN:
            self.selected = (self.selected + 1) % len(self.game_ids)
        elif action in (Action.PRIMARY, Action.FLAP):
            self.error = None
            return self.selected_game
        return None

    def draw(self, surface):
        surface.clear(COLOR_MENU_BG)
        cx = surface.width / 2
        surface.draw_text("Arcade Variations", cx, 80, COLOR_MENU_ACCENT, size=40, align="center")
        surface.draw_text("Every run is a little different", cx, 116, COLOR_MENU_TEXT, size=18, align="center")

        y = 200
        for i, game_id in enumerate(self.game_ids):
            label = f"{i + 1}. {GAME_TITLES.get(game_id, game_id)}"
            if i == self.selected:
                surface.fill_rect(cx - 120, y - 18, 240, 36, "#ffffff26")
                surface.draw_text(label, cx, y, COLOR_MENU_ACCENT, size=28, align="center")
            else:
                surface.draw_text(label, cx, y, COLOR_MENU_TEXT, size=28, align="center")
            y += 56

        surface.draw_text("Enter / Space to play, 1-3 to jump straight in", cx, y + 20, COLOR_MENU_TEXT,
                          size=16, align="center")
        if self.error:
            surface.draw_text(self.error, cx, surface.height - 40, COLOR_ERROR, size=18, align="center")
