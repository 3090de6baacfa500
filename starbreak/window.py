"""
Arcade host for Starbreak: keyboard input, rendering, HUD, high score

Run:
    python -m starbreak
"""

from __future__ import annotations

import argparse
import logging
import math
from typing import Optional

import arcade

from .config import Color
from .entities import PowerUpType
from .game import Game, GameLoop
from .highscore import HighScoreStore
from .movement import HeldInputs, InputState, Intent
from .state import GameState
from .utils import rotate
from .world import EntityView, Snapshot

logger = logging.getLogger(__name__)

KEY_INTENTS = {
    arcade.key.LEFT: Intent.LEFT,
    arcade.key.A: Intent.LEFT,
    arcade.key.RIGHT: Intent.RIGHT,
    arcade.key.D: Intent.RIGHT,
    arcade.key.SPACE: Intent.FIRE,
}
MOUSE_INTENTS = {
    ("mouse", arcade.MOUSE_BUTTON_LEFT): Intent.FIRE,
}
PAUSE_KEYS = (arcade.key.P, arcade.key.ESCAPE)
START_KEYS = (arcade.key.ENTER, arcade.key.RETURN)
ABORT_KEYS = (arcade.key.Q, arcade.key.BACKSPACE)

BG = (10, 10, 20)
HUD_C = (230, 230, 230)
DIM_C = (115, 115, 115)
RED = (239, 68, 68)
AMBER = (250, 204, 21)

# Ship outline as fractions of (width, height), nose first, y pointing down
SHIP_OUTLINE = (
    (0.0, -0.5), (0.2, -0.1), (0.5, 0.2), (0.2, 0.2), (0.15, 0.5),
    (0.0, 0.4), (-0.15, 0.5), (-0.2, 0.2), (-0.5, 0.2), (-0.2, -0.1),
)


def with_alpha(color: Color, alpha: float):
    return (color[0], color[1], color[2], int(255 * max(0.0, min(1.0, alpha))))


class StarbreakWindow(arcade.Window):
    """
    Projects each frame's snapshot onto the screen.

    In interactive mode the window also owns the GameLoop and acts as the
    input collaborator. With ``interactive=False`` something else (the
    Gymnasium env) steps the game and only asks the window to draw.
    """

    def __init__(self, game: Game, interactive: bool = True,
                 store: Optional[HighScoreStore] = None, title: str = "Starbreak"):
        cfg = game.world.config
        super().__init__(cfg.width, cfg.height, title)
        self.background_color = BG

        self.game = game
        self.store = store
        self.high_score = store.load() if store is not None else 0

        self.held = HeldInputs({**KEY_INTENTS, **MOUSE_INTENTS})

        self.loop: Optional[GameLoop] = None
        if interactive:
            self.loop = GameLoop(game, self.poll_input, arcade.schedule, arcade.unschedule,
                                 on_frame=self._after_frame)
            self.loop.start()

    # ----------------------------
    # Input collaborator
    # ----------------------------

    def poll_input(self) -> InputState:
        return self.held.poll()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in PAUSE_KEYS:
            self.held.request_pause()
        elif symbol in START_KEYS:
            if not self.game.start():
                self.game.restart()
        elif symbol in ABORT_KEYS:
            self.game.abort()
        else:
            self.held.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.held.release(symbol)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self.held.press(("mouse", button))

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.held.release(("mouse", button))

    def _after_frame(self, game: Game):
        if game.score <= self.high_score:
            return
        self.high_score = game.score
        if self.store is None:
            return
        try:
            self.store.submit(game.score)
        except OSError as e:
            logger.warning("Could not save high score: %s", e)

    def on_close(self):
        if self.loop is not None:
            self.loop.cancel()
        super().on_close()

    # ----------------------------
    # Render collaborator
    # ----------------------------

    def on_draw(self):
        self.clear()
        snap = self.game.snapshot()
        h = self.height

        for s in snap.stars:
            arcade.draw_circle_filled(s.x, h - s.y, s.size, with_alpha((255, 255, 255), s.brightness))

        if snap.state is GameState.TITLE:
            self._draw_title()
            return

        for b in snap.bullets:
            arcade.draw_lrbt_rectangle_filled(
                b.x - b.width / 2, b.x + b.width / 2, h - b.y - b.height, h - b.y, b.color
            )
        for p in snap.powerups:
            self._draw_powerup(p)
        if not snap.player.flash:
            self._draw_player(snap.player, snap.now)
        for a in snap.asteroids:
            self._draw_asteroid(a)
        for p in snap.particles:
            arcade.draw_lrbt_rectangle_filled(
                p.x, p.x + p.width, h - p.y - p.height, h - p.y, with_alpha(p.color, p.alpha)
            )
        for t in snap.texts:
            arcade.draw_text(t.text, t.x, h - t.y, with_alpha(t.color, t.alpha), t.size,
                             anchor_x="center", bold=True)

        self._draw_hud(snap)
        if snap.state is GameState.PAUSED:
            self._draw_paused()
        elif snap.state is GameState.GAME_OVER:
            self._draw_game_over(snap)

    def _draw_player(self, player: EntityView, now: float):
        h = self.height
        angle = math.radians(player.rotation)
        points = []
        for fx, fy in SHIP_OUTLINE:
            rx, ry = rotate(fx * player.width, fy * player.height, angle)
            points.append((player.x + rx, h - (player.y + ry)))
        arcade.draw_polygon_filled(points, player.color)

        remaining = player.double_shot_expires_at - now
        if remaining > 0:
            bar_w = 40
            duration = self.game.world.config.double_shot_duration
            fill = bar_w * min(1.0, remaining / duration)
            x0, y0 = player.x - bar_w / 2, h - player.y - 44
            arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + 4, (51, 51, 51))
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + 4, AMBER)

    def _draw_asteroid(self, a: EntityView):
        h = self.height
        points = []
        for v in a.shape:
            rx, ry = rotate(v.x, v.y, a.rotation)
            points.append((a.x + rx, h - (a.y + ry)))
        if len(points) >= 3:
            arcade.draw_polygon_filled(points, a.color)
        for c in a.craters:
            rx, ry = rotate(c.x, c.y, a.rotation)
            arcade.draw_circle_filled(a.x + rx, h - (a.y + ry), c.r, (0, 0, 0, 38))

    def _draw_powerup(self, p: EntityView):
        x, y = p.x, self.height - p.y
        r = p.width / 2 * (1 + math.sin(p.pulse) * 0.1)
        if p.type is PowerUpType.EXTRA_LIFE:
            arcade.draw_circle_filled(x - r / 2, y + r / 4, r / 2, p.color)
            arcade.draw_circle_filled(x + r / 2, y + r / 4, r / 2, p.color)
            arcade.draw_triangle_filled(x - r, y + r / 8, x + r, y + r / 8, x, y - r, p.color)
        else:
            arcade.draw_circle_filled(x, y, r, p.color)
            arcade.draw_lrbt_rectangle_filled(x - 4, x - 1, y - 6, y + 6, (255, 255, 255))
            arcade.draw_lrbt_rectangle_filled(x + 1, x + 4, y - 6, y + 6, (255, 255, 255))

    # ----------------------------
    # HUD / overlays
    # ----------------------------

    def _draw_hud(self, snap: Snapshot):
        top = self.height - 30
        arcade.draw_text(f"{snap.score:06d}", 24, top, HUD_C, 18)
        arcade.draw_text(f"HIGH SCORE: {self.high_score}", 24, top - 18, DIM_C, 9)
        max_lives = self.game.world.config.initial_lives
        for i in range(max_lives):
            cx = self.width - 30 - (max_lives - 1 - i) * 26
            if i < snap.lives:
                arcade.draw_circle_filled(cx, top + 8, 9, RED)
            else:
                arcade.draw_circle_outline(cx, top + 8, 9, (255, 255, 255, 50), 2)

    def _center_text(self, text: str, dy: float, color, size: int, bold: bool = False):
        arcade.draw_text(text, self.width / 2, self.height / 2 + dy, color, size,
                         anchor_x="center", anchor_y="center", bold=bold)

    def _draw_title(self):
        self._center_text("STARBREAK", 90, HUD_C, 48, bold=True)
        self._center_text("Beyond the Event Horizon", 40, DIM_C, 14)
        self._center_text("PRESS ENTER TO ENGAGE SYSTEMS", -30, (34, 211, 238), 14)
        if self.high_score > 0:
            self._center_text(f"HIGH SCORE: {self.high_score}", -70, DIM_C, 10)
        self._center_text("A / D / ARROWS TO MOVE    SPACE TO SHOOT    P TO PAUSE",
                          -self.height / 2 + 40, DIM_C, 10)

    def _draw_paused(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 204))
        self._center_text("SUSPENDED", 50, HUD_C, 30, bold=True)
        self._center_text("P: RESUME MISSION     Q: ABORT", -20, (34, 211, 238), 12)

    def _draw_game_over(self, snap: Snapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 230))
        self._center_text("SIGNAL LOST", 110, RED, 36, bold=True)
        self._center_text("Lost to the deep dark.", 70, DIM_C, 12)
        self._center_text("FINAL SCORE", 20, DIM_C, 10)
        self._center_text(str(snap.score), -20, HUD_C, 40, bold=True)
        if snap.score > 0 and snap.score >= self.high_score:
            self._center_text("NEW RECORD", -60, AMBER, 12)
        self._center_text("ENTER: REINITIATE     Q: RETURN TO MENU", -110, (34, 211, 238), 12)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Starbreak")
    parser.add_argument(
        "--highscore-path",
        type=str,
        default=None,
        help="JSON file holding the high score (default: ~/.starbreak/highscore.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    StarbreakWindow(Game(), store=HighScoreStore(args.highscore_path))
    arcade.run()


if __name__ == "__main__":
    main()
