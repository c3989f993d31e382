"""
Arcade front end: real-time clock, keyboard input and drawing of session snapshots
"""

from __future__ import annotations

import logging
import math
import os
from typing import Callable, Dict, Optional, Set

import arcade
from arcade.types import LBWH

from .entities import ExplosionKind, Facing
from .session import GameSession, InvalidPlayerName, SessionState
from .simulation import InputIntent
from .timers import TimerHandle
from .utils import clamp

logger = logging.getLogger(__name__)

HUD_HEIGHT = 80
NAME_MAX_LEN = 20


class ArcadeScheduler:
    """Real-time one-shot timers on arcade's (pyglet's) clock, in milliseconds"""

    def __init__(self):
        self._handles: Set[TimerHandle] = set()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback)

        # A fresh closure per timer so unschedule only removes this one
        def _fire(_delta_time):
            self._handles.discard(handle)
            handle.fire()

        def _unschedule():
            self._handles.discard(handle)
            arcade.unschedule(_fire)

        handle._on_cancel = _unschedule
        self._handles.add(handle)
        arcade.schedule_once(_fire, max(0.0, delay_ms) / 1000.0)
        return handle

    def pending(self) -> int:
        return len(self._handles)

    def cancel_all(self):
        for handle in list(self._handles):
            handle.cancel()


class ShooterWindow(arcade.Window):
    """Arcade window that draws a GameSession and feeds it keyboard input"""

    def __init__(
        self,
        session: GameSession,
        title: str = "$PARM",
        interactive: bool = True,
        assets_dir: Optional[str] = None,
        font_name: str = "Matemasie",
        resizable: bool = True,
        music_volume: float = 0.6,
    ):
        self.session = session
        super().__init__(int(session.width), int(session.height), title, resizable=resizable)
        self.interactive = interactive
        self.assets_dir = assets_dir

        self.keys: Dict[int, bool] = {}
        self.name_buffer = ""
        self.message = ""
        self.muted = False

        # Colors
        self.BG = (250, 230, 160)
        self.BULLET_C = (219, 124, 0)
        self.PROJECTILE_C = (44, 23, 3)
        self.PLAYER_C = (240, 200, 60)
        self.SPRITE_C = (120, 120, 130)
        self.EXPLOSION_C = (255, 69, 0)
        self.LINE_C = (189, 57, 0)
        self.GAME_OVER_C = (255, 145, 0)
        self.HUD_C = (255, 255, 0)
        self.background_color = self.BG

        self.font_name = self._load_font(font_name)
        self.textures = {
            "player": self._load_texture("shooter_img.png"),
            Facing.RIGHT: self._load_texture("mouse_right.png"),
            Facing.LEFT: self._load_texture("mouse_left.png"),
        }
        self.sounds = {
            "sprite_hit": self._load_sound("mouse_hit.wav"),
            "player_hit": self._load_sound("shooter_hit.ogg"),
            "music": self._load_sound("game2.wav"),
        }
        self.music_volume = music_volume
        self.music_player = None

    # ----------------------------
    # Assets (all optional)
    # ----------------------------

    def _asset(self, name: str) -> Optional[str]:
        if self.assets_dir is None:
            return None
        return os.path.join(self.assets_dir, name)

    def _load_font(self, font_name: str):
        path = self._asset(f"{font_name}.ttf")
        if path is None:
            return "arial"
        try:
            arcade.load_font(path)
            return font_name
        except Exception as e:
            logger.warning("Could not load font %s: %s; using fallback", path, e)
            return "arial"

    def _load_texture(self, name: str):
        path = self._asset(name)
        if path is None:
            return None
        try:
            return arcade.load_texture(path)
        except Exception as e:
            logger.warning("Could not load texture %s: %s; drawing shapes instead", path, e)
            return None

    def _load_sound(self, name: str):
        path = self._asset(name)
        if path is None:
            return None
        try:
            return arcade.load_sound(path)
        except Exception as e:
            logger.warning("Could not load sound %s: %s", path, e)
            return None

    def _play(self, key: str):
        sound = self.sounds.get(key)
        if sound is not None and not self.muted:
            arcade.play_sound(sound)

    def _start_music(self):
        """Loop the background track once per game; starts paused when muted"""
        sound = self.sounds.get("music")
        if sound is None or self.music_player is not None:
            return
        self.music_player = arcade.play_sound(sound, volume=self.music_volume, loop=True)
        if self.muted and self.music_player is not None:
            self.music_player.pause()

    def _stop_music(self):
        if self.music_player is not None:
            arcade.stop_sound(self.music_player)
            self.music_player = None

    def toggle_mute(self):
        self.muted = not self.muted
        if self.music_player is not None:
            if self.muted:
                self.music_player.pause()
            else:
                self.music_player.play()

    def on_close(self):
        self._stop_music()
        super().on_close()

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        s = self.session
        score, lives = s.score, s.lives
        s.update(InputIntent(
            move_left=self.keys.get(arcade.key.LEFT, False),
            move_right=self.keys.get(arcade.key.RIGHT, False),
        ))
        if s.score > score:
            self._play("sprite_hit")
        if s.lives < lives:
            self._play("player_hit")
        if s.state is SessionState.RUNNING:
            self._start_music()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        # pyglet can fire this while the window is still being constructed
        if getattr(self, "session", None) is not None:
            self.session.resize(width, height)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        self.keys[symbol] = True
        s = self.session

        if symbol == arcade.key.F1:
            self.toggle_mute()
        elif s.state is SessionState.IDLE:
            if symbol in (arcade.key.ENTER, arcade.key.RETURN):
                try:
                    s.start(self.name_buffer)
                    self.message = ""
                except InvalidPlayerName:
                    self.message = "Please enter your name to start the game!"
            elif symbol == arcade.key.BACKSPACE:
                self.name_buffer = self.name_buffer[:-1]
        elif s.state is SessionState.RUNNING:
            if symbol == arcade.key.SPACE:
                s.fire()
        elif s.state is SessionState.LEADERBOARD:
            if symbol in (arcade.key.ENTER, arcade.key.RETURN, arcade.key.R):
                self._stop_music()
                s.reset()
                self.keys.clear()
            elif symbol in (arcade.key.Q, arcade.key.ESCAPE):
                self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        self.keys[symbol] = False

    def on_text(self, text: str):
        if not self.interactive or self.session.state is not SessionState.IDLE:
            return
        if text.isprintable() and len(self.name_buffer) < NAME_MAX_LEN:
            self.name_buffer += text

    # ----------------------------
    # Drawing
    # ----------------------------

    def _fy(self, y: float) -> float:
        """Session y grows downward, arcade y grows upward"""
        return self.height - y

    def _rect(self, r, color, texture=None):
        left, bottom = r.x, self._fy(r.y + r.height)
        if texture is not None:
            arcade.draw_texture_rect(texture, LBWH(left, bottom, r.width, r.height))
        else:
            arcade.draw_lrbt_rectangle_filled(left, left + r.width, bottom, bottom + r.height, color)

    def _text(self, text, x, y, color, size, **kwargs):
        arcade.draw_text(text, x, y, color, size, font_name=self.font_name, **kwargs)

    def on_draw(self):
        self.clear()
        snap = self.session.snapshot()

        if snap.state is SessionState.IDLE:
            self._draw_start_screen()
        elif snap.state is SessionState.COUNTDOWN:
            self._draw_countdown(snap)
        elif snap.state is SessionState.RUNNING:
            self._draw_field(snap)
            self._draw_hud(snap)
        elif snap.state is SessionState.ENDING:
            for e in snap.explosions:
                self._draw_explosion(e)
            if snap.game_over_alpha > 0:
                a = int(255 * clamp(snap.game_over_alpha, 0, 1))
                self._text("GAME OVER", self.width / 2, self.height / 2, (*self.GAME_OVER_C, a),
                           self._big_font(), anchor_x="center", anchor_y="center")
        elif snap.state is SessionState.LEADERBOARD:
            self._draw_leaderboard(snap)

    def _big_font(self) -> int:
        return 80 if self.session.profile.name == "mobile" else 150

    def _draw_start_screen(self):
        cx, cy = self.width / 2, self.height / 2
        self._text("$PARM", cx, cy + 120, (0, 0, 0), 60, anchor_x="center")
        self._text("Enter your name and press ENTER", cx, cy + 40, (0, 0, 0), 24, anchor_x="center")
        self._text(self.name_buffer + "_", cx, cy - 20, (0, 0, 0), 32, anchor_x="center")
        if self.message:
            self._text(self.message, cx, cy - 80, (180, 0, 0), 18, anchor_x="center")
        self._text("F1 to mute" if not self.muted else "F1 to unmute", cx, 30, (0, 0, 0), 14,
                   anchor_x="center")

    def _draw_countdown(self, snap):
        label = str(snap.countdown) if snap.countdown and snap.countdown > 0 else "GO!"
        self._text(label, self.width / 2, self.height / 2, (0, 0, 0), self._big_font(),
                   anchor_x="center", anchor_y="center")
        if snap.width > 768:
            self._text("Left, Right ARROW to move and SPACE to shoot", self.width / 2, 50,
                       (0, 0, 0), 30, anchor_x="center")

    def _draw_field(self, snap):
        self._rect(snap.player, self.PLAYER_C, self.textures["player"])
        for b in snap.bullets:
            self._rect(b, self.BULLET_C)
        for p in snap.projectiles:
            self._rect(p, self.PROJECTILE_C)
        for sprite in snap.sprites:
            self._rect(sprite, self.SPRITE_C, self.textures[sprite.facing])
        for e in snap.explosions:
            self._draw_explosion(e)

    def _draw_explosion(self, e):
        a = int(255 * clamp(e.alpha, 0, 1))
        kind = e.kind
        if kind is ExplosionKind.RADIAL or kind is ExplosionKind.RADIAL_FINAL:
            arcade.draw_circle_filled(e.x, self._fy(e.y), e.extent, (*self.EXPLOSION_C, a))
        elif kind is ExplosionKind.RADIAL_LINE:
            n = e.profile.lines
            step = (math.pi * 2) / n
            for i in range(n):
                x_end = e.x + math.cos(i * step) * e.extent
                y_end = e.y + math.sin(i * step) * e.extent
                arcade.draw_line(e.x, self._fy(e.y), x_end, self._fy(y_end), (*self.LINE_C, a), 2)
        else:
            raise ValueError(f"Unknown explosion kind: {kind}")

    def _draw_hud(self, snap):
        arcade.draw_lrbt_rectangle_filled(0, self.width, self.height - HUD_HEIGHT, self.height, (0, 0, 0))
        self._text(f"Score: {snap.score}", 100, self.height - 50, self.HUD_C, 40)
        self._text(f"Lives: {snap.lives}", 400, self.height - 50, self.HUD_C, 40)

    def _draw_leaderboard(self, snap):
        w, h = self.width, self.height
        arcade.draw_lrbt_rectangle_filled(w / 4, w * 3 / 4, 50, h - 50, (0, 0, 0, 178))
        self._text("$PARM Leaderboard", w / 2, h - 100, (255, 255, 255), 36, anchor_x="center")
        for i, entry in enumerate(snap.leaderboard):
            self._text(f"{i + 1}. {entry.name}: {entry.score}", w / 2, h - 150 - i * 30,
                       (255, 255, 255), 24, anchor_x="center")
        self._text("ENTER to play again, Q to quit", w / 2, 80, (255, 255, 255), 18, anchor_x="center")
