"""
GameSession - lifecycle and authoritative state of one player's game
--------------------------------------------------------------------
idle -> countdown -> running -> ending -> leaderboard -> (reset) -> idle

- The frame driver calls ``update`` once per display refresh
- Every timer goes through the injected scheduler and is cancelled on reset
- The final score is handed to the scoreboard when lives run out
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .difficulty import DifficultyController
from .entities import (
    Bullet,
    DisplayProfile,
    EnemyProjectile,
    EnemySprite,
    Explosion,
    ExplosionKind,
    Player,
    Rect,
    profile_for_width,
)
from .simulation import InputIntent, advance_explosions, step
from .spawner import Spawner
from .timers import ManualScheduler, TimerHandle

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    RUNNING = "running"
    ENDING = "ending"
    LEADERBOARD = "leaderboard"


class SessionError(Exception):
    """Base class for rejected session operations"""


class InvalidPlayerName(SessionError, ValueError):
    """Raised when starting without a usable name"""


class InvalidTransition(SessionError):
    """Raised when an operation is not allowed in the current state"""


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of everything a renderer needs for one frame"""
    state: SessionState
    width: float
    height: float
    player: Rect
    player_hitbox: Rect
    bullets: Tuple[Bullet, ...]
    sprites: Tuple[EnemySprite, ...]
    projectiles: Tuple[EnemyProjectile, ...]
    explosions: Tuple[Explosion, ...]
    score: int
    lives: int
    player_name: str
    countdown: Optional[int]
    game_over_alpha: float
    fire_ready: bool
    drop_interval: float
    leaderboard: Tuple = ()


class GameSession:
    """One player's game, from name entry to leaderboard"""

    def __init__(
        self,
        width: float = 1280.0,
        height: float = 800.0,
        scheduler=None,
        scoreboard=None,
        rng: Optional[random.Random] = None,
        lives: int = 5,
        initial_sprites: int = 4,
        countdown_from: int = 3,
        countdown_tick: float = 1000.0,  # ms
        fire_cooldown: float = 500.0,  # ms
        player_speed: float = 100.0,  # px/frame
        bullet_speed: float = 10.0,  # px/frame
        bullet_size: Tuple[float, float] = (5.0, 20.0),
        projectile_speed: float = 7.0,  # px/frame
        initial_drop_interval: float = 2000.0,  # ms
        drop_scaling_factor: float = 0.8,
        difficulty_band: int = 5,
        end_delay: float = 500.0,  # ms between final explosion and GAME OVER
        game_over_fade: float = 0.02,  # opacity per frame
        leaderboard_delay: float = 1000.0,  # ms after GAME OVER is fully shown
    ):
        self.width = width
        self.height = height
        self.profile: DisplayProfile = profile_for_width(width)
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.scoreboard = scoreboard
        self.rng = rng or random.Random()

        # Gameplay config
        self.initial_lives = lives
        self.initial_sprites = initial_sprites
        self.countdown_from = countdown_from
        self.countdown_tick = countdown_tick
        self.fire_cooldown = fire_cooldown
        self.player_speed = player_speed
        self.bullet_speed = bullet_speed
        self.bullet_size = bullet_size
        self.projectile_speed = projectile_speed
        self.end_delay = end_delay
        self.game_over_fade = game_over_fade
        self.leaderboard_delay = leaderboard_delay

        self.difficulty = DifficultyController(
            initial_interval=initial_drop_interval,
            scaling_factor=drop_scaling_factor,
            band=difficulty_band,
        )
        self.spawner = Spawner(
            self.scheduler,
            on_drop=self._drop_projectile,
            width=width,
            height=height,
            profile=self.profile,
            rng=self.rng,
        )

        # Named one-shot timers owned by the session (sprite timers live on sprites)
        self._timers: Dict[str, TimerHandle] = {}
        self._init_state()

    def _init_state(self):
        self.state = SessionState.IDLE
        self.player_name = ""
        self.score = 0
        self.lives = self.initial_lives
        self.countdown: Optional[int] = None
        self.fire_ready = True
        self.game_over_alpha = 0.0
        self._ending_phase: Optional[str] = None
        self.leaderboard_entries: List = []

        size = self.profile.player_size
        self.player = Player(
            x=self.width / 2 - size / 2,
            y=self.height - size,
            width=size,
            height=size,
            speed=self.player_speed,
            hitbox_size=self.profile.player_hitbox,
        )
        self.bullets: List[Bullet] = []
        self.projectiles: List[EnemyProjectile] = []
        self.explosions: List[Explosion] = []
        self.difficulty.reset()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self, player_name: str):
        """Validate the name and begin the countdown"""
        if self.state is not SessionState.IDLE:
            raise InvalidTransition(f"cannot start from {self.state.value}")
        name = (player_name or "").strip()
        if not name:
            raise InvalidPlayerName("player name must not be empty")

        self.player_name = name
        self.state = SessionState.COUNTDOWN
        self.countdown = self.countdown_from
        self._schedule("countdown", self.countdown_tick, self._tick_countdown)
        logger.info("Session started for %r, countdown from %d", name, self.countdown_from)

    def _tick_countdown(self):
        self._timers.pop("countdown", None)
        self.countdown -= 1
        if self.countdown < 0:
            self._begin_running()
        else:
            self._schedule("countdown", self.countdown_tick, self._tick_countdown)

    def _begin_running(self):
        self.countdown = None
        self.state = SessionState.RUNNING
        self.spawner.spawn_initial(self.initial_sprites)
        logger.info("Session running with %d sprites", len(self.spawner.sprites))

    def end_game(self):
        """Lives are gone: record the score and start the terminal animation"""
        if self.state is not SessionState.RUNNING:
            raise InvalidTransition(f"cannot end the game from {self.state.value}")
        self.state = SessionState.ENDING
        self._ending_phase = "explosion"

        self.spawner.retire_all()
        self._cancel("cooldown")
        self.bullets = []
        self.projectiles = []
        cx, cy = self.player.center
        self.explosions = [Explosion(x=cx, y=cy, kind=ExplosionKind.RADIAL_FINAL)]

        logger.info("Game over for %r with score %d", self.player_name, self.score)
        if self.scoreboard is not None:
            self.scoreboard.record(self.player_name, self.score)

    def _advance_ending(self):
        if self._ending_phase == "explosion":
            self.explosions = advance_explosions(self.explosions)
            if not self.explosions:
                self._ending_phase = "delay"
                self._schedule("stage", self.end_delay, self._begin_fade)
        elif self._ending_phase == "fade":
            self.game_over_alpha = min(1.0, self.game_over_alpha + self.game_over_fade)
            if self.game_over_alpha >= 1.0:
                self._ending_phase = "hold"
                self._schedule("stage", self.leaderboard_delay, self._show_leaderboard)

    def _begin_fade(self):
        self._timers.pop("stage", None)
        self._ending_phase = "fade"

    def _show_leaderboard(self):
        self._timers.pop("stage", None)
        self._ending_phase = None
        self.state = SessionState.LEADERBOARD
        if self.scoreboard is not None:
            self.leaderboard_entries = list(self.scoreboard.entries())
        logger.info("Showing leaderboard (%d entries)", len(self.leaderboard_entries))

    def reset(self):
        """Play again: cancel every timer and restore the initial state"""
        for name in list(self._timers):
            self._cancel(name)
        self.spawner.retire_all()
        self._init_state()
        logger.info("Session reset")

    # ----------------------------
    # Frame / input
    # ----------------------------

    def update(self, intent: Optional[InputIntent] = None):
        """Frame callback; does nothing outside running and ending"""
        if self.state is SessionState.RUNNING:
            step(self, intent or InputIntent())
        elif self.state is SessionState.ENDING:
            self._advance_ending()

    def fire(self) -> bool:
        """Edge-triggered shot. Dropped silently while on cooldown."""
        if self.state is not SessionState.RUNNING or not self.fire_ready:
            return False

        w, h = self.bullet_size
        self.bullets.append(Bullet(
            x=self.player.x + self.player.width / 2,
            y=self.player.y,
            width=w,
            height=h,
            vy=-self.bullet_speed,
        ))
        self.fire_ready = False
        self._schedule("cooldown", self.fire_cooldown, self._cooldown_done)
        return True

    def _cooldown_done(self):
        self._timers.pop("cooldown", None)
        self.fire_ready = True

    def _drop_projectile(self, sprite: EnemySprite) -> Optional[float]:
        if self.state is not SessionState.RUNNING:
            return None
        self.projectiles.append(EnemyProjectile(
            x=sprite.x + sprite.width / 2,
            y=sprite.y + sprite.height,
            width=self.profile.projectile_width,
            height=self.profile.projectile_height,
            vy=self.projectile_speed,
        ))
        return self.difficulty.next_interval(self.score)

    def resize(self, width: float, height: float):
        """New field size; sizes follow the display profile for that width"""
        self.width = width
        self.height = height
        self.profile = profile_for_width(width)
        self.spawner.resize(width, height, self.profile)

        size = self.profile.player_size
        self.player.width = size
        self.player.height = size
        self.player.hitbox_size = self.profile.player_hitbox
        self.player.y = height - size
        self.player.x = min(max(0.0, self.player.x), max(0.0, width - size))

    # ----------------------------
    # Timers
    # ----------------------------

    def _schedule(self, name: str, delay: float, callback):
        self._cancel(name)
        self._timers[name] = self.scheduler.call_later(delay, callback)

    def _cancel(self, name: str):
        handle = self._timers.pop(name, None)
        if handle is not None:
            handle.cancel()

    # ----------------------------
    # Read-only view
    # ----------------------------

    @property
    def sprites(self) -> List[EnemySprite]:
        return self.spawner.sprites

    @property
    def drop_interval(self) -> float:
        return self.difficulty.base_drop_interval

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            width=self.width,
            height=self.height,
            player=Rect(self.player.x, self.player.y, self.player.width, self.player.height),
            player_hitbox=self.player.hitbox,
            bullets=tuple(copy.copy(b) for b in self.bullets),
            sprites=tuple(dataclasses.replace(s, timer=None) for s in self.spawner.sprites),
            projectiles=tuple(copy.copy(p) for p in self.projectiles),
            explosions=tuple(copy.copy(e) for e in self.explosions),
            score=self.score,
            lives=self.lives,
            player_name=self.player_name,
            countdown=self.countdown,
            game_over_alpha=self.game_over_alpha,
            fire_ready=self.fire_ready,
            drop_interval=self.drop_interval,
            leaderboard=tuple(self.leaderboard_entries),
        )
