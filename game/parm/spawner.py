"""
Enemy sprite population: spawning, drop-timer scheduling and retirement
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from .entities import DESKTOP, DisplayProfile, EnemySprite, Facing
from .utils import clamp

logger = logging.getLogger(__name__)


class Spawner:
    """Owns the live sprites and the one pending drop timer each of them has.

    ``on_drop`` is called when a live sprite's timer fires. It emits the
    projectile and returns the delay until the next drop, or None when the
    sprite should stop firing (e.g. the game is no longer running).
    """

    def __init__(
        self,
        scheduler,
        on_drop: Callable[[EnemySprite], Optional[float]],
        width: float = 1280.0,
        height: float = 800.0,
        profile: DisplayProfile = DESKTOP,
        rng: Optional[random.Random] = None,
        min_y: float = 100.0,
        speed_range: Tuple[float, float] = (3.0, 9.5),
        first_drop_max: float = 2000.0,  # ms
        score_value: int = 1,
    ):
        self.scheduler = scheduler
        self.on_drop = on_drop
        self.width = width
        self.height = height
        self.profile = profile
        self.rng = rng or random.Random()
        self.min_y = min_y
        self.speed_range = speed_range
        self.first_drop_max = first_drop_max
        self.score_value = score_value

        self.sprites: List[EnemySprite] = []

    def resize(self, width: float, height: float, profile: DisplayProfile):
        """Adopt the new field and pull existing sprites back inside it"""
        self.width = width
        self.height = height
        self.profile = profile

        size = profile.sprite_size
        max_y = max(self.min_y, height / 2 - 75)
        for sprite in self.sprites:
            sprite.width = sprite.height = size
            sprite.x = clamp(sprite.x, 0.0, max(0.0, width - size))
            sprite.y = clamp(sprite.y, self.min_y, max_y)
            # Heading into the edge it now touches would flip it every frame
            if (sprite.x + size >= width and sprite.direction > 0) or (sprite.x <= 0 and sprite.direction < 0):
                sprite.flip()

    # ----------------------------
    # Population
    # ----------------------------

    def spawn_initial(self, n: int) -> List[EnemySprite]:
        return [self.spawn_replacement() for _ in range(n)]

    def spawn_replacement(self) -> EnemySprite:
        size = self.profile.sprite_size
        # Upper band: below the HUD, above the middle of the field
        max_y = self.height / 2 - 75
        direction = 1 if self.rng.random() < 0.5 else -1
        lo, hi = self.speed_range

        sprite = EnemySprite(
            x=self.rng.random() * (self.width - size),
            y=self.rng.random() * (max_y - self.min_y) + self.min_y,
            width=size,
            height=size,
            direction=direction,
            speed=self.rng.random() * (hi - lo) + lo,
            score_value=self.score_value,
            facing=Facing.from_direction(direction),
        )
        self.sprites.append(sprite)
        self._schedule_drop(sprite, self.rng.random() * self.first_drop_max)
        logger.debug("Spawned sprite at (%.0f, %.0f) dir=%d speed=%.2f",
                     sprite.x, sprite.y, sprite.direction, sprite.speed)
        return sprite

    def retire(self, sprite: EnemySprite):
        """Cancel the sprite's timer and drop it from the live set. Idempotent."""
        if sprite.timer is not None:
            sprite.timer.cancel()
            sprite.timer = None
        sprite.alive = False
        if sprite in self.sprites:
            self.sprites.remove(sprite)

    def retire_all(self):
        for sprite in list(self.sprites):
            self.retire(sprite)

    def cancel_timers(self):
        """Stop every sprite from firing while keeping them in place"""
        for sprite in self.sprites:
            if sprite.timer is not None:
                sprite.timer.cancel()
                sprite.timer = None

    # ----------------------------
    # Drop timers
    # ----------------------------

    def _schedule_drop(self, sprite: EnemySprite, delay: float):
        sprite.timer = self.scheduler.call_later(delay, lambda: self._fire(sprite))

    def _fire(self, sprite: EnemySprite):
        sprite.timer = None
        # Scheduled asynchronously; the sprite may have been hit since
        if not sprite.alive or sprite not in self.sprites:
            return
        delay = self.on_drop(sprite)
        if delay is not None:
            self._schedule_drop(sprite, delay)
