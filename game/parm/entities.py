"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .timers import TimerHandle


@dataclass
class Rect:
    """Axis-aligned box in field coordinates (origin top-left, y grows down)"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass(frozen=True)
class DisplayProfile:
    """Entity sizes for one screen class"""
    name: str
    player_size: float
    player_hitbox: float
    sprite_size: float
    projectile_width: float
    projectile_height: float


DESKTOP = DisplayProfile("desktop", 150.0, 100.0, 100.0, 5.0, 20.0)
MOBILE = DisplayProfile("mobile", 100.0, 66.0, 75.0, 3.0, 15.0)
MOBILE_MAX_WIDTH = 768


def profile_for_width(width: float) -> DisplayProfile:
    return MOBILE if width <= MOBILE_MAX_WIDTH else DESKTOP


class Facing(Enum):
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_direction(cls, direction: int) -> "Facing":
        return cls.RIGHT if direction == 1 else cls.LEFT


@dataclass(eq=False)
class Player(Rect):
    """The shooter at the bottom of the field"""
    speed: float = 100.0
    hitbox_size: float = 100.0

    @property
    def hitbox(self) -> Rect:
        """Centered collision box, smaller than the drawn bounds"""
        return Rect(
            x=self.x + (self.width - self.hitbox_size) / 2,
            y=self.y + (self.height - self.hitbox_size) / 2,
            width=self.hitbox_size,
            height=self.hitbox_size,
        )


@dataclass(eq=False)
class Bullet(Rect):
    """Player projectile, travels up"""
    vy: float = -10.0


@dataclass(eq=False)
class EnemySprite(Rect):
    """Patrolling enemy that drops projectiles"""
    direction: int = 1
    speed: float = 3.0
    score_value: int = 1
    facing: Facing = Facing.RIGHT
    timer: Optional[TimerHandle] = None
    alive: bool = True

    def flip(self):
        self.direction *= -1
        self.facing = Facing.from_direction(self.direction)


@dataclass(eq=False)
class EnemyProjectile(Rect):
    """Enemy drop, travels down"""
    vy: float = 7.0


class ExplosionKind(Enum):
    RADIAL = "radial"
    RADIAL_LINE = "radial-line"
    RADIAL_FINAL = "radial-final"


@dataclass(frozen=True)
class ExplosionProfile:
    growth: float
    fade: float
    max_extent: float
    lines: int = 0


EXPLOSION_PROFILES: Dict[ExplosionKind, ExplosionProfile] = {
    ExplosionKind.RADIAL: ExplosionProfile(growth=4.0, fade=0.04, max_extent=150.0),
    ExplosionKind.RADIAL_LINE: ExplosionProfile(growth=4.0, fade=0.04, max_extent=200.0, lines=40),
    ExplosionKind.RADIAL_FINAL: ExplosionProfile(growth=6.0, fade=0.03, max_extent=400.0),
}


@dataclass(eq=False)
class Explosion:
    """Transient burst; extent is a radius or a line length depending on kind"""
    x: float
    y: float
    kind: ExplosionKind = ExplosionKind.RADIAL
    extent: float = 0.0
    alpha: float = 1.0

    @property
    def profile(self) -> ExplosionProfile:
        return EXPLOSION_PROFILES[self.kind]

    @property
    def progress(self) -> float:
        """Fraction of the way to max extent, in [0, 1]"""
        return min(1.0, self.extent / self.profile.max_extent)
