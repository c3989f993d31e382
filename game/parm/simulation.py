"""
One frame of the running game.

``step`` advances every entity once, resolves both kinds of collision and
prunes whatever left the field or finished animating. It runs synchronously
and only while the session is running.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .collisions import resolve_enemy_hits_on_player, resolve_player_bullets
from .entities import Bullet, EnemyProjectile, EnemySprite, Explosion, Player
from .utils import clamp


@dataclass
class InputIntent:
    """Movement intent sampled once per frame"""
    move_left: bool = False
    move_right: bool = False


# ----------------------------
# Per-entity motion
# ----------------------------

def move_player(player: Player, intent: InputIntent, width: float):
    if intent.move_left:
        player.x -= player.speed
    if intent.move_right:
        player.x += player.speed
    player.x = clamp(player.x, 0.0, max(0.0, width - player.width))


def advance_bullets(bullets: List[Bullet]) -> List[Bullet]:
    for b in bullets:
        b.y += b.vy
    # Gone once fully above the top edge
    return [b for b in bullets if b.bottom > 0]


def advance_sprites(sprites: List[EnemySprite], width: float):
    for s in sprites:
        s.x += s.speed * s.direction
        if s.x <= 0 or s.x + s.width >= width:
            s.flip()


def advance_projectiles(projectiles: List[EnemyProjectile], height: float) -> List[EnemyProjectile]:
    for p in projectiles:
        p.y += p.vy
    return [p for p in projectiles if p.y < height]


def explosion_finished(explosion: Explosion) -> bool:
    profile = explosion.profile
    return (
        explosion.extent >= profile.max_extent
        or explosion.alpha <= 0
        or math.isclose(explosion.alpha, 0.0, abs_tol=1e-9)
    )


def advance_explosions(explosions: List[Explosion]) -> List[Explosion]:
    for e in explosions:
        profile = e.profile
        e.extent += profile.growth
        e.alpha = max(0.0, e.alpha - profile.fade)
    return [e for e in explosions if not explosion_finished(e)]


# ----------------------------
# Frame
# ----------------------------

def step(session, intent: InputIntent) -> bool:
    """Advance a running session by one frame.

    Returns False when the frame exhausted the player's lives; the session has
    already moved to its ending phase by then and nothing else is advanced.
    """
    spawner = session.spawner

    move_player(session.player, intent, session.width)

    session.bullets = advance_bullets(session.bullets)
    advance_sprites(spawner.sprites, session.width)

    session.bullets, gained = resolve_player_bullets(
        session.bullets, spawner.sprites, session.explosions, spawner
    )
    session.score += gained

    session.projectiles = advance_projectiles(session.projectiles, session.height)
    session.projectiles, session.lives = resolve_enemy_hits_on_player(
        session.projectiles, session.player, session.explosions, session.lives
    )
    if session.lives == 0:
        session.end_game()
        return False

    session.explosions = advance_explosions(session.explosions)
    return True
