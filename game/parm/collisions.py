"""
Hit detection and its consequences.

Both resolvers use the shared ``intersects`` box test. They return the
surviving projectiles together with the counter they changed; the session
owns score and lives and applies the result.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .entities import Bullet, EnemyProjectile, EnemySprite, Explosion, ExplosionKind, Player
from .utils import intersects

logger = logging.getLogger(__name__)


def resolve_player_bullets(
    bullets: List[Bullet],
    sprites: List[EnemySprite],
    explosions: List[Explosion],
    spawner,
) -> Tuple[List[Bullet], int]:
    """Match bullets against sprites, one sprite per bullet per frame.

    Each hit adds a radial explosion at the sprite's centre, retires the sprite
    (cancelling its drop timer) and spawns one replacement. Replacements join
    the live set immediately but are not matched until the next frame.

    Returns (remaining bullets, score gained).
    """
    targets = list(sprites)
    remaining: List[Bullet] = []
    gained = 0

    for bullet in bullets:
        hit = None
        for sprite in targets:
            if sprite.alive and intersects(bullet, sprite):
                hit = sprite
                break

        if hit is None:
            remaining.append(bullet)
            continue

        gained += hit.score_value
        cx, cy = hit.center
        explosions.append(Explosion(x=cx, y=cy, kind=ExplosionKind.RADIAL))
        spawner.retire(hit)
        spawner.spawn_replacement()
        logger.debug("Sprite hit at (%.0f, %.0f), +%d", cx, cy, hit.score_value)

    return remaining, gained


def resolve_enemy_hits_on_player(
    projectiles: List[EnemyProjectile],
    player: Player,
    explosions: List[Explosion],
    lives: int,
) -> Tuple[List[EnemyProjectile], int]:
    """Match enemy projectiles against the player's reduced hit box.

    Every overlapping projectile is consumed and costs one life (never below
    zero), with a radial-line explosion on the player's centre.

    Returns (remaining projectiles, lives left).
    """
    hitbox = player.hitbox
    remaining: List[EnemyProjectile] = []

    for projectile in projectiles:
        if not intersects(projectile, hitbox):
            remaining.append(projectile)
            continue

        lives = max(0, lives - 1)
        cx, cy = player.center
        explosions.append(Explosion(x=cx, y=cy, kind=ExplosionKind.RADIAL_LINE))
        logger.debug("Player hit, %d lives left", lives)

    return remaining, lives
