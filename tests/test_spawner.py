import random

import pytest

from game.parm.entities import MOBILE, Facing
from game.parm.spawner import Spawner


def test_spawn_initial_positions_and_timers(spawner):
    sprites = spawner.spawn_initial(50)

    assert len(spawner.sprites) == 50
    for s in sprites:
        assert 0 <= s.x < 1280 - s.width
        assert 100 <= s.y < 800 / 2 - 75
        assert s.direction in (1, -1)
        assert s.facing is Facing.from_direction(s.direction)
        assert 3 <= s.speed < 9.5
        assert s.score_value == 1
        assert s.timer is not None and s.timer.active
        assert 0 <= s.timer.due < 2000


def test_spawn_replacement_adds_exactly_one(spawner):
    spawner.spawn_initial(4)
    spawner.spawn_replacement()
    assert len(spawner.sprites) == 5


def test_sprite_size_follows_profile(scheduler):
    spawner = Spawner(scheduler, on_drop=lambda s: None, width=700, height=900, profile=MOBILE)
    sprite = spawner.spawn_replacement()
    assert sprite.width == sprite.height == 75


def test_retire_cancels_timer_and_is_idempotent(spawner, scheduler):
    sprite = spawner.spawn_replacement()
    timer = sprite.timer

    spawner.retire(sprite)
    spawner.retire(sprite)

    assert sprite not in spawner.sprites
    assert not sprite.alive
    assert timer.cancelled
    assert scheduler.pending() == 0


def test_retired_sprite_timer_never_fires(scheduler):
    drops = []
    spawner = Spawner(scheduler, on_drop=lambda s: drops.append(s) or 1000.0, rng=random.Random(1))
    keep, gone = spawner.spawn_initial(2)
    spawner.retire(gone)

    scheduler.advance(5000)

    assert gone not in drops
    assert keep in drops


def test_drop_reschedules_with_returned_interval(scheduler):
    drops = []
    spawner = Spawner(scheduler, on_drop=lambda s: drops.append(scheduler.now) or 500.0,
                      rng=random.Random(2))
    sprite = spawner.spawn_replacement()
    first_due = sprite.timer.due

    scheduler.advance(first_due + 1600)

    assert drops == pytest.approx([first_due, first_due + 500, first_due + 1000, first_due + 1500])
    assert sprite.timer is not None and sprite.timer.active


def test_drop_stops_when_callback_returns_none(scheduler):
    calls = []
    spawner = Spawner(scheduler, on_drop=lambda s: calls.append(s) and None, rng=random.Random(4))
    sprite = spawner.spawn_replacement()

    scheduler.advance(10000)

    assert calls == [sprite]
    assert sprite.timer is None
    assert scheduler.pending() == 0


def test_retire_all(spawner, scheduler):
    spawner.spawn_initial(6)
    spawner.retire_all()
    assert spawner.sprites == []
    assert scheduler.pending() == 0
