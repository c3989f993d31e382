import numpy as np

from game.parm.entities import EnemyProjectile
from game.parm.shooter_env import ShooterEnv, run_random_episode


def test_reset_starts_a_running_game():
    env = ShooterEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["state"] == "running"
    assert info["lives"] == 5
    assert info["num_sprites"] == 4


def test_steps_stay_inside_observation_space():
    env = ShooterEnv()
    env.reset(seed=1)
    env.action_space.seed(1)

    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated or truncated:
            break


def test_losing_last_life_terminates_with_penalty():
    env = ShooterEnv()
    env.reset(seed=2)
    s = env.session
    s.spawner.retire_all()
    s.lives = 1
    hx = s.player.hitbox
    s.projectiles.append(EnemyProjectile(x=hx.x + 10, y=hx.y + 10, width=5, height=20))

    obs, reward, terminated, truncated, info = env.step(np.array([0, 0]))

    assert terminated
    assert reward == -1.0
    assert info["state"] == "ending"


def test_truncates_at_max_steps():
    env = ShooterEnv(max_steps=5)
    env.reset(seed=3)
    truncated = False
    for _ in range(5):
        _, _, terminated, truncated, _ = env.step(np.array([0, 0]))
    assert truncated


def test_same_seed_spawns_same_sprites():
    a, b = ShooterEnv(), ShooterEnv()
    a.reset(seed=9)
    b.reset(seed=9)
    assert [(s.x, s.y, s.direction) for s in a.session.sprites] == \
        [(s.x, s.y, s.direction) for s in b.session.sprites]


def test_reset_clears_previous_episode():
    env = ShooterEnv()
    env.reset(seed=4)
    for _ in range(30):
        env.step(np.array([2, 1]))
    obs, info = env.reset(seed=4)
    assert info["step"] == 0
    assert info["score"] == 0
    assert info["num_sprites"] == 4
    assert info["num_bullets"] == 0


def test_run_random_episode():
    result = run_random_episode(seed=5)
    assert "return" in result
    assert result["score"] >= 0
    assert 0 <= result["lives"] <= 5
