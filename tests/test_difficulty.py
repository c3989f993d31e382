import pytest

from game.parm.difficulty import DifficultyController


def test_initial_state():
    d = DifficultyController()
    assert d.state == (2000.0, 0)
    assert d.next_interval(0) == 2000.0


def test_interval_shrinks_per_five_point_band():
    d = DifficultyController()
    assert d.next_interval(4) == 2000.0
    assert d.next_interval(5) == pytest.approx(1600.0)
    assert d.next_interval(9) == pytest.approx(1600.0)
    assert d.next_interval(10) == pytest.approx(1280.0)


def test_threshold_moves_to_current_score():
    d = DifficultyController()
    d.next_interval(7)
    assert d.last_score_threshold == 7
    assert d.next_interval(11) == pytest.approx(1600.0)
    assert d.next_interval(12) == pytest.approx(1280.0)


def test_interval_never_grows():
    d = DifficultyController()
    previous = d.next_interval(0)
    for score in range(0, 60):
        current = d.next_interval(score)
        assert current <= previous
        previous = current


def test_one_step_per_request_even_after_big_jump():
    d = DifficultyController()
    assert d.next_interval(23) == pytest.approx(1600.0)
    assert d.last_score_threshold == 23


def test_reset_restores_initial_values():
    d = DifficultyController()
    d.next_interval(5)
    d.next_interval(10)
    d.reset()
    assert d.state == (2000.0, 0)


def test_interval_starts_from_configured_value():
    d = DifficultyController(initial_interval=1500.0)
    assert d.state == (1500.0, 0)
    with pytest.raises(TypeError):
        DifficultyController(base_drop_interval=100.0)
