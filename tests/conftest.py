import random

import pytest

from game.parm.session import GameSession, SessionState
from game.parm.spawner import Spawner
from game.parm.timers import ManualScheduler


class RecordingScoreBoard:
    """Stands in for ScoreBoard; remembers what the session handed over"""

    def __init__(self):
        self.recorded = []

    def record(self, player_name, score):
        self.recorded.append((player_name, score))
        return self.entries()

    def entries(self):
        return [(name, score) for name, score in self.recorded]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def scoreboard():
    return RecordingScoreBoard()


@pytest.fixture
def session(scheduler, scoreboard):
    return GameSession(
        width=1280, height=800, scheduler=scheduler, scoreboard=scoreboard, rng=random.Random(7)
    )


@pytest.fixture
def running_session(session, scheduler):
    session.start("tester")
    scheduler.advance(4000)
    assert session.state is SessionState.RUNNING
    return session


@pytest.fixture
def spawner(scheduler):
    return Spawner(scheduler, on_drop=lambda sprite: None, width=1280, height=800, rng=random.Random(3))
