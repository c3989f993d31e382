import pytest

pytest.importorskip("arcade")

from game.parm import window as window_module
from game.parm.window import ArcadeScheduler, ShooterWindow


@pytest.fixture
def fake_clock(monkeypatch):
    scheduled, unscheduled = [], []
    monkeypatch.setattr(window_module.arcade, "schedule_once",
                        lambda fn, delay: scheduled.append((fn, delay)))
    monkeypatch.setattr(window_module.arcade, "unschedule", unscheduled.append)
    return scheduled, unscheduled


class FakePlayer:
    def __init__(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def play(self):
        self.playing = True


# ----------------------------
# Scheduler
# ----------------------------

def test_call_later_converts_ms_to_seconds(fake_clock):
    scheduled, _ = fake_clock
    sched = ArcadeScheduler()
    sched.call_later(250, lambda: None)
    sched.call_later(-10, lambda: None)
    assert [delay for _, delay in scheduled] == [0.25, 0.0]
    assert sched.pending() == 2


def test_cancel_unschedules_only_its_own_closure(fake_clock):
    scheduled, unscheduled = fake_clock
    sched = ArcadeScheduler()
    fired = []
    first = sched.call_later(100, lambda: fired.append("first"))
    sched.call_later(200, lambda: fired.append("second"))

    first.cancel()
    first.cancel()

    assert unscheduled == [scheduled[0][0]]
    assert scheduled[0][0] is not scheduled[1][0]
    assert sched.pending() == 1

    scheduled[1][0](0.2)
    assert fired == ["second"]
    assert sched.pending() == 0


def test_fired_timer_cannot_be_cancelled(fake_clock):
    scheduled, unscheduled = fake_clock
    sched = ArcadeScheduler()
    handle = sched.call_later(100, lambda: None)
    scheduled[0][0](0.1)
    handle.cancel()
    assert unscheduled == []
    assert handle.fired and not handle.cancelled


def test_cancel_all(fake_clock):
    _, unscheduled = fake_clock
    sched = ArcadeScheduler()
    for delay in (100, 200, 300):
        sched.call_later(delay, lambda: None)
    sched.cancel_all()
    assert len(unscheduled) == 3
    assert sched.pending() == 0


# ----------------------------
# Background music
# ----------------------------

def bare_window(music=object(), muted=False):
    # Skips arcade.Window.__init__ so no display is needed
    w = ShooterWindow.__new__(ShooterWindow)
    w.sounds = {"music": music}
    w.music_volume = 0.6
    w.music_player = None
    w.muted = muted
    return w


def test_music_loops_once_and_stops(monkeypatch):
    calls, stopped = [], []

    def fake_play_sound(sound, volume=1.0, loop=False):
        calls.append((volume, loop))
        return FakePlayer()

    monkeypatch.setattr(window_module.arcade, "play_sound", fake_play_sound)
    monkeypatch.setattr(window_module.arcade, "stop_sound", stopped.append)
    w = bare_window()

    w._start_music()
    w._start_music()
    assert calls == [(0.6, True)]

    player = w.music_player
    w._stop_music()
    assert stopped == [player]
    assert w.music_player is None


def test_mute_pauses_and_resumes_music(monkeypatch):
    monkeypatch.setattr(window_module.arcade, "play_sound",
                        lambda sound, volume=1.0, loop=False: FakePlayer())
    w = bare_window()
    w._start_music()

    w.toggle_mute()
    assert w.muted and not w.music_player.playing
    w.toggle_mute()
    assert not w.muted and w.music_player.playing


def test_music_starts_paused_when_muted(monkeypatch):
    monkeypatch.setattr(window_module.arcade, "play_sound",
                        lambda sound, volume=1.0, loop=False: FakePlayer())
    w = bare_window(muted=True)
    w._start_music()
    assert not w.music_player.playing


def test_missing_music_asset_is_silent(monkeypatch):
    monkeypatch.setattr(window_module.arcade, "play_sound",
                        lambda *a, **k: pytest.fail("nothing to play"))
    w = bare_window(music=None)
    w._start_music()
    w.toggle_mute()
    assert w.music_player is None
    assert w.muted


def test_missing_sound_file_logs_warning(monkeypatch, caplog):
    def fail(path):
        raise FileNotFoundError(path)

    monkeypatch.setattr(window_module.arcade, "load_sound", fail)
    w = bare_window()
    w.assets_dir = "/nowhere"

    with caplog.at_level("WARNING", logger="game.parm.window"):
        assert w._load_sound("game2.wav") is None

    (record,) = caplog.records
    assert record.msg == "Could not load sound %s: %s"
    assert "game2.wav" in record.getMessage()
