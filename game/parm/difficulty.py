"""
Score-driven difficulty ratchet for enemy drop timing
"""

from dataclasses import dataclass, field


@dataclass
class DifficultyController:
    """Shortens the enemy drop interval every time score climbs another band.

    The interval only ever shrinks: each request checks whether score has
    moved at least ``band`` points past the last threshold, and if so scales
    the interval by ``scaling_factor`` and moves the threshold up to the
    current score.
    """
    initial_interval: float = 2000.0  # ms
    scaling_factor: float = 0.8
    band: int = 5
    base_drop_interval: float = field(init=False, default=2000.0)
    last_score_threshold: int = field(init=False, default=0)

    def __post_init__(self):
        self.base_drop_interval = self.initial_interval

    def next_interval(self, score: int) -> float:
        if score >= self.last_score_threshold + self.band:
            self.base_drop_interval *= self.scaling_factor
            self.last_score_threshold = score
        return self.base_drop_interval

    def reset(self):
        self.base_drop_interval = self.initial_interval
        self.last_score_threshold = 0

    @property
    def state(self):
        return self.base_drop_interval, self.last_score_threshold
