"""$PARM cheese shooter - real-time simulation and collision engine"""

from .session import GameSession, SessionState, SessionSnapshot, InvalidPlayerName, InvalidTransition
from .simulation import InputIntent
from .timers import ManualScheduler, TimerHandle
from .leaderboard import Leaderboard, LeaderboardEntry, RemoteScoreClient, ScoreBoard
from .shooter_env import ShooterEnv, run_random_episode

__all__ = [
    'GameSession',
    'SessionState',
    'SessionSnapshot',
    'InvalidPlayerName',
    'InvalidTransition',
    'InputIntent',
    'ManualScheduler',
    'TimerHandle',
    'Leaderboard',
    'LeaderboardEntry',
    'RemoteScoreClient',
    'ScoreBoard',
    'ShooterEnv',
    'run_random_episode',
]
