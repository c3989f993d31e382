"""
Score persistence: a local top-10 JSON leaderboard and an optional remote collector
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass
from typing import List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_SUBMIT_URL = "https://parmbot-29ed122e8ba4.herokuapp.com/submit_score/"


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int


class Leaderboard:
    """Top-N scores kept in a JSON file, highest first, ties in arrival order"""

    def __init__(self, path: str = "highscores.json", limit: int = 10):
        self.path = path
        self.limit = limit
        self._entries: List[LeaderboardEntry] = self.load()

    def load(self) -> List[LeaderboardEntry]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("leaderboard file must hold a list")
            return [LeaderboardEntry(str(d["name"]), int(d["score"])) for d in data][: self.limit]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable leaderboard %s: %s", self.path, e)
            return []

    def save(self):
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([asdict(e) for e in self._entries], f, indent=2)
        except OSError as e:
            # A read-only disk must not take the game down
            logger.warning("Could not write leaderboard %s: %s", self.path, e)

    def add(self, name: str, score: int) -> List[LeaderboardEntry]:
        self._entries.append(LeaderboardEntry(name, int(score)))
        # list.sort is stable, so equal scores keep insertion order
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self.limit:]
        self.save()
        return self.entries()

    def entries(self) -> List[LeaderboardEntry]:
        return list(self._entries)


class RemoteScoreClient:
    """Posts final scores to an HTTP collector; failures are logged, never raised"""

    def __init__(self, url: str = DEFAULT_SUBMIT_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def submit(self, player_name: str, score: int) -> Tuple[bool, str]:
        data = {"player_name": player_name, "score": int(score)}
        try:
            response = requests.post(self.url, json=data, timeout=self.timeout)
            response.raise_for_status()
            message = response.json().get("message", "")
        except requests.exceptions.RequestException as e:
            logger.warning("Error submitting score for %r: %s", player_name, e)
            return False, f"Network error: {e}"
        except (ValueError, AttributeError) as e:
            logger.warning("Unexpected response from %s: %s", self.url, e)
            return False, f"Bad response: {e}"

        logger.info("Score submitted successfully: %s", message)
        return True, message

    def submit_async(self, player_name: str, score: int) -> threading.Thread:
        """Submit on a daemon thread so the frame loop never waits on the network"""
        thread = threading.Thread(
            target=self.submit, args=(player_name, score), daemon=True
        )
        thread.start()
        return thread


class ScoreBoard:
    """What the session talks to when a game ends"""

    def __init__(
        self,
        leaderboard: Leaderboard,
        remote: Optional[RemoteScoreClient] = None,
        submit_async: bool = True,
    ):
        self.leaderboard = leaderboard
        self.remote = remote
        self.submit_async = submit_async

    def record(self, player_name: str, score: int) -> List[LeaderboardEntry]:
        entries = self.leaderboard.add(player_name, score)
        if self.remote is not None:
            if self.submit_async:
                self.remote.submit_async(player_name, score)
            else:
                self.remote.submit(player_name, score)
        return entries

    def entries(self) -> List[LeaderboardEntry]:
        return self.leaderboard.entries()
