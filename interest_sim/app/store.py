"""In-memory registry of running games. Lives for the process only."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from interest_sim.domain.simulation import Simulator

logger = logging.getLogger(__name__)


class GameNotFound(LookupError):
    def __init__(self, game_id: str):
        super().__init__(f"game {game_id} not found")
        self.game_id = game_id


@dataclass
class GameEntry:
    id: str
    simulator: Simulator
    score: Optional[int] = None
    lock: threading.Lock = field(default_factory=threading.Lock)


class GameStore:
    """
    Games keyed by id, oldest first.

    Once `max_games` is reached the oldest game is evicted to make room, so
    memory stays bounded on a long-running server.
    """

    def __init__(self, monthly_rate: float, max_games: int = 1000):
        self.monthly_rate = monthly_rate
        self.max_games = max_games
        self._games: Dict[str, GameEntry] = {}
        self._lock = threading.Lock()

    def create(self) -> GameEntry:
        game_id = uuid.uuid4().hex
        entry = GameEntry(id=game_id, simulator=Simulator(monthly_rate=self.monthly_rate))

        def record_score(score: int) -> None:
            entry.score = score
            logger.info("game completed", extra={"game_id": game_id, "action": "complete"})

        entry.simulator.on_complete = record_score
        with self._lock:
            while len(self._games) >= self.max_games:
                oldest = next(iter(self._games))
                del self._games[oldest]
                logger.info("game evicted", extra={"game_id": oldest, "action": "evict"})
            self._games[game_id] = entry
        logger.info("game created", extra={"game_id": game_id, "action": "create"})
        return entry

    def get(self, game_id: str) -> GameEntry:
        with self._lock:
            entry = self._games.get(game_id)
        if entry is None:
            raise GameNotFound(game_id)
        return entry

    def remove(self, game_id: str) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFound(game_id)
        logger.info("game removed", extra={"game_id": game_id, "action": "remove"})

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
