"""
Per-game bounded score history
"""

from collections import deque
from typing import Deque, Dict, Mapping, Optional, Tuple

from config import Config
from models import ScoreSnapshot
from logger import log


class ScoreHistory:
    """
    Ring of deduplicated score snapshots per game id, oldest first.

    A snapshot is only stored when the score differs from the last stored
    one; clock-only changes are ignored. Each ring keeps the most recent
    HISTORY_SIZE entries. Owned and mutated by the tracker only.
    """

    def __init__(self, size: int = Config.HISTORY_SIZE):
        self.size = size
        self._rings: Dict[str, Deque[ScoreSnapshot]] = {}

    def append(self, game_id: str, home: str, away: str,
               score: Optional[Mapping[str, int]], clock: Optional[str] = None) -> None:
        score = score or {}
        snapshot = ScoreSnapshot(
            scores=((home, score.get(home, 0)), (away, score.get(away, 0))),
            clock=clock
        )

        ring = self._rings.get(game_id)
        if ring is None:
            ring = deque(maxlen=self.size)
            self._rings[game_id] = ring
        elif ring:
            last = ring[-1]
            if last.same_score(snapshot):
                return
            for team in (home, away):
                if snapshot.score_for(team) < last.score_for(team):
                    log(f"Score for {team} went down in game {game_id}: "
                        f"{last.score_for(team)} -> {snapshot.score_for(team)}", 'WARNING')

        ring.append(snapshot)

    def get(self, game_id: str) -> Tuple[ScoreSnapshot, ...]:
        ring = self._rings.get(game_id)
        return tuple(ring) if ring else ()

    def view(self) -> Dict[str, Tuple[ScoreSnapshot, ...]]:
        """Immutable copy of every ring, for the derive phase of a tick"""
        return {game_id: tuple(ring) for game_id, ring in self._rings.items()}

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._rings

    def __len__(self) -> int:
        return len(self._rings)
