from typing import Dict, List, Optional

import pytest

import logger
from models import GameRecord, ScoreSnapshot


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path):
    logger.set_log_file(tmp_path / "logs.txt")
    yield


def make_game(game_id: str = "G1", league: str = "NBA", home: str = "H", away: str = "A",
              status: str = "in_progress", score: Optional[Dict[str, int]] = None,
              clock: Optional[str] = None, **extra) -> GameRecord:
    data = {
        "id": game_id,
        "league": league,
        "home": home,
        "away": away,
        "status": status,
        "score": score if score is not None else {},
        "clock": clock,
    }
    data.update(extra)
    return GameRecord.from_dict(data)


def snap(home_score: int, away_score: int, clock: Optional[str] = None,
         home: str = "H", away: str = "A") -> ScoreSnapshot:
    return ScoreSnapshot(scores=((home, home_score), (away, away_score)), clock=clock)


class FakeFeedClient:
    """Serves canned league payloads; an Exception value is raised instead"""

    def __init__(self, responses: Optional[Dict[str, object]] = None):
        self.responses: Dict[str, object] = dict(responses or {})
        self.requests: List[str] = []

    def get_games(self, league_slug: str):
        self.requests.append(league_slug)
        payload = self.responses.get(league_slug, [])
        if isinstance(payload, Exception):
            raise payload
        return list(payload)


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def snap_factory():
    return snap


@pytest.fixture
def fake_feed():
    return FakeFeedClient()
