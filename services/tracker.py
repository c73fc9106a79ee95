"""
Main tracking logic - orchestrates the poll cycle and signal derivation
"""

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Callable, List, Dict, Optional, Mapping, Sequence, Tuple

from config import Config
from models import DashboardSnapshot, GameRecord, ScoreSnapshot
from .feed import FeedClient
from .history import ScoreHistory
from .rankers import find_best_bet, find_best_live_game
from .signals import compute_game_signals
from .sports import League, LEAGUES, get_league
from logger import log


def derive_snapshot(games: Mapping[str, Sequence[GameRecord]],
                    history: Mapping[str, Sequence[ScoreSnapshot]],
                    league_order: Sequence[str],
                    available: bool = True,
                    failed_leagues: Optional[List[str]] = None,
                    error: Optional[str] = None) -> DashboardSnapshot:
    """Compute every per-game signal and both rankings from one tick's state"""
    signals = {}
    for league_name, league_games in games.items():
        for game in league_games:
            league = get_league(game.league or league_name)
            signals[game.id] = compute_game_signals(game, history.get(game.id, ()), league)

    return DashboardSnapshot(
        timestamp=datetime.now(timezone.utc).isoformat(),
        available=available,
        games={name: list(league_games) for name, league_games in games.items()},
        signals=signals,
        best_bet=find_best_bet(games, league_order),
        best_live_game=find_best_live_game(games, history, league_order),
        failed_leagues=list(failed_leagues or []),
        error=error
    )


class DashboardTracker:
    """
    Poll orchestrator.

    Each tick fetches every league in parallel, waits for all of them, then
    appends to the score history league by league in configured order, and
    only then derives signals from a frozen view of the history. A tick
    triggered while another is still running is dropped.
    """

    def __init__(self, feed_client: Optional[FeedClient] = None,
                 leagues: Optional[List[League]] = None,
                 history: Optional[ScoreHistory] = None,
                 max_workers: int = Config.MAX_FETCH_WORKERS):
        self.feed_client = feed_client or FeedClient()
        self.leagues = list(leagues) if leagues is not None else list(LEAGUES)
        self.history = history if history is not None else ScoreHistory()
        self.max_workers = max_workers
        self.games: Dict[str, List[GameRecord]] = {league.name: [] for league in self.leagues}
        self._tick_lock = threading.Lock()
        self._latest: Optional[DashboardSnapshot] = None

    @property
    def latest(self) -> Optional[DashboardSnapshot]:
        return self._latest

    @property
    def is_polling(self) -> bool:
        return self._tick_lock.locked()

    @property
    def league_order(self) -> List[str]:
        return [league.name for league in self.leagues]

    def fetch_league(self, league: League) -> List[Dict]:
        return self.feed_client.get_games(league.slug)

    def parse_games(self, raw_games: List[Dict], league: League) -> List[GameRecord]:
        """Turn a league's raw feed array into records, last entry wins per id"""
        records: Dict[str, GameRecord] = {}
        for entry in raw_games:
            if not isinstance(entry, dict):
                log(f"{league.name}: skipping non-object feed entry {entry!r:.80}", 'WARNING')
                continue
            try:
                game = GameRecord.from_dict(entry, league.name)
            except ValueError as e:
                log(f"{league.name}: skipping malformed game: {e}", 'WARNING')
                continue
            records[game.id] = game
        return list(records.values())

    def _fetch_all(self) -> Tuple[Dict[str, List[Dict]], Dict[str, Exception]]:
        results: Dict[str, List[Dict]] = {}
        errors: Dict[str, Exception] = {}
        if not self.leagues:
            return results, errors

        with ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(self.leagues)))) as pool:
            futures = {pool.submit(self.fetch_league, league): league for league in self.leagues}
            wait(futures)

        for future, league in futures.items():
            try:
                results[league.name] = future.result()
            except Exception as e:
                # One league failing must not take the others down
                errors[league.name] = e
        return results, errors

    def poll(self) -> Optional[DashboardSnapshot]:
        """Run one tick. Returns the previous snapshot if a tick is already running."""
        if not self._tick_lock.acquire(blocking=False):
            log("Previous tick still running, dropping this trigger", 'DEBUG')
            return self._latest
        try:
            self._latest = self._run_tick()
            return self._latest
        finally:
            self._tick_lock.release()

    def _run_tick(self) -> DashboardSnapshot:
        raw_games, errors = self._fetch_all()

        failed_leagues = []
        for league in self.leagues:
            if league.name in errors:
                log(f"{league.name}: fetch failed, keeping previous games: {errors[league.name]}", 'ERROR')
                failed_leagues.append(league.name)
                continue

            games = self.parse_games(raw_games.get(league.name, []), league)
            for game in games:
                self.history.append(game.id, game.home, game.away, game.score, game.clock)
            self.games[league.name] = games
            log(f"{league.name}: {len(games)} games "
                f"({sum(1 for g in games if g.is_live)} live)", 'DEBUG')

        available = not self.leagues or len(failed_leagues) < len(self.leagues)
        error = None
        if not available:
            error = "All league feeds failed; showing last known games"
            log(error, 'ERROR')

        return derive_snapshot(
            games={name: list(games) for name, games in self.games.items()},
            history=self.history.view(),
            league_order=self.league_order,
            available=available,
            failed_leagues=failed_leagues,
            error=error
        )

    def run_forever(self, stop_event: threading.Event,
                    interval: float = Config.REFRESH_INTERVAL,
                    on_tick: Optional[Callable[[DashboardSnapshot], None]] = None) -> None:
        """Poll every `interval` seconds until stop_event is set"""
        log(f"Tracker started - polling {len(self.leagues)} leagues every {interval}s")
        while not stop_event.is_set():
            try:
                snapshot = self.poll()
                if snapshot is not None and on_tick is not None:
                    on_tick(snapshot)
            except Exception as e:
                log(f"Unexpected tick error: {e}", 'ERROR')
            stop_event.wait(interval)
        log("Tracker stopped")
