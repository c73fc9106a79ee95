"""
Data models for the live league dashboard
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Tuple

STATUS_SCHEDULED = 'scheduled'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_FINAL = 'final'
STATUS_CLOSED = 'closed'  # feed alias of final

GOAL_EVENT_TYPES = {'goal', 'penaltygoal', 'penaltyscored', 'owngoal'}


def _to_int(value) -> int:
    """Coerce a feed score to a non-negative int, 0 when unusable"""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _to_pct(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class GameEvent:
    """Single discrete in-game event (goal, card, substitution)"""
    event_type: str
    is_home: bool
    clock: Optional[str] = None
    player_name: Optional[str] = None

    @property
    def normalized_type(self) -> str:
        return self.event_type.lower().replace('-', '').replace('_', '').replace(' ', '')

    @property
    def is_goal(self) -> bool:
        return self.normalized_type in GOAL_EVENT_TYPES

    @property
    def is_own_goal(self) -> bool:
        return self.normalized_type == 'owngoal'

    @classmethod
    def from_dict(cls, data: Dict) -> 'GameEvent':
        player_name = None
        player = data.get('player')
        if isinstance(player, dict):
            player_name = player.get('shortName') or player.get('name')
        elif player:
            player_name = str(player)

        clock = data.get('clock')
        return cls(
            event_type=str(data.get('type') or 'unknown'),
            is_home=bool(data.get('isHome', False)),
            clock=str(clock) if clock is not None else None,
            player_name=player_name
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Spread:
    """Free-text betting line"""
    favorite: str
    over_under: Optional[str] = None

    def to_dict(self) -> Dict:
        return {'favorite': self.favorite, 'overUnder': self.over_under}


@dataclass
class GameRecord:
    """One game as reported by the feed at a single tick"""
    id: str
    league: str
    home: str
    away: str
    status: str
    score: Dict[str, int] = field(default_factory=dict)
    clock: Optional[str] = None
    win_probability: Optional[Dict[str, float]] = None
    spread: Optional[Spread] = None
    events: List[GameEvent] = field(default_factory=list)
    teams: Dict[str, Dict] = field(default_factory=dict)
    start_time: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.status == STATUS_IN_PROGRESS

    @property
    def is_final(self) -> bool:
        return self.status == STATUS_FINAL

    @property
    def is_scheduled(self) -> bool:
        return self.status == STATUS_SCHEDULED

    @property
    def has_score(self) -> bool:
        return bool(self.score)

    def score_for(self, team: str) -> int:
        return self.score.get(team, 0)

    @property
    def home_score(self) -> int:
        return self.score_for(self.home)

    @property
    def away_score(self) -> int:
        return self.score_for(self.away)

    @property
    def margin(self) -> int:
        return abs(self.home_score - self.away_score)

    def team_name(self, team: str) -> str:
        """Display name for a team, falling back to its abbreviation"""
        info = self.teams.get(team)
        if isinstance(info, dict) and info.get('name'):
            return info['name']
        return team

    @classmethod
    def from_dict(cls, data: Dict, league: str = '') -> 'GameRecord':
        """
        Build a record from one feed entry.
        Raises ValueError when the entry cannot identify the game.
        """
        game_id = data.get('id')
        home = data.get('home')
        away = data.get('away')
        if game_id is None or not home or not away:
            raise ValueError(f"game entry missing id/home/away: {data!r:.120}")
        if home == away:
            raise ValueError(f"game {game_id} has identical home and away '{home}'")

        status = str(data.get('status') or '').lower()
        if status == STATUS_CLOSED:
            status = STATUS_FINAL

        raw_score = data.get('score') or {}
        score = {}
        if isinstance(raw_score, dict):
            score = {str(team): _to_int(value) for team, value in raw_score.items()}

        raw_prob = data.get('win_probability', data.get('winProbability'))
        win_probability = None
        if isinstance(raw_prob, dict):
            win_probability = {}
            for team, value in raw_prob.items():
                pct = _to_pct(value)
                if pct is not None:
                    win_probability[str(team)] = pct

        spread = None
        raw_spread = data.get('spread')
        if isinstance(raw_spread, dict) and raw_spread.get('favorite') is not None:
            spread = Spread(
                favorite=str(raw_spread['favorite']),
                over_under=raw_spread.get('overUnder')
            )

        events = []
        for raw_event in data.get('events') or []:
            if isinstance(raw_event, dict):
                events.append(GameEvent.from_dict(raw_event))

        clock = data.get('clock')
        teams = data.get('teams')
        return cls(
            id=str(game_id),
            league=data.get('league') or league,
            home=str(home),
            away=str(away),
            status=status,
            score=score,
            clock=str(clock) if clock else None,
            win_probability=win_probability,
            spread=spread,
            events=events,
            teams=teams if isinstance(teams, dict) else {},
            start_time=data.get('start_time')
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'league': self.league,
            'home': self.home,
            'away': self.away,
            'status': self.status,
            'score': dict(self.score),
            'clock': self.clock,
            'win_probability': self.win_probability,
            'spread': self.spread.to_dict() if self.spread else None,
            'events': [e.to_dict() for e in self.events],
            'teams': self.teams,
            'start_time': self.start_time
        }


@dataclass(frozen=True)
class ScoreSnapshot:
    """Score of both sides observed at one tick"""
    scores: Tuple[Tuple[str, int], ...]
    clock: Optional[str] = None

    def score_for(self, team: str) -> int:
        for abbr, value in self.scores:
            if abbr == team:
                return value
        return 0

    def same_score(self, other: 'ScoreSnapshot') -> bool:
        return dict(self.scores) == dict(other.scores)

    def to_dict(self) -> Dict:
        data = {abbr: value for abbr, value in self.scores}
        data['clock'] = self.clock
        return data


@dataclass
class GameSignals:
    """Per-game derived signals for one tick"""
    game_id: str
    momentum: Optional[str] = None
    score_delta: Optional[Dict[str, int]] = None
    upset_alert: bool = False
    tension: bool = False
    entertainment_rating: Optional[float] = None
    recap: Optional[str] = None
    history: Tuple[ScoreSnapshot, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'momentum': self.momentum,
            'score_delta': self.score_delta,
            'upset_alert': self.upset_alert,
            'tension': self.tension,
            'entertainment_rating': self.entertainment_rating,
            'recap': self.recap,
            'history': [s.to_dict() for s in self.history]
        }


@dataclass
class BestBet:
    """Cross-league pre-game pick"""
    game: GameRecord
    league: str
    favorite_percentage: Optional[float]
    tier: int
    favorite: Optional[str] = None
    edge_label: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'league': self.league,
            'game': self.game.to_dict(),
            'favorite_percentage': self.favorite_percentage,
            'favorite': self.favorite,
            'edge_label': self.edge_label,
            'tier': self.tier,
            'odds_available': self.favorite_percentage is not None
        }


@dataclass
class BestLiveGame:
    """Cross-league most exciting in-progress game"""
    game: GameRecord
    league: str
    excitement: float

    def to_dict(self) -> Dict:
        return {
            'league': self.league,
            'game': self.game.to_dict(),
            'excitement': self.excitement
        }


@dataclass
class DashboardSnapshot:
    """Everything derived from one completed tick"""
    timestamp: str
    available: bool
    games: Dict[str, List[GameRecord]]
    signals: Dict[str, GameSignals]
    best_bet: Optional[BestBet] = None
    best_live_game: Optional[BestLiveGame] = None
    failed_leagues: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def total_games(self) -> int:
        return sum(len(games) for games in self.games.values())

    def to_dict(self) -> Dict:
        leagues = {}
        for league, games in self.games.items():
            entries = []
            for game in games:
                entry = game.to_dict()
                signals = self.signals.get(game.id)
                entry['signals'] = signals.to_dict() if signals else None
                entries.append(entry)
            leagues[league] = entries

        return {
            'timestamp': self.timestamp,
            'available': self.available,
            'error': self.error,
            'failed_leagues': list(self.failed_leagues),
            'leagues': leagues,
            'total_games': self.total_games,
            'best_bet': self.best_bet.to_dict() if self.best_bet else None,
            'best_live_game': self.best_live_game.to_dict() if self.best_live_game else None
        }
