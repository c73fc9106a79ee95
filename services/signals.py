"""
Per-game signals derived from a game record and its score history.

Every function here is pure: it reads only its arguments (plus the static
league configuration) and never mutates the history it is given.
"""

from typing import Dict, Mapping, Optional, Sequence

from config import Config
from models import GameRecord, GameSignals, ScoreSnapshot
from .recap import generate_recap
from .sports import League, get_league


def _last_two(history: Sequence[ScoreSnapshot]):
    if not history or len(history) < 2:
        return None
    return history[-2], history[-1]


def get_momentum(history: Sequence[ScoreSnapshot], home: str, away: str) -> Optional[str]:
    """
    Team currently on a run: the only side whose score went up between the
    last two snapshots. None when both or neither scored.
    """
    pair = _last_two(history)
    if pair is None:
        return None
    prev, curr = pair

    home_scored = curr.score_for(home) > prev.score_for(home)
    away_scored = curr.score_for(away) > prev.score_for(away)
    if home_scored and not away_scored:
        return home
    if away_scored and not home_scored:
        return away
    return None


def get_score_delta(history: Sequence[ScoreSnapshot], home: str, away: str) -> Optional[Dict[str, int]]:
    """Non-zero per-team score changes between the last two snapshots"""
    pair = _last_two(history)
    if pair is None:
        return None
    prev, curr = pair

    delta = {}
    for team in (home, away):
        change = curr.score_for(team) - prev.score_for(team)
        if change != 0:
            delta[team] = change
    return delta or None


def is_upset_alert(win_probability: Optional[Mapping[str, float]], home: str, away: str) -> bool:
    """
    Toss-up flag. A missing side counts as DEFAULT_WIN_PCT, so a model that
    only reports one team reads as "close to even" for the other, and an
    empty mapping reads as 50/50. Only a missing mapping (None) is no alert.
    """
    if win_probability is None:
        return False
    home_pct = win_probability.get(home, Config.DEFAULT_WIN_PCT)
    away_pct = win_probability.get(away, Config.DEFAULT_WIN_PCT)
    return abs(home_pct - away_pct) <= Config.UPSET_ALERT_MAX_GAP


def is_tension(game: GameRecord, league: Optional[League] = None) -> bool:
    """Close-and-late flag for a live game"""
    if not game.is_live or not game.has_score:
        return False
    league = league or get_league(game.league)
    if not league.sport.is_late(game.clock):
        return False
    return game.margin <= league.tension_margin


def count_lead_changes(history: Sequence[ScoreSnapshot], home: str, away: str) -> int:
    """Times the leading side flipped along the ring; ties keep the last leader"""
    changes = 0
    leader = None
    for snapshot in history:
        home_score = snapshot.score_for(home)
        away_score = snapshot.score_for(away)
        if home_score == away_score:
            continue
        current = home if home_score > away_score else away
        if leader is not None and current != leader:
            changes += 1
        leader = current
    return changes


def get_entertainment_rating(game: GameRecord, history: Sequence[ScoreSnapshot],
                             league: Optional[League] = None) -> Optional[float]:
    """1-10 watchability score for a finished game"""
    if not game.is_final:
        return None
    league = league or get_league(game.league)
    sport = league.sport

    rating = Config.RATING_BASELINE
    rating += sport.margin_bonus(game.margin)

    lead_changes = count_lead_changes(history or (), game.home, game.away)
    rating += min(lead_changes * Config.RATING_LEAD_CHANGE_BONUS, Config.RATING_LEAD_CHANGE_CAP)

    if sport.is_overtime(game.clock):
        rating += Config.RATING_OVERTIME_BONUS

    rating = max(Config.RATING_MIN, min(Config.RATING_MAX, rating))
    return round(rating, 1)


def compute_game_signals(game: GameRecord, history: Sequence[ScoreSnapshot],
                         league: Optional[League] = None) -> GameSignals:
    """Bundle every per-game signal for one tick"""
    league = league or get_league(game.league)
    history = tuple(history or ())

    signals = GameSignals(
        game_id=game.id,
        upset_alert=is_upset_alert(game.win_probability, game.home, game.away),
        history=history
    )
    if game.is_live:
        signals.momentum = get_momentum(history, game.home, game.away)
        signals.score_delta = get_score_delta(history, game.home, game.away)
        signals.tension = is_tension(game, league)
    elif game.is_final:
        signals.entertainment_rating = get_entertainment_rating(game, history, league)
        signals.recap = generate_recap(game, league)
    return signals
