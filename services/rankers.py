"""
Cross-league rankers: Best Bet (pre-game) and Best Live Game.

Both scan leagues in an explicit, configured order and keep the first game
encountered on ties, so the pick only changes when a score strictly beats
the current one.
"""

import re
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from config import Config
from models import BestBet, BestLiveGame, GameRecord, ScoreSnapshot
from .signals import is_tension
from .sports import get_league

_NUMBER_PATTERN = re.compile(r'[-+]?\d+(?:\.\d+)?|[-+]?\.\d+')


def iter_games(all_games: Mapping[str, Sequence[GameRecord]],
               league_order: Optional[Sequence[str]] = None) -> Iterator[Tuple[str, GameRecord]]:
    """
    Yield (league, game) pairs: configured leagues first in configured order,
    then any other league in mapping order; games in feed order.
    """
    if league_order is None:
        league_order = Config.LEAGUE_ORDER
    ordered = [league for league in league_order if league in all_games]
    ordered += [league for league in all_games if league not in ordered]
    for league in ordered:
        for game in all_games[league] or []:
            yield league, game


def parse_spread_magnitude(favorite: Optional[str]) -> float:
    """Absolute value of the first number in a spread string, 0.0 if none"""
    if not favorite:
        return 0.0
    match = _NUMBER_PATTERN.search(favorite)
    if not match:
        return 0.0
    try:
        return abs(float(match.group(0)))
    except ValueError:
        return 0.0


def edge_label(favorite_percentage: Optional[float]) -> Optional[str]:
    """Wording for how strongly the favourite is favoured"""
    if favorite_percentage is None:
        return None
    if favorite_percentage >= 75:
        return "Strong Lean"
    if favorite_percentage >= 62:
        return "Moderate Lean"
    if favorite_percentage >= 52:
        return "Slight Lean"
    return "Toss-Up"


def _best_by_probability(games: List[Tuple[str, GameRecord]]) -> Optional[BestBet]:
    best = None
    best_skew = 0
    for league, game in games:
        if game.win_probability is None:
            continue
        home_pct = game.win_probability.get(game.home, Config.DEFAULT_WIN_PCT)
        away_pct = game.win_probability.get(game.away, Config.DEFAULT_WIN_PCT)
        skew = abs(home_pct - away_pct)
        if skew > best_skew:
            favorite_pct = max(home_pct, away_pct)
            best = BestBet(
                game=game,
                league=league,
                favorite_percentage=favorite_pct,
                tier=1,
                favorite=game.home if home_pct >= away_pct else game.away,
                edge_label=edge_label(favorite_pct)
            )
            best_skew = skew
    return best


def _best_by_spread(games: List[Tuple[str, GameRecord]]) -> Optional[BestBet]:
    best = None
    best_magnitude = 0.0
    for league, game in games:
        if game.spread is None:
            continue
        magnitude = parse_spread_magnitude(game.spread.favorite)
        if magnitude > best_magnitude:
            best = BestBet(game=game, league=league, favorite_percentage=None, tier=2)
            best_magnitude = magnitude
    return best


def find_best_bet(all_games: Mapping[str, Sequence[GameRecord]],
                  league_order: Optional[Sequence[str]] = None) -> Optional[BestBet]:
    """
    Pick the most lopsided scheduled game across every league.

    Tier 1 uses win probabilities, tier 2 the spread, tier 3 simply the first
    scheduled game. A tier only picks a game whose skew or spread is above
    zero, so even matchups and "PK" lines fall through to the next tier.
    A None favorite_percentage means no odds are available.
    """
    scheduled = [(league, game) for league, game in iter_games(all_games, league_order)
                 if game.is_scheduled]
    if not scheduled:
        return None

    best = _best_by_probability(scheduled) or _best_by_spread(scheduled)
    if best:
        return best

    league, game = scheduled[0]
    return BestBet(game=game, league=league, favorite_percentage=None, tier=3)


def excitement_score(game: GameRecord, history: Sequence[ScoreSnapshot],
                     league: Optional[str] = None) -> float:
    """Close margin, live tension and recent scoring activity, added up"""
    score = max(0.0, Config.EXCITEMENT_BASE - game.margin * Config.EXCITEMENT_MARGIN_WEIGHT)
    if is_tension(game, get_league(game.league or league)):
        score += Config.EXCITEMENT_TENSION_BONUS
    score += min(len(history or ()), Config.EXCITEMENT_HISTORY_CAP)
    return score


def find_best_live_game(all_games: Mapping[str, Sequence[GameRecord]],
                        history: Mapping[str, Sequence[ScoreSnapshot]],
                        league_order: Optional[Sequence[str]] = None) -> Optional[BestLiveGame]:
    """Most exciting in-progress game across every league"""
    best = None
    for league, game in iter_games(all_games, league_order):
        if not game.is_live:
            continue
        score = excitement_score(game, history.get(game.id, ()), league)
        if best is None or score > best.excitement:
            best = BestLiveGame(game=game, league=league, excitement=score)
    return best
