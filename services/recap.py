"""
One-sentence recap for finished games
"""

from typing import Optional

from models import GameRecord
from .sports import League, get_league


def _last_scorer(game: GameRecord, winner_is_home: bool) -> Optional[str]:
    """
    Player behind the winning side's last goal, own goals excluded.
    None when that goal carries no player.
    """
    for event in reversed(game.events):
        if event.is_home != winner_is_home:
            continue
        if not event.is_goal or event.is_own_goal:
            continue
        return event.player_name
    return None


def generate_recap(game: GameRecord, league: Optional[League] = None) -> Optional[str]:
    """
    Summarise a final, e.g. "Celtics edged Knicks 102-99 in overtime."

    Returns None for games that are not final, and for finals where both
    scores are zero: the feed reports 0-0 for finals it has no data for, so
    such a game is treated as "nothing to say yet" rather than a scoreless
    result.
    """
    if not game.is_final:
        return None
    home_score = game.home_score
    away_score = game.away_score
    if home_score == 0 and away_score == 0:
        return None

    league = league or get_league(game.league)
    sport = league.sport

    home_wins = home_score >= away_score
    winner, loser = (game.home, game.away) if home_wins else (game.away, game.home)
    winner_score, loser_score = max(home_score, away_score), min(home_score, away_score)
    margin = winner_score - loser_score
    verb = sport.result_verb(margin)

    overtime = sport.overtime_phrase(game.clock)
    overtime_clause = f" {overtime}" if overtime else ""

    if margin == 0:
        return (f"{game.team_name(game.home)} and {game.team_name(game.away)} "
                f"{verb} {home_score}-{away_score}{overtime_clause}.")

    scorer_clause = ""
    if league.is_soccer and game.events and margin <= 2:
        scorer = _last_scorer(game, home_wins)
        if scorer:
            scorer_clause = f", with {scorer} scoring the last goal for {game.team_name(winner)}"

    return (f"{game.team_name(winner)} {verb} {game.team_name(loser)} "
            f"{winner_score}-{loser_score}{overtime_clause}{scorer_clause}.")
