import pytest

from conftest import make_game, snap
from services.rankers import (
    edge_label,
    excitement_score,
    find_best_bet,
    find_best_live_game,
    iter_games,
    parse_spread_magnitude,
)


def scheduled(game_id, league="NBA", home="A", away="B", **extra):
    return make_game(game_id=game_id, league=league, home=home, away=away, status="scheduled", **extra)


def live(game_id, score, clock, league="NBA", home="H", away="A"):
    return make_game(game_id=game_id, league=league, home=home, away=away, score=score, clock=clock)


class TestIterGames:
    def test_configured_order_then_extras(self):
        all_games = {
            "XFL": [scheduled("x1", league="XFL")],
            "NHL": [scheduled("h1", league="NHL")],
            "NBA": [scheduled("b1"), scheduled("b2")],
        }
        order = [game.id for _, game in iter_games(all_games)]
        assert order == ["b1", "b2", "h1", "x1"]

    def test_explicit_order(self):
        all_games = {"NBA": [scheduled("b1")], "NHL": [scheduled("h1", league="NHL")]}
        order = [league for league, _ in iter_games(all_games, ["NHL", "NBA"])]
        assert order == ["NHL", "NBA"]


class TestSpreadParsing:
    @pytest.mark.parametrize("text, expected", [
        ("A -14", 14.0),
        ("LAL -7.5", 7.5),
        ("BOS +3", 3.0),
        ("KC 6", 6.0),
        ("-.5 HOU", 0.5),
        ("PK", 0.0),
        ("", 0.0),
        (None, 0.0),
    ])
    def test_magnitude(self, text, expected):
        assert parse_spread_magnitude(text) == expected


class TestEdgeLabel:
    def test_bands(self):
        assert edge_label(80) == "Strong Lean"
        assert edge_label(75) == "Strong Lean"
        assert edge_label(70) == "Moderate Lean"
        assert edge_label(55) == "Slight Lean"
        assert edge_label(50) == "Toss-Up"
        assert edge_label(None) is None


class TestBestBet:
    def test_probability_tier_beats_spread_only_game(self):
        spread_only = scheduled("spread", spread={"favorite": "A -14"})
        with_prob = scheduled("prob", league="NHL", win_probability={"A": 70, "B": 30})

        best = find_best_bet({"NBA": [spread_only], "NHL": [with_prob]})

        assert best.game.id == "prob"
        assert best.league == "NHL"
        assert best.favorite_percentage == 70
        assert best.favorite == "A"
        assert best.tier == 1
        assert best.edge_label == "Moderate Lean"

    def test_greatest_skew_wins(self):
        games = {
            "NBA": [scheduled("g1", win_probability={"A": 60, "B": 40})],
            "NFL": [scheduled("g2", league="NFL", win_probability={"A": 20, "B": 80})],
        }
        best = find_best_bet(games)
        assert best.game.id == "g2"
        assert best.favorite == "B"
        assert best.favorite_percentage == 80

    def test_ties_keep_first_in_league_order(self):
        games = {
            "NFL": [scheduled("nfl", league="NFL", win_probability={"A": 75, "B": 25})],
            "NBA": [scheduled("nba", win_probability={"A": 25, "B": 75})],
        }
        assert find_best_bet(games).game.id == "nba"

    def test_missing_side_defaults_to_fifty(self):
        games = {"NBA": [
            scheduled("g1", win_probability={"A": 62}),
            scheduled("g2", win_probability={"A": 58, "B": 40}),
        ]}
        best = find_best_bet(games)
        # g1 skew 12, g2 skew 18
        assert best.game.id == "g2"

    def test_spread_tier(self):
        games = {"NBA": [
            scheduled("g1", spread={"favorite": "BOS -3.5"}),
            scheduled("g2", spread={"favorite": "LAL -7", "overUnder": "221.5"}),
            scheduled("g3", spread={"favorite": "PK"}),
            scheduled("g4"),
        ]}
        best = find_best_bet(games)
        assert best.game.id == "g2"
        assert best.tier == 2
        assert best.favorite_percentage is None
        assert best.edge_label is None

    def test_unparsable_spread_falls_through_to_first_scheduled(self):
        games = {"NBA": [
            scheduled("plain"),
            scheduled("pk", spread={"favorite": "PK"}),
            scheduled("g2", spread={"favorite": "even"}),
        ]}
        best = find_best_bet(games)
        assert best.game.id == "plain"
        assert best.tier == 3

    def test_even_matchup_falls_through_to_spread(self):
        games = {"NBA": [
            scheduled("even", win_probability={"A": 50, "B": 50}),
            scheduled("spread", spread={"favorite": "A -14"}),
        ]}
        best = find_best_bet(games)
        assert best.game.id == "spread"
        assert best.tier == 2

    def test_empty_probability_reads_as_even(self):
        games = {"NBA": [
            scheduled("empty", win_probability={}),
            scheduled("g2"),
        ]}
        best = find_best_bet(games)
        assert best.game.id == "empty"
        assert best.tier == 3

    def test_first_scheduled_fallback(self):
        games = {
            "NHL": [scheduled("h1", league="NHL")],
            "NBA": [make_game(game_id="live1", status="in_progress"), scheduled("b1")],
        }
        best = find_best_bet(games)
        assert best.game.id == "b1"
        assert best.tier == 3
        assert best.favorite_percentage is None
        assert best.to_dict()["odds_available"] is False

    def test_only_scheduled_games_count(self):
        games = {"NBA": [
            make_game(game_id="live", status="in_progress", win_probability={"H": 99, "A": 1}),
            make_game(game_id="done", status="final", win_probability={"H": 95, "A": 5}),
        ]}
        assert find_best_bet(games) is None

    def test_empty(self):
        assert find_best_bet({}) is None


class TestBestLiveGame:
    def test_excitement_formula(self):
        game = live("g1", {"H": 100, "A": 98}, "Q4 1:00")
        # 15 - 2 * 1.5 = 12, +8 tension, +3 history
        assert excitement_score(game, (snap(1, 0), snap(2, 0), snap(3, 0))) == 23

    def test_history_bonus_is_capped(self):
        game = live("g1", {"H": 50, "A": 40}, "Q2 1:00")
        history = tuple(snap(i, 0) for i in range(8))
        assert excitement_score(game, history) == 5

    def test_margin_term_never_negative(self):
        game = live("g1", {"H": 120, "A": 80}, "Q3 1:00")
        assert excitement_score(game, ()) == 0

    def test_close_late_game_wins(self):
        blowout = live("blowout", {"H": 60, "A": 50}, "Q2 3:00")
        close = live("close", {"H": 99, "A": 97}, "Q4 2:00")
        history = {
            "blowout": (snap(1, 0), snap(2, 0), snap(3, 0)),
            "close": (snap(97, 97),),
        }
        best = find_best_live_game({"NBA": [blowout, close]}, history)
        assert best.game.id == "close"
        assert best.excitement == 21

    def test_ties_keep_first_encountered(self):
        nhl = live("nhl", {"H": 1, "A": 1}, "2nd 5:00", league="NHL")
        nba = live("nba", {"H": 50, "A": 50}, "Q2 5:00")
        best = find_best_live_game({"NHL": [nhl], "NBA": [nba]}, {})
        assert best.game.id == "nba"
        assert best.league == "NBA"

    def test_only_live_games(self):
        games = {"NBA": [
            make_game(game_id="s", status="scheduled"),
            make_game(game_id="f", status="final", score={"H": 1, "A": 1}),
        ]}
        assert find_best_live_game(games, {}) is None
