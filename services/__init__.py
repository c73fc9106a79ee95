"""
Services package for the analytics core
"""

from .feed import FeedClient, FeedError
from .history import ScoreHistory
from .rankers import find_best_bet, find_best_live_game
from .recap import generate_recap
from .signals import (
    compute_game_signals,
    get_entertainment_rating,
    get_momentum,
    get_score_delta,
    is_tension,
    is_upset_alert,
)
from .sports import League, LEAGUES, Sport, get_league
from .tracker import DashboardTracker, derive_snapshot

__all__ = [
    'FeedClient',
    'FeedError',
    'ScoreHistory',
    'find_best_bet',
    'find_best_live_game',
    'generate_recap',
    'compute_game_signals',
    'get_entertainment_rating',
    'get_momentum',
    'get_score_delta',
    'is_tension',
    'is_upset_alert',
    'League',
    'LEAGUES',
    'Sport',
    'get_league',
    'DashboardTracker',
    'derive_snapshot'
]
