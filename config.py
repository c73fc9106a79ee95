"""
Application configuration
"""
import os


class Config:
    """Application configuration"""
    # Feed backend (one snapshot array per league)
    API_BASE = os.environ.get('API_URL', 'http://localhost:3001/api')
    API_TIMEOUT = 10
    MAX_FETCH_WORKERS = 5

    # Poll cycle
    REFRESH_INTERVAL = int(os.environ.get('REFRESH_INTERVAL', 30))  # seconds

    # Tracked leagues, display name -> feed slug.
    # Insertion order is the league enumeration order used for tie-breaks.
    LEAGUE_SLUGS = {
        'NBA': 'nba',
        'NFL': 'nfl',
        'NHL': 'nhl',
        'MLS': 'mls',
        'Champions League': 'ucl',
    }
    LEAGUE_ORDER = list(LEAGUE_SLUGS)

    # Sport family per league (keys of services.sports.SPORTS)
    LEAGUE_SPORTS = {
        'NBA': 'basketball',
        'NFL': 'football',
        'NHL': 'hockey',
        'MLS': 'soccer',
        'Champions League': 'soccer',
    }

    # History ring
    HISTORY_SIZE = 10

    # Upset alert
    DEFAULT_WIN_PCT = 50  # missing side of a win probability counts as a toss-up
    UPSET_ALERT_MAX_GAP = 15

    # Tension: "close" means margin <= threshold once the game is late
    TENSION_MARGINS = {
        'NBA': 8,
        'NFL': 8,
        'NHL': 1,
        'MLS': 1,
        'Champions League': 1,
    }
    DEFAULT_TENSION_MARGIN = 5
    SOCCER_LATE_MINUTE = 70

    # Entertainment rating
    RATING_BASELINE = 5.0
    RATING_LEAD_CHANGE_BONUS = 0.5
    RATING_LEAD_CHANGE_CAP = 2.0
    RATING_OVERTIME_BONUS = 1.5
    RATING_MIN = 1.0
    RATING_MAX = 10.0

    # Best live game excitement weights
    EXCITEMENT_BASE = 15
    EXCITEMENT_MARGIN_WEIGHT = 1.5
    EXCITEMENT_TENSION_BONUS = 8
    EXCITEMENT_HISTORY_CAP = 5

    # Logging
    LOG_FILE = os.environ.get('LOG_FILE', 'logs.txt')

    # Flask config
    FLASK_HOST = '0.0.0.0'
    FLASK_PORT = int(os.environ.get('PORT', 5001))
    FLASK_DEBUG = False
