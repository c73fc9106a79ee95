"""
Flask REST API exposing the live league dashboard signals
"""

from flask import Flask, jsonify
from flask_cors import CORS
from datetime import datetime, timezone
import threading

from config import Config
from services import DashboardTracker
from logger import log

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes

# Initialize services
try:
    tracker = DashboardTracker()
except Exception as e:
    log(f"Service initialization failed: {e}", 'WARNING')
    tracker = None

# Last completed tick, served to every client
games_cache = {
    'data': None,
    'last_updated': None
}

_stop_event = threading.Event()


def cache_snapshot(snapshot):
    """Store a completed tick for the API routes"""
    games_cache['data'] = snapshot.to_dict()
    games_cache['last_updated'] = datetime.now(timezone.utc)
    log(f"Cache updated. Games: {snapshot.total_games}, available: {snapshot.available}")


def fetch_and_cache_data():
    """Run one poll tick and cache its snapshot"""
    if tracker is None:
        return

    try:
        log("Fetching league snapshots...")
        snapshot = tracker.poll()
        if snapshot is not None:
            cache_snapshot(snapshot)
    except Exception as e:
        # Don't crash - keep serving the previous snapshot
        log(f"Failed to fetch data: {e}", 'ERROR')


def should_refresh_cache() -> bool:
    """Check if cache should be refreshed"""
    if games_cache['data'] is None or games_cache['last_updated'] is None:
        return True

    age = (datetime.now(timezone.utc) - games_cache['last_updated']).total_seconds()
    return age >= Config.REFRESH_INTERVAL


def start_background_polling() -> threading.Thread:
    """Refresh the cache every REFRESH_INTERVAL seconds on a daemon thread"""
    _stop_event.clear()
    thread = threading.Thread(
        target=tracker.run_forever,
        args=(_stop_event, Config.REFRESH_INTERVAL),
        kwargs={'on_tick': cache_snapshot},
        daemon=True,
        name="dashboard-poller"
    )
    thread.start()
    return thread


def stop_background_polling():
    _stop_event.set()


@app.route('/api/refresh', methods=['GET', 'POST'])
def refresh_cache():
    """
    GET/POST /api/refresh

    Force a poll tick. Dropped if a tick is already running.
    """
    fetch_and_cache_data()
    data = games_cache['data']
    return jsonify({
        'status': 'refreshed',
        'available': data.get('available', False) if data else False,
        'games': data.get('total_games', 0) if data else 0,
        'timestamp': games_cache['last_updated'].isoformat() if games_cache['last_updated'] else None
    }), 200


@app.route('/api/dashboard', methods=['GET'])
def get_dashboard():
    """
    GET /api/dashboard

    Returns the cached dashboard snapshot. Refreshes if older than one poll interval.
    """
    if should_refresh_cache():
        fetch_and_cache_data()

    if games_cache['data'] is None:
        return jsonify({
            'error': 'Data not yet available',
            'message': 'Server is fetching initial data, please retry in a few seconds'
        }), 503

    response_data = games_cache['data'].copy()
    response_data['cached_at'] = games_cache['last_updated'].isoformat() if games_cache['last_updated'] else None
    return jsonify(response_data), 200


@app.route('/api/games/<game_id>/history', methods=['GET'])
def get_game_history(game_id):
    """
    GET /api/games/<game_id>/history

    Score history ring for one game, oldest first, as of the last
    published tick.
    """
    history = ()
    latest = tracker.latest if tracker else None
    if latest and game_id in latest.signals:
        history = latest.signals[game_id].history
    return jsonify({
        'game_id': game_id,
        'history': [snapshot.to_dict() for snapshot in history]
    }), 200


@app.route('/api/health', methods=['GET'])
def health_check():
    """
    GET /api/health
    """
    cache_age = None
    if games_cache['last_updated']:
        cache_age = (datetime.now(timezone.utc) - games_cache['last_updated']).total_seconds()

    data = games_cache['data']
    return jsonify({
        'status': 'healthy',
        'cache_status': 'populated' if data else 'empty',
        'feed_available': data.get('available') if data else None,
        'cache_age_seconds': cache_age,
        'is_fetching': tracker.is_polling if tracker else False
    }), 200


if __name__ == '__main__':
    print("=" * 80)
    print("Live League Dashboard")
    print("=" * 80)
    print(f"\nStarting server on {Config.FLASK_HOST}:{Config.FLASK_PORT}")
    print(f"Polling {Config.API_BASE} every {Config.REFRESH_INTERVAL}s")
    print("\nAPI Endpoints:")
    print(f"  - GET  http://localhost:{Config.FLASK_PORT}/api/health")
    print(f"  - GET  http://localhost:{Config.FLASK_PORT}/api/dashboard")
    print(f"  - GET  http://localhost:{Config.FLASK_PORT}/api/games/<game_id>/history")
    print("\nPress Ctrl+C to stop")
    print("=" * 80 + "\n")

    start_background_polling()
    app.run(
        host=Config.FLASK_HOST,
        port=Config.FLASK_PORT,
        debug=Config.FLASK_DEBUG
    )
