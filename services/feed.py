"""
Game feed API client
"""

import requests
from typing import List, Dict, Optional

from config import Config


class FeedError(Exception):
    """A league's snapshot could not be fetched or decoded"""


class FeedClient:
    """Handles all API interactions with the game feed backend"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or Config.API_BASE).rstrip('/')
        self.timeout = timeout if timeout is not None else Config.API_TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

    def get_games(self, league_slug: str) -> List[Dict]:
        """
        Fetch the current snapshot array for one league.
        Raises FeedError on transport errors, bad status or a non-list body.
        """
        try:
            response = self.session.get(
                f"{self.base_url}/games",
                params={'league': league_slug},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise FeedError(f"Request for league '{league_slug}' failed: {e}") from e

        if response.status_code != 200:
            raise FeedError(f"Feed returned status {response.status_code} for league '{league_slug}'")

        try:
            games = response.json()
        except ValueError as e:
            raise FeedError(f"Feed returned invalid JSON for league '{league_slug}': {e}") from e

        if not isinstance(games, list):
            raise FeedError(f"Feed returned {type(games).__name__} instead of a list for league '{league_slug}'")

        return games
