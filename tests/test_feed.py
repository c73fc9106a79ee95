import pytest
import requests

from services.feed import FeedClient, FeedError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


@pytest.fixture
def client():
    return FeedClient(base_url="http://feed.test/api/", timeout=3)


def test_get_games_requests_league(client, monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params, timeout))
        return FakeResponse(payload=[{"id": "G1"}])

    monkeypatch.setattr(client.session, "get", fake_get)

    assert client.get_games("nba") == [{"id": "G1"}]
    assert calls == [("http://feed.test/api/games", {"league": "nba"}, 3)]


def test_transport_error(client, monkeypatch):
    def fake_get(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(client.session, "get", fake_get)
    with pytest.raises(FeedError, match="nba"):
        client.get_games("nba")


@pytest.mark.parametrize("response", [
    FakeResponse(status_code=502),
    FakeResponse(invalid_json=True),
    FakeResponse(payload={"error": "nope"}),
])
def test_bad_responses(client, monkeypatch, response):
    monkeypatch.setattr(client.session, "get", lambda *args, **kwargs: response)
    with pytest.raises(FeedError):
        client.get_games("nhl")
