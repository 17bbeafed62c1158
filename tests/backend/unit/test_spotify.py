"""
Unit tests for services.spotify module.
Tests the caller-owned token cache and track lookup parsing.
"""
import time

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from app.services.spotify import (
    SpotifyError,
    SpotifyTokenCache,
    get_spotify_token,
    search_song_for_interview,
    search_track,
)

TRACK_BODY = {
    "tracks": {"items": [{
        "id": "abc123",
        "name": "Happy Birthday",
        "artists": [{"name": "Singer One"}, {"name": "Singer Two"}],
        "album": {"images": [{"url": "https://img/large.jpg"}, {"url": "https://img/small.jpg"}]},
        "preview_url": None,
        "uri": "spotify:track:abc123",
    }]}
}


def mock_http(method, status_code=200, body=None, side_effect=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body or {}
    mock_call = AsyncMock(return_value=resp, side_effect=side_effect)
    mock_client = AsyncMock()
    setattr(mock_client.__aenter__.return_value, method, mock_call)
    return mock_client, mock_call


class TestTokenCache:
    """Tests for token caching."""

    def test_empty_cache_is_invalid(self):
        assert SpotifyTokenCache().is_valid() is False

    def test_expired_token_is_invalid(self):
        cache = SpotifyTokenCache(token="t", expires_at=100.0)
        assert cache.is_valid(now=99.0) is True
        assert cache.is_valid(now=100.0) is False

    @pytest.mark.asyncio
    async def test_valid_cached_token_skips_request(self):
        cache = SpotifyTokenCache(token="cached", expires_at=time.time() + 600)
        with patch('httpx.AsyncClient') as mock_client_class:
            assert await get_spotify_token("id", "secret", cache) == "cached"
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetches_and_stores_token_with_margin(self):
        cache = SpotifyTokenCache()
        mock_client, mock_post = mock_http("post", body={"access_token": "fresh", "expires_in": 3600})
        with patch('httpx.AsyncClient', return_value=mock_client):
            before = time.time()
            token = await get_spotify_token("id", "secret", cache)

        assert token == "fresh"
        assert cache.token == "fresh"
        assert before + 3600 - 60 <= cache.expires_at <= time.time() + 3600 - 60
        assert mock_post.call_args[1]["headers"]["Authorization"].startswith("Basic ")
        assert mock_post.call_args[1]["data"] == {"grant_type": "client_credentials"}

    @pytest.mark.asyncio
    async def test_auth_failure_raises(self):
        mock_client, _ = mock_http("post", status_code=401)
        with patch('httpx.AsyncClient', return_value=mock_client):
            with pytest.raises(SpotifyError, match=r"Spotify auth failed \(401\)"):
                await get_spotify_token("id", "secret", SpotifyTokenCache())


class TestSearch:
    """Tests for track search."""

    @pytest.mark.asyncio
    async def test_search_track_parses_first_item(self):
        mock_client, mock_get = mock_http("get", body=TRACK_BODY)
        with patch('httpx.AsyncClient', return_value=mock_client):
            track = await search_track("happy birthday", "tok")

        assert track.to_dict() == {
            "trackId": "abc123",
            "trackName": "Happy Birthday",
            "artistName": "Singer One, Singer Two",
            "albumArt": "https://img/large.jpg",
            "previewUrl": None,
            "spotifyUri": "spotify:track:abc123",
        }
        assert mock_get.call_args[1]["params"] == {"q": "happy birthday", "type": "track", "limit": "1"}

    @pytest.mark.asyncio
    async def test_search_track_no_results(self):
        mock_client, _ = mock_http("get", body={"tracks": {"items": []}})
        with patch('httpx.AsyncClient', return_value=mock_client):
            assert await search_track("zzzz", "tok") is None

    @pytest.mark.asyncio
    async def test_interview_search_requires_text_and_credentials(self):
        cache = SpotifyTokenCache()
        assert await search_song_for_interview("", "id", "secret", cache) is None
        assert await search_song_for_interview("song", None, "secret", cache) is None

    @pytest.mark.asyncio
    async def test_interview_search_returns_none_on_failure(self):
        mock_client, _ = mock_http("post", side_effect=httpx.ConnectError("offline"))
        with patch('httpx.AsyncClient', return_value=mock_client):
            assert await search_song_for_interview("song", "id", "secret", SpotifyTokenCache()) is None

    @pytest.mark.asyncio
    async def test_interview_search_returns_none_on_non_json_token_response(self):
        mock_client, _ = mock_http("post")
        mock_client.__aenter__.return_value.post.return_value.json.side_effect = ValueError("not json")
        with patch('httpx.AsyncClient', return_value=mock_client):
            assert await search_song_for_interview("Let it go", "id", "secret", SpotifyTokenCache()) is None

    @pytest.mark.asyncio
    async def test_token_response_without_access_token_raises(self):
        cache = SpotifyTokenCache()
        mock_client, _ = mock_http("post", body={"token_type": "bearer"})
        with patch('httpx.AsyncClient', return_value=mock_client):
            with pytest.raises(SpotifyError, match="invalid token response"):
                await get_spotify_token("id", "secret", cache)

        assert cache.token is None

    @pytest.mark.asyncio
    async def test_search_track_invalid_body_raises(self):
        mock_client, _ = mock_http("get", body={"tracks": {"items": [{"name": "No id"}]}})
        with patch('httpx.AsyncClient', return_value=mock_client):
            with pytest.raises(SpotifyError, match="invalid response"):
                await search_track("song", "tok")
