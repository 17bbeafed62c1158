"""
Spotify Song Lookup

Finds a track for a "favorite song" answer. Uses the client-credentials flow;
the access token is kept in a SpotifyTokenCache owned by the caller.
"""
import base64
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from app.config import settings

logger = logging.getLogger("uvicorn.error")

# Refresh a minute before Spotify's expiry
EXPIRY_MARGIN_SEC = 60


class SpotifyError(RuntimeError):
    pass


@dataclass
class SpotifyTokenCache:
    token: Optional[str] = None
    expires_at: float = 0.0  # Unix time (seconds)

    def is_valid(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return bool(self.token) and now < self.expires_at


@dataclass
class TrackInfo:
    track_id: str
    track_name: str
    artist_name: str
    album_art: Optional[str]
    preview_url: Optional[str]
    spotify_uri: str

    def to_dict(self) -> dict:
        return {
            "trackId": self.track_id,
            "trackName": self.track_name,
            "artistName": self.artist_name,
            "albumArt": self.album_art,
            "previewUrl": self.preview_url,
            "spotifyUri": self.spotify_uri,
        }


async def get_spotify_token(client_id: str, client_secret: str, cache: SpotifyTokenCache) -> str:
    """Return the cached token while it is valid, otherwise fetch and cache a new one"""
    if cache.is_valid():
        return cache.token

    credentials = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
    headers = {
        "Authorization": f"Basic {credentials}",
        "Content-Type": "application/x-www-form-urlencoded",
    }
    async with httpx.AsyncClient(timeout=30) as client:
        resp = await client.post(
            settings.spotify_accounts_url,
            headers=headers,
            data={"grant_type": "client_credentials"},
        )
    if resp.status_code >= 300:
        raise SpotifyError(f"Spotify auth failed ({resp.status_code})")

    try:
        data = resp.json()
        token = data["access_token"]
        expires_in = float(data.get("expires_in", 3600))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise SpotifyError(f"Spotify auth returned an invalid token response: {e!r}") from e

    cache.token = token
    cache.expires_at = time.time() + expires_in - EXPIRY_MARGIN_SEC
    return cache.token


async def search_track(query: str, token: str) -> Optional[TrackInfo]:
    """First track matching `query`, or None"""
    params = {"q": query, "type": "track", "limit": "1"}
    async with httpx.AsyncClient(timeout=30) as client:
        resp = await client.get(
            f"{settings.spotify_api_base}/search",
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
    if resp.status_code >= 300:
        raise SpotifyError(f"Spotify search failed ({resp.status_code})")

    try:
        items = ((resp.json().get("tracks") or {}).get("items")) or []
        if not items:
            return None

        track = items[0]
        images = (track.get("album") or {}).get("images") or []
        return TrackInfo(
            track_id=track["id"],
            track_name=track["name"],
            artist_name=", ".join(a["name"] for a in track.get("artists", [])),
            album_art=images[0].get("url") if images else None,
            preview_url=track.get("preview_url") or None,
            spotify_uri=track["uri"],
        )
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise SpotifyError(f"Spotify search returned an invalid response: {e!r}") from e


async def search_song_for_interview(
    answer_text: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    cache: SpotifyTokenCache,
) -> Optional[TrackInfo]:
    """
    Look up the song named in an answer

    Display helper: returns None when there is nothing to search with, and
    logs and returns None when Spotify fails.
    """
    if not answer_text or not client_id or not client_secret:
        return None

    try:
        token = await get_spotify_token(client_id, client_secret, cache)
        return await search_track(answer_text, token)
    except (SpotifyError, httpx.HTTPError) as e:
        logger.warning("[spotify] search failed: %s", e)
        return None
