# app/api/v1/routers/songs.py
from fastapi import APIRouter, HTTPException, status
from app.config import settings
from app.schemas.interview import SongSearchIn
from app.services.spotify import SpotifyTokenCache, search_song_for_interview

router = APIRouter(prefix="/songs", tags=["songs"])

# Token cache owned by this router, shared by its requests
_token_cache = SpotifyTokenCache()

@router.post("/search")
async def search_song(body: SongSearchIn):
    """
    Look up the song named in a "favorite song" answer.

    Returns:
        dict: {"success": True, "data": track or None}
              None when Spotify is not configured or finds nothing.

    Raises:
        HTTPException (400): If text is empty
    """
    text = (body.text or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text cannot be empty")

    track = await search_song_for_interview(
        text,
        settings.spotify_client_id,
        settings.spotify_client_secret,
        _token_cache,
    )
    return {"success": True, "data": track.to_dict() if track else None}
