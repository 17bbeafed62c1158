"""
OpenAI Whisper API Adapter

Uploads a recorded interview video to the Whisper transcription endpoint and
returns segment-level timestamps.
"""
import asyncio
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import unquote, urlparse

import httpx

from .asr_base import (
    ASRService,
    ASRServiceError,
    ASRTransportError,
    TranscriptSegment,
    VideoNotFoundError,
    VideoTooLargeError,
)
from ..config import settings

logger = logging.getLogger("uvicorn.error")


@dataclass
class VideoFileInfo:
    exists: bool
    size: int = 0


def resolve_video_path(video_uri: str) -> str:
    """Accept both plain paths and file:// URIs"""
    if video_uri.startswith("file://"):
        return unquote(urlparse(video_uri).path)
    return video_uri


def _stat_video(path: str) -> VideoFileInfo:
    if not os.path.isfile(path):
        return VideoFileInfo(exists=False)
    return VideoFileInfo(exists=True, size=os.path.getsize(path))


async def inspect_video(path: str) -> VideoFileInfo:
    """File metadata only (existence + byte size), read off the event loop"""
    return await asyncio.to_thread(_stat_video, path)


def _error_message(resp: httpx.Response) -> str:
    """Pull error.message out of a Whisper error body, else a generic status message"""
    try:
        body = resp.json()
    except ValueError:
        body = None
    err = body.get("error") if isinstance(body, dict) else None
    message = err.get("message") if isinstance(err, dict) else None
    return message or f"Whisper API error ({resp.status_code})"


class OpenAIWhisperService(ASRService):
    """OpenAI Whisper API Service"""

    def __init__(self):
        self.api_key = settings.openai_api_key
        self.api_url = settings.whisper_api_url
        self.model = settings.whisper_model
        self.timeout = settings.whisper_timeout_sec
        self.max_bytes = settings.max_video_bytes

    @property
    def name(self) -> str:
        return "OpenAI Whisper API"

    async def transcribe(
        self,
        video_uri: str,
        api_key: Optional[str] = None,
    ) -> List[TranscriptSegment]:
        """
        Call OpenAI Whisper API for transcription

        The file is checked (exists, within the size ceiling) before anything
        is uploaded. Uses verbose_json with segment granularity.
        """
        path = resolve_video_path(video_uri)
        info = await inspect_video(path)
        if not info.exists:
            raise VideoNotFoundError("Video file not found")
        if info.size > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise VideoTooLargeError(
                f"Video file exceeds {limit_mb}MB limit. Try recording a shorter interview.",
                limit_bytes=self.max_bytes,
            )

        key = api_key or self.api_key
        if not key:
            raise ASRServiceError(f"{self.name}: API key not configured")

        headers = {"Authorization": f"Bearer {key}"}
        data = {
            "model": self.model,
            "response_format": "verbose_json",
            "timestamp_granularities": "segment",
        }
        mime = mimetypes.guess_type(path)[0] or "video/mp4"

        logger.info("[asr] uploading %s (%d bytes) to %s", path, info.size, self.api_url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                with open(path, "rb") as f:
                    files = {"file": (os.path.basename(path), f, mime)}
                    resp = await client.post(self.api_url, headers=headers, data=data, files=files)
        except httpx.TimeoutException as e:
            raise ASRTransportError(f"Whisper API request timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise ASRTransportError(f"Whisper API request failed: {e}") from e

        if resp.status_code != 200:
            raise ASRServiceError(_error_message(resp), status_code=resp.status_code)

        try:
            result = resp.json()
        except ValueError as e:
            raise ASRServiceError("Whisper API returned an invalid response", status_code=resp.status_code) from e

        raw_segments = result.get("segments") or []
        segments = [TranscriptSegment.from_dict(seg) for seg in raw_segments]
        logger.info("[asr] received %d segments", len(segments))
        return segments


# Global singleton
openai_whisper_service = OpenAIWhisperService()


async def transcribe_video(video_uri: str, api_key: Optional[str] = None) -> List[TranscriptSegment]:
    """Convenience function: transcribe with the shared Whisper service"""
    return await openai_whisper_service.transcribe(video_uri, api_key=api_key)
