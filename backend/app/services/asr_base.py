"""
ASR Service Abstract Interface

Shared types and error taxonomy for speech-to-text providers.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass


@dataclass
class TranscriptSegment:
    """
    Transcription segment (sentence/segment level)

    Note: Timestamps here are relative time (from video start), not Unix timestamps
    """
    text: str
    start_sec: float  # Relative time (seconds)
    end_sec: float

    @property
    def mid_sec(self) -> float:
        return (self.start_sec + self.end_sec) / 2

    @classmethod
    def from_dict(cls, raw: dict) -> "TranscriptSegment":
        """Build from Whisper's wire form {"start", "end", "text"}"""
        return cls(
            text=raw.get("text") or "",
            start_sec=float(raw.get("start", 0.0)),
            end_sec=float(raw.get("end", 0.0)),
        )

    def to_dict(self) -> dict:
        """Wire form, as persisted in TranscriptionStatus.rawSegments"""
        return {"start": self.start_sec, "end": self.end_sec, "text": self.text}

    def __repr__(self):
        return f"TranscriptSegment(text='{self.text[:30]}...', start={self.start_sec:.2f}s, end={self.end_sec:.2f}s)"


# ===== Errors =====

class TranscriptionError(Exception):
    """Base class for every failure raised by an ASR client"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class VideoNotFoundError(TranscriptionError):
    """The video file does not exist"""


class VideoTooLargeError(TranscriptionError):
    """The video file exceeds the upload ceiling"""

    def __init__(self, message: str, limit_bytes: int):
        super().__init__(message)
        self.limit_bytes = limit_bytes


class ASRServiceError(TranscriptionError):
    """Non-success response from the ASR service"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ASRTransportError(ASRServiceError):
    """Network-level failure (timeout, connection reset, DNS...)"""


class ASRService(ABC):
    """ASR Service Abstract Base Class"""

    @abstractmethod
    async def transcribe(
        self,
        video_uri: str,
        api_key: Optional[str] = None,
    ) -> List[TranscriptSegment]:
        """
        Transcribe a recorded video

        Parameters:
        - video_uri: Local path or file:// URI, uploaded as-is (no decoding)
        - api_key: Optional per-call key, falls back to configured key

        Returns:
        - Segments ordered by start time
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name (e.g., "OpenAI Whisper API")"""
        pass
