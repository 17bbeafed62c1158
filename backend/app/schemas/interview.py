# app/schemas/interview.py
"""
Pydantic schemas for interview, transcription and answer endpoints.
"""
from pydantic import BaseModel, Field
from typing import Optional, List

class QuestionTimestampIn(BaseModel):
    """
    One "question shown" event captured while recording.
    """
    questionId: str  # Question catalog id (e.g., "q3")
    timestampMs: int = Field(ge=0)  # Milliseconds since recording start

class CreateInterviewIn(BaseModel):
    """
    Request model for registering a recorded interview.
    """
    childName: Optional[str] = None  # Display name of the child
    year: Optional[int] = None  # Birthday year (gallery grouping)
    age: Optional[int] = Field(default=None, ge=0)  # Child's age at the interview
    videoUri: Optional[str] = None  # Local path or file:// URI of the recording
    questionTimestamps: List[QuestionTimestampIn] = []  # Capture-ordered question log

class TranscribeIn(BaseModel):
    """
    Request model for starting (or retrying) a transcription run.
    """
    apiKey: Optional[str] = None  # OpenAI key; falls back to OPENAI_API_KEY

class AnswerEditIn(BaseModel):
    """
    Request model for a manual answer edit.
    """
    text: str

class SongSearchIn(BaseModel):
    """
    Request model for looking up a song named in an answer.
    """
    text: str
