# app/models/interview.py
"""
Database model for birthday interviews.
An interview holds the recorded video reference, the log of when each question
was shown during recording, the transcription pipeline status, and the answers
keyed by question id.
"""
import uuid
from tortoise import fields, models


def pending_transcription() -> dict:
    """Initial transcription status for a freshly recorded interview."""
    return {"status": "pending", "rawSegments": None, "error": None, "completedAt": None}


class Interview(models.Model):
    """
    Interview database model.

    `transcription` and `answers` are JSON documents that the transcription
    pipeline and manual edits patch independently of each other.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique interview identifier
    child_name = fields.CharField(max_length=128, null=True)  # Display name of the interviewed child
    year = fields.IntField(null=True)  # Birthday year the interview belongs to (gallery grouping)
    age = fields.IntField(null=True)  # Child's age at the time of the interview
    video_uri = fields.CharField(max_length=1024, null=True)  # Local path or file:// URI of the recording

    # [{"questionId": "q1", "timestampMs": 0}, ...] in capture order
    question_timestamps = fields.JSONField(default=list)

    # {"status", "rawSegments", "error", "completedAt"}
    transcription = fields.JSONField(default=pending_transcription)

    # {questionId: {"text", "source", "editedAt"}}
    answers = fields.JSONField(default=dict)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "interviews"
