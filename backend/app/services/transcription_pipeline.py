"""
Interview Transcription Pipeline

Coordinates one transcription run for an interview:
1. Mark the interview as processing
2. Upload the video to Whisper
3. Map the returned segments onto the questions shown while recording
4. Persist the completed status together with the new answers

Failures are persisted as a failed status and re-raised to the caller. There
is no automatic retry; calling run_transcription_pipeline again is the retry.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from app.core.run_lock import run_registry
from .asr_base import TranscriptSegment
from .asr_openai_adapter import transcribe_video
from .interview_store import update_interview, utc_now_iso
from .segment_mapper import AnswerRecord, TimestampLike, map_segments_to_questions

logger = logging.getLogger("uvicorn.error")


@dataclass
class PipelineResult:
    answers: Dict[str, AnswerRecord] = field(default_factory=dict)
    segments: List[TranscriptSegment] = field(default_factory=list)


def processing_status() -> dict:
    return {"status": "processing", "rawSegments": None, "error": None, "completedAt": None}


def failed_status(message: str) -> dict:
    return {"status": "failed", "rawSegments": None, "error": message, "completedAt": None}


def completed_status(segments: Sequence[TranscriptSegment]) -> dict:
    return {
        "status": "completed",
        "rawSegments": [seg.to_dict() for seg in segments],
        "error": None,
        "completedAt": utc_now_iso(),
    }


def is_stranded(interview_id: str, transcription: Optional[dict]) -> bool:
    """
    A "processing" status with no live run in this process was left behind by
    a crash or restart; it may be retried.
    """
    status = (transcription or {}).get("status")
    return status == "processing" and not run_registry.is_running(interview_id)


async def run_transcription_pipeline(
    interview_id: str,
    video_uri: str,
    question_timestamps: Sequence[TimestampLike],
    api_key: Optional[str] = None,
) -> PipelineResult:
    """
    Transcribe an interview video and store the answers it contains

    On success the interview's whole `answers` mapping is replaced by the
    freshly mapped answers, including any that were edited by hand.
    On failure `answers` is left untouched.

    Raises:
    - PipelineBusyError: a run for this interview is already active
    - TranscriptionError (or anything else raised while transcribing, mapping
      or saving the result), after the failed status has been persisted
    - whatever the store raises while writing the initial processing status;
      nothing else is written in that case
    """
    async with run_registry.hold(interview_id):
        await update_interview(interview_id, {"transcription": processing_status()})
        logger.info("[pipeline] interview=%s processing", interview_id)

        try:
            segments = await transcribe_video(video_uri, api_key)
            answers = map_segments_to_questions(segments, question_timestamps)
            await update_interview(interview_id, {
                "transcription": completed_status(segments),
                "answers": {qid: answer.to_dict() for qid, answer in answers.items()},
            })
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or e.__class__.__name__
            logger.warning("[pipeline] interview=%s failed: %s", interview_id, message)
            try:
                await update_interview(interview_id, {"transcription": failed_status(message)})
            except Exception:
                logger.exception("[pipeline] interview=%s could not persist failed status", interview_id)
            raise

        logger.info(
            "[pipeline] interview=%s completed: %d segments, %d answers",
            interview_id, len(segments), len(answers),
        )
        return PipelineResult(answers=answers, segments=segments)
