"""
Services Module

Provides the interview processing services:
- ASR (Automatic Speech Recognition): OpenAI Whisper API
- Segment mapping: Whisper segments -> answers per question
- Transcription pipeline: status tracking around ASR + mapping
- Enrichment: emoji / color tags for answers
- Spotify: song lookup for "favorite song" answers
"""

# ASR service
from .asr_base import (
    ASRService,
    ASRServiceError,
    ASRTransportError,
    TranscriptionError,
    TranscriptSegment,
    VideoNotFoundError,
    VideoTooLargeError,
)
from .asr_openai_adapter import openai_whisper_service, transcribe_video

# Answer mapping and pipeline
from .segment_mapper import (
    AnswerRecord,
    QuestionTimestamp,
    QuestionWindow,
    build_question_windows,
    map_segments_to_questions,
)
from .transcription_pipeline import PipelineResult, run_transcription_pipeline

# Enrichment
from .enrichment import EnrichmentResult, enrich_answer, enrich_interview
from .question_catalog import QUESTIONS, Question, get_question

__all__ = [
    # ASR
    "ASRService",
    "ASRServiceError",
    "ASRTransportError",
    "TranscriptionError",
    "TranscriptSegment",
    "VideoNotFoundError",
    "VideoTooLargeError",
    "openai_whisper_service",
    "transcribe_video",
    # Mapping / pipeline
    "AnswerRecord",
    "QuestionTimestamp",
    "QuestionWindow",
    "build_question_windows",
    "map_segments_to_questions",
    "PipelineResult",
    "run_transcription_pipeline",
    # Enrichment
    "EnrichmentResult",
    "enrich_answer",
    "enrich_interview",
    "QUESTIONS",
    "Question",
    "get_question",
]
