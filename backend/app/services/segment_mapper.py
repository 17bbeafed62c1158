# backend/app/services/segment_mapper.py
"""
Segment-to-Question Mapper

Core features:
1. Turn the "question shown at time T" log into consecutive time windows
2. Assign each Whisper segment to the window containing its midpoint
3. Join the text per window into an answer keyed by question id
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .asr_base import TranscriptSegment


@dataclass
class QuestionTimestamp:
    """One entry per time a question was shown while recording"""
    question_id: str
    timestamp_ms: int

    @classmethod
    def from_dict(cls, raw: dict) -> "QuestionTimestamp":
        return cls(question_id=raw["questionId"], timestamp_ms=raw["timestampMs"])

    def to_dict(self) -> dict:
        return {"questionId": self.question_id, "timestampMs": self.timestamp_ms}


@dataclass
class QuestionWindow:
    """Half-open interval [start_sec, end_sec) during which a question was on screen"""
    question_id: str
    start_sec: float
    end_sec: float

    def contains(self, sec: float) -> bool:
        return self.start_sec <= sec < self.end_sec


@dataclass
class AnswerRecord:
    text: str
    source: str = "auto"  # auto | edited
    edited_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {"text": self.text, "source": self.source, "editedAt": self.edited_at}


TimestampLike = Union[QuestionTimestamp, dict]


def _as_timestamp(ts: TimestampLike) -> QuestionTimestamp:
    return ts if isinstance(ts, QuestionTimestamp) else QuestionTimestamp.from_dict(ts)


def build_question_windows(question_timestamps: Sequence[TimestampLike]) -> List[QuestionWindow]:
    """
    One window per timestamp event, in input order (never re-sorted).

    Window i starts at event i and ends at event i+1; the last window is
    open-ended.
    """
    events = [_as_timestamp(ts) for ts in question_timestamps]
    windows = []
    for i, ev in enumerate(events):
        end_ms = events[i + 1].timestamp_ms if i < len(events) - 1 else math.inf
        windows.append(QuestionWindow(
            question_id=ev.question_id,
            start_sec=ev.timestamp_ms / 1000,
            end_sec=end_ms / 1000,
        ))
    return windows


def map_segments_to_questions(
    segments: Sequence[TranscriptSegment],
    question_timestamps: Sequence[TimestampLike],
) -> Dict[str, AnswerRecord]:
    """
    Map Whisper segments onto the questions that were on screen when they were spoken

    Algorithm:
    1. Build windows from consecutive timestamp events
    2. For each segment, scan windows from last to first and give its trimmed
       text to the first window containing the segment midpoint
    3. Join each window's texts with single spaces, in forward window order

    A revisited question (same id at several events) keeps only the text of
    its last window that produced any. Questions without text are absent.
    """
    if not segments or not question_timestamps:
        return {}

    windows = build_question_windows(question_timestamps)

    window_texts: List[List[str]] = [[] for _ in windows]
    for seg in segments:
        mid = seg.mid_sec
        for i in range(len(windows) - 1, -1, -1):
            if windows[i].contains(mid):
                window_texts[i].append(seg.text.strip())
                break

    answers: Dict[str, AnswerRecord] = {}
    for window, texts in zip(windows, window_texts):
        text = " ".join(texts).strip()
        if text:
            answers[window.question_id] = AnswerRecord(text=text)

    return answers
