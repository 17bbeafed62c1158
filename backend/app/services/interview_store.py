"""
Interview record store

Merge-patch access to persisted interviews. The transcription pipeline goes
through update_interview so that `transcription` and `answers` can be patched
independently; manual edits use set_answer to change a single answer.
"""
import datetime as dt
from typing import Optional

from tortoise.transactions import in_transaction

from app.models.interview import Interview

# camelCase patch keys -> model fields
_PATCHABLE = {
    "transcription": "transcription",
    "answers": "answers",
    "videoUri": "video_uri",
    "questionTimestamps": "question_timestamps",
}


def utc_now_iso() -> str:
    """Millisecond-precision UTC timestamp, e.g. 2025-02-14T12:00:00.000Z"""
    now = dt.datetime.now(dt.timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class InterviewNotFoundError(LookupError):
    def __init__(self, interview_id: str):
        super().__init__(f"Interview not found: {interview_id}")
        self.interview_id = interview_id


async def get_interview(interview_id: str) -> Optional[Interview]:
    return await Interview.get_or_none(id=interview_id)


async def update_interview(interview_id: str, fields: dict) -> Interview:
    """
    Merge-patch the stored interview

    Every key in `fields` replaces the stored value wholesale; keys not given
    are left untouched. All keys are written in a single save.
    """
    unknown = set(fields) - set(_PATCHABLE)
    if unknown:
        raise ValueError(f"Cannot patch interview fields: {sorted(unknown)}")

    interview = await get_interview(interview_id)
    if interview is None:
        raise InterviewNotFoundError(interview_id)

    update_fields = []
    for key, value in fields.items():
        attr = _PATCHABLE[key]
        setattr(interview, attr, value)
        update_fields.append(attr)
    update_fields.append("updated_at")

    await interview.save(update_fields=update_fields)
    return interview


async def set_answer(interview_id: str, question_id: str, answer: dict) -> Interview:
    """
    Replace the answer for one question, keeping every other stored answer

    The current answers are re-read inside the transaction, so a pipeline run
    that completed after the caller loaded the interview is not rolled back.
    """
    async with in_transaction():
        interview = await Interview.select_for_update().get_or_none(id=interview_id)
        if interview is None:
            raise InterviewNotFoundError(interview_id)

        answers = dict(interview.answers or {})
        answers[question_id] = answer
        interview.answers = answers
        await interview.save(update_fields=["answers", "updated_at"])
    return interview
