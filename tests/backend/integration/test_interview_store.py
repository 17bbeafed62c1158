"""
Integration tests for services.interview_store against an in-memory database.
"""
import uuid

import pytest

from app.models.interview import Interview
from app.services.interview_store import InterviewNotFoundError, set_answer, update_interview


pytestmark = pytest.mark.asyncio


async def test_update_patches_only_given_fields(db, create_interview):
    iv = await create_interview(answers={"q1": {"text": "Five", "source": "edited", "editedAt": None}})

    status = {"status": "processing", "rawSegments": None, "error": None, "completedAt": None}
    await update_interview(str(iv.id), {"transcription": status})

    stored = await Interview.get(id=iv.id)
    assert stored.transcription == status
    assert stored.answers == {"q1": {"text": "Five", "source": "edited", "editedAt": None}}


async def test_update_replaces_answers_wholesale(db, create_interview):
    iv = await create_interview(answers={"q1": {"text": "old", "source": "auto", "editedAt": None}})

    await update_interview(str(iv.id), {"answers": {"q2": {"text": "new", "source": "auto", "editedAt": None}}})

    stored = await Interview.get(id=iv.id)
    assert stored.answers == {"q2": {"text": "new", "source": "auto", "editedAt": None}}


async def test_update_unknown_interview_raises(db):
    with pytest.raises(InterviewNotFoundError):
        await update_interview(str(uuid.uuid4()), {"answers": {}})


async def test_update_rejects_unknown_fields(db, create_interview):
    iv = await create_interview()
    with pytest.raises(ValueError, match="child_name"):
        await update_interview(str(iv.id), {"child_name": "x"})


async def test_new_interview_is_pending(db, create_interview):
    iv = await create_interview()
    assert iv.transcription["status"] == "pending"
    assert iv.answers == {}


async def test_set_answer_keeps_answers_written_after_load(db, create_interview):
    iv = await create_interview(answers={"q1": {"text": "old", "source": "auto", "editedAt": None}})
    stale = await Interview.get(id=iv.id)

    fresh = {
        "q1": {"text": "Hello", "source": "auto", "editedAt": None},
        "q2": {"text": "Blue", "source": "auto", "editedAt": None},
    }
    await update_interview(str(iv.id), {"answers": fresh})

    edited = {"text": "Green", "source": "edited", "editedAt": "2025-02-14T12:00:00.000Z"}
    await set_answer(str(stale.id), "q2", edited)

    stored = await Interview.get(id=iv.id)
    assert stored.answers == {"q1": fresh["q1"], "q2": edited}


async def test_set_answer_unknown_interview_raises(db):
    with pytest.raises(InterviewNotFoundError):
        await set_answer(str(uuid.uuid4()), "q1", {"text": "x", "source": "edited", "editedAt": None})
