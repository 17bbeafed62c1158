from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.api.v1.deps import get_interview_or_404
from app.config import settings
from app.core.run_lock import PipelineBusyError
from app.models.interview import Interview
from app.schemas.interview import AnswerEditIn, CreateInterviewIn, TranscribeIn
from app.services.asr_base import ASRServiceError, TranscriptionError, VideoTooLargeError
from app.services.enrichment import enrich_interview
from app.services.interview_store import set_answer, utc_now_iso
from app.services.question_catalog import QUESTIONS, get_question
from app.services.segment_mapper import AnswerRecord
from app.services.transcription_pipeline import is_stranded, run_transcription_pipeline

router = APIRouter(prefix="/interviews", tags=["interviews"])

def _serialize(i: Interview) -> dict:
    return {
        "id": str(i.id),
        "childName": i.child_name,
        "year": i.year,
        "age": i.age,
        "videoUri": i.video_uri,
        "questionTimestamps": i.question_timestamps or [],
        "transcription": i.transcription,
        "answers": i.answers or {},
        "stranded": is_stranded(str(i.id), i.transcription),
        "createdAt": i.created_at.isoformat() if i.created_at else None,
    }

def _enrichment(i: Interview) -> dict:
    return {qid: r.to_dict() for qid, r in enrich_interview(i.answers or {}, QUESTIONS).items()}

# ===== Routes =====
@router.get("", response_model=dict)
async def list_interviews(year: int | None = Query(None)):
    """
    List recorded interviews, newest first, optionally for one birthday year.

    Returns:
        dict: {"success": True, "data": {"items": [...], "total": int}}
    """
    qs = Interview.all() if year is None else Interview.filter(year=year)
    rows = await qs.order_by("-created_at")
    items = [_serialize(i) for i in rows]
    return {"success": True, "data": {"items": items, "total": len(items)}}

@router.post("", response_model=dict)
async def create_interview(body: CreateInterviewIn):
    """
    Register a recorded interview.

    The transcription status starts as "pending" and answers start empty.
    """
    i = await Interview.create(
        child_name=(body.childName.strip() if body.childName else None),
        year=body.year,
        age=body.age,
        video_uri=body.videoUri,
        question_timestamps=[ts.model_dump() for ts in body.questionTimestamps],
    )
    return {"success": True, "data": _serialize(i)}

@router.get("/{iid}", response_model=dict)
async def get_interview_detail(interview: Interview = Depends(get_interview_or_404)):
    """
    Interview detail, including transcription status, answers and the
    display enrichment for each answer.

    `stranded` is true when the status says "processing" but no run is active
    in this server, i.e. the run was interrupted and can be retried.
    """
    data = _serialize(interview)
    data["enrichment"] = _enrichment(interview)
    return {"success": True, "data": data}

@router.delete("/{iid}", response_model=dict)
async def delete_interview(interview: Interview = Depends(get_interview_or_404)):
    iid = str(interview.id)
    await interview.delete()
    return {"success": True, "data": {"id": iid, "deleted": True}}

@router.post("/{iid}/transcription", response_model=dict)
async def transcribe_interview(
    body: TranscribeIn | None = None,
    interview: Interview = Depends(get_interview_or_404),
):
    """
    Run (or re-run) the transcription pipeline for an interview.

    On success every stored answer is replaced by the newly transcribed ones,
    including answers that were edited by hand.

    Raises:
        HTTPException (400): No video, no question timestamps, or no API key
        HTTPException (409): A run for this interview is already in progress
        HTTPException (400/413): Video missing on disk or too large
        HTTPException (502): Whisper API error (detail carries its message)
    """
    if not interview.video_uri:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="NO_VIDEO")
    if not interview.question_timestamps:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="NO_QUESTION_TIMESTAMPS")
    api_key = (body.apiKey if body else None) or settings.openai_api_key
    if not api_key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="NO_API_KEY")

    iid = str(interview.id)
    try:
        result = await run_transcription_pipeline(
            iid, interview.video_uri, interview.question_timestamps, api_key
        )
    except PipelineBusyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="TRANSCRIPTION_IN_PROGRESS")
    except VideoTooLargeError as e:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=e.message)
    except ASRServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    except TranscriptionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return {"success": True, "data": {
        "answers": {qid: a.to_dict() for qid, a in result.answers.items()},
        "segments": [s.to_dict() for s in result.segments],
    }}

@router.put("/{iid}/answers/{question_id}", response_model=dict)
async def edit_answer(
    question_id: str,
    body: AnswerEditIn,
    interview: Interview = Depends(get_interview_or_404),
):
    """
    Manually set the answer for one question.

    The answer is stored with source="edited". Only `answers` is written; the
    transcription status is left alone.
    """
    if get_question(question_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="UNKNOWN_QUESTION")
    text = (body.text or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="EMPTY_ANSWER")

    answer = AnswerRecord(text=text, source="edited", edited_at=utc_now_iso()).to_dict()
    await set_answer(str(interview.id), question_id, answer)
    return {"success": True, "data": {"questionId": question_id, "answer": answer}}

@router.get("/{iid}/enrichment", response_model=dict)
async def get_enrichment(interview: Interview = Depends(get_interview_or_404)):
    return {"success": True, "data": _enrichment(interview)}
