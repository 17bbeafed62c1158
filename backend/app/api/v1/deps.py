import uuid
from fastapi import HTTPException, status
from app.models.interview import Interview
from app.services.interview_store import get_interview

async def get_interview_or_404(iid: str) -> Interview:
    """
    FastAPI dependency resolving the `{iid}` path parameter to an Interview.

    Args:
        iid: Interview ID (UUID string) from the request path

    Returns:
        Interview: The stored interview

    Raises:
        HTTPException (404): If the id is malformed or no such interview exists (NOT_FOUND)

    Usage:
        @router.get("/{iid}")
        async def detail(interview: Interview = Depends(get_interview_or_404)):
            ...
    """
    try:
        uuid.UUID(iid)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="NOT_FOUND")

    interview = await get_interview(iid)
    if not interview:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="NOT_FOUND")
    return interview
