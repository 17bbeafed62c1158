# app/api/v1/routers/questions.py
from fastapi import APIRouter
from app.services.question_catalog import QUESTIONS

router = APIRouter(prefix="/questions", tags=["questions"])

@router.get("")
async def get_questions():
    """
    Get the ordered interview question catalog.

    Returns:
        dict: Response containing:
            - success: bool (always True)
            - data: dict with "questions" list containing:
                - id: str (question id referenced by questionTimestamps)
                - text: str (question shown on screen)
                - enrichable: bool (whether answers get emoji/color tags)
                - enrichmentType: str | None (keyword category)
    """
    return {"success": True, "data": {"questions": [q.to_dict() for q in QUESTIONS]}}
