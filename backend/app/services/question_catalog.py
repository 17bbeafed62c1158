"""
Question Catalog

The fixed, ordered list of birthday interview questions. Questions flagged
enrichable carry the keyword category used by the enrichment engine.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    enrichable: bool = False
    enrichment_type: Optional[str] = None  # color | animal | food | song | book | activity | movie | tvshow | restaurant

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "enrichable": self.enrichable,
            "enrichmentType": self.enrichment_type,
        }


QUESTIONS: List[Question] = [
    Question("q1", "How old are you today?"),
    Question("q2", "What is your favorite color?", True, "color"),
    Question("q3", "What is your favorite animal?", True, "animal"),
    Question("q4", "What is your favorite food?", True, "food"),
    Question("q5", "What is your favorite song?", True, "song"),
    Question("q6", "What is your favorite book?", True, "book"),
    Question("q7", "What do you like to do for fun?", True, "activity"),
    Question("q8", "What is your favorite movie?", True, "movie"),
    Question("q9", "What is your favorite TV show?", True, "tvshow"),
    Question("q10", "Where is your favorite place to eat?", True, "restaurant"),
    Question("q11", "Who is your best friend?"),
    Question("q12", "What do you want to be when you grow up?"),
]

_BY_ID = {q.id: q for q in QUESTIONS}


def get_question(question_id: str) -> Optional[Question]:
    return _BY_ID.get(question_id)
