"""
Answer Enrichment Service

Tags free-text answers with display metadata (emojis, color swatch) using
keyword tables per question category. Results are derived on demand and never
persisted.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .question_catalog import Question

KeywordTable = List[Tuple[str, Tuple[str, ...]]]

# Order matters: emojis are collected in table order and, for colors, the last
# matching keyword decides the swatch.
KEYWORD_EMOJIS: Dict[str, KeywordTable] = {
    "color": [
        ("red", ("🔴",)), ("blue", ("🔵",)), ("green", ("🟢",)), ("yellow", ("🟡",)),
        ("orange", ("🟠",)), ("purple", ("🟣",)), ("pink", ("💗",)), ("black", ("⚫",)),
        ("white", ("⚪",)), ("brown", ("🟤",)), ("gold", ("🏆",)), ("silver", ("🥈",)),
        ("rainbow", ("🌈",)),
    ],
    "animal": [
        ("dog", ("🐕",)), ("puppy", ("🐶",)), ("cat", ("🐱",)), ("kitten", ("🐱",)),
        ("horse", ("🐴",)), ("unicorn", ("🦄",)), ("rabbit", ("🐰",)), ("bunny", ("🐰",)),
        ("bear", ("🐻",)), ("lion", ("🦁",)), ("tiger", ("🐯",)), ("elephant", ("🐘",)),
        ("dolphin", ("🐬",)), ("whale", ("🐳",)), ("bird", ("🐦",)), ("owl", ("🦉",)),
        ("penguin", ("🐧",)), ("fish", ("🐟",)), ("shark", ("🦈",)), ("butterfly", ("🦋",)),
        ("dinosaur", ("🦕",)), ("dragon", ("🐉",)), ("monkey", ("🐵",)), ("panda", ("🐼",)),
        ("fox", ("🦊",)), ("wolf", ("🐺",)), ("turtle", ("🐢",)), ("frog", ("🐸",)),
    ],
    "food": [
        ("pizza", ("🍕",)), ("burger", ("🍔",)), ("hamburger", ("🍔",)), ("taco", ("🌮",)),
        ("spaghetti", ("🍝",)), ("pasta", ("🍝",)), ("noodle", ("🍜",)), ("sushi", ("🍣",)),
        ("chicken", ("🍗",)), ("steak", ("🥩",)), ("hotdog", ("🌭",)), ("fries", ("🍟",)),
        ("ice cream", ("🍦",)), ("cake", ("🎂",)), ("cookie", ("🍪",)), ("chocolate", ("🍫",)),
        ("candy", ("🍬",)), ("donut", ("🍩",)), ("pancake", ("🥞",)), ("waffle", ("🧇",)),
        ("apple", ("🍎",)), ("banana", ("🍌",)), ("strawberry", ("🍓",)), ("watermelon", ("🍉",)),
        ("mac", ("🧀",)), ("cheese", ("🧀",)), ("soup", ("🍲",)), ("salad", ("🥗",)),
    ],
    "song": [
        ("music", ("🎵",)), ("song", ("🎶",)), ("sing", ("🎤",)), ("dance", ("💃",)),
        ("rock", ("🎸",)), ("piano", ("🎹",)), ("drum", ("🥁",)),
    ],
    "book": [
        ("book", ("📖",)), ("story", ("📚",)), ("read", ("📖",)), ("fairy", ("🧚",)),
        ("magic", ("✨",)), ("adventure", ("🗺️",)), ("comic", ("💥",)),
    ],
    "activity": [
        ("swim", ("🏊",)), ("soccer", ("⚽",)), ("football", ("🏈",)), ("basketball", ("🏀",)),
        ("baseball", ("⚾",)), ("tennis", ("🎾",)), ("dance", ("💃",)), ("bike", ("🚲",)),
        ("ride", ("🚲",)), ("draw", ("🎨",)), ("paint", ("🎨",)), ("art", ("🎨",)),
        ("sing", ("🎤",)), ("game", ("🎮",)), ("video game", ("🎮",)), ("lego", ("🧱",)),
        ("play", ("🎮",)), ("run", ("🏃",)), ("skate", ("⛸️",)), ("gymnastics", ("🤸",)),
        ("cook", ("👩‍🍳",)), ("bake", ("🧁",)),
    ],
    "movie": [
        ("movie", ("🎬",)), ("film", ("🎬",)), ("cartoon", ("📺",)), ("disney", ("🏰",)),
        ("superhero", ("🦸",)), ("star wars", ("⭐",)), ("princess", ("👸",)),
    ],
    "tvshow": [
        ("show", ("📺",)), ("cartoon", ("📺",)), ("anime", ("📺",)),
    ],
    "restaurant": [
        ("mcdonalds", ("🍔",)), ("chick", ("🐔",)), ("pizza", ("🍕",)), ("subway", ("🥪",)),
        ("taco", ("🌮",)), ("chinese", ("🥡",)), ("mexican", ("🌮",)), ("italian", ("🍕",)),
        ("japanese", ("🍣",)), ("thai", ("🍜",)), ("indian", ("🍛",)),
    ],
}

COLOR_SWATCHES: Dict[str, str] = {
    "red": "#EF4444", "blue": "#3B82F6", "green": "#22C55E", "yellow": "#EAB308",
    "orange": "#F97316", "purple": "#A855F7", "pink": "#EC4899", "black": "#1F2937",
    "white": "#F9FAFB", "brown": "#92400E", "gold": "#D97706", "silver": "#9CA3AF",
    "rainbow": "#EC4899",
}


@dataclass
class EnrichmentResult:
    emojis: List[str] = field(default_factory=list)
    color_tag: Optional[str] = None

    def to_dict(self) -> dict:
        return {"emojis": list(self.emojis), "colorTag": self.color_tag}


def enrich_answer(text: Optional[str], category: Optional[str]) -> Optional[EnrichmentResult]:
    """
    Classify one answer

    Keywords are matched as plain substrings of the lowercased text (no word
    boundaries, so "mac" matches "macaroni"). Returns None when the category
    is unknown, the text is empty, or nothing matched.
    """
    if not text or not category:
        return None

    table = KEYWORD_EMOJIS.get(category)
    if table is None:
        return None

    lower = text.lower()
    emojis: List[str] = []
    color_tag = None

    for keyword, keyword_emojis in table:
        if keyword in lower:
            emojis.extend(keyword_emojis)
            if category == "color" and keyword in COLOR_SWATCHES:
                color_tag = COLOR_SWATCHES[keyword]

    if not emojis:
        return None

    return EnrichmentResult(emojis=list(dict.fromkeys(emojis)), color_tag=color_tag)


def enrich_interview(
    answers: Mapping[str, dict],
    questions: Sequence[Question],
) -> Dict[str, EnrichmentResult]:
    """
    Enrich every answered, enrichable question

    answers: persisted answers mapping {questionId: {"text", "source", "editedAt"}}
    Only questions that produced a result appear in the output.
    """
    enrichment: Dict[str, EnrichmentResult] = {}
    for q in questions:
        if not q.enrichable or not q.enrichment_type:
            continue
        answer = answers.get(q.id) or {}
        text = answer.get("text")
        if not text:
            continue
        result = enrich_answer(text, q.enrichment_type)
        if result:
            enrichment[q.id] = result
    return enrichment
