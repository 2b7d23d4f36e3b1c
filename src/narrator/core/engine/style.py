"""Narrator prompt pieces: base style, mood clause and the drama-level tables."""

from typing import Any, Dict, Optional

DEFAULT_MOOD = "default"
DEFAULT_DRAMA = "3"

BASE_STYLE = """
You are the NARRATOR of a text-adventure game.

STYLE:
- Present tense.
- PG-13; no slurs or explicit sexual content.
- Never mention you are an AI. Never break the fourth wall.
- Always continue directly from the player's last turn.
""".strip()

DRAMA_TEMPERATURES: Dict[str, float] = {
    "1": 0.4,
    "2": 0.55,
    "3": 0.7,
    "4": 0.85,
    "5": 1.0,
}

DRAMA_INSTRUCTIONS: Dict[str, str] = {
    "1": (
        "Narration style: Write very plain and simple. Short sentences. "
        "Minimal detail. Like an amateur storyteller."
    ),
    "2": (
        "Narration style: Simple narration with some description. "
        "A beginner storyteller with a bit of flair."
    ),
    "3": (
        "Narration style: Balanced detail. Moderate description, "
        "engaging but not too theatrical."
    ),
    "4": (
        "Narration style: Dramatic with vivid imagery and emotional tone. "
        "Add suspense and flair."
    ),
    "5": (
        "Narration style: Extremely dramatic and theatrical. Rich detail, "
        "powerful emotions, like a professional novelist."
    ),
}


def normalize_drama(drama: Any) -> str:
    """Coerce any drama value to a level key "1".."5"; unknown values become "3"."""
    if isinstance(drama, float) and drama.is_integer():
        drama = int(drama)
    level = str(drama)
    return level if level in DRAMA_TEMPERATURES else DEFAULT_DRAMA


def normalize_mood(mood: Optional[str]) -> Optional[str]:
    """Return the mood to apply, or None when no mood override was asked for."""
    if not mood or mood == DEFAULT_MOOD:
        return None
    return mood


def drama_temperature(drama: Any) -> float:
    return DRAMA_TEMPERATURES[normalize_drama(drama)]


def drama_instructions(drama: Any) -> str:
    return DRAMA_INSTRUCTIONS[normalize_drama(drama)]


def mood_clause(mood: Optional[str]) -> str:
    mood = normalize_mood(mood)
    if mood is None:
        return ""
    return (
        f"Mood/Genre: This is a {mood} story. "
        f"Match your narration to {mood} conventions, tone, and atmosphere."
    )


def build_system_prompt(mood: Optional[str], drama: Any) -> str:
    parts = [BASE_STYLE, mood_clause(mood), drama_instructions(drama)]
    return "\n\n".join(part for part in parts if part)
