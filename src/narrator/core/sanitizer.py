"""
Vowel-masking profanity filter.

Banned words keep their shape ("sh*t") so text stays readable while staying
PG-13. Only whole words are matched: "class" and "Scunthorpe" pass untouched.
"""

import re
from typing import List, Optional, Pattern, Tuple

BANNED_TERMS: Tuple[str, ...] = (
    "ass",
    "asshole",
    "bastard",
    "bitch",
    "bollocks",
    "bullshit",
    "cock",
    "cunt",
    "dick",
    "dickhead",
    "fag",
    "faggot",
    "fuck",
    "fucked",
    "fucker",
    "fucking",
    "motherfucker",
    "nigger",
    "piss",
    "prick",
    "pussy",
    "retard",
    "shit",
    "shitty",
    "slut",
    "twat",
    "wanker",
    "whore",
)

_VOWELS = re.compile(r"[aeiou]", re.IGNORECASE)

# One matcher per term, compiled once for the process lifetime.
_BANNED_PATTERNS: List[Pattern[str]] = [
    re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in BANNED_TERMS
]


def _mask_vowels(match: "re.Match[str]") -> str:
    return _VOWELS.sub("*", match.group(0))


def sanitize(text: Optional[str]) -> Optional[str]:
    """Mask the vowels of every banned whole word in ``text``.

    ``None`` and ``""`` are returned as-is.
    """
    if not text:
        return text

    for pattern in _BANNED_PATTERNS:
        text = pattern.sub(_mask_vowels, text)
    return text
