"""Idea text normalization and tokenization."""

import re

from idea_insight.core.entities import Idea
from idea_insight.core.errors import InvalidInputError

MIN_IDEA_LENGTH = 10
MAX_IDEA_LENGTH = 1000
MIN_TOKEN_LENGTH = 3

# Frequent typos seen in submitted ideas
COMMON_MISSPELLINGS: dict[str, str] = {
    "managment": "management",
    "platfrom": "platform",
    "plattform": "platform",
    "aplication": "application",
    "appliction": "application",
    "sofware": "software",
    "softwear": "software",
    "buisness": "business",
    "bussiness": "business",
    "busines": "business",
    "studnets": "students",
    "studens": "students",
    "excercise": "exercise",
    "exersice": "exercise",
    "meditaion": "meditation",
    "finanace": "finance",
    "recipies": "recipes",
    "resturant": "restaurant",
    "restuarant": "restaurant",
    "marketting": "marketing",
    "educaton": "education",
    "helth": "health",
}

_NON_WORD_RE = re.compile(r"[^\w\s-]|_")
_EDGE_HYPHEN_RE = re.compile(r"(?<![^\W_])-|-(?![^\W_])")
_REPEATED_CHAR_RE = re.compile(r"([a-z])\1{2,}")
_WHITESPACE_RE = re.compile(r"\s+")
_MISSPELLING_RE = re.compile(
    r"\b(" + "|".join(sorted(COMMON_MISSPELLINGS, key=len, reverse=True)) + r")\b"
)


def validate_idea_text(text: object) -> str:
    """Return stripped idea text or raise InvalidInputError."""
    if text is None or not isinstance(text, str):
        raise InvalidInputError("Idea text must be a non-empty string")

    stripped = text.strip()
    if not stripped:
        raise InvalidInputError("Idea text cannot be empty")
    if len(stripped) < MIN_IDEA_LENGTH:
        raise InvalidInputError(
            f"Idea text too short: provide at least {MIN_IDEA_LENGTH} characters"
        )
    if len(stripped) > MAX_IDEA_LENGTH:
        raise InvalidInputError(
            f"Idea text too long: keep it under {MAX_IDEA_LENGTH} characters"
        )
    return stripped


def correct_typos(text: str) -> str:
    """Fix obvious typo artifacts in lower-cased text."""
    text = _REPEATED_CHAR_RE.sub(r"\1\1", text)
    return _MISSPELLING_RE.sub(lambda match: COMMON_MISSPELLINGS[match.group(1)], text)


def normalize_text(text: str) -> str:
    """Lower-case and strip punctuation, keeping internal hyphens."""
    lowered = correct_typos(text.lower())
    cleaned = _NON_WORD_RE.sub(" ", lowered)
    cleaned = _EDGE_HYPHEN_RE.sub(" ", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def tokenize(normalized_text: str) -> tuple[str, ...]:
    """Split normalized text into tokens.

    Hyphens inside a word are removed, so "blockchain-based" becomes the single
    token "blockchainbased". Tokens shorter than three characters are dropped.
    """
    tokens = []
    for word in normalized_text.split():
        joined = word.replace("-", "")
        if len(joined) >= MIN_TOKEN_LENGTH:
            tokens.append(joined)
    return tuple(tokens)


def normalize_idea(text: object) -> Idea:
    """Validate, normalize and tokenize raw idea text."""
    original = validate_idea_text(text)
    normalized = normalize_text(original)
    return Idea(
        original_text=original,
        normalized_text=normalized,
        tokens=tokenize(normalized),
    )
