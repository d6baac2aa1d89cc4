"""Small text helpers used when saving profiles, blogs and comments."""

import math
import random
import re

PROFILE_COLORS = [
    "#be123c",
    "#15803d",
    "#a21caf",
    "#0f766e",
    "#6d28d9",
    "#4338ca",
    "#b45309",
    "#c2410c",
    "#0e7490",
    "#b45309",
]

WORDS_PER_MINUTE = 220
EXCERPT_LENGTH = 200
OMISSION = "..."

_TAG_RE = re.compile(r"<[^>]*>")
# a word boundary, including the commas and periods right before it
_SEPARATOR_RE = re.compile(r",?\.* +")


def generate_color() -> str:
    return random.choice(PROFILE_COLORS)


def get_clean_text(text: str) -> str:
    return _TAG_RE.sub("", text or "").strip()


def count_words(text: str) -> int:
    clean = get_clean_text(text)
    return len(clean.split()) if clean else 0


def reading_time(text: str) -> str:
    minutes = math.ceil(count_words(text) / WORDS_PER_MINUTE)
    return f"{minutes} min read"


def excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    clean = get_clean_text(text)
    if len(clean) <= length:
        return clean
    cut = clean[: length - len(OMISSION)]
    last = None
    for match in _SEPARATOR_RE.finditer(cut):
        last = match
    if last is not None and last.start() > 0:
        cut = cut[: last.start()]
    return cut + OMISSION
