# pantrychef/core/title.py
"""
Derive a short, human-readable title from generated recipe text.

The title only seeds a video search, so this is a best-effort heuristic:
an ordered list of rules, first match wins, and a fixed fallback when none
of them finds anything usable. Pure and deterministic.
"""
from __future__ import annotations

import re
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

FALLBACK_TITLE = "Delicious Recipe"
MAX_TITLE_LEN = 70
MIN_WORD_CUT = 30  # word-boundary cuts earlier than this are too short to keep
EMOJI_LINE_MAX_LEN = 100
SHORT_LINE_MIN_LEN = 10  # exclusive
SHORT_LINE_MAX_LEN = 80  # exclusive

# Pictographic blocks: misc symbols & dingbats, arrows/stars, mahjong..enclosed
# ideographic supplement, and the big emoji planes (U+1F300..U+1FAFF).
PICTOGRAPH_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x2600, 0x27BF),
    (0x2B00, 0x2BFF),
    (0x1F000, 0x1F2FF),
    (0x1F300, 0x1FAFF),
)
# Glue characters that only make sense next to a pictograph
_EMOJI_JOINERS = {0x200D, 0xFE0E, 0xFE0F, 0x20E3}

GREETING_WORDS: Tuple[str, ...] = (
    "hello", "hi", "hey", "sure", "okay", "ok", "here", "great", "absolutely",
    "certainly", "of course", "welcome", "greetings", "alright", "what",
    "let's", "this", "i'd", "i'm",
)
_GREETING_RE = re.compile(
    r"^(?:" + "|".join(re.escape(w) for w in GREETING_WORDS) + r")\b",
    re.IGNORECASE,
)
_LABEL_RE = re.compile(r"^(?:recipe\s+name|recipe\s+title|recipe|title|name|dish)\s*:\s*", re.IGNORECASE)
_HEADER_RE = re.compile(r"^#+\s*")
_LEADING_MARKERS = "#*->_ \t"
_EMPHASIS = "*_"
_TRAILING_PUNCT = ".,;:!?-"


class TitleMatch(NamedTuple):
    rule: str
    title: str


def is_pictograph(ch: str) -> bool:
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in PICTOGRAPH_RANGES)


def strip_pictographs(text: str) -> str:
    return "".join(ch for ch in text if not is_pictograph(ch) and ord(ch) not in _EMOJI_JOINERS)


# ---------- Rules ----------
# Each rule returns the raw candidate (before clean_title) or None.

def emoji_line(lines: Sequence[str]) -> Optional[str]:
    """A short line decorated with emoji is almost always the title."""
    for line in lines:
        if len(line) < EMOJI_LINE_MAX_LEN and any(is_pictograph(ch) for ch in line):
            return strip_pictographs(line).lstrip(_LEADING_MARKERS)
    return None


def markdown_header(lines: Sequence[str]) -> Optional[str]:
    for line in lines:
        if line.startswith("#"):
            return _HEADER_RE.sub("", line)
    return None


def short_line(lines: Sequence[str]) -> Optional[str]:
    """First line of title-like length that isn't the model talking to the user."""
    for line in lines:
        s = line.strip()
        if SHORT_LINE_MIN_LEN < len(s) < SHORT_LINE_MAX_LEN and not _GREETING_RE.match(s):
            return s
    return None


TITLE_RULES: Tuple[Tuple[str, Callable[[Sequence[str]], Optional[str]]], ...] = (
    ("emoji_line", emoji_line),
    ("markdown_header", markdown_header),
    ("short_line", short_line),
)


# ---------- Post-processing ----------

def truncate(text: str, limit: int = MAX_TITLE_LEN) -> str:
    if len(text) <= limit:
        return text
    cut = text.rfind(" ", 0, limit)
    if cut > MIN_WORD_CUT:
        return text[:cut].rstrip()
    return text[:limit].rstrip()


def clean_title(candidate: str) -> str:
    """Normalize a rule's candidate into a title; '' when nothing usable is left."""
    s = candidate.strip().strip(_EMPHASIS).strip()
    s = _LABEL_RE.sub("", s)
    if ":" in s:
        head, _, tail = s.rpartition(":")
        # "Tomato Soup:" has nothing after the colon; keep what precedes it
        s = tail.strip() or head.strip()
    s = s.strip(_EMPHASIS).strip()
    s = s.rstrip(_TRAILING_PUNCT).rstrip()
    return truncate(s)


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def match_title(text: str) -> TitleMatch:
    lines = split_lines(text)
    for name, rule in TITLE_RULES:
        candidate = rule(lines)
        if candidate is None:
            continue
        title = clean_title(candidate)
        if title:
            return TitleMatch(name, title)
    return TitleMatch("fallback", FALLBACK_TITLE)


def extract_title(text: str) -> str:
    return match_title(text).title
