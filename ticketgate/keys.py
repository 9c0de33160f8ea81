"""Ticket key extraction and the PR title length rule."""

import re
from typing import List

from ticketgate.models import TitleCheck

# Jira issue key: project code, dash, number (e.g. PROJ-42)
TICKET_KEY_RE = re.compile(r"[A-Z]+-[0-9]+")
_BRACKETS_RE = re.compile(r"[\[\]()]")

DEFAULT_MIN_TITLE_LENGTH = 10


def extract_keys(title: str, branch: str) -> List[str]:
    """Return ticket keys found in title, then branch.

    Duplicates are dropped, first occurrence wins, so the order is stable
    for rendering. Matching is case-sensitive.
    """
    keys: List[str] = []
    for text in (title or "", branch or ""):
        for key in TICKET_KEY_RE.findall(text):
            if key not in keys:
                keys.append(key)
    return keys


def clean_title(title: str) -> str:
    """Strip key-shaped substrings, brackets and surrounding whitespace.

    Removal goes by pattern, not by the extracted keys, so any key-shaped
    text disappears. Dropping brackets can join a new key ("A(-1)" -> "A-1"),
    so the pass repeats until nothing changes; "[AB]-12 fixed it" therefore
    cleans to "fixed it", where a single pass would leave "AB-12 fixed it".

    The length rule counts code points (len), not UTF-16 units: an emoji
    counts as one character.
    """
    text = title or ""
    while True:
        cleaned = _BRACKETS_RE.sub("", TICKET_KEY_RE.sub("", text)).strip()
        if cleaned == text:
            return cleaned
        text = cleaned


def check_title_length(title: str, min_length: int = DEFAULT_MIN_TITLE_LENGTH) -> TitleCheck:
    """Check that the title has at least min_length characters besides ticket keys."""
    cleaned = clean_title(title)
    return TitleCheck(ok=len(cleaned) >= min_length, length=len(cleaned), cleaned=cleaned)
