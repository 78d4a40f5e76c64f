"""Utility functions for spell application."""

import re
from datetime import datetime, timezone

EPOCH = datetime.fromtimestamp(0, timezone.utc)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None, default: datetime | None = EPOCH) -> datetime | None:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if not value:
        return default
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def censor_word_in_definition(word: str, definition: str) -> str:
    """Mask the word and its simple derived forms inside its definition.

    'family' also hides 'families', 'accommodate' also hides 'accommodation'.
    """
    root = word
    if len(word) > 4 and word.endswith(('y', 'e')):
        root = word[:-1]
    pattern = re.compile(rf'\b{re.escape(root)}\w*\b', re.IGNORECASE)
    return pattern.sub(lambda m: '*' * len(m.group(0)), definition)


def parse_legacy_word_list(text: str) -> list[str]:
    """Split the old one-word-per-line list format."""
    words = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            words.append(line)
    return words
