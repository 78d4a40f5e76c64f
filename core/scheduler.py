"""Spaced-repetition scheduling for word records."""

from datetime import datetime, timedelta

from .config import REVIEW_INTERVALS, MAX_REVIEW_INTERVAL


def review_interval(level: int) -> int:
    """Days until a word at this level is due again.

    Level 0 (or below) is due immediately. Levels past the end of
    REVIEW_INTERVALS use MAX_REVIEW_INTERVAL, and every result is capped
    at MAX_REVIEW_INTERVAL.
    """
    if level <= 0:
        days = 0
    elif level <= len(REVIEW_INTERVALS):
        days = REVIEW_INTERVALS[level - 1]
    else:
        days = MAX_REVIEW_INTERVAL
    return min(days, MAX_REVIEW_INTERVAL)


def schedule(record, now: datetime) -> None:
    """Stamp the record as practiced now and derive its next review date."""
    record.last_practiced = now
    record.next_review_date = now + timedelta(days=review_interval(record.level))


def advance(record, now: datetime) -> None:
    """Move a record up one level after a completed drill."""
    record.level += 1
    schedule(record, now)


def due_words(words, now: datetime) -> list:
    """Records due at `now`, earliest review date first.

    sorted() is stable, so records sharing a review date keep list order.
    """
    due = [record for record in words if record.next_review_date <= now]
    return sorted(due, key=lambda record: record.next_review_date)


def select_next_due(words, now: datetime):
    """Return the record to practice next, or None when nothing is due."""
    due = due_words(words, now)
    if not due:
        return None
    return due[0]


def next_due_date(words) -> datetime | None:
    """Earliest upcoming review date across the list."""
    dates = [record.next_review_date for record in words]
    if not dates:
        return None
    return min(dates)
