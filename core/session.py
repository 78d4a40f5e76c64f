"""Typing drill session driven by keystroke events."""

import logging
from datetime import datetime

from .config import (
    DEFAULT_REPEAT_COUNT, MIN_REPEAT_COUNT,
    STATE_TYPING, STATE_CELEBRATING, STATE_PENALIZING,
    OUTCOME_COMPLETED, OUTCOME_LIST_EMPTY, OUTCOME_NOTHING_DUE, OUTCOME_INTERRUPTED
)
from .interfaces import Storage
from .models import WordList, WordRecord
from .scheduler import advance, select_next_due
from .utils import utc_now

logger = logging.getLogger(__name__)

EVENT_CHAR = 'char'
EVENT_BACKSPACE = 'backspace'
EVENT_DELETE = 'delete'
EVENT_INTERRUPT = 'interrupt'


class Event:
    """One input event from the keyboard."""

    def __init__(self, kind: str, char: str | None = None):
        self.kind = kind
        self.char = char

    @classmethod
    def key(cls, char: str) -> 'Event':
        return cls(EVENT_CHAR, char)

    def __eq__(self, other) -> bool:
        return isinstance(other, Event) and (self.kind, self.char) == (other.kind, other.char)

    def __repr__(self) -> str:
        if self.char is None:
            return f'Event({self.kind!r})'
        return f'Event({self.kind!r}, {self.char!r})'


def validate_repeat_count(value) -> int:
    """Coerce and check the drill repeat count."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f'Repeat count must be a whole number, got {value!r}')
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValueError(f'Repeat count must be a whole number, got {value!r}')
    if count < MIN_REPEAT_COUNT:
        raise ValueError(f'Repeat count must be at least {MIN_REPEAT_COUNT}, got {count}')
    return count


class DrillSession:
    """State of one drill run over a word list.

    The session owns the list for its lifetime and writes it back through
    the storage after every change to a record's schedule, after every full
    correct spelling and after every deletion. A mismatch only resets the
    streak; the word's level and review date are left alone.
    """

    def __init__(self, words: WordList, storage: Storage,
                 repeat_count: int = DEFAULT_REPEAT_COUNT, clock=utc_now):
        self.words = words
        self.storage = storage
        self.repeat_count = validate_repeat_count(repeat_count)
        self.clock = clock
        self.current: WordRecord | None = None
        self.typed = ''
        self.started = False
        self.streak = 0
        self.state: str | None = None
        self.outcome = None
        self.levels_gained = 0
        self.flash_record = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def start(self, now: datetime | None = None) -> None:
        """Pick the first word, or finish at once if there is nothing to do."""
        now = now or self.clock()
        if len(self.words) == 0:
            self._finish(OUTCOME_LIST_EMPTY)
            return
        self.current = select_next_due(self.words, now)
        if self.current is None:
            self._finish(OUTCOME_NOTHING_DUE)
            return
        self.state = STATE_TYPING
        logger.info(f"Session started on '{self.current.word}' ({len(self.words)} words, repeat {self.repeat_count})")

    def dispatch(self, event: Event, now: datetime | None = None) -> str:
        """Apply one input event and return the resulting state."""
        if self.finished:
            return self.state
        if event.kind == EVENT_INTERRUPT:
            self.interrupt()
        elif event.kind == EVENT_DELETE:
            self.delete_current(now)
        elif event.kind == EVENT_BACKSPACE:
            self.backspace()
        elif event.kind == EVENT_CHAR:
            self.type_char(event.char, now)
        else:
            raise ValueError(f'Unknown event kind: {event.kind}')
        return self.state

    def type_char(self, char: str, now: datetime | None = None) -> str:
        """Check one typed character against the current word."""
        if self.finished or self.state != STATE_TYPING or self.current is None:
            return self.state
        self.started = True
        self.typed += char
        target = self.current.word
        if self.typed == target:
            self._on_word_spelled(now or self.clock())
        elif not target.startswith(self.typed):
            self._on_mismatch()
        return self.state

    def backspace(self) -> None:
        if self.state != STATE_TYPING:
            return
        self.typed = self.typed[:-1]

    def settle(self) -> None:
        """End a success or error flash and go back to typing."""
        if not self.finished:
            self.state = STATE_TYPING

    def delete_current(self, now: datetime | None = None) -> None:
        """Permanently drop the word being drilled."""
        if self.finished or self.current is None:
            return
        removed = self.current
        self.words.remove(removed)
        self._save()
        logger.info(f"Deleted '{removed.word}' ({len(self.words)} words left)")
        self.current = None
        self._clear_attempt()
        self.streak = 0
        if len(self.words) == 0:
            self._finish(OUTCOME_LIST_EMPTY)
            return
        self.current = select_next_due(self.words, now or self.clock())
        if self.current is None:
            self._finish(OUTCOME_NOTHING_DUE)
            return
        self.state = STATE_TYPING

    def interrupt(self) -> None:
        self._finish(OUTCOME_INTERRUPTED)

    def _on_word_spelled(self, now: datetime) -> None:
        self.flash_record = self.current
        self.state = STATE_CELEBRATING
        self.streak += 1
        self._clear_attempt()
        if self.streak < self.repeat_count:
            self._save()
            return
        advance(self.current, now)
        self.levels_gained += 1
        self._save()
        logger.info(f"'{self.current.word}' advanced to level {self.current.level}, next review {self.current.next_review_date.isoformat()}")
        self.streak = 0
        self.current = select_next_due(self.words, now)
        if self.current is None:
            self._finish(OUTCOME_COMPLETED)

    def _on_mismatch(self) -> None:
        self.flash_record = self.current
        logger.debug(f"Mismatch on '{self.current.word}' after typing '{self.typed}'")
        self.state = STATE_PENALIZING
        self.streak = 0
        self._clear_attempt()

    def _clear_attempt(self) -> None:
        self.typed = ''
        self.started = False

    def _save(self) -> None:
        self.storage.save_words(self.words.to_list())

    def _finish(self, outcome: str) -> None:
        self.outcome = outcome
        logger.info(f"Session finished: {outcome}")
