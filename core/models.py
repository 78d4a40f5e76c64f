"""Domain models for spell application."""

from datetime import datetime, timedelta

from .scheduler import review_interval, schedule, due_words
from .utils import EPOCH, parse_timestamp


class WordRecord:
    """One word the user is learning, with its review schedule."""

    def __init__(self, word: str, definition: str, level: int = 0,
                 last_practiced: datetime = EPOCH, next_review_date: datetime | None = None):
        self.word = word
        self.definition = definition
        self.level = level
        self.last_practiced = last_practiced
        if next_review_date is None:
            next_review_date = last_practiced + timedelta(days=review_interval(level))
        self.next_review_date = next_review_date

    @property
    def key(self) -> str:
        """Case-insensitive identity of the word."""
        return self.word.casefold()

    def is_due(self, now: datetime) -> bool:
        return self.next_review_date <= now

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'definition': self.definition,
            'level': self.level,
            'lastPracticed': self.last_practiced.isoformat(),
            'nextReviewDate': self.next_review_date.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WordRecord':
        # Entries written before scheduling existed only carry word/definition
        level = max(0, int(data.get('level', 0) or 0))
        last_practiced = parse_timestamp(data.get('lastPracticed'))
        next_review_date = None
        if data.get('nextReviewDate'):
            next_review_date = parse_timestamp(data['nextReviewDate'], default=None)
        return cls(
            data['word'],
            data.get('definition', ''),
            level=level,
            last_practiced=last_practiced,
            next_review_date=next_review_date
        )

    def __repr__(self) -> str:
        return f'WordRecord({self.word!r}, level={self.level}, next_review_date={self.next_review_date.isoformat()})'


class WordList:
    """Ordered collection of word records in insertion order.

    Records are handed out by reference, so scheduling updates made through
    the session are visible here without copying back.
    """

    def __init__(self, records: list[WordRecord] | None = None):
        self.records = []
        for record in records or []:
            self.append(record)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, word: str) -> bool:
        return self.find(word) is not None

    def find(self, word: str) -> WordRecord | None:
        """Look up a record by word, ignoring case."""
        key = word.strip().casefold()
        for record in self.records:
            if record.key == key:
                return record
        return None

    def append(self, record: WordRecord) -> None:
        if not record.word.strip():
            raise ValueError('Word must not be empty')
        if record.key in self:
            raise ValueError(f'"{record.word}" is already in the list')
        self.records.append(record)

    def add(self, word: str, definition: str, now: datetime) -> WordRecord:
        """Add a new word at level 0, due immediately."""
        word = word.strip()
        record = WordRecord(word, definition, level=0, last_practiced=now)
        self.append(record)
        return record

    def remove(self, record: WordRecord) -> None:
        """Remove this exact record (identity, not equality)."""
        for index, candidate in enumerate(self.records):
            if candidate is record:
                del self.records[index]
                return
        raise ValueError(f'"{record.word}" is not in the list')

    def remove_word(self, word: str) -> WordRecord:
        record = self.find(word)
        if record is None:
            raise ValueError(f'"{word}" is not in the list')
        self.remove(record)
        return record

    def reset(self, word: str, now: datetime) -> WordRecord:
        """Send a word back to level 0 so it is drilled from scratch."""
        record = self.find(word)
        if record is None:
            raise ValueError(f'"{word}" is not in the list')
        record.level = 0
        schedule(record, now)
        return record

    def due_count(self, now: datetime) -> int:
        return len(due_words(self.records, now))

    def to_list(self) -> list[dict]:
        return [record.to_dict() for record in self.records]

    @classmethod
    def from_list(cls, data: list[dict] | None) -> 'WordList':
        words = cls()
        for item in data or []:
            if not isinstance(item, dict) or not isinstance(item.get('word'), str) or not item['word'].strip():
                continue
            record = WordRecord.from_dict(item)
            # Keep the first entry when an older file holds duplicates
            if record.key in words:
                continue
            words.append(record)
        return words
