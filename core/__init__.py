from .models import WordRecord, WordList
from .interfaces import DictionaryProvider, Storage
from .scheduler import review_interval, advance, select_next_due
from .session import DrillSession, Event, validate_repeat_count
from .utils import censor_word_in_definition, utc_now
from .config import (
    REVIEW_INTERVALS, MAX_REVIEW_INTERVAL,
    DEFAULT_REPEAT_COUNT, MIN_REPEAT_COUNT,
    STATE_TYPING, STATE_CELEBRATING, STATE_PENALIZING
)

__all__ = [
    'WordRecord', 'WordList',
    'DictionaryProvider', 'Storage',
    'review_interval', 'advance', 'select_next_due',
    'DrillSession', 'Event', 'validate_repeat_count',
    'censor_word_in_definition', 'utc_now',
    'REVIEW_INTERVALS', 'MAX_REVIEW_INTERVAL',
    'DEFAULT_REPEAT_COUNT', 'MIN_REPEAT_COUNT',
    'STATE_TYPING', 'STATE_CELEBRATING', 'STATE_PENALIZING'
]
