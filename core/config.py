"""Configuration constants for spell application."""

# Review scheduling (days)
REVIEW_INTERVALS = [1, 3, 7, 16, 35, 70, 140]
MAX_REVIEW_INTERVAL = 180     # Hard ceiling for any interval

# Drill
DEFAULT_REPEAT_COUNT = 3      # Correct spellings needed before a level up
MIN_REPEAT_COUNT = 1
FLASH_SECONDS = 0.7           # How long a success/error flash stays on screen

# Session states
STATE_TYPING = 'typing'
STATE_CELEBRATING = 'celebrating'
STATE_PENALIZING = 'penalizing'

# Session outcomes
OUTCOME_COMPLETED = 'completed'
OUTCOME_LIST_EMPTY = 'list_empty'
OUTCOME_NOTHING_DUE = 'nothing_due'
OUTCOME_INTERRUPTED = 'interrupted'

# Dictionary lookup
DICTIONARY_URL = 'https://api.dictionaryapi.dev/api/v2/entries/en/'
REQUEST_TIMEOUT = 10          # seconds
NO_DEFINITION = '(no definition found)'
FETCH_FAILED = '(could not fetch definition)'

# Storage
APP_DIR = '~/.spell'
WORDS_FILE = 'spellingList.json'
LEGACY_WORDS_FILE = 'spellingList.txt'
DEFINITIONS_FILE = 'definitions.json'
CONFIG_FILE = 'config.json'
LOG_FILE = 'spell.log'
