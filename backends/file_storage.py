"""File-based storage implementation."""

import json
import logging
import os

from core.config import APP_DIR, WORDS_FILE, LEGACY_WORDS_FILE, DEFINITIONS_FILE, CONFIG_FILE
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """JSON files under the app directory (~/.spell by default)."""

    def __init__(self, app_dir: str = None):
        self.app_dir = app_dir or os.path.expanduser(os.environ.get('SPELL_HOME', APP_DIR))
        os.makedirs(self.app_dir, exist_ok=True)

    @property
    def words_file(self) -> str:
        return os.path.join(self.app_dir, WORDS_FILE)

    @property
    def legacy_words_file(self) -> str:
        return os.path.join(self.app_dir, LEGACY_WORDS_FILE)

    def _get_definitions_file(self) -> str:
        return os.path.join(self.app_dir, DEFINITIONS_FILE)

    def load_config(self) -> dict:
        config_file = os.path.join(self.app_dir, CONFIG_FILE)
        if not os.path.exists(config_file):
            return {}
        with open(config_file, 'r') as f:
            return json.load(f)

    def load_words(self) -> list[dict] | None:
        if not os.path.exists(self.words_file):
            return None
        with open(self.words_file, 'r') as f:
            content = f.read()
        if not content.strip():
            return []
        return json.loads(content)

    def save_words(self, words: list[dict]) -> None:
        try:
            with open(self.words_file, 'w') as f:
                json.dump(words, f, indent=2)
        except OSError as e:
            logger.error(f"Error saving word list to {self.words_file}: {e}")
            raise

    def needs_migration(self) -> bool:
        """True when only the old plain-text word list exists."""
        return not os.path.exists(self.words_file) and os.path.exists(self.legacy_words_file)

    def read_legacy_words(self) -> str:
        with open(self.legacy_words_file, 'r') as f:
            return f.read()

    def retire_legacy_words(self) -> str:
        """Rename the old text list out of the way. Returns the new path."""
        backup = f'{self.legacy_words_file}.bak'
        os.replace(self.legacy_words_file, backup)
        return backup

    def _load_definitions(self) -> dict:
        """Load all cached definitions."""
        definitions_file = self._get_definitions_file()
        if os.path.exists(definitions_file):
            try:
                with open(definitions_file, 'r') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable definitions cache: {e}")
                return {}
        return {}

    def _save_definitions(self, definitions: dict) -> None:
        with open(self._get_definitions_file(), 'w') as f:
            json.dump(definitions, f, indent=2)

    def get_definition(self, word: str) -> str | None:
        return self._load_definitions().get(word.casefold())

    def save_definition(self, word: str, definition: str) -> None:
        try:
            definitions = self._load_definitions()
            definitions[word.casefold()] = definition
            self._save_definitions(definitions)
        except OSError as e:
            logger.error(f"Error saving definition for '{word}': {e}")
            raise
