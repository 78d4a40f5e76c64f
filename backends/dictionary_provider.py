"""Free Dictionary API provider implementation."""

import logging
from urllib.parse import quote

import requests

from core.config import DICTIONARY_URL, REQUEST_TIMEOUT, NO_DEFINITION, FETCH_FAILED
from core.interfaces import DictionaryProvider, Storage

logger = logging.getLogger(__name__)


class FreeDictionaryProvider(DictionaryProvider):
    """Looks words up on dictionaryapi.dev, caching hits in storage."""

    def __init__(self, storage: Storage = None, base_url: str = DICTIONARY_URL,
                 timeout: float = REQUEST_TIMEOUT):
        self.storage = storage
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout = timeout
        self.session = requests.Session()

    def _fetch(self, word: str) -> str:
        try:
            response = self.session.get(f"{self.base_url}{quote(word)}", timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Definition lookup for '{word}' failed: {e}")
            return FETCH_FAILED
        if not response.ok:
            logger.info(f"No definition for '{word}' (HTTP {response.status_code})")
            return NO_DEFINITION
        try:
            entries = response.json()
            definition = entries[0]['meanings'][0]['definitions'][0]['definition']
        except (ValueError, LookupError, TypeError) as e:
            logger.warning(f"Unexpected dictionary response for '{word}': {e}")
            return NO_DEFINITION
        return definition or NO_DEFINITION

    def definition_for(self, word: str) -> str:
        if self.storage:
            cached = self.storage.get_definition(word)
            if cached:
                return cached
        definition = self._fetch(word)
        if self.storage and definition not in (NO_DEFINITION, FETCH_FAILED):
            try:
                self.storage.save_definition(word, definition)
            except Exception as e:
                logger.warning(f"Could not cache definition for '{word}': {e}")
        return definition
