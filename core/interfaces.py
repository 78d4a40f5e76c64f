"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class DictionaryProvider(ABC):
    """Abstract base class for word definition lookup."""

    @abstractmethod
    def definition_for(self, word: str) -> str:
        """Get a definition for a word. Returns a placeholder string on failure."""
        pass


class Storage(ABC):
    """Abstract base class for word list and definition storage."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict (empty when none is set)."""
        pass

    @abstractmethod
    def load_words(self) -> list[dict] | None:
        """Load the word list. Returns list of word dicts or None if not found."""
        pass

    @abstractmethod
    def save_words(self, words: list[dict]) -> None:
        """Save the whole word list."""
        pass

    @abstractmethod
    def get_definition(self, word: str) -> str | None:
        """Get a cached definition for a word. Returns None if not cached."""
        pass

    @abstractmethod
    def save_definition(self, word: str, definition: str) -> None:
        """Cache the definition for a word."""
        pass
