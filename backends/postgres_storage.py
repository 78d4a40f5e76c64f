"""PostgreSQL storage implementation."""

import json
import logging
import os

import psycopg2
from psycopg2.extras import RealDictCursor

from core.config import APP_DIR, CONFIG_FILE
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, db_url: str = None, list_id: str = 'default', app_dir: str = None):
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/spell'
        )
        self.list_id = list_id
        self.app_dir = app_dir or os.path.expanduser(os.environ.get('SPELL_HOME', APP_DIR))
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS word_lists (
                    list_id VARCHAR(255) PRIMARY KEY,
                    words JSONB NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            # Definitions cache (shared across all lists)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS definitions (
                    word VARCHAR(255) PRIMARY KEY,
                    definition TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_config(self) -> dict:
        config_file = os.path.join(self.app_dir, CONFIG_FILE)
        if not os.path.exists(config_file):
            return {}
        with open(config_file, 'r') as f:
            return json.load(f)

    def load_words(self) -> list[dict] | None:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                "SELECT words FROM word_lists WHERE list_id = %s",
                (self.list_id,)
            )
            row = cur.fetchone()
        if row:
            return row['words']
        return None

    def save_words(self, words: list[dict]) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO word_lists (list_id, words, updated_at)
                    VALUES (%s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (list_id)
                    DO UPDATE SET words = EXCLUDED.words, updated_at = CURRENT_TIMESTAMP
                """, (self.list_id, json.dumps(words)))
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error saving word list '{self.list_id}': {e}")
            self.conn.rollback()
            raise

    def get_definition(self, word: str) -> str | None:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    "SELECT definition FROM definitions WHERE word = %s",
                    (word.casefold(),)
                )
                row = cur.fetchone()
                if row:
                    return row['definition']
                return None
        except psycopg2.Error as e:
            logger.warning(f"Error getting definition for '{word}': {e}")
            return None

    def save_definition(self, word: str, definition: str) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO definitions (word, definition)
                    VALUES (%s, %s)
                    ON CONFLICT (word)
                    DO UPDATE SET definition = EXCLUDED.definition
                """, (word.casefold(), definition))
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error saving definition for '{word}': {e}")
            self.conn.rollback()
            raise
