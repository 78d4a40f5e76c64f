"""Entry point for spell CLI."""

import argparse
import logging
import os
import sys

import psycopg2
from rich.console import Console

from backends.dictionary_provider import FreeDictionaryProvider
from backends.file_storage import FileStorage
from backends.postgres_storage import PostgresStorage
from cli.console import ConsoleUI
from cli.keys import raw_mode, read_events
from core.config import DEFAULT_REPEAT_COUNT, DICTIONARY_URL, REQUEST_TIMEOUT, LOG_FILE
from core.interfaces import DictionaryProvider, Storage
from core.models import WordList
from core.session import DrillSession, validate_repeat_count
from core.utils import parse_legacy_word_list, utc_now

logger = logging.getLogger(__name__)


def create_storage() -> Storage:
    """File storage by default, set SPELL_STORAGE=postgres for PostgreSQL."""
    storage_type = os.environ.get('SPELL_STORAGE', 'file')
    if storage_type == 'postgres':
        return PostgresStorage()
    return FileStorage()


def configure_logging(app_dir: str, debug: bool = False) -> None:
    """Log to a file so messages never land on the drill screen."""
    os.makedirs(app_dir, exist_ok=True)
    logging.basicConfig(
        filename=os.path.join(app_dir, LOG_FILE),
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def migrate_legacy_words(storage: FileStorage, dictionary: DictionaryProvider, console: Console) -> WordList:
    """Convert the old spellingList.txt into the JSON word list."""
    console.print('[yellow]Old `spellingList.txt` found. Migrating to new JSON format...[/yellow]')
    words = WordList()
    now = utc_now()
    for word in parse_legacy_word_list(storage.read_legacy_words()):
        if word in words:
            continue
        console.print(f'Fetching definition for "{word}"... ', end='', markup=False)
        words.add(word, dictionary.definition_for(word), now)
        console.print('[green]Done.[/green]')
    storage.save_words(words.to_list())
    storage.retire_legacy_words()
    logger.info(f"Migrated {len(words)} words from {storage.legacy_words_file}")
    console.print('[bold green]Migration complete! The old file has been renamed to `spellingList.txt.bak`.[/bold green]')
    return words


def load_words(storage: Storage, dictionary: DictionaryProvider, console: Console) -> WordList:
    """Load the word list, migrating or creating it on first run."""
    if isinstance(storage, FileStorage) and storage.needs_migration():
        return migrate_legacy_words(storage, dictionary, console)
    data = storage.load_words()
    if data is None:
        storage.save_words([])
        return WordList()
    return WordList.from_list(data)


def add_word(storage: Storage, dictionary: DictionaryProvider, words: WordList,
             word: str, console: Console) -> int:
    """Look up a definition and append the word. Returns an exit code."""
    if word in words:
        console.print(f'"{word}" is already in the list.', style='yellow', markup=False)
        return 1
    console.print(f'Adding "{word}" to the list...', markup=False)
    try:
        words.add(word, dictionary.definition_for(word), utc_now())
    except ValueError as e:
        console.print(str(e), style='red', markup=False)
        return 1
    storage.save_words(words.to_list())
    logger.info(f"Added '{word}' ({len(words)} words)")
    console.print('[green]Done.[/green]')
    return 0


def update_word(storage: Storage, words: WordList, word: str, console: Console, *, reset: bool) -> int:
    """Reset or remove one word by name. Returns an exit code."""
    try:
        if reset:
            words.reset(word, utc_now())
        else:
            words.remove_word(word)
    except ValueError as e:
        console.print(str(e), style='red', markup=False)
        return 1
    storage.save_words(words.to_list())
    action = 'Reset' if reset else 'Removed'
    logger.info(f"{action} '{word}'")
    console.print(f'{action} "{word}".', markup=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spell',
        description='Spaced-repetition spelling practice'
    )
    parser.add_argument('word', nargs='?', help='Add a word to the list and exit')
    parser.add_argument(
        '-r', '--repeat',
        type=int,
        default=None,
        help=f'Correct spellings needed before a word levels up (default: {DEFAULT_REPEAT_COUNT})'
    )
    parser.add_argument('--list', action='store_true', help='Show the word list and review dates')
    parser.add_argument('--reset', metavar='WORD', help='Send a word back to level 0')
    parser.add_argument('--remove', metavar='WORD', help='Delete a word from the list')
    parser.add_argument('--debug', action='store_true', help='Verbose logging to spell.log')
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    storage = create_storage()
    configure_logging(storage.app_dir, args.debug)

    try:
        config = storage.load_config()
    except (OSError, ValueError) as e:
        console.print(f'Could not read config: {e}', style='red', markup=False)
        return 1

    try:
        repeat_count = validate_repeat_count(
            args.repeat if args.repeat is not None else config.get('repeat_count', DEFAULT_REPEAT_COUNT)
        )
    except ValueError as e:
        parser.error(str(e))

    dictionary = FreeDictionaryProvider(
        storage=storage,
        base_url=config.get('dictionary_url', DICTIONARY_URL),
        timeout=config.get('request_timeout', REQUEST_TIMEOUT)
    )

    try:
        words = load_words(storage, dictionary, console)
        if args.word:
            return add_word(storage, dictionary, words, args.word, console)
        if args.reset:
            return update_word(storage, words, args.reset, console, reset=True)
        if args.remove:
            return update_word(storage, words, args.remove, console, reset=False)

        ui = ConsoleUI(console)
        if args.list:
            ui.print_word_table(words)
            return 0

        session = DrillSession(words, storage, repeat_count=repeat_count)
        with raw_mode(sys.stdin):
            ui.run(session, read_events(sys.stdin))
        return 0
    except (OSError, ValueError, psycopg2.Error) as e:
        logger.exception("Storage failure")
        console.print(f'\nError: {e}', style='red', markup=False)
        return 1
    except KeyboardInterrupt:
        console.show_cursor(True)
        console.print('\nGoodbye!')
        return 0


if __name__ == '__main__':
    sys.exit(main())
