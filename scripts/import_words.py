#!/usr/bin/env python3
"""Bulk-add words to the spelling list from a text file (one word per line)."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backends.dictionary_provider import FreeDictionaryProvider
from cli.__main__ import create_storage
from core.models import WordList
from core.utils import parse_legacy_word_list, utc_now


def main():
    parser = argparse.ArgumentParser(description='Import words into the spelling list')
    parser.add_argument('file', help='Text file with one word per line')
    args = parser.parse_args()

    path = Path(args.file)
    if not path.exists():
        print(f"Error: {path} not found")
        return 1

    storage = create_storage()
    dictionary = FreeDictionaryProvider(storage=storage)
    words = WordList.from_list(storage.load_words())
    now = utc_now()

    added = 0
    skipped = 0
    for word in parse_legacy_word_list(path.read_text()):
        if word in words:
            skipped += 1
            continue
        print(f'Fetching definition for "{word}"... ', end='', flush=True)
        words.add(word, dictionary.definition_for(word), now)
        added += 1
        print('Done.')

    storage.save_words(words.to_list())
    print(f"\nAdded {added} words, skipped {skipped} already in the list ({len(words)} total)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
