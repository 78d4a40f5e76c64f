"""Tests for the console UI and command line entry point."""

import io
import json
import os
import tempfile
import unittest
from datetime import timedelta
from unittest.mock import patch

from rich.console import Console

from backends.file_storage import FileStorage
from cli import __main__ as spell_cli
from cli.console import ConsoleUI
from cli.keys import decode_keys
from core.config import OUTCOME_COMPLETED, OUTCOME_LIST_EMPTY, OUTCOME_NOTHING_DUE, OUTCOME_INTERRUPTED
from core.models import WordList
from core.session import DrillSession

from tests.test_core import MockDictionaryProvider, MockStorage, NOW, make_words


def make_ui() -> tuple[ConsoleUI, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, width=80, force_terminal=False)
    return ConsoleUI(console, flash_seconds=0, clock=lambda: NOW), output


class TestConsoleUI(unittest.TestCase):
    """Tests for ConsoleUI."""

    def test_run_to_completion(self):
        ui, output = make_ui()
        storage = MockStorage()
        session = DrillSession(make_words(('cat', NOW)), storage, repeat_count=2, clock=lambda: NOW)
        outcome = ui.run(session, iter(decode_keys('catcat')))
        self.assertEqual(outcome, OUTCOME_COMPLETED)
        self.assertEqual(session.words.records[0].level, 1)
        self.assertIn('You completed the list!', output.getvalue())

    def test_definition_is_censored(self):
        ui, output = make_ui()
        words = WordList()
        words.add('cat', 'A cat is a small pet.', NOW)
        session = DrillSession(words, MockStorage(), clock=lambda: NOW)
        ui.run(session, iter(decode_keys('\x03')))
        text = output.getvalue()
        self.assertIn('A *** is a small pet.', text)
        self.assertIn('Progress saved.', text)

    def test_typed_prefix_hides_word(self):
        ui, output = make_ui()
        words = WordList()
        words.add('zebra', 'a striped animal', NOW)
        session = DrillSession(words, MockStorage(), clock=lambda: NOW)
        session.start(NOW)
        session.type_char('z', NOW)
        ui.render(session)
        self.assertNotIn('zebra', output.getvalue())
        self.assertIn('0/3', output.getvalue())

    def test_mistake_then_recovery(self):
        ui, _ = make_ui()
        session = DrillSession(make_words(('cat', NOW)), MockStorage(), repeat_count=1, clock=lambda: NOW)
        outcome = ui.run(session, iter(decode_keys('cxcat')))
        self.assertEqual(outcome, OUTCOME_COMPLETED)

    def test_empty_list_message(self):
        ui, output = make_ui()
        session = DrillSession(WordList(), MockStorage())
        self.assertEqual(ui.run(session, iter([])), OUTCOME_LIST_EMPTY)
        self.assertIn('Your spelling list is empty.', output.getvalue())

    def test_nothing_due_message(self):
        ui, output = make_ui()
        session = DrillSession(make_words(('cat', NOW + timedelta(days=2))), MockStorage())
        self.assertEqual(ui.run(session, iter([])), OUTCOME_NOTHING_DUE)
        self.assertIn('Nothing is due for review.', output.getvalue())
        self.assertIn('Next review:', output.getvalue())

    def test_delete_last_word(self):
        ui, output = make_ui()
        storage = MockStorage()
        session = DrillSession(make_words(('cat', NOW)), storage, clock=lambda: NOW)
        self.assertEqual(ui.run(session, iter(decode_keys('\x04'))), OUTCOME_LIST_EMPTY)
        self.assertEqual(storage.words, [])
        self.assertIn('Spelling list is now empty.', output.getvalue())

    def test_word_table(self):
        ui, output = make_ui()
        ui.print_word_table(make_words(('cat', NOW), ('dog', NOW + timedelta(days=3))))
        text = output.getvalue()
        self.assertIn('cat', text)
        self.assertIn('dog', text)
        self.assertIn('1 due', text)


class TestMain(unittest.TestCase):
    """Tests for the spell command."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.env = patch.dict(os.environ, {'SPELL_HOME': self.tmp.name, 'SPELL_STORAGE': 'file'})
        self.env.start()
        self.dictionary = MockDictionaryProvider()
        self.provider_patch = patch.object(spell_cli, 'FreeDictionaryProvider', return_value=self.dictionary)
        self.provider_patch.start()

    def tearDown(self):
        self.provider_patch.stop()
        self.env.stop()
        self.tmp.cleanup()

    def stored_words(self) -> WordList:
        return WordList.from_list(FileStorage(app_dir=self.tmp.name).load_words())

    def test_add_word(self):
        self.assertEqual(spell_cli.main(['necessary']), 0)
        words = self.stored_words()
        self.assertEqual(len(words), 1)
        self.assertEqual(words.find('necessary').definition, 'definition of necessary')
        self.assertEqual(words.find('necessary').level, 0)

    def test_add_duplicate_fails(self):
        spell_cli.main(['Cat'])
        self.assertEqual(spell_cli.main(['cat']), 1)
        self.assertEqual(len(self.stored_words()), 1)

    def test_first_run_creates_empty_list(self):
        with patch.object(spell_cli, 'read_events', return_value=iter([])), \
                patch.object(spell_cli, 'raw_mode'):
            self.assertEqual(spell_cli.main([]), 0)
        self.assertEqual(FileStorage(app_dir=self.tmp.name).load_words(), [])

    def test_reset_and_remove(self):
        spell_cli.main(['cat'])
        spell_cli.main(['dog'])
        self.assertEqual(spell_cli.main(['--reset', 'CAT']), 0)
        self.assertEqual(spell_cli.main(['--remove', 'dog']), 0)
        self.assertEqual([r.word for r in self.stored_words()], ['cat'])
        self.assertEqual(spell_cli.main(['--remove', 'dog']), 1)

    def test_list(self):
        spell_cli.main(['cat'])
        self.assertEqual(spell_cli.main(['--list']), 0)

    def test_list_skips_corrupt_entries(self):
        FileStorage(app_dir=self.tmp.name).save_words([
            {'word': 5, 'definition': 'x'},
            {'word': 'cat', 'definition': 'a pet'}
        ])
        self.assertEqual(spell_cli.main(['--list']), 0)

    def test_config_with_fractional_repeat_count(self):
        with open(os.path.join(self.tmp.name, 'config.json'), 'w') as f:
            json.dump({'repeat_count': 2.9}, f)
        with self.assertRaises(SystemExit) as ctx:
            spell_cli.main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_repeat_count(self):
        with self.assertRaises(SystemExit) as ctx:
            spell_cli.main(['--repeat', '0'])
        self.assertEqual(ctx.exception.code, 2)

    def test_drill_session_uses_keys(self):
        spell_cli.main(['cat'])
        with patch.object(spell_cli, 'read_events', return_value=iter(decode_keys('cat'))), \
                patch.object(spell_cli, 'raw_mode'), \
                patch('cli.console.time.sleep'):
            self.assertEqual(spell_cli.main(['-r', '1']), 0)
        self.assertEqual(self.stored_words().find('cat').level, 1)

    def test_legacy_text_list_is_migrated(self):
        with open(os.path.join(self.tmp.name, 'spellingList.txt'), 'w') as f:
            f.write('cat\n\ndog\ncat\n')
        self.assertEqual(spell_cli.main(['--list']), 0)
        self.assertEqual([r.word for r in self.stored_words()], ['cat', 'dog'])
        self.assertTrue(os.path.exists(os.path.join(self.tmp.name, 'spellingList.txt.bak')))
        self.assertEqual(self.dictionary.calls, ['cat', 'dog'])


class TestInterruptOutcome(unittest.TestCase):
    """Interrupt leaves earlier progress in place."""

    def test_interrupt_after_level_up(self):
        ui, _ = make_ui()
        storage = MockStorage()
        session = DrillSession(make_words(('cat', NOW), ('dog', NOW)), storage, repeat_count=1, clock=lambda: NOW)
        outcome = ui.run(session, iter(decode_keys('cat\x03')))
        self.assertEqual(outcome, OUTCOME_INTERRUPTED)
        self.assertEqual(storage.words[0]['level'], 1)
        self.assertEqual(storage.words[1]['level'], 0)


if __name__ == '__main__':
    unittest.main()
