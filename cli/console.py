"""Console UI for spell application."""

import time
from datetime import datetime

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.config import (
    FLASH_SECONDS,
    STATE_CELEBRATING, STATE_PENALIZING,
    OUTCOME_COMPLETED, OUTCOME_LIST_EMPTY, OUTCOME_NOTHING_DUE
)
from core.models import WordList
from core.scheduler import next_due_date
from core.session import DrillSession
from core.utils import censor_word_in_definition, utc_now


def format_local(dt: datetime) -> str:
    """Render a UTC timestamp in local time."""
    return dt.astimezone().strftime('%Y-%m-%d %H:%M')


class ConsoleUI:
    """Full-screen drill view."""

    def __init__(self, console: Console = None, flash_seconds: float = FLASH_SECONDS, clock=utc_now):
        self.console = console or Console()
        self.flash_seconds = flash_seconds
        self.clock = clock

    def print_centered(self, text: str, style: str = ''):
        self.console.print(Text(text, style=style), justify='center')

    def show_word(self, record, display: str, style: str, status: str = ''):
        """Clear the screen and draw a definition with its word line."""
        self.console.clear()
        self.console.print('\n\n')
        self.print_centered(censor_word_in_definition(record.word, record.definition), 'dim')
        self.console.print('\n\n')
        self.print_centered(display, style)
        if status:
            self.console.print()
            self.print_centered(status, 'dim')

    def render(self, session: DrillSession):
        """Draw the current word: shown in full until typing starts, then hidden."""
        record = session.current
        if record is None:
            return
        if not session.started:
            display = record.word
        else:
            display = session.typed + ' ' * (len(record.word) - len(session.typed))
        due = session.words.due_count(self.clock())
        status = f'{session.streak}/{session.repeat_count}  ·  level {record.level}  ·  {due} due'
        self.show_word(record, display, 'white', status)

    def flash(self, session: DrillSession):
        """Briefly show the attempted word in green or red."""
        record = session.flash_record
        if record is None:
            return
        style = 'bold green' if session.state == STATE_CELEBRATING else 'bold red'
        self.show_word(record, record.word, style)
        time.sleep(self.flash_seconds)

    def print_outcome(self, session: DrillSession):
        if session.outcome == OUTCOME_COMPLETED:
            self.console.clear()
            self.print_centered('✨ You completed the list! ✨', 'bold yellow')
        elif session.outcome == OUTCOME_LIST_EMPTY:
            self.console.clear()
            self.print_centered('Spelling list is now empty.', 'yellow')
        elif session.outcome == OUTCOME_NOTHING_DUE:
            self.print_nothing_due(session.words)
        else:
            self.console.print()
            self.print_centered('Progress saved.', 'dim')

    def print_nothing_due(self, words: WordList):
        self.print_centered('Nothing is due for review.', 'yellow')
        upcoming = next_due_date(words)
        if upcoming is not None:
            self.print_centered(f'Next review: {format_local(upcoming)}', 'dim')

    def print_empty_list(self):
        self.print_centered('Your spelling list is empty.\nAdd a word with `spell <word>`', 'yellow')

    def print_word_table(self, words: WordList):
        """Print every word with its level and next review time."""
        if len(words) == 0:
            self.print_empty_list()
            return
        now = self.clock()
        table = Table(title=f'Spelling list ({words.due_count(now)} due)')
        table.add_column('Word')
        table.add_column('Level', justify='right')
        table.add_column('Next review')
        table.add_column('Due', justify='center')
        for record in words:
            table.add_row(
                record.word,
                str(record.level),
                format_local(record.next_review_date),
                '✓' if record.is_due(now) else ''
            )
        self.console.print(table)

    def run(self, session: DrillSession, events) -> str:
        """Run the drill loop over an event stream. Returns the session outcome."""
        if len(session.words) == 0:
            self.print_empty_list()
            return OUTCOME_LIST_EMPTY

        session.start(self.clock())
        if session.finished:
            self.print_outcome(session)
            return session.outcome

        self.console.show_cursor(False)
        try:
            self.render(session)
            for event in events:
                session.dispatch(event, self.clock())
                if session.state in (STATE_CELEBRATING, STATE_PENALIZING):
                    self.flash(session)
                    session.settle()
                if session.finished:
                    break
                self.render(session)
        finally:
            self.console.show_cursor(True)

        self.print_outcome(session)
        return session.outcome
