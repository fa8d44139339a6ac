"""Console helpers shared by the library and the command line."""
import contextlib
from typing import Iterable, List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

CONSOLE = Console()

_WAITING: List[str] = []
_STATUS = None


def print_exception(message: str):
    """Prints an error message followed by the traceback being handled.

    Arguments:
        message: error message to print.
    """
    CONSOLE.print(f"[bold red]ERROR[/] [red]{escape(message)}[/]")
    CONSOLE.print_exception()


def print_info(message: str):
    """Prints an informational message.

    Arguments:
        message: informational message to print.
    """
    CONSOLE.print(escape(message))


def log(message: str):
    """Prints a message with a timestamp.

    Arguments:
        message: message to print.
    """
    CONSOLE.log(escape(message))


def print_table(title: str, columns: Sequence[str], rows: Iterable[Sequence[str]]):
    """Prints rows of strings as a table.

    Arguments:
        title: the table's title.
        columns: the column headers.
        rows: the rows to print, each with one value per column.
    """
    table = Table(title=title)

    for column in columns:
        table.add_column(column, justify="left")

    for row in rows:
        table.add_row(*(escape(value) for value in row))

    CONSOLE.print(table)


@contextlib.contextmanager
def print_waiting(message: str, sep: str = " → "):
    """Shows a spinner until the context is exited.

    Nested calls share the same spinner and join their messages with `sep`.

    Arguments:
        message: message to show while the context is running.
        sep: separator between nested messages.
    """
    global _STATUS  # pylint: disable=global-statement

    _WAITING.append(message)

    try:
        if _STATUS is None:
            with CONSOLE.status(escape(message)) as status:
                _STATUS = status

                try:
                    yield

                finally:
                    _STATUS = None

        else:
            _STATUS.update(escape(sep.join(_WAITING)))

            try:
                yield

            finally:
                _STATUS.update(escape(sep.join(_WAITING[:-1])))

    finally:
        _WAITING.pop()
