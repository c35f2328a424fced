# src/hlcolor/cli/formatter.py
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from hlcolor.core.models import StreamStats
from hlcolor.core.patterns import PatternError
from hlcolor.core.stream import StreamError

# stdout carries the colorized stream, so every human-facing message goes to stderr
console = Console(stderr=True)


class DiagnosticFormatter:
    """
    Renders errors and run summaries for the CLI.
    User-supplied text is escaped so regex brackets are never read as markup.
    """

    def __init__(self, target: Console = console):
        self.console = target

    def pattern_error(self, error: PatternError):
        self.console.print(
            f"[bold red]Error:[/bold red] Cannot parse regex pattern "
            f"'[white]{escape(error.pattern)}[/white]': {escape(error.reason)}",
            highlight=False,
        )

    def stream_error(self, error: StreamError):
        self.console.print(f"[bold red]I/O Error:[/bold red] {escape(str(error))}", highlight=False)

    def interrupted(self):
        self.console.print("\n[bold red]Terminated by user.[/bold red]")

    def summary(self, stats: StreamStats):
        """Final counters, shown with --stats."""
        self.console.print(Panel(
            f"[bold white]Run Summary[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Lines Read:     {stats.lines_read}\n"
            f"Lines Emitted:  [green]{stats.lines_emitted}[/green]\n"
            f"Matches:        [cyan]{stats.matches}[/cyan]\n"
            f"Bytes Written:  {stats.bytes_written}\n"
            f"Flushes:        {stats.flushes}",
            border_style="dim",
            expand=False,
        ))
