from __future__ import annotations
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import ImageChartsError
from .models import ParamRow


class Reporter:
    def __init__(self, console: Console) -> None:
        self.console = console

    def params(self, rows: List[ParamRow], signed: bool) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Name", style="bold")
        table.add_column("Value")
        table.add_column("Encoded")
        for r in rows:
            table.add_row(r.name, r.value, r.encoded)
        title = "Parameters (signed)" if signed else "Parameters"
        self.console.print(Panel.fit(table, title=Text(title, style="bold blue")))

    def plain(self, text: str) -> None:
        # soft_wrap keeps long URLs and data URIs on one line
        self.console.print(text, soft_wrap=True, highlight=False, markup=False)

    def saved(self, path: str, size: int, mime_type: str) -> None:
        self.console.print(f"[bold green]Saved[/bold green] {size} bytes ({mime_type}) to {path}")

    def error(self, err: ImageChartsError) -> None:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Message", err.message)
        if err.status_code is not None:
            table.add_row("Status", str(err.status_code))
        if err.code:
            table.add_row("Code", err.code)
        self.console.print(Panel.fit(table, title=Text("Error", style="bold red")))
