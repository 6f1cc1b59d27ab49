# SPDX-License-Identifier: MIT

import json
from typing import Any, Optional

from rich.console import Console
from rich.padding import Padding

from timbers.errors import TimbersError


class Output:
    """
    Per-invocation output settings.

    Replaces a process-wide --json toggle: every view receives the Output it
    should render through.
    """

    def __init__(
        self,
        json_mode: bool = False,
        color: bool = True,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        self.json_mode = json_mode
        self.console = console or Console(no_color=not color, highlight=False)
        self.err_console = err_console or Console(
            stderr=True, no_color=not color, highlight=False
        )

    def print(self, *objects: Any, **kwargs: Any) -> None:
        self.console.print(*objects, **kwargs)

    def header(self, title: str) -> None:
        self.console.print(
            Padding(f"[dark_orange]timbers[/dark_orange] [sandy_brown]{title}[/sandy_brown]", (1, 0, 0, 1))
        )

    def json(self, data: Any) -> None:
        # plain write so the payload is never wrapped or styled
        self.console.file.write(json.dumps(data, indent=2, default=str) + "\n")

    def warn(self, message: str) -> None:
        if self.json_mode:
            self.err_console.print(f"warning: {message}", markup=False)
            return
        self.err_console.print(f"[yellow]warning:[/yellow] {message}")

    def error(self, error: TimbersError) -> None:
        if self.json_mode:
            self.json({"error": error.message, "code": error.exit_code})
            return
        self.err_console.print(f"[bold red]error:[/bold red] {error.message}")
