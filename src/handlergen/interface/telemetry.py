"""Terminal telemetry: rich console output mirrored to the standard logging tree."""

import logging

from rich.console import Console
from rich.markup import escape

from handlergen.domain.constants import HANDLERGEN_BANNER
from handlergen.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """Implements TelemetryPort with a rich Console (stderr) and a logger."""

    def __init__(self, project_name: str, color: str, welcome: str) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        # stderr keeps stdout clean for `handlergen expand` piping.
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(project_name.lower())

    def handshake(self) -> None:
        self.console.print(HANDLERGEN_BANNER, style=self.color, markup=False)
        self.console.print(f"[bold {self.color}]{self.project_name}[/] {self.welcome}")
        self.logger.info("%s session started", self.project_name)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {escape(message)}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/] {escape(message)}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/] {escape(message)}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
