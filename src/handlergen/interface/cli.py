"""CLI entry points for handlergen - Thin Controller using Typer."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from handlergen.domain.config import ConfigurationLoader
from handlergen.domain.entities import HandlerPlan
from handlergen.domain.errors import ExpansionError
from handlergen.domain.naming import NameScheme
from handlergen.domain.protocols import FileSystemProtocol, HandlerExpanderProtocol, TelemetryPort
from handlergen.use_cases.expand_handler import ExpandHandlerUseCase
from handlergen.use_cases.inspect_handler import InspectHandlerUseCase

# B008: avoid function call in default; use module-level singletons for Typer options
_SOURCE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False, help="Handler module to expand")
_HANDLER_OPTION = typer.Option(
    None, "--handler", "-H", help="Handler class name (default: [tool.handlergen.handlers])")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    expander: HandlerExpanderProtocol
    console: Console


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_handler(source: Path, handler: Optional[str], config_loader: ConfigurationLoader) -> str:
        """Explicit --handler wins; otherwise look the module up in the configured handler map."""
        if handler:
            return handler
        configured = config_loader.handler_for(str(source))
        if configured:
            return configured
        raise typer.BadParameter(
            f"no handler given for {source}; pass --handler or add it to [tool.handlergen.handlers]",
            param_hint="--handler",
        )

    @staticmethod
    def render_plan(plan: HandlerPlan) -> Table:
        """Tabulate publish targets and the declarations each one produces."""
        names = NameScheme(plan.handler)
        table = Table(title=f"{plan.handler}: {plan.matched_blocks} block(s), {len(plan.targets)} target(s)")
        table.add_column("Method", style="bold")
        table.add_column("Tag")
        table.add_column("Message")
        table.add_column("Fields")
        messages = {m.method_name: m for m in plan.messages}
        for target in plan.targets:
            if target.is_initializer:
                table.add_row(target.name, "on_create", "-", "-")
                continue
            message = messages[target.name]
            fields = ", ".join(f"{f.name}: {f.type_source}" for f in message.fields) or "(none)"
            table.add_row(target.name, "publish", message.class_name, fields)
        table.caption = f"client: {names.client}, factory: {names.client_factory}"
        return table

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="handlergen",
            help="Expand annotated account handler modules into client, factory and message declarations.",
            add_completion=False,
        )

        def _expand_use_case() -> ExpandHandlerUseCase:
            return ExpandHandlerUseCase(
                expander=deps.expander,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                config_loader=deps.config_loader,
            )

        @app.command()
        def expand(
            source: Path = _SOURCE_ARGUMENT,
            handler: Optional[str] = _HANDLER_OPTION,
            output: Optional[Path] = typer.Option(
                None, "--output", "-o", help="Write the expansion here instead of stdout"),
            in_place: bool = typer.Option(
                False, "--in-place", help="Overwrite SOURCE with its expansion"),
            check: bool = typer.Option(
                False, "--check", help="Exit 1 if the output file is missing or stale; write nothing"),
        ) -> None:
            """Expand one handler module."""
            if output is not None and in_place:
                raise typer.BadParameter("--output and --in-place are mutually exclusive")
            handler_name = CLIAppFactory.resolve_handler(source, handler, deps.config_loader)
            target: Optional[str] = str(source) if in_place else (str(output) if output else None)
            if check and target is None:
                raise typer.BadParameter("--check needs --output or --in-place")
            try:
                outcome = _expand_use_case().execute(str(source), handler_name, target, check=check)
            except ExpansionError as exc:
                deps.telemetry.error(f"{source}: {exc}")
                sys.exit(1)
            if check:
                if not outcome.up_to_date:
                    deps.telemetry.error(f"{target} is out of date with {source}")
                    sys.exit(1)
                deps.telemetry.step(f"{target} is up to date")
                return
            if target is None:
                sys.stdout.write(outcome.code or "")

        @app.command()
        def inspect(
            source: Path = _SOURCE_ARGUMENT,
            handler: Optional[str] = _HANDLER_OPTION,
        ) -> None:
            """Show the publish targets of a handler module and what each one generates."""
            handler_name = CLIAppFactory.resolve_handler(source, handler, deps.config_loader)
            use_case = InspectHandlerUseCase(
                expander=deps.expander, filesystem=deps.filesystem, config_loader=deps.config_loader
            )
            try:
                plan = use_case.execute(str(source), handler_name)
            except ExpansionError as exc:
                deps.telemetry.error(f"{source}: {exc}")
                sys.exit(1)
            if plan.matched_blocks == 0:
                deps.telemetry.warning(f"no class named {handler_name} in {source}")
            deps.console.print(CLIAppFactory.render_plan(plan))

        @app.command()
        def build(
            check: bool = typer.Option(
                False, "--check", help="Exit 1 if any generated module is missing or stale; write nothing"),
        ) -> None:
            """Expand every module listed in [tool.handlergen.handlers]."""
            deps.telemetry.handshake()
            if not deps.config_loader.handlers:
                deps.telemetry.warning("no handler modules configured in [tool.handlergen.handlers]")
                return
            outcomes = _expand_use_case().build_all(check=check)
            failed = [o for o in outcomes if o.failed]
            stale = [o for o in outcomes if not o.failed and not o.up_to_date and not o.written]
            for outcome in stale:
                deps.telemetry.error(f"{outcome.output_path} is out of date with {outcome.source_path}")
            written = sum(1 for o in outcomes if o.written)
            deps.telemetry.step(
                f"{len(outcomes)} module(s): {written} written, {len(failed)} failed, {len(stale)} stale")
            if failed or stale:
                sys.exit(1)

        return app
