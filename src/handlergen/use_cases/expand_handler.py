"""Use Case: Expand handler modules on disk."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from handlergen.domain.errors import ExpansionError
from handlergen.domain.protocols import FileSystemProtocol, HandlerExpanderProtocol, TelemetryPort

if TYPE_CHECKING:
    from handlergen.domain.config import ConfigurationLoader


@dataclass(frozen=True)
class ExpansionOutcome:
    """Result of expanding one module."""

    source_path: str
    handler: str
    code: Optional[str] = None
    output_path: Optional[str] = None
    written: bool = False
    up_to_date: bool = True
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class ExpandHandlerUseCase:
    """Orchestrate reading a handler module, expanding it and writing the result."""

    def __init__(
        self,
        expander: HandlerExpanderProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.expander = expander
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(
        self,
        source_path: str,
        handler: str,
        output_path: Optional[str] = None,
        check: bool = False,
    ) -> ExpansionOutcome:
        """
        Expand one module.

        With ``output_path`` the result is written there (unless ``check`` is set, in
        which case the existing file is only compared). Without it the code is
        returned for the caller to print. Raises ExpansionError on invalid input.
        """
        source = self.filesystem.read_text(source_path)
        self.telemetry.debug(f"Expanding {source_path} for handler {handler}")
        code = self.expander.expand(source, handler, self.config_loader.expansion_config)

        if output_path is None:
            return ExpansionOutcome(source_path=source_path, handler=handler, code=code)

        current = self.filesystem.read_text(output_path) if self.filesystem.exists(output_path) else None
        up_to_date = current == code
        if check or up_to_date:
            return ExpansionOutcome(
                source_path=source_path,
                handler=handler,
                code=code,
                output_path=output_path,
                up_to_date=up_to_date,
            )
        self.filesystem.write_text(output_path, code)
        self.telemetry.step(f"Expanded {handler}: {source_path} -> {output_path}")
        return ExpansionOutcome(
            source_path=source_path,
            handler=handler,
            code=code,
            output_path=output_path,
            written=True,
            up_to_date=False,
        )

    def build_all(self, check: bool = False) -> list[ExpansionOutcome]:
        """
        Expand every module in ``[tool.handlergen.handlers]``.

        Modules are independent: a failure is recorded for that module and the
        remaining modules are still expanded.
        """
        outcomes: list[ExpansionOutcome] = []
        output_dir = self.config_loader.output_dir
        if output_dir and not check:
            self.filesystem.make_dirs(output_dir)
        for source_path, handler in sorted(self.config_loader.handlers.items()):
            output_path = self.filesystem.derive_output_path(
                source_path, self.config_loader.output_suffix, output_dir
            )
            try:
                outcomes.append(self.execute(source_path, handler, output_path, check=check))
            except ExpansionError as exc:
                self.telemetry.error(f"{source_path}: {exc}")
                outcomes.append(
                    ExpansionOutcome(source_path=source_path, handler=handler, up_to_date=False, error=str(exc))
                )
        return outcomes
