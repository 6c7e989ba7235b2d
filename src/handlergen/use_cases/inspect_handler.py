"""Use Case: Report what an expansion would synthesize without writing anything."""

from typing import TYPE_CHECKING

from handlergen.domain.entities import HandlerPlan
from handlergen.domain.protocols import FileSystemProtocol, HandlerExpanderProtocol

if TYPE_CHECKING:
    from handlergen.domain.config import ConfigurationLoader


class InspectHandlerUseCase:
    """Run the analysis half of the pass for one module."""

    def __init__(
        self,
        expander: HandlerExpanderProtocol,
        filesystem: FileSystemProtocol,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.expander = expander
        self.filesystem = filesystem
        self.config_loader = config_loader

    def execute(self, source_path: str, handler: str) -> HandlerPlan:
        source = self.filesystem.read_text(source_path)
        return self.expander.analyze(source, handler, self.config_loader.expansion_config)
