from typing import TYPE_CHECKING, Any, Optional, cast

from rich.console import Console

from handlergen.domain.config import ConfigurationLoader
from handlergen.infrastructure.config_file_loader import ConfigFileLoader
from handlergen.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from handlergen.infrastructure.gateways.libcst_handler_gateway import LibCSTHandlerExpander
from handlergen.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from handlergen.domain.protocols import (
        FileSystemProtocol,
        HandlerExpanderProtocol,
        TelemetryPort,
    )


class HandlergenContainer:
    """Dependency Injection Container for handlergen."""

    _instance: Optional["HandlergenContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("ConfigurationLoader", ConfigurationLoader(config_dict, tool_section))
        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("HANDLERGEN", "cyan", "Handler expansion online")
        )
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("LibCSTHandlerExpander", LibCSTHandlerExpander())
        # stdout: `inspect` output is the command result, telemetry goes to stderr.
        self.register_singleton("Console", Console(highlight=False))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_expander(self) -> "HandlerExpanderProtocol":
        """Return the LibCST handler expansion gateway."""
        return cast("HandlerExpanderProtocol", self.get("LibCSTHandlerExpander"))

    def get_console(self) -> Console:
        """Return the stdout console for command results."""
        return cast(Console, self.get("Console"))

    @classmethod
    def get_instance(cls) -> "HandlergenContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = HandlergenContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
