from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from handlergen.domain.entities import ExpansionConfig, HandlerPlan


class HandlerExpanderProtocol(Protocol):
    """Protocol for the account handler expansion pass."""

    def analyze(
        self, source: str, handler: str, config: Optional["ExpansionConfig"] = None
    ) -> "HandlerPlan":
        """Run loading, marker extraction and classification only."""
        ...

    def expand(
        self, source: str, handler: str, config: Optional["ExpansionConfig"] = None
    ) -> str:
        """Return the fully expanded module source. Raises ExpansionError on failure."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        """Create directory and parent directories if needed."""
        ...

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        ...

    def derive_output_path(self, source_path: str, suffix: str, output_dir: Optional[str] = None) -> str:
        """Path of the expanded module for a source module (``counter.py`` -> ``counter_handler.py``)."""
        ...
