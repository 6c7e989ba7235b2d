"""Expansion diagnostics. Every failure of the pass is build-time fatal."""

from typing import Optional


class ExpansionError(Exception):
    """Base class for structural failures detected while expanding a handler module."""

    def __init__(self, message: str, node_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.node_name = node_name

    def __str__(self) -> str:
        if self.node_name:
            return f"{self.node_name}: {self.message}"
        return self.message


class MalformedModuleError(ExpansionError):
    """The handler module could not be parsed or has no body."""


class ConflictingMarkersError(ExpansionError):
    """A method carries both @publish and @on_create."""


class InvalidMarkerArgumentsError(ExpansionError):
    """A marker decorator was given arguments it does not accept."""


class ExpectedIdentifierError(ExpansionError):
    """A published parameter cannot be turned into a message field name."""


class UntypedParameterError(ExpansionError):
    """A published parameter has no annotation to use as the field type."""


class DuplicateFieldError(ExpansionError):
    """Two retained parameters of a published method share a name."""


class DuplicateDeclarationError(ExpansionError):
    """A synthesized name collides with another declaration in the module."""


class DuplicateInitializerError(ExpansionError):
    """More than one method of the handler is marked @on_create."""


class MarkerContextError(ExpansionError):
    """A marker was executed outside of an expanded handler module."""
