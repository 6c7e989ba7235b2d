"""
Runtime side of the handler markers.

``publish`` and ``on_create`` are consumed by the expansion pass and never
survive into an expanded module. Executing one means the enclosing module was
not expanded, so they fail loudly with the same diagnostic the pass documents.
The remaining markers are inert pass-throughs.
"""

from typing import Any, Callable, TypeVar

from handlergen.domain.constants import ON_CREATE_MARKER, PUBLISH_MARKER, WRONG_CONTEXT_MESSAGE
from handlergen.domain.errors import MarkerContextError

T = TypeVar("T")


def _wrong_context(marker: str) -> MarkerContextError:
    return MarkerContextError(WRONG_CONTEXT_MESSAGE.format(marker=marker))


def publish(*args: Any, **kwargs: Any) -> Callable[[T], T]:
    """Publish a handler class or method. Only meaningful inside an expanded module."""
    raise _wrong_context(PUBLISH_MARKER)


def on_create(*args: Any, **kwargs: Any) -> Callable[[T], T]:
    """Mark the method run when an account is created. Only meaningful inside an expanded module."""
    raise _wrong_context(ON_CREATE_MARKER)


def module_handler(target: T) -> T:
    return target


def account_api(target: T) -> T:
    return target


def module_api(target: T) -> T:
    return target


def resources(target: T) -> T:
    """Resources registration is emitted by the expansion pass; unexpanded, this is a no-op."""
    return target
