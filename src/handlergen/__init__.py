"""Expand annotated account handler modules into framework wiring, client proxies and messages."""

from typing import Optional

from handlergen.domain.entities import ExpansionConfig, HandlerPlan
from handlergen.domain.errors import ExpansionError
from handlergen.infrastructure.gateways.libcst_handler_gateway import LibCSTHandlerExpander

__all__ = ["ExpansionConfig", "ExpansionError", "HandlerPlan", "analyze_source", "expand_source"]


def expand_source(source: str, handler: str, config: Optional[ExpansionConfig] = None) -> str:
    """Expand ``source`` for the handler class named ``handler``; raises ExpansionError."""
    return LibCSTHandlerExpander().expand(source, handler, config)


def analyze_source(source: str, handler: str, config: Optional[ExpansionConfig] = None) -> HandlerPlan:
    """Return the publish targets and messages the expansion would produce."""
    return LibCSTHandlerExpander().analyze(source, handler, config)
