"""Marker placement checks (W9801-W9803)."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from handlergen.domain.config import ConfigurationLoader
from handlergen.domain.constants import ON_CREATE_MARKER, PUBLISH_MARKER

if TYPE_CHECKING:
    from pylint.lint import PyLinter

_MARKERS = (PUBLISH_MARKER, ON_CREATE_MARKER)


class MarkerPlacementChecker(BaseChecker):
    """
    Report handler markers the expansion pass would never see.

    Such markers survive into the module unexpanded and raise at import time;
    flagging them at lint time points at the decorator instead.
    """

    name: str = "handlergen-markers"

    def __init__(self, linter: "PyLinter", config_loader: Optional[ConfigurationLoader] = None) -> None:
        self.msgs = {
            "W9801": (
                "Handler marker @%s outside a class body. Markers only apply to handler methods.",
                "marker-outside-handler",
                "@publish and @on_create are consumed by the handler expansion pass, "
                "which only scans methods of the handler class.",
            ),
            "W9802": (
                "Method %s carries both @publish and @on_create; the markers are mutually exclusive.",
                "conflicting-handler-markers",
                "The expansion pass rejects a method tagged as both published and initializer.",
            ),
            "W9803": (
                "Marker on %s.%s is ignored: the configured handler for this module is %s.",
                "marker-outside-handler-class",
                "Only top-level classes named exactly like the handler are scanned for markers.",
            ),
        }
        super().__init__(linter)
        self.config_loader = config_loader or ConfigurationLoader()

    @staticmethod
    def _decorator_names(node: astroid.nodes.FunctionDef) -> list[str]:
        if not node.decorators:
            return []
        names: list[str] = []
        for decorator in node.decorators.nodes:
            expr = decorator.func if isinstance(decorator, astroid.nodes.Call) else decorator
            if isinstance(expr, astroid.nodes.Name):
                names.append(expr.name)
        return names

    def visit_functiondef(self, node: astroid.nodes.FunctionDef) -> None:
        markers = [m for m in _MARKERS if m in self._decorator_names(node)]
        if not markers:
            return

        if len(markers) == len(_MARKERS):
            self.add_message("conflicting-handler-markers", node=node, args=(node.name,))

        parent = node.parent
        if not isinstance(parent, astroid.nodes.ClassDef):
            for marker in markers:
                self.add_message("marker-outside-handler", node=node, args=(marker,))
            return

        handler = self.config_loader.handler_for(node.root().file or "")
        if handler is None:
            return
        top_level = isinstance(parent.parent, astroid.nodes.Module)
        if parent.name != handler or not top_level:
            self.add_message("marker-outside-handler-class", node=node, args=(parent.name, node.name, handler))

    visit_asyncfunctiondef = visit_functiondef
