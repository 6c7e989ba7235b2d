"""Build the ordered publish-target list for a handler."""

import logging
from typing import Optional

import libcst as cst

from handlergen.domain.entities import PublishTarget
from handlergen.domain.errors import DuplicateInitializerError
from handlergen.infrastructure.gateways.marker_extractor import MarkerExtractor

logger = logging.getLogger(__name__)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class TargetClassifier:
    """
    Combine method and blanket markers into effective tags, in declaration order.

    A blanket ``@publish`` on the class covers every method except dunder methods
    such as ``__init__``; those are published only when tagged themselves.
    """

    def __init__(self, extractor: Optional[MarkerExtractor] = None) -> None:
        self.extractor = extractor or MarkerExtractor()

    def classify_block(self, block: cst.ClassDef) -> tuple[list[PublishTarget], cst.ClassDef]:
        """Return the block's publish targets and the block with its markers stripped."""
        blanket, block = self.extractor.extract_blanket(block)
        if not isinstance(block.body, cst.IndentedBlock):
            return [], block

        targets: list[PublishTarget] = []
        new_body: list[cst.BaseStatement] = []
        for stmt in block.body.body:
            if not isinstance(stmt, cst.FunctionDef):
                new_body.append(stmt)
                continue
            markers, stripped = self.extractor.extract_method(stmt)
            new_body.append(stripped)
            tag = markers.effective_tag(None if _is_dunder(markers.method_name) else blanket)
            if tag is None:
                continue
            # Targets keep the stripped node so client stubs never copy a marker.
            targets.append(PublishTarget(method=stripped, tag=tag))
            logger.debug("Publish target %s.%s (%s)", block.name.value, stmt.name.value, type(tag).__name__)
        return targets, block.with_changes(body=block.body.with_changes(body=new_body))

    @staticmethod
    def check_initializers(handler: str, targets: list[PublishTarget]) -> None:
        """At most one @on_create method per handler."""
        initializers = [t.name for t in targets if t.is_initializer]
        if len(initializers) > 1:
            raise DuplicateInitializerError(
                f"handler has more than one @on_create method: {', '.join(initializers)}",
                node_name=handler,
            )
