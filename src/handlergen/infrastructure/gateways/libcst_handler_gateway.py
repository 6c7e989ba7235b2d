"""LibCST based account handler expansion."""

import keyword
import logging
from typing import Optional

import libcst as cst

from handlergen.domain.constants import RESOURCES_MARKER
from handlergen.domain.entities import ExpansionConfig, HandlerPlan, PublishTarget
from handlergen.domain.errors import DuplicateDeclarationError, ExpansionError
from handlergen.domain.naming import NameScheme
from handlergen.domain.protocols import HandlerExpanderProtocol
from handlergen.infrastructure.gateways.marker_extractor import MarkerExtractor
from handlergen.infrastructure.gateways.module_loader import ModuleLoader
from handlergen.infrastructure.gateways.target_classifier import TargetClassifier
from handlergen.infrastructure.synthesis.assembler import EmissionAssembler
from handlergen.infrastructure.synthesis.client import ClientSynthesizer
from handlergen.infrastructure.synthesis.messages import MessageSynthesizer

logger = logging.getLogger(__name__)


class LibCSTHandlerExpander(HandlerExpanderProtocol):
    """
    Gateway running the handler pass: parse -> match -> extract -> classify ->
    validate -> synthesize -> re-emit.

    The pass is pure. Every check runs during analysis, before anything is
    synthesized, so a failing module produces no output at all.
    """

    def __init__(
        self,
        loader: Optional[ModuleLoader] = None,
        extractor: Optional[MarkerExtractor] = None,
    ) -> None:
        self.loader = loader or ModuleLoader()
        self.extractor = extractor or MarkerExtractor()
        self.classifier = TargetClassifier(self.extractor)

    def _analyze(
        self, source: str, handler: str, config: ExpansionConfig
    ) -> tuple[HandlerPlan, cst.Module]:
        if not handler.isidentifier() or keyword.iskeyword(handler):
            raise ExpansionError(f"handler name '{handler}' must be a bare identifier")

        module = self.loader.load_module(source)
        body = list(module.body)
        indices = self.loader.find_handler_blocks(module, handler)

        targets: list[PublishTarget] = []
        for index in indices:
            block_targets, body[index] = self.classifier.classify_block(body[index])
            targets.extend(block_targets)
        self.classifier.check_initializers(handler, targets)

        resources: list[str] = []
        for index, stmt in enumerate(body):
            if isinstance(stmt, cst.ClassDef):
                marked, body[index] = self.extractor.strip_markers(stmt, RESOURCES_MARKER)
                if marked:
                    resources.append(stmt.name.value)

        names = NameScheme(handler)
        ClientSynthesizer(names, config).validate(targets)
        messages = MessageSynthesizer(names, config).plan(targets)

        synthesized = [names.client, names.client_factory, *(m.class_name for m in messages)]
        existing = self.loader.top_level_names(module)
        for name in synthesized:
            if name in existing:
                raise DuplicateDeclarationError(
                    f"{name} is already declared in the module (was it expanded before?)",
                    node_name=handler,
                )

        plan = HandlerPlan(
            handler=handler,
            targets=tuple(targets),
            messages=tuple(messages),
            resources=tuple(resources),
            matched_blocks=len(indices),
        )
        logger.debug(
            "Handler %s: %d target(s), %d message(s), %d resources class(es).",
            handler, len(plan.targets), len(plan.messages), len(plan.resources),
        )
        return plan, module.with_changes(body=body)

    def analyze(
        self, source: str, handler: str, config: Optional[ExpansionConfig] = None
    ) -> HandlerPlan:
        plan, _ = self._analyze(source, handler, config or ExpansionConfig())
        return plan

    def expand(
        self, source: str, handler: str, config: Optional[ExpansionConfig] = None
    ) -> str:
        config = config or ExpansionConfig()
        plan, module = self._analyze(source, handler, config)
        assembler = EmissionAssembler(NameScheme(handler), config)
        return assembler.assemble(module, plan).code
