from dataclasses import dataclass
from typing import Optional, Union

import libcst as cst

from handlergen.domain.constants import (
    CONFLICTING_MARKERS_MESSAGE,
    DEFAULT_CODEC_DECORATOR,
    DEFAULT_CONTEXT_TYPE,
    DEFAULT_MESSAGE_API_MODULE,
    DEFAULT_RUNTIME_MODULE,
)
from handlergen.domain.errors import ConflictingMarkersError


@dataclass(frozen=True)
class PublishTag:
    """``@publish`` / ``@publish(package=..., name=...)`` on a class or method."""
    package: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class OnCreateTag:
    """``@on_create`` / ``@on_create(message_name=...)`` on the initializer method."""
    message_name: Optional[str] = None


AttributeTag = Union[PublishTag, OnCreateTag]


@dataclass(frozen=True)
class MethodMarkers:
    """Raw markers found on one method, before the blanket tag is applied."""
    method_name: str
    publish: Optional[PublishTag] = None
    on_create: Optional[OnCreateTag] = None

    def effective_tag(self, blanket: Optional[PublishTag]) -> Optional[AttributeTag]:
        """
        Resolve the tag that governs this method.

        A method's own tag replaces the blanket tag entirely; the blanket tag only
        applies to methods with no marker of their own.
        """
        if self.publish is not None and self.on_create is not None:
            raise ConflictingMarkersError(CONFLICTING_MARKERS_MESSAGE, node_name=self.method_name)
        if self.on_create is not None:
            return self.on_create
        if self.publish is not None:
            return self.publish
        return blanket


@dataclass(frozen=True)
class PublishTarget:
    """A handler method selected for exposure, paired with its effective tag."""
    method: cst.FunctionDef
    tag: AttributeTag

    @property
    def name(self) -> str:
        return self.method.name.value

    @property
    def is_initializer(self) -> bool:
        return isinstance(self.tag, OnCreateTag)


@dataclass(frozen=True)
class MessageField:
    name: str
    annotation: cst.Annotation

    @property
    def type_source(self) -> str:
        """Annotation rendered back to source, e.g. ``int`` or ``list[Address]``."""
        return cst.Module(body=[]).code_for_node(self.annotation.annotation)


@dataclass(frozen=True)
class MessageSpec:
    """The message dataclass derived from one non-initializer publish target."""
    class_name: str
    method_name: str
    fields: tuple[MessageField, ...] = ()


@dataclass(frozen=True)
class HandlerPlan:
    """
    Complete analysis of one handler module.

    Produced before any code is synthesized, so a failure anywhere in the
    analysis aborts the expansion without emitting partial output.
    """
    handler: str
    targets: tuple[PublishTarget, ...] = ()
    messages: tuple[MessageSpec, ...] = ()
    resources: tuple[str, ...] = ()
    matched_blocks: int = 0

    @property
    def initializer(self) -> Optional[PublishTarget]:
        for target in self.targets:
            if target.is_initializer:
                return target
        return None

    @property
    def published(self) -> tuple[PublishTarget, ...]:
        return tuple(t for t in self.targets if not t.is_initializer)


@dataclass(frozen=True)
class ExpansionConfig:
    """Knobs of the pass that depend on the runtime framework being targeted."""
    context_type: str = DEFAULT_CONTEXT_TYPE
    codec_decorator: str = DEFAULT_CODEC_DECORATOR
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    message_api_module: str = DEFAULT_MESSAGE_API_MODULE
    header_comment: bool = True
