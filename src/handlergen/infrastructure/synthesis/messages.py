"""Synthesize one message dataclass per published, non-initializer method."""

from collections.abc import Iterable

import libcst as cst

from handlergen.domain.constants import EXPECTED_IDENTIFIER_MESSAGE
from handlergen.domain.entities import ExpansionConfig, MessageField, MessageSpec, PublishTarget
from handlergen.domain.errors import (
    DuplicateDeclarationError,
    DuplicateFieldError,
    ExpectedIdentifierError,
    UntypedParameterError,
)
from handlergen.domain.naming import NameScheme
from handlergen.infrastructure.synthesis.parameters import ParameterInspector


class MessageSynthesizer:
    """
    Derive message specs and render them as CST class definitions.

    Field order follows the method's parameter order. The receiver and any
    parameter annotated with the context type are dropped wherever they appear.
    """

    def __init__(self, names: NameScheme, config: ExpansionConfig) -> None:
        self.names = names
        self.config = config
        self.parameters = ParameterInspector(config.context_type)

    def derive_fields(self, target: PublishTarget) -> tuple[MessageField, ...]:
        owner = f"{self.names.handler}.{target.name}"
        variadic = self.parameters.variadic_parameters(target.method)
        if variadic:
            raise ExpectedIdentifierError(
                f"{EXPECTED_IDENTIFIER_MESSAGE}, found variadic parameter '{variadic[0].name.value}'",
                node_name=owner,
            )

        fields: list[MessageField] = []
        seen: set[str] = set()
        for param in self.parameters.named_parameters(target.method):
            if self.parameters.is_context(param):
                continue
            name = param.name.value
            if param.annotation is None:
                raise UntypedParameterError(
                    f"parameter '{name}' needs a type annotation to become a message field",
                    node_name=owner,
                )
            if name in seen:
                raise DuplicateFieldError(f"duplicate message field '{name}'", node_name=owner)
            seen.add(name)
            fields.append(MessageField(name=name, annotation=param.annotation))
        return tuple(fields)

    def plan(self, targets: Iterable[PublishTarget]) -> list[MessageSpec]:
        """Message specs for every non-initializer target, with globally unique names."""
        specs: list[MessageSpec] = []
        seen: dict[str, str] = {}
        for target in targets:
            if target.is_initializer:
                continue
            class_name = self.names.message(target.name)
            if class_name in seen:
                raise DuplicateDeclarationError(
                    f"message {class_name} derived from both '{seen[class_name]}' and '{target.name}'",
                    node_name=self.names.handler,
                )
            seen[class_name] = target.name
            specs.append(
                MessageSpec(class_name=class_name, method_name=target.name, fields=self.derive_fields(target))
            )
        return specs

    def render(self, spec: MessageSpec) -> cst.ClassDef:
        body: list[cst.BaseStatement] = [
            cst.SimpleStatementLine(
                body=[
                    cst.AnnAssign(
                        target=cst.Name(f.name),
                        annotation=cst.Annotation(annotation=f.annotation.annotation),
                    )
                ]
            )
            for f in spec.fields
        ]
        if not body:
            body = [cst.SimpleStatementLine(body=[cst.Pass()])]
        return cst.ClassDef(
            name=cst.Name(spec.class_name),
            body=cst.IndentedBlock(body=body),
            decorators=[
                cst.Decorator(decorator=cst.parse_expression(self.config.codec_decorator)),
                cst.Decorator(decorator=cst.parse_expression("dataclasses.dataclass")),
            ],
            leading_lines=[cst.EmptyLine(), cst.EmptyLine()],
        )
