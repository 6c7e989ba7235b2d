"""Append every synthesized declaration to the handler module."""

import libcst as cst

from handlergen.domain.constants import GENERATED_HEADER
from handlergen.domain.entities import ExpansionConfig, HandlerPlan
from handlergen.domain.naming import NameScheme
from handlergen.infrastructure.synthesis.client import ClientSynthesizer
from handlergen.infrastructure.synthesis.messages import MessageSynthesizer
from handlergen.infrastructure.synthesis.registration import RegistrationSynthesizer


class EmissionAssembler:
    """
    Build the generated section and append it after all user statements.

    Section order: imports, handler registration, resources registrations,
    client (with its method stubs), client factory, account API wiring,
    message classes. Python classes cannot be reopened, so the client stubs
    are emitted inside the client class body rather than in a later block.
    """

    def __init__(self, names: NameScheme, config: ExpansionConfig) -> None:
        self.names = names
        self.config = config
        self.registration = RegistrationSynthesizer(names, config)
        self.client = ClientSynthesizer(names, config)
        self.messages = MessageSynthesizer(names, config)

    def generated_section(self, plan: HandlerPlan) -> list[cst.BaseStatement]:
        section: list[cst.BaseStatement] = []
        section.extend(self.registration.imports(with_messages=bool(plan.messages)))
        section.extend(self.registration.handler_registration())
        section.extend(self.registration.resources_registration(plan.resources))
        section.append(self.client.render_client(plan.targets))
        section.append(self.client.render_factory())
        section.extend(self.registration.account_api_registration())
        section.extend(self.messages.render(spec) for spec in plan.messages)

        leading = [cst.EmptyLine(), cst.EmptyLine()]
        if self.config.header_comment:
            header = GENERATED_HEADER.format(handler=self.names.handler)
            leading.append(cst.EmptyLine(comment=cst.Comment(value=header)))
        section[0] = section[0].with_changes(leading_lines=leading)
        return section

    def assemble(self, module: cst.Module, plan: HandlerPlan) -> cst.Module:
        """Return a new module: user statements unchanged in order, generated section last."""
        return module.with_changes(body=[*module.body, *self.generated_section(plan)])
