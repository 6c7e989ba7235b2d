"""Synthesize the client proxy and client factory of a handler."""

from collections.abc import Iterable
from textwrap import dedent

import libcst as cst
from libcst.helpers import ensure_type

from handlergen.domain.constants import RESERVED_CLIENT_MEMBERS
from handlergen.domain.entities import ExpansionConfig, PublishTarget
from handlergen.domain.errors import DuplicateDeclarationError
from handlergen.domain.naming import NameScheme
from handlergen.infrastructure.synthesis.parameters import ParameterInspector

_CLIENT_TEMPLATE = '''
class {client}({runtime}.handler.AccountClient):
    def __init__(self, address: {api}.Address) -> None:
        self._address = address

    def address(self) -> {api}.Address:
        return self._address
'''

_FACTORY_TEMPLATE = '''
class {factory}({runtime}.resource.Resource, {runtime}.handler.AccountClientFactory):
    Client = {client}

    @classmethod
    def new(cls, initializer: {runtime}.resource.Initializer) -> "{factory}":
        raise NotImplementedError("{factory}.new")

    @staticmethod
    def new_client(address: {api}.Address) -> {client}:
        return {client}(address)
'''


class ClientSynthesizer:
    """
    Emit ``<Handler>Client`` and ``<Handler>ClientFactory``.

    Client stubs reproduce the handler method signatures only. Building the
    request message, dispatching it and decoding the response belong to the
    runtime, so every stub body raises NotImplementedError.
    """

    def __init__(self, names: NameScheme, config: ExpansionConfig) -> None:
        self.names = names
        self.config = config

    def _format(self, template: str) -> str:
        return dedent(template).lstrip("\n").format(
            client=self.names.client,
            factory=self.names.client_factory,
            runtime=self.config.runtime_module,
            api=self.config.message_api_module,
        )

    def validate(self, targets: Iterable[PublishTarget]) -> None:
        """Published names must not shadow the members the client defines itself."""
        for target in targets:
            if not target.is_initializer and target.name in RESERVED_CLIENT_MEMBERS:
                raise DuplicateDeclarationError(
                    f"published method '{target.name}' collides with a {self.names.client} member",
                    node_name=self.names.handler,
                )

    def stub(self, target: PublishTarget) -> cst.FunctionDef:
        raise_stmt = cst.parse_statement(
            f'raise NotImplementedError("{self.names.client}.{target.name}")'
        )
        return target.method.with_changes(
            decorators=ParameterInspector.signature_decorators(target.method),
            body=cst.IndentedBlock(body=[raise_stmt]),
            leading_lines=[cst.EmptyLine()],
        )

    def render_client(self, targets: Iterable[PublishTarget]) -> cst.ClassDef:
        client = ensure_type(cst.parse_statement(self._format(_CLIENT_TEMPLATE)), cst.ClassDef)
        stubs = [self.stub(t) for t in targets if not t.is_initializer]
        body = client.body.with_changes(body=[*client.body.body, *stubs])
        return client.with_changes(body=body, leading_lines=[cst.EmptyLine(), cst.EmptyLine()])

    def render_factory(self) -> cst.ClassDef:
        factory = ensure_type(cst.parse_statement(self._format(_FACTORY_TEMPLATE)), cst.ClassDef)
        return factory.with_changes(leading_lines=[cst.EmptyLine(), cst.EmptyLine()])
