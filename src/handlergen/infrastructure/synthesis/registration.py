"""Synthesize the framework registrations of a handler."""

from collections.abc import Iterable
from textwrap import dedent
from typing import Optional

import libcst as cst

from handlergen.domain.entities import ExpansionConfig
from handlergen.domain.naming import NameScheme

# Init is always the unit association, whether or not an @on_create method exists.
_HANDLER_TEMPLATE = """
{handler}.Init = type(None)
{runtime}.handler.Handler.register({handler})
"""

_ACCOUNT_API_TEMPLATE = """
{handler}.ClientFactory = {factory}
{runtime}.handler.AccountAPI.register({handler})
{runtime}.handler.AccountHandler.register({handler})
"""

_RESOURCES_TEMPLATE = "{runtime}.resource.Resources.register({name})\n"


class RegistrationSynthesizer:
    """Emit handler, account API and resources registrations as module statements."""

    def __init__(self, names: NameScheme, config: ExpansionConfig) -> None:
        self.names = names
        self.config = config

    def _statements(self, template: str, **values: str) -> list[cst.BaseStatement]:
        code = dedent(template).lstrip("\n").format(
            handler=self.names.handler,
            factory=self.names.client_factory,
            runtime=self.config.runtime_module,
            **values,
        )
        return list(cst.parse_module(code).body)

    def handler_registration(self) -> list[cst.BaseStatement]:
        statements = self._statements(_HANDLER_TEMPLATE)
        statements[0] = statements[0].with_changes(leading_lines=[cst.EmptyLine()])
        return statements

    def account_api_registration(self) -> list[cst.BaseStatement]:
        statements = self._statements(_ACCOUNT_API_TEMPLATE)
        statements[0] = statements[0].with_changes(leading_lines=[cst.EmptyLine(), cst.EmptyLine()])
        return statements

    def resources_registration(self, classes: Iterable[str]) -> list[cst.BaseStatement]:
        """Zero-behaviour marker registration for classes that carried ``@resources``."""
        statements: list[cst.BaseStatement] = []
        for name in classes:
            statements.extend(self._statements(_RESOURCES_TEMPLATE, name=name))
        return statements

    def codec_module(self) -> Optional[str]:
        """Module owning a dotted codec decorator (``pkg.codec.message(...)`` -> ``pkg.codec``)."""
        target = self.config.codec_decorator.split("(", 1)[0].strip()
        if "." not in target:
            return None
        return target.rsplit(".", 1)[0]

    def imports(self, with_messages: bool) -> list[cst.BaseStatement]:
        """Imports the generated section relies on, placed at the top of that section."""
        modules = [
            f"{self.config.runtime_module}.handler",
            f"{self.config.runtime_module}.resource",
            self.config.message_api_module,
        ]
        if with_messages:
            modules.insert(0, "dataclasses")
            codec_module = self.codec_module()
            if codec_module and codec_module not in modules:
                modules.append(codec_module)
        code = "".join(f"import {m}\n" for m in modules)
        return list(cst.parse_module(code).body)
