"""Identifier conventions for synthesized declarations."""

import re

from handlergen.domain.constants import CLIENT_FACTORY_SUFFIX, CLIENT_SUFFIX, MESSAGE_SUFFIX

# Word boundaries: lower->Upper ("getValue"), acronym->Word ("HTTPServer"), letter<->digit is kept together.
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*")


class NameScheme:
    """Derive client, factory and message names from a handler identifier."""

    def __init__(self, handler: str) -> None:
        self.handler = handler

    @staticmethod
    def upper_camel_case(identifier: str) -> str:
        """Convert ``get_balance`` / ``getBalance`` / ``get-balance`` into ``GetBalance``."""
        words: list[str] = []
        for chunk in re.split(r"[\s_\-]+", identifier):
            words.extend(_WORD_PATTERN.findall(chunk))
        return "".join(word[:1].upper() + word[1:].lower() for word in words)

    @property
    def client(self) -> str:
        return f"{self.handler}{CLIENT_SUFFIX}"

    @property
    def client_factory(self) -> str:
        return f"{self.handler}{CLIENT_FACTORY_SUFFIX}"

    def message(self, method_name: str) -> str:
        """Message class for a published method, e.g. Counter + inc -> CounterIncMsg."""
        return f"{self.handler}{self.upper_camel_case(method_name)}{MESSAGE_SUFFIX}"
