"""Parameter inspection shared by the message and client synthesizers."""

from collections.abc import Iterator

import libcst as cst

from handlergen.infrastructure.gateways.marker_extractor import MarkerExtractor

_RECEIVERLESS_DECORATORS = frozenset({"staticmethod"})
_SIGNATURE_DECORATORS = frozenset({"staticmethod", "classmethod"})


class ParameterInspector:
    """Classify the parameters of a handler method."""

    def __init__(self, context_type: str) -> None:
        self.context_type = context_type

    @staticmethod
    def signature_decorators(method: cst.FunctionDef) -> list[cst.Decorator]:
        """Decorators that change the calling shape and must follow the signature."""
        return [
            d for d in method.decorators
            if MarkerExtractor.marker_name(d) in _SIGNATURE_DECORATORS
        ]

    @staticmethod
    def has_receiver(method: cst.FunctionDef) -> bool:
        return not any(
            MarkerExtractor.marker_name(d) in _RECEIVERLESS_DECORATORS for d in method.decorators
        )

    def named_parameters(self, method: cst.FunctionDef) -> Iterator[cst.Param]:
        """Positional-only, regular and keyword-only parameters, receiver excluded."""
        params = method.params
        positional = [*params.posonly_params, *params.params]
        if self.has_receiver(method) and positional:
            positional = positional[1:]
        yield from positional
        yield from params.kwonly_params

    @staticmethod
    def variadic_parameters(method: cst.FunctionDef) -> list[cst.Param]:
        """``*args`` / ``**kwargs``; a bare ``*`` separator is not a parameter."""
        found: list[cst.Param] = []
        if isinstance(method.params.star_arg, cst.Param):
            found.append(method.params.star_arg)
        if method.params.star_kwarg is not None:
            found.append(method.params.star_kwarg)
        return found

    def is_context(self, param: cst.Param) -> bool:
        """True for parameters annotated with the execution-context type name."""
        if param.annotation is None:
            return False
        expr = param.annotation.annotation
        if isinstance(expr, cst.Name):
            return expr.value == self.context_type
        if isinstance(expr, cst.SimpleString):
            return expr.evaluated_value == self.context_type
        return False
