"""Extract @publish / @on_create markers from handler classes and methods."""

from collections.abc import Sequence
from typing import Optional

import libcst as cst

from handlergen.domain.constants import (
    ON_CREATE_KEYWORDS,
    ON_CREATE_MARKER,
    PUBLISH_KEYWORDS,
    PUBLISH_MARKER,
)
from handlergen.domain.entities import MethodMarkers, OnCreateTag, PublishTag
from handlergen.domain.errors import InvalidMarkerArgumentsError


class MarkerExtractor:
    """
    Pull recognised marker decorators off CST nodes.

    Extraction removes the marker from the node: the expanded module must not
    execute a marker at import time, since a bare marker raises outside of an
    expanded module. Decorators that are not markers are left untouched.
    """

    @staticmethod
    def marker_name(decorator: cst.Decorator) -> Optional[str]:
        """Return the bare name of a decorator (``@x`` or ``@x(...)``), else None."""
        expr = decorator.decorator
        if isinstance(expr, cst.Call):
            expr = expr.func
        if isinstance(expr, cst.Name):
            return expr.value
        return None

    def _marker_arguments(
        self, decorator: cst.Decorator, marker: str, allowed: frozenset[str], owner: str
    ) -> dict[str, str]:
        """Validate marker call arguments: keyword-only, known keys, string literals."""
        expr = decorator.decorator
        if not isinstance(expr, cst.Call):
            return {}
        values: dict[str, str] = {}
        for arg in expr.args:
            if arg.star or arg.keyword is None:
                raise InvalidMarkerArgumentsError(
                    f"@{marker} only accepts keyword arguments", node_name=owner
                )
            key = arg.keyword.value
            if key not in allowed:
                expected = ", ".join(sorted(allowed))
                raise InvalidMarkerArgumentsError(
                    f"unknown @{marker} argument '{key}' (expected one of: {expected})",
                    node_name=owner,
                )
            if key in values:
                raise InvalidMarkerArgumentsError(
                    f"duplicate @{marker} argument '{key}'", node_name=owner
                )
            value = arg.value
            evaluated = value.evaluated_value if isinstance(value, cst.SimpleString) else None
            if not isinstance(evaluated, str):
                raise InvalidMarkerArgumentsError(
                    f"@{marker} argument '{key}' must be a string literal", node_name=owner
                )
            values[key] = evaluated
        return values

    def _extract(
        self,
        decorators: Sequence[cst.Decorator],
        marker: str,
        allowed: frozenset[str],
        owner: str,
    ) -> tuple[Optional[dict[str, str]], list[cst.Decorator]]:
        found: Optional[dict[str, str]] = None
        remaining: list[cst.Decorator] = []
        for decorator in decorators:
            if self.marker_name(decorator) != marker:
                remaining.append(decorator)
                continue
            if found is not None:
                raise InvalidMarkerArgumentsError(f"@{marker} applied more than once", node_name=owner)
            found = self._marker_arguments(decorator, marker, allowed, owner)
        return found, remaining

    def extract_blanket(self, node: cst.ClassDef) -> tuple[Optional[PublishTag], cst.ClassDef]:
        """Blanket ``@publish`` on the handler class itself."""
        owner = node.name.value
        args, remaining = self._extract(node.decorators, PUBLISH_MARKER, PUBLISH_KEYWORDS, owner)
        if args is None:
            return None, node
        return PublishTag(**args), node.with_changes(decorators=remaining)

    def extract_method(self, node: cst.FunctionDef) -> tuple[MethodMarkers, cst.FunctionDef]:
        """Method-level ``@publish`` and ``@on_create``; both are returned even if they conflict."""
        owner = node.name.value
        on_create_args, remaining = self._extract(
            node.decorators, ON_CREATE_MARKER, ON_CREATE_KEYWORDS, owner
        )
        publish_args, remaining = self._extract(remaining, PUBLISH_MARKER, PUBLISH_KEYWORDS, owner)
        markers = MethodMarkers(
            method_name=owner,
            publish=PublishTag(**publish_args) if publish_args is not None else None,
            on_create=OnCreateTag(**on_create_args) if on_create_args is not None else None,
        )
        if publish_args is None and on_create_args is None:
            return markers, node
        return markers, node.with_changes(decorators=remaining)

    def strip_markers(self, node: cst.ClassDef, marker: str) -> tuple[bool, cst.ClassDef]:
        """Remove an argument-less class marker such as ``@resources``."""
        args, remaining = self._extract(node.decorators, marker, frozenset(), node.name.value)
        if args is None:
            return False, node
        return True, node.with_changes(decorators=remaining)
