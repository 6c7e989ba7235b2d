"""Configuration for handler expansion. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging
from typing import Optional

from handlergen.domain.constants import (
    DEFAULT_CODEC_DECORATOR,
    DEFAULT_CONTEXT_TYPE,
    DEFAULT_MESSAGE_API_MODULE,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_RUNTIME_MODULE,
)
from handlergen.domain.entities import ExpansionConfig

logger = logging.getLogger(__name__)

_KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "context_type",
        "codec_decorator",
        "runtime_module",
        "message_api_module",
        "header_comment",
        "handlers",
        "output_suffix",
        "output_dir",
    }
)


class ConfigurationLoader:
    """
    Immutable configuration for handlergen.

    Created by Infrastructure from (config_dict, tool_section). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at composition root.
    """

    def __init__(
        self,
        config_dict: Optional[dict[str, object]] = None,
        tool_section: Optional[dict[str, object]] = None,
    ) -> None:
        """Set config once at construction. No mutable class or instance state after init."""
        self._config: dict[str, object] = config_dict or {}
        self._tool_section: dict[str, object] = tool_section or {}
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys handlergen does not understand."""
        for key in sorted(set(config) - _KNOWN_KEYS):
            logger.warning("Configuration Warning: unknown [tool.handlergen] key '%s' ignored.", key)

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    def _str_option(self, key: str, default: str) -> str:
        raw = self._config.get(key, default)
        return raw if isinstance(raw, str) and raw else default

    @property
    def expansion_config(self) -> ExpansionConfig:
        """Settings consumed by the expansion pass itself."""
        header = self._config.get("header_comment", True)
        return ExpansionConfig(
            context_type=self._str_option("context_type", DEFAULT_CONTEXT_TYPE),
            codec_decorator=self._str_option("codec_decorator", DEFAULT_CODEC_DECORATOR),
            runtime_module=self._str_option("runtime_module", DEFAULT_RUNTIME_MODULE),
            message_api_module=self._str_option("message_api_module", DEFAULT_MESSAGE_API_MODULE),
            header_comment=header if isinstance(header, bool) else True,
        )

    @property
    def handlers(self) -> dict[str, str]:
        """
        Map of module path -> handler class name.

        Lets ``handlergen build`` expand every handler module without arguments and
        lets ``expand``/``inspect`` omit ``--handler`` for configured modules.
        """
        raw = self._config.get("handlers", {})
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items() if isinstance(v, str)}

    def handler_for(self, module_path: str) -> Optional[str]:
        """Return the configured handler for a module path, matching on normalized suffix."""
        wanted = module_path.replace("\\", "/")
        for path, handler in self.handlers.items():
            normalized = path.replace("\\", "/")
            if wanted == normalized or wanted.endswith("/" + normalized.lstrip("./")):
                return handler
        return None

    @property
    def output_suffix(self) -> str:
        """Suffix appended to the module stem when ``build`` writes an expansion."""
        return self._str_option("output_suffix", DEFAULT_OUTPUT_SUFFIX)

    @property
    def output_dir(self) -> Optional[str]:
        """Directory for ``build`` outputs; None writes next to the source module."""
        raw = self._config.get("output_dir")
        return raw if isinstance(raw, str) and raw else None
