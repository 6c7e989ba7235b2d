"""Shared names and diagnostics for the handler expansion pass."""

HANDLERGEN_BANNER = r"""
  _                     _ _
 | |__   __ _ _ __   __| | | ___ _ __ __ _  ___ _ __
 | '_ \ / _` | '_ \ / _` | |/ _ \ '__/ _` |/ _ \ '_ \
 | | | | (_| | | | | (_| | |  __/ | | (_| |  __/ | | |
 |_| |_|\__,_|_| |_|\__,_|_|\___|_|  \__, |\___|_| |_|
                                     |___/
"""

PUBLISH_MARKER = "publish"
ON_CREATE_MARKER = "on_create"
RESOURCES_MARKER = "resources"

PUBLISH_KEYWORDS: frozenset[str] = frozenset({"package", "name"})
ON_CREATE_KEYWORDS: frozenset[str] = frozenset({"message_name"})

DEFAULT_CONTEXT_TYPE = "Context"
DEFAULT_CODEC_DECORATOR = "interchain_message_api.struct_codec"
DEFAULT_RUNTIME_MODULE = "interchain_core"
DEFAULT_MESSAGE_API_MODULE = "interchain_message_api"
DEFAULT_OUTPUT_SUFFIX = "_handler"

CLIENT_SUFFIX = "Client"
CLIENT_FACTORY_SUFFIX = "ClientFactory"
MESSAGE_SUFFIX = "Msg"

# Members the generated client defines itself; published methods may not reuse them.
RESERVED_CLIENT_MEMBERS: frozenset[str] = frozenset({"__init__", "address"})

GENERATED_HEADER = "# generated by handlergen for handler {handler}: do not edit below"

CONFLICTING_MARKERS_MESSAGE = (
    "on_create and publish markers must not be attached to the same function"
)
EXPECTED_IDENTIFIER_MESSAGE = "expected identifier"
WRONG_CONTEXT_MESSAGE = (
    "the @{marker} marker is being used in the wrong context, possibly "
    "module_handler or account_handler has not been applied to the enclosing module"
)
