"""
Method Router — Dispatch MCP methods to handlers

Routes:
  initialize       → server capabilities handshake
  initialized      → notification (no response)
  tools/list       → registered tool definitions
  tools/call       → tool handler dispatch
  resources/list   → always empty (no resources are exposed)
  resources/read   → invalid params (no resources are exposed)
  ping             → pong

Tool modules export:
  TOOLS: list[dict]                    — Tool definitions (MCP schema)
  handle_tool(name, args) -> dict      — Tool handler (returns content list)
"""

from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .logger import get_logger
from .protocol import (
    initialize_result,
    tools_list_result,
    text_result,
    resources_list_result,
    ProtocolError,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
)

log = get_logger("router")

_NOTIFICATIONS = frozenset({
    "initialized",
    "notifications/initialized",
    "notifications/cancelled",
})


class Router:
    """MCP method dispatcher."""

    def __init__(self):
        self._tools: List[Dict[str, Any]] = []
        self._tool_handlers: List[tuple] = []
        self._initialized = False

    # ── registration ─────────────────────────────────────────────

    def register_tools_module(self, tools_list: List[Dict], handler: Callable):
        """
        Register a tools module.

        Args:
            tools_list: List of MCP tool definition dicts.
            handler:    async fn(name, args) -> dict with "content" key.
        """
        self._tools.extend(tools_list)
        self._tool_handlers.append((
            {t["name"] for t in tools_list},
            handler,
        ))
        log.info(f"Registered {len(tools_list)} tools: {[t['name'] for t in tools_list]}")

    # ── dispatch ─────────────────────────────────────────────────

    async def route(self, msg_type: str, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Route a validated message to the appropriate handler.

        Returns the result payload (to be wrapped in a JSON-RPC response),
        or None for notifications that need no response.
        """
        method = msg.get("method", "")
        params = msg.get("params") or {}

        if method in _NOTIFICATIONS:
            if method in ("initialized", "notifications/initialized"):
                self._initialized = True
            # Sent with an id, it still gets an (empty) answer
            return None if msg_type == "notification" else {}

        if msg_type == "notification":
            return None  # unknown notification, ignored

        if not isinstance(params, dict):
            raise ProtocolError(INVALID_PARAMS, "Params must be an object")

        if method == "initialize":
            return self._handle_initialize(params)

        if method == "ping":
            return {}

        if method == "tools/list":
            return self._handle_tools_list()

        if method == "tools/call":
            return await self._handle_tools_call(params)

        if method == "resources/list":
            return self._handle_resources_list()

        if method == "resources/read":
            return self._handle_resources_read(params)

        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    # ── handlers ─────────────────────────────────────────────────

    def _handle_initialize(self, params: Dict) -> Dict[str, Any]:
        requested = params.get("protocolVersion")
        log.info(
            f"Client initialize: {params.get('clientInfo', {}).get('name', '?')} "
            f"protocol={requested or '?'}"
        )
        if requested in Config.SUPPORTED_PROTOCOL_VERSIONS:
            version = requested
        else:
            version = Config.PROTOCOL_VERSION
        return initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=version,
        )

    def _handle_tools_list(self) -> Dict[str, Any]:
        return tools_list_result(self._tools)

    async def _handle_tools_call(self, params: Dict) -> Dict[str, Any]:
        name = params.get("name", "")
        args = params.get("arguments")

        if not name or not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, "Missing tool name")

        log.info(f"tools/call {name}")

        # Find the handler that owns this tool
        for tool_names, handler in self._tool_handlers:
            if name in tool_names:
                try:
                    return await handler(name, args)
                except Exception as exc:
                    log.error(f"Tool {name} error: {exc}", exc_info=True)
                    return text_result(f"Tool error: {exc}", is_error=True)

        log.warning(f"Unknown tool requested: {name}")
        return text_result(f"Unknown tool: {name}", is_error=True)

    def _handle_resources_list(self) -> Dict[str, Any]:
        return resources_list_result([])

    def _handle_resources_read(self, params: Dict) -> Dict[str, Any]:
        uri = params.get("uri", "")
        if not uri:
            raise ProtocolError(INVALID_PARAMS, "Missing resource URI")
        raise ProtocolError(INVALID_PARAMS, f"Resource not found: {uri}")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def tool_count(self) -> int:
        return len(self._tools)
