"""
Cosense MCP Server — Main Orchestrator

Ties together:
  Transport → Protocol → Router → Tools → Gateway

Flow:
  1. Transport reads one JSON line from stdin
  2. Protocol validates JSON-RPC 2.0
  3. Router dispatches to the correct handler
  4. Tool handlers call the Cosense API through the gateway
  5. Transport writes the response line to stdout

Each inbound message is handled in its own task, so a slow upstream
request never holds up other calls.
"""

import asyncio
import signal
from typing import Any, Dict, Optional, Set

from .config import Config, CosenseSettings
from .gateway import CosenseGateway
from .logger import get_logger
from .transport import StdioTransport, MALFORMED
from .protocol import (
    validate_message,
    make_response,
    make_error,
    ProtocolError,
    PARSE_ERROR,
    INTERNAL_ERROR,
)
from .router import Router
from .tools import TOOLS, CosenseTools

log = get_logger("server")


class CosenseMCPServer:
    """
    Main server orchestrator.

    Usage:
        server = CosenseMCPServer(CosenseSettings.from_env())
        await server.run()
    """

    def __init__(
        self,
        settings: CosenseSettings,
        transport: Optional[StdioTransport] = None,
        gateway: Optional[CosenseGateway] = None,
    ):
        self._settings = settings
        self._transport = transport or StdioTransport()
        self._gateway = gateway or CosenseGateway(settings)
        self._router = Router()
        self._tasks: Set[asyncio.Task] = set()
        self._main_task: Optional[asyncio.Task] = None
        self._running = False

        self._router.register_tools_module(TOOLS, CosenseTools(self._gateway).handle_tool)

    @property
    def router(self) -> Router:
        return self._router

    # ── main loop ────────────────────────────────────────────────

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(
            f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION} "
            f"project={self._settings.project_name}"
        )

        await self._transport.start()
        self._main_task = asyncio.current_task()

        # Handle graceful shutdown
        loop = asyncio.get_running_loop()
        installed = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.stop)
                installed.append(sig)
            except (NotImplementedError, RuntimeError):
                pass  # Windows, or not on the main thread

        self._running = True
        log.info(f"MCP server running on stdio — tools={self._router.tool_count}")

        try:
            while self._running:
                msg = await self._transport.read_message()
                if msg is None:
                    log.info("EOF on stdin — shutting down")
                    break

                if msg is MALFORMED:
                    self._transport.write_message(
                        make_error(None, PARSE_ERROR, "Parse error")
                    )
                    continue

                task = asyncio.create_task(self._handle_message(msg))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)
            await self.shutdown()

    def stop(self):
        """Stop reading new messages; in-flight calls still complete."""
        self._running = False
        if self._main_task is not None:
            self._main_task.cancel()
        log.info("Stop requested")

    async def _handle_message(self, msg: Any):
        """Process a single JSON-RPC message through the full pipeline."""
        try:
            response = await self.handle_message(msg)
            if response is not None:
                self._transport.write_message(response)
        except Exception as exc:
            # A request must never go unanswered, even if its reply failed
            log.error(f"Failed to answer message: {exc}", exc_info=True)
            request_id = msg.get("id") if isinstance(msg, dict) else None
            if request_id is not None:
                self._transport.write_message(
                    make_error(request_id, INTERNAL_ERROR, f"Internal error: {type(exc).__name__}")
                )

    async def handle_message(self, msg: Any) -> Optional[Dict[str, Any]]:
        """Return the JSON-RPC response for ``msg``, or None if none is owed."""
        request_id = msg.get("id") if isinstance(msg, dict) else None

        try:
            msg_type = validate_message(msg)

            # Replies from the client (e.g. to pings) need no answer
            if msg_type in ("response", "error"):
                return None

            result = await self._router.route(msg_type, msg)
            if result is None or msg_type == "notification":
                return None

            return make_response(request_id, result)

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            if request_id is None and isinstance(msg, dict) and "method" in msg:
                return None  # notifications never get a reply
            return make_error(request_id, exc.code, exc.message, exc.data)

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            if request_id is None:
                return None
            return make_error(request_id, INTERNAL_ERROR, str(exc))

    async def shutdown(self):
        """Graceful shutdown — finish in-flight calls, close the HTTP client."""
        self._running = False

        if self._tasks:
            log.info(f"Waiting for {len(self._tasks)} in-flight requests")
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

        await self._transport.close()
        await self._gateway.aclose()
        log.info("Server stopped")
