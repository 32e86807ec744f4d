"""
STDIO Transport — newline-delimited JSON-RPC

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
"""

import sys
import json
import asyncio
from typing import Any, Dict, Optional

from .logger import get_logger

log = get_logger("transport")

# Returned by read_message() for a line that is not valid JSON
MALFORMED = object()


class StdioTransport:
    """Async stdin reader paired with synchronous stdout writes"""

    def __init__(self, reader: Optional[asyncio.StreamReader] = None, writer=None):
        self._reader = reader
        self._stdout = writer  # binary file-like; defaults to sys.stdout.buffer

    async def start(self):
        """Initialize async stdin reader and direct stdout writer"""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=2**20)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        # Synchronous writes: connect_write_pipe fails when stdout
        # is not a proper pipe
        if self._stdout is None:
            self._stdout = sys.stdout.buffer
        log.info("Transport initialized")

    async def read_message(self) -> Any:
        """
        Read one JSON-RPC message from stdin.

        Returns the decoded message, MALFORMED for an undecodable line,
        or None on EOF. Blank lines are skipped.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        while True:
            try:
                raw_bytes = await self._reader.readline()
            except ValueError as exc:
                # line longer than the reader limit; the buffer is discarded
                log.error(f"Read error: {exc}")
                return MALFORMED
            if not raw_bytes:
                return None  # EOF
            if raw_bytes.strip():
                break

        try:
            return json.loads(raw_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.error(f"JSON parse error: {exc}")
            return MALFORMED

    def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout as a single line"""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_text = json.dumps(message, separators=(",", ":")) + "\n"
        self._stdout.write(raw_text.encode("utf-8"))
        self._stdout.flush()

    async def close(self):
        log.info("Transport closed")
