#!/usr/bin/env python3
"""
Entry point: python -m cosense_mcp

Validates configuration, then serves the Cosense tools over stdio.
Requires COSENSE_PROJECT_NAME and COSENSE_SERVICE_ACCOUNT_ACCESS_KEY.
"""

import asyncio
import sys

from .config import ConfigError, CosenseSettings
from .logger import configure_logging, get_logger
from .server import CosenseMCPServer

log = get_logger("main")


def load_settings() -> CosenseSettings:
    """Read settings from the environment or exit with status 1."""
    try:
        return CosenseSettings.from_env()
    except ConfigError as exc:
        # logging is not configured yet, so stderr is the only channel
        print(str(exc), file=sys.stderr)
        sys.exit(1)


async def main():
    settings = load_settings()
    configure_logging(settings.log_dir, settings.log_level)
    log.info(f"Logging to {settings.log_dir} at {settings.log_level}")
    server = CosenseMCPServer(settings)
    await server.run()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
