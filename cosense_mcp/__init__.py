"""
Cosense MCP Server

Search and read pages of a Cosense (Scrapbox) project over the
Model Context Protocol.
"""

__version__ = "1.0.0"

from .config import Config, ConfigError, CosenseSettings
from .gateway import CosenseGateway, Failure, Success
from .router import Router
from .server import CosenseMCPServer
