"""
Cosense MCP Tools

Modules:
  cosense_tools  — search, page lookup and syntax reference
  validation     — inputSchema-driven argument checks
"""

from .cosense_tools import TOOLS, CosenseTools, list_tools

__all__ = ["TOOLS", "CosenseTools", "list_tools"]
