"""
Cosense Tools — search, page lookup and syntax reference

3 tools backed by the Cosense page API:
  cosense_search, cosense_get_page, cosense_syntax_rule

Every code path returns a tool result envelope; handle_tool never raises.
"""

import json
from typing import Any, Dict, Iterable, List, Optional

from cosense_mcp.gateway import CosenseGateway, Failure
from cosense_mcp.logger import get_logger
from cosense_mcp.protocol import text_result
from cosense_mcp.syntax_rules import COSENSE_SYNTAX_RULES
from cosense_mcp.tools.validation import validate_arguments

log = get_logger("tools.cosense")

# ── Tool definitions ─────────────────────────────────────────────────────────

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "cosense_search",
        "description": "Search Cosense by keywords",
        "inputSchema": {
            "type": "object",
            "properties": {
                "keywords": {
                    "type": "string",
                    "description": "Keywords separated by spaces",
                },
            },
            "required": ["keywords"],
        },
    },
    {
        "name": "cosense_get_page",
        "description": "Get a page by title",
        "inputSchema": {
            "type": "object",
            "properties": {
                "title": {
                    "type": "string",
                    "description": "Title of the page",
                },
            },
            "required": ["title"],
        },
    },
    {
        "name": "cosense_syntax_rule",
        "description": "Get Cosense syntax rules",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
]

_SCHEMAS = {t["name"]: t["inputSchema"] for t in TOOLS}

# Fields copied from the API responses; anything else (notably the
# relatedPages link graph) stays out of the tool output.
_SEARCH_FIELDS = ("projectName", "searchQuery", "limit", "count")
_SEARCH_PAGE_FIELDS = ("id", "title", "image", "words", "lines")
_PAGE_FIELDS = ("id", "title", "created", "updated", "image", "descriptions", "lines")


def list_tools() -> List[Dict[str, Any]]:
    """Tool definitions in advertised order."""
    return list(TOOLS)


def _pick(record: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    return {f: record[f] for f in fields if f in record}


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


# ── Handler ──────────────────────────────────────────────────────────────────

class CosenseTools:
    """Dispatches cosense_* tool calls against one gateway."""

    def __init__(self, gateway: CosenseGateway):
        self._gateway = gateway

    async def handle_tool(self, name: str, args: Optional[dict]) -> dict:
        """Dispatch Cosense tool calls."""
        if args is None:
            args = {}

        schema = _SCHEMAS.get(name)
        if schema is None:
            return text_result(f"Unknown tool: {name}", is_error=True)

        # Static text, whatever arguments came along
        if name == "cosense_syntax_rule":
            return text_result(COSENSE_SYNTAX_RULES)

        problem = validate_arguments(schema, args)
        if problem:
            log.info(f"Rejected {name} call: {problem}")
            return text_result(problem, is_error=True)

        try:
            if name == "cosense_search":
                return await self._search(args["keywords"])
            else:
                return await self._get_page(args["title"])
        except Exception as exc:
            log.error(f"Cosense tool error ({name}): {exc}", exc_info=True)
            return text_result(f"Error: {exc}", is_error=True)

    async def _search(self, keywords: str) -> dict:
        outcome = await self._gateway.search(keywords)
        if isinstance(outcome, Failure):
            return text_result(f"Error: {outcome.message}", is_error=True)

        data = outcome.value
        if not isinstance(data, dict):
            return text_result("Error: Unexpected response from Cosense", is_error=True)

        if data.get("count") == 0:
            return text_result(f'No results for "{keywords}"', is_error=True)

        result = _pick(data, _SEARCH_FIELDS)
        result["pages"] = [
            dict(_pick(page, _SEARCH_PAGE_FIELDS), url=self._gateway.page_url(page.get("title") or ""))
            for page in data.get("pages") or []
            if isinstance(page, dict)
        ]
        log.info(f'Search "{keywords}": {len(result["pages"])} pages')
        return text_result(_to_json(result))

    async def _get_page(self, title: str) -> dict:
        outcome = await self._gateway.get_page(title)
        if isinstance(outcome, Failure):
            if outcome.status == 404:
                return text_result(f'Error: Page "{title}" does not exist.', is_error=True)
            return text_result(f"Error: {outcome.message}", is_error=True)

        data = outcome.value
        if not isinstance(data, dict):
            return text_result("Error: Unexpected response from Cosense", is_error=True)

        result = _pick(data, _PAGE_FIELDS)
        result["url"] = self._gateway.page_url(data.get("title") or title)
        return text_result(_to_json(result))
