"""
Tests for the Cosense MCP tools.

Covers the tool definitions and the dispatcher:
- cosense_search
- cosense_get_page
- cosense_syntax_rule
- unknown tool names and malformed arguments

The gateway is replaced by a stub returning canned outcomes, so no
network access is needed.
"""

import json

import pytest

from cosense_mcp.gateway import Failure, Success
from cosense_mcp.syntax_rules import COSENSE_SYNTAX_RULES
from cosense_mcp.tools import TOOLS, CosenseTools, list_tools

pytestmark = pytest.mark.anyio


def _text(result):
    assert len(result["content"]) == 1
    block = result["content"][0]
    assert block["type"] == "text"
    return block["text"]


# ═══════════════════════════════════════════════════════════════════════════
# Test Tool Definitions
# ═══════════════════════════════════════════════════════════════════════════


class TestToolDefinitions:
    """Test tool definitions are correctly structured."""

    def test_tools_list_order(self):
        """Exactly three tools, in advertised order."""
        assert [t["name"] for t in list_tools()] == [
            "cosense_search",
            "cosense_get_page",
            "cosense_syntax_rule",
        ]

    def test_tools_have_input_schemas(self):
        for tool in TOOLS:
            assert tool["description"]
            schema = tool["inputSchema"]
            assert schema["type"] == "object"
            assert "properties" in schema
            assert isinstance(schema["required"], list)

    def test_search_schema(self):
        tool = next(t for t in TOOLS if t["name"] == "cosense_search")
        assert tool["inputSchema"]["required"] == ["keywords"]
        assert tool["inputSchema"]["properties"]["keywords"]["type"] == "string"

    def test_get_page_schema(self):
        tool = next(t for t in TOOLS if t["name"] == "cosense_get_page")
        assert tool["inputSchema"]["required"] == ["title"]
        assert tool["inputSchema"]["properties"]["title"]["type"] == "string"

    def test_syntax_rule_takes_no_arguments(self):
        tool = next(t for t in TOOLS if t["name"] == "cosense_syntax_rule")
        assert tool["inputSchema"]["required"] == []
        assert tool["inputSchema"]["properties"] == {}

    def test_list_tools_returns_copy(self):
        tools = list_tools()
        tools.pop()
        assert len(list_tools()) == 3


# ═══════════════════════════════════════════════════════════════════════════
# Test Dispatcher Routing
# ═══════════════════════════════════════════════════════════════════════════


class TestDispatch:

    @pytest.mark.parametrize("name", ["cosense_delete", "", "search", "COSENSE_SEARCH"])
    async def test_unknown_tool(self, stub_gateway, name):
        tools = CosenseTools(stub_gateway())
        result = await tools.handle_tool(name, {})
        assert result["isError"] is True
        assert _text(result) == f"Unknown tool: {name}"

    async def test_syntax_rule_returns_static_text(self, stub_gateway):
        gateway = stub_gateway()
        result = await CosenseTools(gateway).handle_tool("cosense_syntax_rule", {})
        assert result["isError"] is False
        assert _text(result) == COSENSE_SYNTAX_RULES
        assert gateway.calls == []

    async def test_syntax_rule_ignores_arguments(self, stub_gateway):
        tools = CosenseTools(stub_gateway())
        for args in (None, {}, {"keywords": 42}, {"anything": ["x"]}, ["not", "a", "dict"]):
            result = await tools.handle_tool("cosense_syntax_rule", args)
            assert result["isError"] is False
            assert _text(result) == COSENSE_SYNTAX_RULES

    async def test_arguments_must_be_object(self, stub_gateway):
        result = await CosenseTools(stub_gateway()).handle_tool("cosense_search", ["python"])
        assert result["isError"] is True
        assert "list" in _text(result)


# ═══════════════════════════════════════════════════════════════════════════
# Test cosense_search
# ═══════════════════════════════════════════════════════════════════════════


class TestSearch:

    async def test_rejects_non_string_keywords(self, stub_gateway):
        gateway = stub_gateway()
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": 42})
        assert result["isError"] is True
        assert "int" in _text(result)
        assert "keywords" in _text(result)
        assert gateway.calls == []

    async def test_rejects_boolean_keywords(self, stub_gateway):
        result = await CosenseTools(stub_gateway()).handle_tool("cosense_search", {"keywords": True})
        assert result["isError"] is True
        assert "bool" in _text(result)

    async def test_missing_keywords(self, stub_gateway):
        result = await CosenseTools(stub_gateway()).handle_tool("cosense_search", {})
        assert result["isError"] is True
        assert _text(result) == 'Missing required argument "keywords"'

    async def test_gateway_failure(self, stub_gateway):
        gateway = stub_gateway(search=Failure("HTTP error! status: 500", status=500))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "python"})
        assert result["isError"] is True
        assert _text(result) == "Error: HTTP error! status: 500"

    async def test_no_results_is_an_error(self, stub_gateway):
        gateway = stub_gateway(search=Success({
            "projectName": "myproject",
            "searchQuery": "nothing here",
            "limit": 100,
            "count": 0,
            "pages": [],
        }))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "nothing here"})
        assert result["isError"] is True
        assert _text(result) == 'No results for "nothing here"'

    async def test_results_carry_page_urls(self, stub_gateway, search_response):
        gateway = stub_gateway(search=Success(search_response))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "python asyncio"})
        assert result["isError"] is False
        assert gateway.calls == [("search", "python asyncio")]

        data = json.loads(_text(result))
        assert data["count"] == 2
        assert data["projectName"] == "myproject"
        assert len(data["pages"]) == 2
        assert data["pages"][0]["url"] == "https://scrapbox.io/myproject/First%20Page"
        assert data["pages"][1]["url"] == "https://scrapbox.io/myproject/%E6%97%A5%E6%9C%AC%E8%AA%9E"

    async def test_projection_drops_unlisted_fields(self, stub_gateway, search_response):
        gateway = stub_gateway(search=Success(search_response))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "python"})
        data = json.loads(_text(result))
        assert "backend" not in data
        assert "existsExactTitleMatch" not in data
        assert set(data["pages"][0]) == {"id", "title", "image", "words", "lines", "url"}
        # missing upstream fields are omitted, not null
        assert "image" not in data["pages"][1]

    async def test_output_is_pretty_printed(self, stub_gateway, search_response):
        gateway = stub_gateway(search=Success(search_response))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "python"})
        text = _text(result)
        assert text.startswith('{\n  "projectName": "myproject"')
        assert "日本語" in text

    async def test_non_object_response(self, stub_gateway):
        gateway = stub_gateway(search=Success(["not", "an", "object"]))
        result = await CosenseTools(gateway).handle_tool("cosense_search", {"keywords": "python"})
        assert result["isError"] is True
        assert _text(result) == "Error: Unexpected response from Cosense"

    async def test_identical_calls_give_identical_results(self, stub_gateway, search_response):
        tools = CosenseTools(stub_gateway(search=Success(search_response)))
        first = await tools.handle_tool("cosense_search", {"keywords": "python"})
        second = await tools.handle_tool("cosense_search", {"keywords": "python"})
        assert json.dumps(first) == json.dumps(second)


# ═══════════════════════════════════════════════════════════════════════════
# Test cosense_get_page
# ═══════════════════════════════════════════════════════════════════════════


class TestGetPage:

    async def test_page_projection(self, stub_gateway, page_response):
        gateway = stub_gateway(page=Success(page_response))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "First Page"})
        assert result["isError"] is False
        assert gateway.calls == [("get_page", "First Page")]

        data = json.loads(_text(result))
        assert list(data) == [
            "id", "title", "created", "updated", "image", "descriptions", "lines", "url",
        ]
        assert data["url"] == "https://scrapbox.io/myproject/First%20Page"
        assert data["lines"] == page_response["lines"]

    async def test_related_pages_never_returned(self, stub_gateway, page_response):
        gateway = stub_gateway(page=Success(page_response))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "First Page"})
        assert "relatedPages" not in _text(result)
        assert "links1hop" not in _text(result)

    async def test_page_not_found(self, stub_gateway):
        gateway = stub_gateway(page=Failure("HTTP error! status: 404", status=404))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "Missing"})
        assert result["isError"] is True
        assert _text(result) == 'Error: Page "Missing" does not exist.'

    async def test_other_http_failure(self, stub_gateway):
        gateway = stub_gateway(page=Failure("HTTP error! status: 403", status=403))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "Secret"})
        assert result["isError"] is True
        assert _text(result) == "Error: HTTP error! status: 403"

    async def test_transport_failure(self, stub_gateway):
        gateway = stub_gateway(page=Failure("Request timed out after 30s"))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "Slow"})
        assert result["isError"] is True
        assert _text(result) == "Error: Request timed out after 30s"

    async def test_title_must_be_string(self, stub_gateway):
        gateway = stub_gateway()
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": 7})
        assert result["isError"] is True
        assert "title" in _text(result)
        assert "int" in _text(result)
        assert gateway.calls == []

    async def test_missing_title(self, stub_gateway):
        result = await CosenseTools(stub_gateway()).handle_tool("cosense_get_page", None)
        assert result["isError"] is True
        assert _text(result) == 'Missing required argument "title"'

    async def test_sparse_page_falls_back_to_requested_title(self, stub_gateway):
        gateway = stub_gateway(page=Success({"id": "p9"}))
        result = await CosenseTools(gateway).handle_tool("cosense_get_page", {"title": "a/b"})
        data = json.loads(_text(result))
        assert data == {"id": "p9", "url": "https://scrapbox.io/myproject/a%2Fb"}

    async def test_unexpected_exception_becomes_error_result(self, stub_gateway):
        class Exploding:
            async def get_page(self, title):
                raise RuntimeError("boom")

        result = await CosenseTools(Exploding()).handle_tool("cosense_get_page", {"title": "x"})
        assert result["isError"] is True
        assert _text(result) == "Error: boom"
