"""Shared fixtures for the Cosense MCP tests."""

import pytest

from cosense_mcp.config import CosenseSettings
from cosense_mcp.gateway import CosenseGateway, Failure, Success


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return CosenseSettings(project_name="myproject", access_key="secret-key")


class StubGateway(CosenseGateway):
    """Gateway that returns canned outcomes and records what was asked."""

    def __init__(self, settings, search=None, page=None):
        super().__init__(settings)
        self.search_outcome = search
        self.page_outcome = page
        self.calls = []

    async def search(self, keywords):
        self.calls.append(("search", keywords))
        return self.search_outcome

    async def get_page(self, title):
        self.calls.append(("get_page", title))
        return self.page_outcome


@pytest.fixture
def stub_gateway(settings):
    def make(search=None, page=None):
        return StubGateway(settings, search=search, page=page)
    return make


SEARCH_RESPONSE = {
    "projectName": "myproject",
    "searchQuery": "python asyncio",
    "limit": 100,
    "count": 2,
    "existsExactTitleMatch": False,
    "backend": "elasticsearch",
    "pages": [
        {
            "id": "p1",
            "title": "First Page",
            "image": "https://gyazo.com/abc/raw",
            "words": ["python", "asyncio"],
            "lines": ["python asyncio basics"],
        },
        {
            "id": "p2",
            "title": "日本語",
            "words": ["python"],
            "lines": ["asyncio in Japanese"],
        },
    ],
}

PAGE_RESPONSE = {
    "id": "p1",
    "title": "First Page",
    "created": 1700000000,
    "updated": 1700000500,
    "image": "https://gyazo.com/abc/raw",
    "descriptions": ["python asyncio basics"],
    "lines": [
        {"id": "l1", "text": "First Page"},
        {"id": "l2", "text": "python asyncio basics"},
    ],
    "pin": 0,
    "views": 12,
    "relatedPages": {
        "links1hop": [{"id": "p3", "title": "Linked"}],
        "links2hop": [],
    },
}


@pytest.fixture
def search_response():
    return dict(SEARCH_RESPONSE)


@pytest.fixture
def page_response():
    return dict(PAGE_RESPONSE)
