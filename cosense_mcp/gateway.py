"""
Cosense Gateway — authenticated HTTP access to the Cosense page API

Every call is a single GET. Transport faults, non-2xx statuses and JSON
decode errors are folded into a Failure outcome; nothing here raises for
upstream problems.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union
from urllib.parse import quote

import httpx

from .config import Config, CosenseSettings
from .logger import get_logger

log = get_logger("gateway")

T = TypeVar("T")

# Characters encodeURIComponent leaves untouched (besides alphanumerics)
_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str
    status: Optional[int] = None


RemoteOutcome = Union[Success[T], Failure]


def encode_component(value: str) -> str:
    """Percent-encode a single URL path or query component."""
    return quote(value, safe=_COMPONENT_SAFE)


class CosenseGateway:
    """
    Talks to https://scrapbox.io/api/pages/<project>/...

    Usage:
        gateway = CosenseGateway(settings)
        outcome = await gateway.search("python asyncio")
        await gateway.aclose()

    Pass ``client`` to route requests through a preconfigured
    httpx.AsyncClient (tests use one backed by httpx.MockTransport).
    """

    def __init__(self, settings: CosenseSettings, client: Optional[httpx.AsyncClient] = None):
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def settings(self) -> CosenseSettings:
        return self._settings

    def _headers(self) -> dict:
        return {
            "x-service-account-access-key": self._settings.access_key,
            "User-Agent": Config.USER_AGENT,
            "Accept": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    # ── URL builders ─────────────────────────────────────────────

    def page_url(self, title: str) -> str:
        """Browsable URL of a page, as shown to users."""
        s = self._settings
        return f"{s.base_url}/{s.project_name}/{encode_component(title)}"

    def search_endpoint(self, keywords: str) -> str:
        s = self._settings
        return f"{s.api_base}/{s.project_name}/search/query?q={encode_component(keywords)}"

    def page_endpoint(self, title: str) -> str:
        s = self._settings
        return f"{s.api_base}/{s.project_name}/{encode_component(title)}"

    # ── requests ─────────────────────────────────────────────────

    async def fetch_json(self, url: str) -> RemoteOutcome[Any]:
        """GET ``url`` and decode the JSON body."""
        client = self._get_client()
        try:
            response = await client.get(
                url, headers=self._headers(), timeout=self._settings.timeout
            )
        except httpx.TimeoutException as exc:
            log.warning(f"Timeout fetching {url}: {exc!r}")
            return Failure(f"Request timed out after {self._settings.timeout:g}s")
        except httpx.HTTPError as exc:
            log.warning(f"Transport error fetching {url}: {exc!r}")
            return Failure(str(exc) or exc.__class__.__name__)

        if not response.is_success:
            log.info(f"GET {url} -> HTTP {response.status_code}")
            return Failure(
                f"HTTP error! status: {response.status_code}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.warning(f"Invalid JSON from {url}: {exc}")
            return Failure(str(exc))

        log.debug(f"GET {url} -> HTTP {response.status_code}")
        return Success(data)

    async def search(self, keywords: str) -> RemoteOutcome[Any]:
        """Full-text search within the configured project."""
        return await self.fetch_json(self.search_endpoint(keywords))

    async def get_page(self, title: str) -> RemoteOutcome[Any]:
        """Fetch one page by its title."""
        return await self.fetch_json(self.page_endpoint(title))

    async def aclose(self):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
