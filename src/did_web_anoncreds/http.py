"""Resource fetching over HTTP.

A fetch is classified into one of three outcomes: the resource was found,
the server answered with something other than 200, or the request failed at
the transport level. No retries are made.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from httpx import AsyncClient, InvalidURL, Response, TransportError

LOGGER = logging.getLogger(__name__)


class InvalidResourceError(Exception):
    """Raised when a fetched body is not a resource envelope."""


@dataclass(frozen=True)
class Found:
    """The resource envelope was retrieved."""

    resource: Mapping[str, Any]
    resource_metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    """The server did not answer with 200."""

    status: int


@dataclass(frozen=True)
class FetchFailed:
    """The request failed before a response was received."""

    cause: Exception


FetchOutcome = Found | NotFound | FetchFailed


def _parse_envelope(resp: Response) -> Found:
    try:
        body = resp.json()
    except ValueError as err:
        raise InvalidResourceError(f"Response from {resp.url} is not JSON") from err

    if not isinstance(body, dict) or not isinstance(body.get("resource"), dict):
        raise InvalidResourceError(
            f"Response from {resp.url} does not contain a resource"
        )

    metadata = body.get("resourceMetadata") or {}
    if not isinstance(metadata, dict):
        raise InvalidResourceError(
            f"Response from {resp.url} contains invalid resource metadata"
        )

    return Found(body["resource"], metadata)


class ResourceFetcher:
    """Retrieve resource envelopes from service endpoints."""

    def __init__(self, client: AsyncClient | None = None, timeout: float = 10.0):
        """Init the fetcher."""
        self.client = client
        self.timeout = timeout

    async def _get(self, url: str) -> Response:
        if self.client:
            return await self.client.get(url, follow_redirects=True)
        async with AsyncClient(
            timeout=self.timeout, follow_redirects=True
        ) as session:
            return await session.get(url)

    async def fetch_url(self, url: str) -> FetchOutcome:
        """Fetch the resource envelope at url."""
        LOGGER.debug("Getting AnonCreds resource at URL: %s", url)
        try:
            resp = await self._get(url)
        except (TransportError, InvalidURL) as err:
            LOGGER.debug("Transport error fetching %s: %s", url, err)
            return FetchFailed(err)

        if resp.status_code != 200:
            LOGGER.debug("Response from %s: %s", url, resp.status_code)
            return NotFound(resp.status_code)

        return _parse_envelope(resp)

    async def fetch(self, base_endpoint: str, relative_path: str) -> FetchOutcome:
        """Fetch the resource envelope at relative_path under base_endpoint."""
        return await self.fetch_url(f"{base_endpoint}{relative_path}")
