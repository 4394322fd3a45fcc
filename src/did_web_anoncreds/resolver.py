"""DID resolution and service endpoint lookup."""

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import quote

from httpx import AsyncClient, HTTPError

from did_web_anoncreds.did import parse_did_web

LOGGER = logging.getLogger(__name__)


class DidResolutionError(Exception):
    """Raised on error in resolver."""


class DidResolver(Protocol):
    """DID resolver protocol."""

    async def resolve_did(self, did: str) -> Mapping[str, Any]:
        """Resolve a DID to its DID document."""
        ...


def did_web_to_url(did: str) -> str:
    """Derive the URL of the DID document for a did:web.

    did:web:example.com -> https://example.com/.well-known/did.json
    did:web:example.com:user:alice -> https://example.com/user/alice/did.json
    did:web:example.com%3A8443 -> https://example.com:8443/.well-known/did.json
    """
    try:
        did_web = parse_did_web(did)
    except ValueError as err:
        raise DidResolutionError(f"Invalid did:web identifier: {did}") from err

    host = did_web.host.replace("%3A", ":").replace("%3a", ":")
    if did_web.path:
        path = "/" + "/".join(quote(part, safe="%") for part in did_web.path)
        return f"https://{host}{path}/did.json"
    return f"https://{host}/.well-known/did.json"


class DidWebResolver(DidResolver):
    """Resolve did:web DIDs by fetching their DID documents over HTTPS."""

    def __init__(self, client: AsyncClient | None = None, timeout: float = 10.0):
        """Init the resolver."""
        self.client = client
        self.timeout = timeout

    async def _get(self, url: str):
        if self.client:
            return await self.client.get(url, follow_redirects=True)
        async with AsyncClient(
            timeout=self.timeout, follow_redirects=True
        ) as session:
            return await session.get(url)

    async def resolve_did(self, did: str) -> Mapping[str, Any]:
        """Resolve a did:web DID."""
        url = did_web_to_url(did)
        LOGGER.debug("Resolving %s from %s", did, url)
        try:
            resp = await self._get(url)
            resp.raise_for_status()
            doc = resp.json()
        except HTTPError as err:
            raise DidResolutionError(
                f"Could not retrieve DID document for {did}"
            ) from err
        except ValueError as err:
            raise DidResolutionError(
                f"Invalid JSON in DID document for {did}"
            ) from err

        if not isinstance(doc, dict) or doc.get("id") != did:
            raise DidResolutionError(f"DID document id does not match {did}")

        return doc


async def locate_service_endpoint(
    resolver: DidResolver, did: str, service_name: str
) -> str:
    """Find the endpoint of the service named service_name in the DID document."""
    try:
        doc = await resolver.resolve_did(did)
    except DidResolutionError:
        raise
    except Exception as err:
        raise DidResolutionError(f"Failed to resolve {did}: {err}") from err

    service_id = f"{did}#{service_name}"
    for service in doc.get("service") or []:
        if isinstance(service, Mapping) and service.get("id") == service_id:
            endpoint = service.get("serviceEndpoint")
            if isinstance(endpoint, str) and endpoint:
                return endpoint
            break

    raise DidResolutionError(
        f"No valid endpoint has been found for the service {service_name}"
    )
