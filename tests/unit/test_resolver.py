"""Test DID resolution and service endpoint lookup."""

import httpx
import pytest

from did_web_anoncreds.resolver import (
    DidResolutionError,
    DidWebResolver,
    did_web_to_url,
    locate_service_endpoint,
)

DID = "did:web:example.com"


@pytest.mark.parametrize(
    ("did", "url"),
    [
        ("did:web:example.com", "https://example.com/.well-known/did.json"),
        (
            "did:web:example.com:user:alice",
            "https://example.com/user/alice/did.json",
        ),
        (
            "did:web:localhost%3A8443",
            "https://localhost:8443/.well-known/did.json",
        ),
    ],
)
def test_did_web_to_url(did: str, url: str):
    assert did_web_to_url(did) == url


def test_did_web_to_url_invalid():
    with pytest.raises(DidResolutionError):
        did_web_to_url("did:key:z6Mkabc")


@pytest.mark.asyncio
async def test_resolve_did_web(mock_http):
    doc = {"id": DID, "service": []}
    mock_http.get("https://example.com/.well-known/did.json").mock(
        return_value=httpx.Response(200, json=doc)
    )
    assert await DidWebResolver().resolve_did(DID) == doc


@pytest.mark.asyncio
async def test_resolve_did_web_follows_redirect(mock_http):
    doc = {"id": DID, "service": []}
    moved = "https://www.example.com/.well-known/did.json"
    mock_http.get("https://example.com/.well-known/did.json").mock(
        return_value=httpx.Response(302, headers={"Location": moved})
    )
    mock_http.get(moved).mock(return_value=httpx.Response(200, json=doc))

    assert await DidWebResolver().resolve_did(DID) == doc


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, content=b"<html></html>"),
        httpx.Response(200, json={"id": "did:web:other.com"}),
    ],
)
async def test_resolve_did_web_failures(mock_http, response: httpx.Response):
    mock_http.get("https://example.com/.well-known/did.json").mock(
        return_value=response
    )
    with pytest.raises(DidResolutionError):
        await DidWebResolver().resolve_did(DID)


@pytest.mark.asyncio
async def test_resolve_did_web_transport_error(mock_http):
    mock_http.get("https://example.com/.well-known/did.json").mock(
        side_effect=httpx.ConnectError
    )
    with pytest.raises(DidResolutionError):
        await DidWebResolver().resolve_did(DID)


@pytest.mark.asyncio
async def test_locate_service_endpoint(resolver):
    endpoint = await locate_service_endpoint(resolver, DID, "anoncreds")
    assert endpoint == "https://example.com/path"


@pytest.mark.asyncio
async def test_locate_service_endpoint_missing_service(resolver):
    with pytest.raises(DidResolutionError, match="other"):
        await locate_service_endpoint(resolver, DID, "other")


@pytest.mark.asyncio
async def test_locate_service_endpoint_relative_id_not_matched(resolver):
    resolver.docs[DID] = {
        "id": DID,
        "service": [{"id": "#anoncreds", "serviceEndpoint": "https://x.org"}],
    }
    with pytest.raises(DidResolutionError):
        await locate_service_endpoint(resolver, DID, "anoncreds")


@pytest.mark.asyncio
async def test_locate_service_endpoint_resolver_failure(resolver):
    with pytest.raises(DidResolutionError):
        await locate_service_endpoint(resolver, "did:web:unknown.com", "anoncreds")


@pytest.mark.asyncio
async def test_locate_service_endpoint_wraps_unexpected_errors():
    class BrokenResolver:
        async def resolve_did(self, did):
            raise RuntimeError("boom")

    with pytest.raises(DidResolutionError, match="boom"):
        await locate_service_endpoint(BrokenResolver(), DID, "anoncreds")
