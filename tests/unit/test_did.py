"""Test resource identifier parsing."""

import pytest

from did_web_anoncreds.did import (
    MalformedIdentifierError,
    ResourceIdentifier,
    build_resource_identifier,
    parse_did_web,
    parse_resource_identifier,
)


@pytest.mark.parametrize(
    ("identifier", "did", "service", "relative_path", "content_id"),
    [
        (
            "did:web:example.com?service=anoncreds&relativeRef=/schema/abc123",
            "did:web:example.com",
            "anoncreds",
            "/schema/abc123",
            "abc123",
        ),
        (
            "did:web:example.com:issuers:1?relativeRef=/credDef/xyz&service=ac",
            "did:web:example.com:issuers:1",
            "ac",
            "/credDef/xyz",
            "xyz",
        ),
        (
            "did:web:localhost%3A8443?service=anoncreds&relativeRef=%2FrevRegDef%2Fq",
            "did:web:localhost%3A8443",
            "anoncreds",
            "/revRegDef/q",
            "q",
        ),
        (
            "did:web:example.com?service=anoncreds&relativeRef=/schema/abc#frag",
            "did:web:example.com",
            "anoncreds",
            "/schema/abc",
            "abc",
        ),
    ],
)
def test_parse_resource_identifier(
    identifier: str, did: str, service: str, relative_path: str, content_id: str
):
    """Test parsing a resource identifier."""
    parsed = parse_resource_identifier(identifier)
    assert parsed.did == did
    assert parsed.service_name == service
    assert parsed.relative_path == relative_path
    assert parsed.content_id == content_id


@pytest.mark.parametrize(
    "identifier",
    [
        "did:web:example.com",
        "did:web:example.com?relativeRef=/schema/abc",
        "did:web:example.com?service=anoncreds",
        "did:web:example.com?service=&relativeRef=/schema/abc",
        "did:web:example.com?service=anoncreds&relativeRef=",
        "did:web:example.com?service=a&service=b&relativeRef=/schema/abc",
        "did:web:example.com?service=anoncreds&relativeRef=/a&relativeRef=/b",
        "did:web:example.com?service=anoncreds&relativeRef=/schema/",
        "did:indy:sovrin:abc?service=anoncreds&relativeRef=/schema/abc",
        "not a did?service=anoncreds&relativeRef=/schema/abc",
    ],
)
def test_parse_resource_identifier_malformed(identifier: str):
    """Test malformed identifiers are rejected."""
    with pytest.raises(MalformedIdentifierError):
        parse_resource_identifier(identifier)


def test_build_resource_identifier():
    """Test building an identifier."""
    identifier = build_resource_identifier("did:web:example.com", "schema", "abc123")
    assert identifier == (
        "did:web:example.com?service=anoncreds&relativeRef=/schema/abc123"
    )
    assert parse_resource_identifier(identifier) == ResourceIdentifier(
        "did:web:example.com", "anoncreds", "/schema/abc123"
    )


@pytest.mark.parametrize(
    ("did", "host", "path"),
    [
        ("did:web:example.com", "example.com", ()),
        ("did:web:example.com:user:alice", "example.com", ("user", "alice")),
        ("did:web:localhost%3A8443", "localhost%3A8443", ()),
    ],
)
def test_parse_did_web(did: str, host: str, path: tuple):
    """Test parsing a did:web."""
    did_web = parse_did_web(did)
    assert did_web.host == host
    assert did_web.path == path


def test_parse_did_web_rejects_other_methods():
    with pytest.raises(ValueError):
        parse_did_web("did:key:z6Mkabc")

