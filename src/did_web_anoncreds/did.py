"""DID and AnonCreds resource identifier parsing."""

import re
from dataclasses import dataclass
from urllib.parse import parse_qs

SUPPORTED_IDENTIFIER = re.compile(r"^did:web:[_a-z0-9.%A-]*")
DID_WEB_PATTERN = re.compile(r"^did:web:[A-Za-z0-9._%-]+(:[A-Za-z0-9._%-]+)*$")

ANONCREDS_SERVICE = "anoncreds"


class MalformedIdentifierError(Exception):
    """Raised when a resource identifier cannot be parsed."""


@dataclass(frozen=True)
class DidWeb:
    """Parsed did:web DID."""

    host: str
    path: tuple[str, ...]
    did: str


@dataclass(frozen=True)
class ResourceIdentifier:
    """Parsed resource identifier.

    The string form is `<did>?service=<service_name>&relativeRef=<relative_path>`.
    """

    did: str
    service_name: str
    relative_path: str

    @property
    def content_id(self) -> str:
        """The final segment of the relative path."""
        return self.relative_path.rsplit("/", 1)[-1]

    def __str__(self) -> str:
        return (
            f"{self.did}?service={self.service_name}"
            f"&relativeRef={self.relative_path}"
        )


def parse_did_web(did: str) -> DidWeb:
    """Extract info from a did:web DID."""
    if not DID_WEB_PATTERN.match(did):
        raise ValueError(f"{did} is not a did:web")

    host, *path = did.removeprefix("did:web:").split(":")
    return DidWeb(host, tuple(path), did)


def _single_query_value(query: dict[str, list[str]], name: str) -> str:
    values = query.get(name)
    if not values or len(values) > 1 or not values[0]:
        raise MalformedIdentifierError(f"No valid {name} query present in the ID")
    return values[0]


def parse_resource_identifier(identifier: str) -> ResourceIdentifier:
    """Parse a resource identifier into DID, service name and relative path."""
    did, sep, query_string = identifier.partition("?")
    if not sep:
        raise MalformedIdentifierError(
            f"{identifier} is not a valid resource identifier"
        )

    try:
        parse_did_web(did)
    except ValueError as err:
        raise MalformedIdentifierError(
            f"{identifier} is not a valid resource identifier"
        ) from err

    query_string, _, _ = query_string.partition("#")
    query = parse_qs(query_string, keep_blank_values=True)
    service_name = _single_query_value(query, "service")
    relative_path = _single_query_value(query, "relativeRef")

    parsed = ResourceIdentifier(did, service_name, relative_path)
    if not parsed.content_id:
        raise MalformedIdentifierError("Could not get resourceId from relativeRef")

    return parsed


def build_resource_identifier(did: str, kind_path: str, content_id: str) -> str:
    """Make the identifier for a resource published by did."""
    relative_path = f"/{kind_path}/{content_id}"
    return str(ResourceIdentifier(did, ANONCREDS_SERVICE, relative_path))
