"""Resolve AnonCreds resources published under did:web DIDs."""

from did_web_anoncreds.cache import BasicCache, Cache
from did_web_anoncreds.config import CacheSettings
from did_web_anoncreds.did import ResourceIdentifier, parse_resource_identifier
from did_web_anoncreds.models.anoncreds import (
    CredDef,
    RevRegDef,
    RevStatusList,
    Schema,
)
from did_web_anoncreds.models.results import RegistrationResult, ResolutionResult
from did_web_anoncreds.registry import DidWebAnonCredsRegistry
from did_web_anoncreds.resolver import DidResolver, DidWebResolver

__all__ = [
    "BasicCache",
    "Cache",
    "CacheSettings",
    "CredDef",
    "DidResolver",
    "DidWebAnonCredsRegistry",
    "DidWebResolver",
    "RegistrationResult",
    "ResolutionResult",
    "ResourceIdentifier",
    "RevRegDef",
    "RevStatusList",
    "Schema",
    "parse_resource_identifier",
]
