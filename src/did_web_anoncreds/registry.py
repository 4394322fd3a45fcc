"""AnonCreds registry for resources published under did:web DIDs.

Resources are served as static JSON envelopes found by combining the
endpoint of a service in the issuer's DID document with the relative path
carried in the resource identifier:

    did:web:example.com?service=anoncreds&relativeRef=/schema/<content id>

Registration publishes nothing; it only derives the identifier a resource
will have once the issuer serves it.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Type, TypeVar

from did_web_anoncreds.anoncreds import (
    CredDefTypes,
    RevRegDefTypes,
    RevStatusListTypes,
    SchemaTypes,
    make_cred_def_id,
    make_rev_reg_def_id,
    make_schema_id,
    normalize_cred_def_representation,
    normalize_rev_reg_def_representation,
    normalize_rev_status_list_representation,
    normalize_schema_representation,
    verify_resource,
    verify_status_list_issuer,
)
from did_web_anoncreds.cache import BasicCache, Cache, ResourceCache
from did_web_anoncreds.config import CacheSettings
from did_web_anoncreds.did import SUPPORTED_IDENTIFIER, parse_resource_identifier
from did_web_anoncreds.http import Found, ResourceFetcher
from did_web_anoncreds.models.anoncreds import (
    AnonCredsObject,
    CredDef,
    RevRegDef,
    RevStatusList,
    Schema,
)
from did_web_anoncreds.models.results import (
    CacheEntry,
    RegistrationResult,
    ResolutionMetadata,
    ResolutionResult,
)
from did_web_anoncreds.resolver import (
    DidResolver,
    DidWebResolver,
    locate_service_endpoint,
)

LOGGER = logging.getLogger(__name__)

R = TypeVar("R", bound=AnonCredsObject)


class DependentResourceError(Exception):
    """Raised when a resource needed to resolve another cannot be resolved."""


@dataclass(frozen=True)
class ArtifactKind(Generic[R]):
    """Describes one kind of AnonCreds resource."""

    name: str
    label: str
    model: Type[R]


SCHEMA = ArtifactKind("schema", "schema", Schema)
CRED_DEF = ArtifactKind("credentialDefinition", "credential definition", CredDef)
REV_REG_DEF = ArtifactKind(
    "revocationRegistryDefinition", "revocation registry definition", RevRegDef
)
REV_STATUS_LIST = ArtifactKind(
    "revocationStatusList", "revocation status list", RevStatusList
)


def _not_found(kind: ArtifactKind, resource_id: str | None) -> ResolutionResult:
    return ResolutionResult(
        kind=kind.name,
        resource_id=resource_id,
        resolution_metadata=ResolutionMetadata(error="notFound"),
    )


def _invalid(
    kind: ArtifactKind, resource_id: str | None, error: Exception
) -> ResolutionResult:
    return ResolutionResult(
        kind=kind.name,
        resource_id=resource_id,
        resolution_metadata=ResolutionMetadata(error="invalid", message=str(error)),
    )


class DidWebAnonCredsRegistry:
    """Resolve and register AnonCreds resources for did:web issuers.

    None of the get operations raise; failures are reported through the
    resolution metadata of the returned result.
    """

    method_name = "web"
    supported_identifier = SUPPORTED_IDENTIFIER

    def __init__(
        self,
        did_resolver: DidResolver | None = None,
        cache: Cache | None = None,
        settings: CacheSettings | None = None,
        fetcher: ResourceFetcher | None = None,
    ):
        """Init the registry."""
        self.did_resolver = did_resolver or DidWebResolver()
        self.settings = settings or CacheSettings()
        self.cache = ResourceCache(
            BasicCache() if cache is None else cache, self.settings
        )
        self.fetcher = fetcher or ResourceFetcher()

    def supports(self, identifier: str) -> bool:
        """Check whether identifier can be handled by this registry."""
        return bool(self.supported_identifier.match(identifier))

    async def _resolve(
        self, kind: ArtifactKind[R], resource_id: str
    ) -> ResolutionResult[R]:
        """Resolve a resource identified by a did:web resource identifier."""
        try:
            entry = await self.cache.lookup(kind.name, resource_id)
            if entry is not None:
                return ResolutionResult(
                    kind=kind.name,
                    resource_id=resource_id,
                    resource=kind.model.model_validate(entry.resource),
                    resource_metadata=entry.resource_metadata,
                    resolution_metadata=ResolutionMetadata.model_validate(
                        {**entry.resolution_metadata, "servedFromCache": True}
                    ),
                )

            identifier = parse_resource_identifier(resource_id)
            endpoint = await locate_service_endpoint(
                self.did_resolver, identifier.did, identifier.service_name
            )
            outcome = await self.fetcher.fetch(endpoint, identifier.relative_path)
            if not isinstance(outcome, Found):
                LOGGER.debug(
                    "Could not fetch %s with id %s: %s",
                    kind.label,
                    resource_id,
                    outcome,
                )
                return _not_found(kind, resource_id)

            verify_resource(outcome.resource, identifier, kind.label)
            resource = kind.model.model_validate(outcome.resource)

            await self.cache.store(
                kind.name,
                resource_id,
                CacheEntry(
                    resource=dict(outcome.resource),
                    resource_metadata=dict(outcome.resource_metadata),
                ),
            )
            return ResolutionResult(
                kind=kind.name,
                resource_id=resource_id,
                resource=resource,
                resource_metadata=outcome.resource_metadata,
            )
        except Exception as err:
            LOGGER.debug(
                "Error resolving %s with id %s: %s",
                kind.label,
                resource_id,
                err,
                exc_info=True,
            )
            return _invalid(kind, resource_id, err)

    async def get_schema(self, schema_id: str) -> ResolutionResult[Schema]:
        """Retrieve schema by ID."""
        return await self._resolve(SCHEMA, schema_id)

    async def get_credential_definition(
        self, cred_def_id: str
    ) -> ResolutionResult[CredDef]:
        """Retrieve cred def by ID."""
        return await self._resolve(CRED_DEF, cred_def_id)

    async def get_revocation_registry_definition(
        self, rev_reg_def_id: str
    ) -> ResolutionResult[RevRegDef]:
        """Retrieve rev reg def by ID."""
        return await self._resolve(REV_REG_DEF, rev_reg_def_id)

    async def get_revocation_status_list(
        self, rev_reg_def_id: str, timestamp: int
    ) -> ResolutionResult[RevStatusList]:
        """Retrieve the rev status list of a registry at a point in time.

        The status list endpoint and the expected issuer both come from the
        revocation registry definition, which is resolved first.
        """
        kind = REV_STATUS_LIST
        try:
            rev_reg_def_result = await self.get_revocation_registry_definition(
                rev_reg_def_id
            )
            rev_reg_def = rev_reg_def_result.resource
            if rev_reg_def is None:
                metadata = rev_reg_def_result.resolution_metadata
                raise DependentResourceError(
                    "Error resolving revocation registry definition with id "
                    f"{rev_reg_def_id}. {metadata.error} {metadata.message}"
                )

            endpoint = rev_reg_def_result.resource_metadata.get("statusListEndpoint")
            if not endpoint:
                raise DependentResourceError(
                    "No revocation status list endpoint has been found for "
                    f"{rev_reg_def_id}"
                )

            outcome = await self.fetcher.fetch_url(f"{endpoint}/{timestamp}")
            if not isinstance(outcome, Found):
                LOGGER.debug(
                    "Could not fetch %s for %s at %s: %s",
                    kind.label,
                    rev_reg_def_id,
                    timestamp,
                    outcome,
                )
                return _not_found(kind, None)

            status_list = RevStatusList.model_validate(outcome.resource)
            verify_status_list_issuer(status_list, rev_reg_def)
            return ResolutionResult(
                kind=kind.name,
                resource=status_list,
                resource_metadata=outcome.resource_metadata,
            )
        except Exception as err:
            LOGGER.debug(
                "Error resolving %s for %s at %s: %s",
                kind.label,
                rev_reg_def_id,
                timestamp,
                err,
                exc_info=True,
            )
            return _invalid(kind, None, err)

    async def register_schema(self, schema: SchemaTypes) -> RegistrationResult[Schema]:
        """Derive the identifier of a schema."""
        schema = normalize_schema_representation(schema)
        return RegistrationResult(
            kind=SCHEMA.name, resource=schema, resource_id=make_schema_id(schema)
        )

    async def register_credential_definition(
        self, cred_def: CredDefTypes
    ) -> RegistrationResult[CredDef]:
        """Derive the identifier of a cred def."""
        cred_def = normalize_cred_def_representation(cred_def)
        return RegistrationResult(
            kind=CRED_DEF.name,
            resource=cred_def,
            resource_id=make_cred_def_id(cred_def),
        )

    async def register_revocation_registry_definition(
        self, rev_reg_def: RevRegDefTypes
    ) -> RegistrationResult[RevRegDef]:
        """Derive the identifier of a rev reg def."""
        rev_reg_def = normalize_rev_reg_def_representation(rev_reg_def)
        return RegistrationResult(
            kind=REV_REG_DEF.name,
            resource=rev_reg_def,
            resource_id=make_rev_reg_def_id(rev_reg_def),
        )

    async def register_revocation_status_list(
        self, status_list: RevStatusListTypes
    ) -> RegistrationResult[RevStatusList]:
        """Timestamp a rev status list.

        The previous version is looked up at the new timestamp itself, so it
        is only found when the issuer already serves a list for that second.
        """
        status_list = normalize_rev_status_list_representation(status_list)
        timestamp = int(time.time())
        latest = await self.get_revocation_status_list(
            status_list.rev_reg_def_id, timestamp
        )

        metadata: dict[str, Any] = {
            "previousVersionId": str(latest.resource.timestamp)
            if latest.resource and latest.resource.timestamp is not None
            else "",
            "nextVersionId": "",
        }
        return RegistrationResult(
            kind=REV_STATUS_LIST.name,
            resource=status_list.model_copy(update={"timestamp": timestamp}),
            resource_metadata=metadata,
        )
