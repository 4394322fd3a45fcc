"""Resolution and registration result models.

Every resolution operation produces a ResolutionResult, successful or not. A
result carries either the resolved resource or an error in its resolution
metadata, never both.
"""

from typing import Any, Dict, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from did_web_anoncreds.models.anoncreds import AnonCredsObject


Resource = TypeVar("Resource", bound=AnonCredsObject)
ResolutionError = Literal["notFound", "invalid"]


class ResolutionMetadata(BaseModel):
    """Metadata describing how a resolution went."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: ResolutionError | None = None
    message: str | None = None
    served_from_cache: bool | None = Field(None, alias="servedFromCache")

    def serialize(self) -> Dict[str, Any]:
        """Serialize, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CacheEntry(BaseModel):
    """Value stored in the cache for a resolved resource."""

    model_config = ConfigDict(populate_by_name=True)

    resolution_metadata: Dict[str, Any] = Field(
        default_factory=dict, alias="resolutionMetadata"
    )
    resource: Dict[str, Any]
    resource_metadata: Dict[str, Any] = Field(
        default_factory=dict, alias="resourceMetadata"
    )

    def serialize(self) -> Dict[str, Any]:
        """Serialize to a JSON compatible mapping."""
        return self.model_dump(by_alias=True)


class ResolutionResult(BaseModel, Generic[Resource]):
    """Result of resolving an AnonCreds resource."""

    model_config = ConfigDict(frozen=True)

    kind: str
    resource_id: str | None = None
    resource: Resource | None = None
    resource_metadata: Dict[str, Any] = Field(default_factory=dict)
    resolution_metadata: ResolutionMetadata = Field(
        default_factory=ResolutionMetadata
    )

    @model_validator(mode="after")
    def _resource_xor_error(self):
        has_error = self.resolution_metadata.error is not None
        if (self.resource is not None) == has_error:
            raise ValueError(
                "Resolution result must hold either a resource or an error"
            )
        return self

    @property
    def ok(self) -> bool:
        """Return whether the resource was resolved."""
        return self.resource is not None

    @property
    def error(self) -> ResolutionError | None:
        """Return the resolution error, if any."""
        return self.resolution_metadata.error

    def serialize(self) -> Dict[str, Any]:
        """Serialize to the kind-keyed form, e.g. schema, schemaId, ..."""
        value: Dict[str, Any] = {}
        if self.resource is not None:
            value[self.kind] = self.resource.serialize()
        if self.resource_id is not None:
            value[f"{self.kind}Id"] = self.resource_id
        value[f"{self.kind}Metadata"] = dict(self.resource_metadata)
        value["resolutionMetadata"] = self.resolution_metadata.serialize()
        return value


class RegistrationResult(BaseModel, Generic[Resource]):
    """Result of registering an AnonCreds resource."""

    model_config = ConfigDict(frozen=True)

    kind: str
    state: Literal["finished"] = "finished"
    resource: Resource
    resource_id: str | None = None
    registration_metadata: Dict[str, Any] = Field(default_factory=dict)
    resource_metadata: Dict[str, Any] = Field(default_factory=dict)

    def serialize(self) -> Dict[str, Any]:
        """Serialize to the kind-keyed form, e.g. schemaState, schemaMetadata."""
        state: Dict[str, Any] = {
            "state": self.state,
            self.kind: self.resource.serialize(),
        }
        if self.resource_id is not None:
            state[f"{self.kind}Id"] = self.resource_id
        return {
            f"{self.kind}State": state,
            "registrationMetadata": dict(self.registration_metadata),
            f"{self.kind}Metadata": dict(self.resource_metadata),
        }
