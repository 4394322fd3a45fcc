"""AnonCreds models."""

from typing import Any, Dict, List, Literal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AnonCredsObject(BaseModel):
    """Base for AnonCreds objects published under an issuer DID."""

    model_config = ConfigDict(frozen=True, extra="allow")

    issuer_id: str = Field(
        validation_alias=AliasChoices("issuerId", "issuer_id"),
        serialization_alias="issuerId",
    )

    def serialize(self) -> Dict[str, Any]:
        """Serialize to the JSON form used on the wire."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Schema(AnonCredsObject):
    """Schema Model."""

    attr_names: List[str] = Field(
        validation_alias=AliasChoices("attrNames", "attr_names"),
        serialization_alias="attrNames",
    )
    name: str
    version: str


class CredDef(AnonCredsObject):
    """Cred Def Model."""

    schema_id: str = Field(
        validation_alias=AliasChoices("schemaId", "schema_id"),
        serialization_alias="schemaId",
    )
    type: Literal["CL"]
    tag: str
    value: Dict[str, Any]


class RevRegDef(AnonCredsObject):
    """Rev Reg Def Model."""

    revoc_def_type: Literal["CL_ACCUM"] = Field(
        validation_alias=AliasChoices("revoc_def_type", "revocDefType"),
        serialization_alias="revocDefType",
    )
    cred_def_id: str = Field(
        validation_alias=AliasChoices("credDefId", "cred_def_id"),
        serialization_alias="credDefId",
    )
    tag: str
    value: Dict[str, Any]


class RevStatusList(AnonCredsObject):
    """Rev List Model."""

    rev_reg_def_id: str = Field(
        validation_alias=AliasChoices("revRegDefId", "rev_reg_def_id"),
        serialization_alias="revRegDefId",
    )
    revocation_list: list[int] = Field(
        validation_alias=AliasChoices("revocation_list", "revocationList"),
        serialization_alias="revocationList",
    )
    current_accumulator: str = Field(
        validation_alias=AliasChoices("current_accumulator", "currentAccumulator"),
        serialization_alias="currentAccumulator",
    )
    timestamp: int | None = None
