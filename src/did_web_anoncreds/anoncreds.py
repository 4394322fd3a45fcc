"""AnonCreds did:web support functions."""

import logging
from hashlib import sha256
from typing import Any, Mapping

import rfc8785
from anoncreds import (
    CredentialDefinition,
    RevocationRegistryDefinition,
    RevocationStatusList,
)
from anoncreds import (
    Schema as ACSchema,
)
from base58 import b58encode

from did_web_anoncreds.did import ResourceIdentifier, build_resource_identifier
from did_web_anoncreds.models.anoncreds import (
    AnonCredsObject,
    CredDef,
    RevRegDef,
    RevStatusList,
    Schema,
)

LOGGER = logging.getLogger(__name__)


class ResourceIntegrityError(Exception):
    """Raised when a resource does not match the identifier it was fetched by."""


SchemaTypes = Schema | ACSchema | dict


def normalize_schema_representation(schema: SchemaTypes | Any) -> Schema:
    """Normalize the schema representation to our native representation."""
    if isinstance(schema, Schema):
        return schema
    elif isinstance(schema, ACSchema):
        return Schema.model_validate(schema.to_dict())
    elif isinstance(schema, dict):
        return Schema.model_validate(schema)

    raise TypeError(f"Invalid schema type: {type(schema)}")


CredDefTypes = CredDef | CredentialDefinition | dict


def normalize_cred_def_representation(cred_def: CredDefTypes | Any) -> CredDef:
    """Normalize the cred def representation to our native representation."""
    if isinstance(cred_def, CredDef):
        return cred_def
    elif isinstance(cred_def, CredentialDefinition):
        return CredDef.model_validate(cred_def.to_dict())
    elif isinstance(cred_def, dict):
        return CredDef.model_validate(cred_def)

    raise TypeError(f"Invalid cred_def type: {type(cred_def)}")


RevRegDefTypes = RevRegDef | RevocationRegistryDefinition | dict


def normalize_rev_reg_def_representation(
    rev_reg_def: RevRegDefTypes | Any,
) -> RevRegDef:
    """Normalize the rev reg def representation to our native representation."""
    if isinstance(rev_reg_def, RevRegDef):
        return rev_reg_def
    elif isinstance(rev_reg_def, RevocationRegistryDefinition):
        return RevRegDef.model_validate(rev_reg_def.to_dict())
    elif isinstance(rev_reg_def, dict):
        return RevRegDef.model_validate(rev_reg_def)

    raise TypeError(f"Invalid rev_reg_def type: {type(rev_reg_def)}")


RevStatusListTypes = RevStatusList | RevocationStatusList | dict


def normalize_rev_status_list_representation(
    rev_status_list: RevStatusListTypes | Any,
) -> RevStatusList:
    """Normalize the rev status list representation to our native representation."""
    if isinstance(rev_status_list, RevStatusList):
        return rev_status_list
    elif isinstance(rev_status_list, RevocationStatusList):
        return RevStatusList.model_validate(rev_status_list.to_dict())
    elif isinstance(rev_status_list, dict):
        return RevStatusList.model_validate(rev_status_list)

    raise TypeError(f"Invalid rev_status_list type: {type(rev_status_list)}")


def calculate_resource_id(resource: AnonCredsObject | Mapping[str, Any]) -> str:
    """Derive the content id of a resource.

    The id is the base58 encoded SHA-256 digest of the RFC 8785 (JCS)
    canonical JSON serialization of the resource.
    """
    if isinstance(resource, AnonCredsObject):
        resource = resource.serialize()
    canonical = rfc8785.dumps(dict(resource))
    return b58encode(sha256(canonical).digest()).decode()


def verify_resource_id(
    resource: AnonCredsObject | Mapping[str, Any], resource_id: str
) -> bool:
    """Check that the content id of resource matches resource_id."""
    return calculate_resource_id(resource) == resource_id


def verify_resource(
    resource: Mapping[str, Any], identifier: ResourceIdentifier, label: str
):
    """Verify a fetched resource against the identifier it was fetched by.

    The content id is computed over the resource exactly as it was received.
    """
    if not verify_resource_id(resource, identifier.content_id):
        raise ResourceIntegrityError(
            f"Wrong resource Id: {label} content id "
            f"({calculate_resource_id(resource)}) does not match the id in the "
            f"identifier ({identifier.content_id})"
        )

    issuer_id = resource.get("issuerId")
    if issuer_id != identifier.did:
        raise ResourceIntegrityError(
            f"issuerId in {label} ({issuer_id}) does not match the did "
            f"({identifier.did})"
        )


def verify_status_list_issuer(status_list: RevStatusList, rev_reg_def: RevRegDef):
    """Verify a status list was published by the issuer of its registry."""
    if status_list.issuer_id != rev_reg_def.issuer_id:
        raise ResourceIntegrityError(
            f"issuerId in revocation status list ({status_list.issuer_id}) does "
            "not match the issuer in the revocation registry definition "
            f"({rev_reg_def.issuer_id})"
        )


def make_schema_id(schema: SchemaTypes) -> str:
    """Make the identifier for a schema."""
    schema = normalize_schema_representation(schema)
    return build_resource_identifier(
        schema.issuer_id, "schema", calculate_resource_id(schema)
    )


def make_cred_def_id(cred_def: CredDefTypes) -> str:
    """Make the identifier for a cred def."""
    cred_def = normalize_cred_def_representation(cred_def)
    return build_resource_identifier(
        cred_def.issuer_id, "credDef", calculate_resource_id(cred_def)
    )


def make_rev_reg_def_id(rev_reg_def: RevRegDefTypes) -> str:
    """Make the identifier for a rev reg def."""
    rev_reg_def = normalize_rev_reg_def_representation(rev_reg_def)
    return build_resource_identifier(
        rev_reg_def.issuer_id, "revRegDef", calculate_resource_id(rev_reg_def)
    )
