"""Demo script.

Creates AnonCreds objects for a did:web issuer, derives their identifiers and
prints the paths at which the issuer must publish them. With RESOLVE=1 the
objects are then resolved back, which requires the issuer to be serving them.
"""

import asyncio
import json
import logging
from os import getenv
import sys

from anoncreds import (
    CredentialDefinition,
    RevocationRegistryDefinition,
    RevocationStatusList,
    Schema,
)

from did_web_anoncreds.did import parse_resource_identifier
from did_web_anoncreds.registry import DidWebAnonCredsRegistry


ISSUER_DID = getenv("ISSUER_DID", "did:web:example.com")
RESOLVE = getenv("RESOLVE", "0") == "1"
LOG_LEVEL = getenv("LOG_LEVEL", "info")


def logging_to_stdout():
    logging.basicConfig(
        stream=sys.stdout,
        level=logging.WARNING,
        format="[%(levelname)s] %(name)s %(message)s",
    )
    logging.getLogger("did_web_anoncreds").setLevel(LOG_LEVEL.upper())


def show(resource_id: str, resource: dict):
    """Print where a resource must be published."""
    identifier = parse_resource_identifier(resource_id)
    print(resource_id)
    print(f"  publish at <{identifier.service_name}>{identifier.relative_path}")
    print(f"  {json.dumps({'resource': resource, 'resourceMetadata': {}})}")


async def main():
    """Demo registration and resolution."""
    logging_to_stdout()
    registry = DidWebAnonCredsRegistry()

    schema = Schema.create(
        name="test",
        version="1.0",
        issuer_id=ISSUER_DID,
        attr_names=["firstname", "lastname"],
    )
    schema_result = await registry.register_schema(schema)
    show(schema_result.resource_id, schema_result.resource.serialize())

    cred_def, _, _ = CredentialDefinition.create(
        schema_id=schema_result.resource_id,
        schema=schema,
        issuer_id=ISSUER_DID,
        tag="test",
        signature_type="CL",
        support_revocation=True,
    )
    cred_def_result = await registry.register_credential_definition(cred_def)
    show(cred_def_result.resource_id, cred_def_result.resource.serialize())

    rev_reg_def, private = RevocationRegistryDefinition.create(
        cred_def_id=cred_def_result.resource_id,
        cred_def=cred_def,
        issuer_id=ISSUER_DID,
        tag="0",
        registry_type="CL_ACCUM",
        max_cred_num=1000,
    )
    rev_reg_def_result = await registry.register_revocation_registry_definition(
        rev_reg_def
    )
    show(rev_reg_def_result.resource_id, rev_reg_def_result.resource.serialize())

    status_list = RevocationStatusList.create(
        cred_def=cred_def,
        rev_reg_def_id=rev_reg_def_result.resource_id,
        rev_reg_def=rev_reg_def,
        rev_reg_def_private=private,
        issuer_id=ISSUER_DID,
    )
    status_list_result = await registry.register_revocation_status_list(status_list)
    print(json.dumps(status_list_result.serialize(), indent=2))

    if not RESOLVE:
        return

    for result in (
        await registry.get_schema(schema_result.resource_id),
        await registry.get_credential_definition(cred_def_result.resource_id),
        await registry.get_revocation_registry_definition(
            rev_reg_def_result.resource_id
        ),
    ):
        print(json.dumps(result.serialize(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
