from pathlib import Path
from typing import Any, Iterable, Mapping

import pytest
import respx

from did_web_anoncreds.cache import BasicCache
from did_web_anoncreds.config import CacheSettings
from did_web_anoncreds.registry import DidWebAnonCredsRegistry
from did_web_anoncreds.resolver import DidResolutionError

UNIT_TEST_DIR = Path(__file__).parent

DID = "did:web:example.com"
ENDPOINT = "https://example.com/path"


def pytest_collection_modifyitems(config, items: Iterable[pytest.Item]):
    for item in items:
        path = Path(item.fspath)
        if path.is_relative_to(UNIT_TEST_DIR):
            item.add_marker(pytest.mark.unit)


class StaticResolver:
    """DID resolver serving fixed documents."""

    def __init__(self, docs: Mapping[str, Mapping[str, Any]]):
        self.docs = docs
        self.calls: list[str] = []

    async def resolve_did(self, did: str) -> Mapping[str, Any]:
        self.calls.append(did)
        if did not in self.docs:
            raise DidResolutionError(f"Unknown DID {did}")
        return self.docs[did]


def did_doc(did: str = DID, service: str = "anoncreds", endpoint: str = ENDPOINT):
    return {
        "id": did,
        "service": [
            {
                "id": f"{did}#{service}",
                "type": "AnonCredsRegistry",
                "serviceEndpoint": endpoint,
            }
        ],
    }


@pytest.fixture
def resolver():
    return StaticResolver({DID: did_doc()})


@pytest.fixture
def cache():
    return BasicCache()


@pytest.fixture
def registry(resolver, cache):
    return DidWebAnonCredsRegistry(
        did_resolver=resolver, cache=cache, settings=CacheSettings()
    )


@pytest.fixture
def mock_http():
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def schema() -> dict:
    return {
        "issuerId": DID,
        "name": "license",
        "version": "1.0",
        "attrNames": ["name"],
    }


@pytest.fixture
def cred_def() -> dict:
    return {
        "issuerId": DID,
        "schemaId": f"{DID}?service=anoncreds&relativeRef=/schema/abc",
        "type": "CL",
        "tag": "default",
        "value": {
            "primary": {
                "n": "779",
                "s": "750",
                "r": {"master_secret": "541", "name": "611"},
                "rctxt": "774",
                "z": "632",
            }
        },
    }


@pytest.fixture
def rev_reg_def() -> dict:
    return {
        "issuerId": DID,
        "revocDefType": "CL_ACCUM",
        "credDefId": f"{DID}?service=anoncreds&relativeRef=/credDef/abc",
        "tag": "0",
        "value": {
            "publicKeys": {"accumKey": {"z": "1 0BB...386"}},
            "maxCredNum": 100,
            "tailsLocation": "https://example.com/tails/abc",
            "tailsHash": "91zvq2cFmBZmHCcLqFyzv7bfehHH5rMhdAG5wTjqy2PE",
        },
    }


@pytest.fixture
def status_list() -> dict:
    return {
        "issuerId": DID,
        "revRegDefId": f"{DID}?service=anoncreds&relativeRef=/revRegDef/abc",
        "revocationList": [0, 1, 0, 0],
        "currentAccumulator": "21 124C594B6B20E41B681E92B2C43FD165EA9E68BC3C9D63A82",
        "timestamp": 1700000000,
    }
