"""Pytest configuration and shared fixtures for koios-client tests."""

import pytest

from koios_client.testing import create_mock_transport

TIP_HASH = "abc123def456ghi789jkl012mno345pqr678stu901vwx234yz567"

TIP_PAYLOAD = [
    {
        "hash": TIP_HASH,
        "epoch_no": 300,
        "abs_slot": 3653,
        "epoch_slot": 153,
        "block_no": 12345678,
        "block_time": 1696118400,
    }
]

GENESIS_PAYLOAD = [
    {
        "networkmagic": "764824073",
        "networkid": "Mainnet",
        "epochlength": "432000",
        "slotlength": "1",
        "maxlovelacesupply": "45000000000000000",
        "systemstart": 1506203091,
        "activeslotcoeff": "0.05",
        "slotsperkesperiod": "129600",
        "maxkesrevolutions": "62",
        "securityparam": "2160",
        "updatequorum": "5",
        "alonzogenesis": '{"lovelacePerUTxOWord":34482,"maxValueSize":5000,"collateralPercentage":150}',
    }
]

CLI_PROTOCOL_PARAMS_PAYLOAD = {
    "collateralPercentage": 150,
    "maxTxSize": 16384,
    "minPoolCost": 170000000,
    "monetaryExpansion": 0.003,
    "txFeeFixed": 155381,
    "txFeePerByte": 44,
    "dRepDeposit": 500000000,
    "govActionLifetime": 6,
    "protocolVersion": {"major": 10, "minor": 0},
    "executionUnitPrices": {"priceMemory": 0.0577, "priceSteps": 0.0000721},
}


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing API key resolution.
    """
    import os

    test_prefixes = ("KOIOS_", "TEST_", "UNSET_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def sent_requests():
    """Requests seen by `mock_transport`, in arrival order."""
    return []


@pytest.fixture
def mock_transport(sent_requests):
    """Transport answering tip, genesis and cli_protocol_params with canned payloads."""
    return create_mock_transport(
        {
            "tip": TIP_PAYLOAD,
            "genesis": GENESIS_PAYLOAD,
            "cli_protocol_params": CLI_PROTOCOL_PARAMS_PAYLOAD,
        },
        requests=sent_requests,
    )


@pytest.fixture
def tip_payload():
    return TIP_PAYLOAD


@pytest.fixture
def genesis_payload():
    return GENESIS_PAYLOAD


@pytest.fixture
def cli_protocol_params_payload():
    return CLI_PROTOCOL_PARAMS_PAYLOAD
