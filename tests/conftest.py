import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app.core.settings import Settings
from execution.evm import ChainClient

# anvil account #0
ANVIL_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ANVIL_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

_SETTINGS_ENV = [
    "SIGNER_TYPE",
    "PRIVATE_KEY",
    "KEYSTORE_PATH",
    "KEYSTORE_PASSWORD",
    "RPC_URL",
    "CHAIN_ID",
    "HTTP_TIMEOUT_SEC",
    "TX_TO",
    "TX_GAS",
    "TX_VALUE_WEI",
    "ENCODED_TRANSFER",
    "AUX_HASH",
    "SIGNER_ALLOWED_CHAIN_IDS",
    "SIGNER_MAX_GAS",
    "SIGNER_MAX_VALUE_WEI",
    "SIGNER_MAX_DATA_BYTES",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # A developer's .env must not leak into tests
    for k in _SETTINGS_ENV:
        monkeypatch.delenv(k, raising=False)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def fake_w3():
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.get_block.return_value = {"number": 1, "baseFeePerGas": 1_000_000_000}
    w3.eth.max_priority_fee = 1_000_000_000
    w3.eth.gas_price = 2_000_000_000
    return w3


@pytest.fixture
def fake_client(fake_w3):
    return ChainClient(w3=fake_w3, chain_id=31337, rpc_url="http://localhost:8545")
