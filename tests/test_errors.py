import requests
from web3.exceptions import Web3RPCError

from app.core.settings import SettingsValidationError
from errors import AppError, classify_exception
from signing.policy import SignerPolicyViolation


def test_classify_transport_errors():
    assert classify_exception(requests.exceptions.ConnectionError("refused")).code == "rpc_unreachable"
    assert classify_exception(ConnectionError("RPC not reachable")).code == "rpc_unreachable"
    assert classify_exception(requests.exceptions.ReadTimeout("slow")).code == "rpc_timeout"


def test_classify_rpc_error():
    assert classify_exception(Web3RPCError("nonce too low")).code == "rpc_error"


def test_classify_policy_violation_keeps_policy_code():
    err = classify_exception(SignerPolicyViolation("chain_id_not_allowed", "nope", {"chain_id": 1}))
    assert err.code == "signer_policy_violation"
    assert err.data == {"policy_code": "chain_id_not_allowed", "chain_id": 1}


def test_classify_settings_and_values():
    assert classify_exception(SettingsValidationError("TX_TO", "x", "bad")).code == "settings_invalid"
    assert classify_exception(ValueError("private key must be hex")).code == "invalid_input"
    assert classify_exception(RuntimeError("?")).code == "unknown_error"


def test_classify_passes_app_error_through():
    e = AppError("custom", "m", {})
    assert classify_exception(e) is e
