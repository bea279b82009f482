from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import requests
from web3.exceptions import TimeExhausted, Web3Exception, Web3RPCError

from app.core.settings import SettingsValidationError
from signing.policy import SignerPolicyViolation


@dataclass
class AppError(Exception):
    code: str
    message: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}


def classify_exception(e: Exception) -> AppError:
    """
    Map settings / signer / RPC failures into stable error codes.
    """
    if isinstance(e, AppError):
        return e
    if isinstance(e, SignerPolicyViolation):
        return AppError("signer_policy_violation", e.message, {"policy_code": e.code, **e.data})
    if isinstance(e, SettingsValidationError):
        return AppError("settings_invalid", str(e), {"field": e.field})

    # Transport (HTTPProvider is requests-based)
    if isinstance(e, (requests.exceptions.Timeout, TimeExhausted)):
        return AppError("rpc_timeout", str(e), {})
    if isinstance(e, (requests.exceptions.ConnectionError, ConnectionError)):
        return AppError("rpc_unreachable", str(e), {})

    # JSON-RPC error responses
    if isinstance(e, Web3RPCError):
        return AppError("rpc_error", str(e), {})
    if isinstance(e, Web3Exception):
        return AppError("web3_error", str(e), {})

    if isinstance(e, ValueError):
        return AppError("invalid_input", str(e), {})

    return AppError("unknown_error", str(e), {})
