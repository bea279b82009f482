"""
serialized-txn settings

Every input of the pipeline (signing key, endpoint, recipient, gas, calldata
segments) is read here from the environment, optionally via a `.env` file.
Defaults reproduce the fixed local-devnet values the tool was written for.

Usage:
    from app.core.settings import load_settings

    settings = load_settings()
    settings.RPC_URL
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Set

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Throwaway wallet used by the contract test suite; never holds real funds.
DEFAULT_PRIVATE_KEY = "0x46a31f1f917570aa8a60b2339f1a0469cbce2feb53c705746446981548845b3b"  # nosec B105
DEFAULT_RPC_URL = "http://localhost:8545"
ANVIL_CHAIN_ID = 31337
DEFAULT_TX_TO = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
DEFAULT_TX_GAS = 50000


class SignerType(Enum):
    """Signer backend types."""

    PRIVATE_KEY = "private_key"
    KEYSTORE = "keystore"


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for {field}={value!r}: {message}")


def _env_str(name: str, default: str | None = None) -> str | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _env_int(name: str, default: int | None = None) -> int | None:
    """Parse an integer (decimal or 0x-hex) from environment variable."""
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        raise SettingsValidationError(name, raw, "expected an integer") from None


def _env_float(name: str, default: float) -> float:
    """Parse a float from environment variable."""
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise SettingsValidationError(name, raw, "expected a number") from None


def _env_int_set(name: str, default: FrozenSet[int]) -> FrozenSet[int]:
    """
    Parse a comma-separated list of integers.

    Unset means `default`; set-but-empty means the empty set.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    result: Set[int] = set()
    for part in raw.split(","):
        s = part.strip()
        if not s:
            continue
        try:
            result.add(int(s, 0))
        except ValueError:
            raise SettingsValidationError(name, raw, f"{s!r} is not an integer") from None
    return frozenset(result)


def _env_signer_type(name: str = "SIGNER_TYPE") -> SignerType:
    raw = (_env_str(name) or SignerType.PRIVATE_KEY.value).lower()
    try:
        return SignerType(raw)
    except ValueError:
        allowed = ", ".join(e.value for e in SignerType)
        raise SettingsValidationError(name, raw, f"expected one of: {allowed}") from None


def _is_hex(value: str) -> bool:
    s = value[2:] if value.startswith(("0x", "0X")) else value
    if len(s) % 2:
        return False
    return all(c in "0123456789abcdefABCDEF" for c in s)


@dataclass
class Settings:
    """
    Pipeline settings with validation.

    All configuration is loaded and validated at instantiation time, so a typo
    in `.env` fails before the signer or the RPC client is touched.
    """

    PROJECT_NAME: str = "serialized-txn"

    # Signer settings
    SIGNER_TYPE: SignerType = field(default_factory=_env_signer_type)
    PRIVATE_KEY: str = field(default_factory=lambda: _env_str("PRIVATE_KEY", DEFAULT_PRIVATE_KEY) or DEFAULT_PRIVATE_KEY)
    KEYSTORE_PATH: str | None = field(default_factory=lambda: _env_str("KEYSTORE_PATH"))
    KEYSTORE_PASSWORD: str | None = field(default_factory=lambda: os.getenv("KEYSTORE_PASSWORD"))

    # Endpoint
    RPC_URL: str = field(default_factory=lambda: _env_str("RPC_URL", DEFAULT_RPC_URL) or DEFAULT_RPC_URL)
    CHAIN_ID: int = field(default_factory=lambda: _env_int("CHAIN_ID", ANVIL_CHAIN_ID))
    HTTP_TIMEOUT_SEC: float = field(default_factory=lambda: _env_float("HTTP_TIMEOUT_SEC", 10.0))

    # Transaction request
    TX_TO: str = field(default_factory=lambda: _env_str("TX_TO", DEFAULT_TX_TO) or DEFAULT_TX_TO)
    TX_GAS: int = field(default_factory=lambda: _env_int("TX_GAS", DEFAULT_TX_GAS))
    TX_VALUE_WEI: int = field(default_factory=lambda: _env_int("TX_VALUE_WEI", 0))

    # Calldata segments (hex). None means "use the built-in constant".
    ENCODED_TRANSFER: str | None = field(default_factory=lambda: _env_str("ENCODED_TRANSFER"))
    AUX_HASH: str | None = field(default_factory=lambda: _env_str("AUX_HASH"))

    # Signer policy
    SIGNER_ALLOWED_CHAIN_IDS: FrozenSet[int] = field(
        default_factory=lambda: _env_int_set("SIGNER_ALLOWED_CHAIN_IDS", frozenset({ANVIL_CHAIN_ID}))
    )
    SIGNER_MAX_GAS: int | None = field(default_factory=lambda: _env_int("SIGNER_MAX_GAS"))
    SIGNER_MAX_VALUE_WEI: int | None = field(default_factory=lambda: _env_int("SIGNER_MAX_VALUE_WEI"))
    SIGNER_MAX_DATA_BYTES: int | None = field(default_factory=lambda: _env_int("SIGNER_MAX_DATA_BYTES"))

    # Observability
    LOG_LEVEL: str = field(default_factory=lambda: (_env_str("LOG_LEVEL", "info") or "info").lower())

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        errors: list[str] = []

        if self.SIGNER_TYPE == SignerType.KEYSTORE and (not self.KEYSTORE_PATH or not self.KEYSTORE_PASSWORD):
            errors.append("KEYSTORE_PATH and KEYSTORE_PASSWORD required when SIGNER_TYPE=keystore")

        if not self.RPC_URL.startswith(("http://", "https://")):
            errors.append(f"RPC_URL must be an http(s) URL, got {self.RPC_URL!r}")

        if self.CHAIN_ID <= 0:
            errors.append(f"CHAIN_ID must be positive, got {self.CHAIN_ID}")

        if self.HTTP_TIMEOUT_SEC <= 0:
            errors.append(f"HTTP_TIMEOUT_SEC must be positive, got {self.HTTP_TIMEOUT_SEC}")

        if self.TX_GAS <= 0:
            errors.append(f"TX_GAS must be positive, got {self.TX_GAS}")

        if self.TX_VALUE_WEI < 0:
            errors.append(f"TX_VALUE_WEI must be >= 0, got {self.TX_VALUE_WEI}")

        for name in ("SIGNER_MAX_GAS", "SIGNER_MAX_VALUE_WEI", "SIGNER_MAX_DATA_BYTES"):
            limit = getattr(self, name)
            if limit is not None and limit < 0:
                errors.append(f"{name} must be >= 0, got {limit}")

        to = self.TX_TO
        if not (to.startswith("0x") and len(to) == 42 and _is_hex(to)):
            errors.append(f"TX_TO must be a 0x-prefixed 20-byte hex address, got {to!r}")

        for name in ("ENCODED_TRANSFER", "AUX_HASH"):
            value = getattr(self, name)
            if value is not None and not _is_hex(value):
                errors.append(f"{name} must be hex")

        if self.LOG_LEVEL not in {"debug", "info", "warning", "error", "critical"}:
            errors.append(f"LOG_LEVEL must be a logging level name, got {self.LOG_LEVEL!r}")

        if errors:
            raise SettingsValidationError("MULTIPLE", None, "; ".join(errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary (redacting secrets)."""
        result: dict[str, Any] = {}
        for key in dir(self):
            if key.startswith("_") or key.isupper() is False:
                continue
            value = getattr(self, key)
            # Redact sensitive values
            if any(s in key.upper() for s in ["SECRET", "PASSWORD", "PRIVATE_KEY"]):
                result[key] = "***REDACTED***" if value else None
            elif isinstance(value, frozenset):
                result[key] = sorted(value)
            elif isinstance(value, Enum):
                result[key] = value.value
            else:
                result[key] = value
        return result


def load_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()
