from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from app.core.settings import Settings

from .base import SignedTx, Signer


@dataclass
class SignerPolicyViolation(Exception):
    code: str
    message: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass(frozen=True)
class SignerPolicyConfig:
    allowed_chain_ids: FrozenSet[int]
    max_value_wei: Optional[int]
    max_gas: Optional[int]
    max_data_bytes: Optional[int]


def policy_config_from_settings(settings: Settings) -> SignerPolicyConfig:
    """
    Signer-side limits. Empty allowlists and unset limits are permissive.
    """
    return SignerPolicyConfig(
        allowed_chain_ids=frozenset(settings.SIGNER_ALLOWED_CHAIN_IDS),
        max_value_wei=settings.SIGNER_MAX_VALUE_WEI,
        max_gas=settings.SIGNER_MAX_GAS,
        max_data_bytes=settings.SIGNER_MAX_DATA_BYTES,
    )


def _as_int(v: Any) -> int:
    if v is None:
        return 0
    if isinstance(v, str):
        return int(v, 0)
    return int(v)


def _data_len(data: Any) -> Optional[int]:
    if data is None:
        return None
    if isinstance(data, (bytes, bytearray)):
        return len(data)
    s = str(data).strip()
    if s.startswith("0x"):
        s = s[2:]
    # bytes length
    return len(s) // 2


def validate_tx_against_policy(tx: Dict[str, Any], *, chain_id: int | None, cfg: SignerPolicyConfig) -> None:
    if not tx.get("to"):
        raise SignerPolicyViolation(
            "contract_creation_not_allowed",
            "Contract creation tx (missing 'to') is disallowed by signer policy.",
            {},
        )

    cid = chain_id if chain_id is not None else tx.get("chainId")
    if cfg.allowed_chain_ids and (cid is None or _as_int(cid) not in cfg.allowed_chain_ids):
        raise SignerPolicyViolation(
            "chain_id_not_allowed",
            "Transaction chain_id is not allowlisted by signer policy.",
            {"chain_id": None if cid is None else _as_int(cid), "allowed_chain_ids": sorted(cfg.allowed_chain_ids)},
        )

    value = _as_int(tx.get("value"))
    if cfg.max_value_wei is not None and value > int(cfg.max_value_wei):
        raise SignerPolicyViolation(
            "value_too_large",
            "Transaction value exceeds signer policy limit.",
            {"value_wei": value, "max_value_wei": int(cfg.max_value_wei)},
        )

    if cfg.max_gas is not None:
        gas = _as_int(tx.get("gas"))
        if gas > int(cfg.max_gas):
            raise SignerPolicyViolation(
                "gas_too_large",
                "Transaction gas exceeds signer policy limit.",
                {"gas": gas, "max_gas": int(cfg.max_gas)},
            )

    if cfg.max_data_bytes is not None:
        dl = _data_len(tx.get("data"))
        if dl is not None and dl > int(cfg.max_data_bytes):
            raise SignerPolicyViolation(
                "data_too_large",
                "Transaction calldata exceeds signer policy limit.",
                {"data_bytes": dl, "max_data_bytes": int(cfg.max_data_bytes)},
            )


class PolicyEnforcedSigner(Signer):
    """
    Wrap a signer with local policy enforcement.
    """

    def __init__(self, inner: Signer, cfg: SignerPolicyConfig) -> None:
        self._inner = inner
        self._cfg = cfg

    def get_address(self) -> str:
        return self._inner.get_address()

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        validate_tx_against_policy(tx, chain_id=chain_id, cfg=self._cfg)
        return self._inner.sign_transaction(tx, chain_id=chain_id)


def maybe_wrap_signer(signer: Signer, cfg: SignerPolicyConfig) -> Signer:
    """
    Wrap signer with policy if any limit is configured.
    """
    has_rules = bool(
        cfg.allowed_chain_ids
        or cfg.max_value_wei is not None
        or cfg.max_gas is not None
        or cfg.max_data_bytes is not None
    )
    if not has_rules:
        return signer
    return PolicyEnforcedSigner(signer, cfg)
