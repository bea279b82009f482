from __future__ import annotations

from typing import Any, Dict

from eth_account import Account

from .base import SignedTx, Signer

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def normalize_private_key(key: str) -> str:
    """
    Return `key` as 0x-prefixed hex after checking it is exactly 32 bytes.

    Raises ValueError without echoing the key back.
    """
    s = (key or "").strip()
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) != 64:
        raise ValueError(f"private key must be 32 bytes (64 hex chars), got {len(s)} chars")
    if not set(s) <= _HEX_DIGITS:
        raise ValueError("private key must be hex")
    return "0x" + s.lower()


class PrivateKeySigner(Signer):
    """
    Development signer holding a raw hex private key in memory.
    """

    def __init__(self, private_key: str) -> None:
        self._account = Account.from_key(normalize_private_key(private_key))

    def get_address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        if chain_id is not None:
            tx = dict(tx)
            tx["chainId"] = chain_id
        return Account.sign_transaction(tx, self._account.key)
