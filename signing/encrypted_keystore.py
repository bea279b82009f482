from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from eth_account import Account

from .base import SignedTx, Signer


class EncryptedKeystoreSigner(Signer):
    """
    Decrypts an Ethereum keystore JSON (V3) using a passphrase.
    """

    def __init__(self, keystore_path: str, password: str) -> None:
        if not keystore_path:
            raise ValueError("keystore path not set")
        if not password:
            raise ValueError("keystore password not set")

        path = Path(keystore_path).expanduser()
        if not path.exists():
            raise ValueError(f"Keystore file not found: {path}")

        keystore = json.loads(path.read_text())
        pk_bytes = Account.decrypt(keystore, password)
        self._account = Account.from_key(pk_bytes)

    def get_address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        if chain_id is not None:
            tx = dict(tx)
            tx["chainId"] = chain_id
        return Account.sign_transaction(tx, self._account.key)
