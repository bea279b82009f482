from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import rlp
from eth_account import Account
from eth_utils import big_endian_to_int, decode_hex, to_checksum_address


@dataclass(frozen=True)
class DecodedTransaction:
    """
    Fields read back out of a serialized signed transaction.
    """

    tx_type: int
    chain_id: Optional[int]
    nonce: int
    to: Optional[str]
    gas: int
    value: int
    data: bytes
    sender: str
    gas_price: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.tx_type,
            "chain_id": self.chain_id,
            "nonce": self.nonce,
            "to": self.to,
            "gas": self.gas,
            "value": self.value,
            "data": "0x" + self.data.hex(),
            "sender": self.sender,
            "gas_price": self.gas_price,
            "max_fee_per_gas": self.max_fee_per_gas,
            "max_priority_fee_per_gas": self.max_priority_fee_per_gas,
        }


def _int(b: bytes) -> int:
    return big_endian_to_int(b) if b else 0


def _address(b: bytes) -> Optional[str]:
    if not b:
        return None
    if len(b) != 20:
        raise ValueError("to must be 20 bytes")
    return to_checksum_address(b)


def _fields(payload: bytes, expected: int) -> List[Any]:
    items = rlp.decode(payload)
    if not isinstance(items, list) or len(items) != expected:
        raise ValueError(f"expected an RLP list of {expected} fields")
    return items


def decode_signed_transaction(raw: Union[bytes, str]) -> DecodedTransaction:
    """
    Parse a legacy (pre-EIP-2718), type 1 or type 2 signed transaction.

    The sender is recovered from the signature, so a payload that decodes but
    carries a bad signature still raises.
    """
    raw_b = decode_hex(raw) if isinstance(raw, str) else bytes(raw)
    if not raw_b:
        raise ValueError("empty transaction")

    first = raw_b[0]
    sender = Account.recover_transaction(raw_b)

    if first >= 0xC0:
        nonce, gas_price, gas, to, value, data, v, _r, _s = _fields(raw_b, 9)
        v_int = _int(v)
        return DecodedTransaction(
            tx_type=0,
            chain_id=(v_int - 35) // 2 if v_int >= 35 else None,
            nonce=_int(nonce),
            to=_address(to),
            gas=_int(gas),
            value=_int(value),
            data=bytes(data),
            sender=sender,
            gas_price=_int(gas_price),
        )

    if first == 0x01:
        chain_id, nonce, gas_price, gas, to, value, data, _al, _y, _r, _s = _fields(raw_b[1:], 11)
        return DecodedTransaction(
            tx_type=1,
            chain_id=_int(chain_id),
            nonce=_int(nonce),
            to=_address(to),
            gas=_int(gas),
            value=_int(value),
            data=bytes(data),
            sender=sender,
            gas_price=_int(gas_price),
        )

    if first == 0x02:
        chain_id, nonce, max_priority, max_fee, gas, to, value, data, _al, _y, _r, _s = _fields(raw_b[1:], 12)
        return DecodedTransaction(
            tx_type=2,
            chain_id=_int(chain_id),
            nonce=_int(nonce),
            to=_address(to),
            gas=_int(gas),
            value=_int(value),
            data=bytes(data),
            sender=sender,
            max_fee_per_gas=_int(max_fee),
            max_priority_fee_per_gas=_int(max_priority),
        )

    raise ValueError(f"Unsupported tx type: {first} (supported: legacy, 1, 2)")
