from __future__ import annotations

from typing import Union

from eth_abi import encode
from eth_utils import decode_hex, function_signature_to_4byte_selector, is_address, to_checksum_address

# transfer(address,uint256) -> 0xc718...0bb1, 6e18
ENCODED_TRANSFER = (
    "0xa9059cbb"
    "000000000000000000000000c7183455a4c133ae270771860664b6b7ec320bb1"
    "00000000000000000000000000000000000000000000000053444835ec580000"
)

# Auxiliary hashes appended after the transfer call.
SUPERTX_HASH_NON_VALIDATED = "0xcdc98f27126eab75b8aadb26e9324d74b2a10b566b345109543d1c9cefd14a72"
USEROPS_ROOT_HASH = "0x1d69c064e2bd749cfe331b748be1dd5324cbf4e1839dda346cbb741a3e3169d1"

DEFAULT_AUX_HASH = SUPERTX_HASH_NON_VALIDATED

ERC20_TRANSFER_SELECTOR = function_signature_to_4byte_selector("transfer(address,uint256)")

BytesLike = Union[bytes, str]


def to_bytes(value: BytesLike, *, name: str) -> bytes:
    """
    Accept raw bytes or a hex string (with or without 0x) and return bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return decode_hex(value.strip())
        except ValueError as e:
            raise ValueError(f"{name} is not valid hex: {e}") from e
    raise ValueError(f"Invalid bytes field {name}: {type(value).__name__}")


def encode_erc20_transfer(recipient: str, amount: int) -> bytes:
    if amount < 0:
        raise ValueError("amount must be >= 0")
    if not is_address(recipient):
        raise ValueError(f"invalid recipient address: {recipient}")
    args = encode(["address", "uint256"], [to_checksum_address(recipient), amount])
    return ERC20_TRANSFER_SELECTOR + args


def build_calldata(encoded_transfer: BytesLike, aux_hash: BytesLike) -> bytes:
    """
    Append the auxiliary hash to an already-encoded call.

    Both segments are copied byte for byte; nothing is padded or re-encoded, so
    len(result) == len(encoded_transfer) + len(aux_hash).
    """
    call = to_bytes(encoded_transfer, name="encoded_transfer")
    aux = to_bytes(aux_hash, name="aux_hash")
    return call + aux
