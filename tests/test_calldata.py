import pytest
from eth_utils import decode_hex

from payload.calldata import (
    DEFAULT_AUX_HASH,
    ENCODED_TRANSFER,
    ERC20_TRANSFER_SELECTOR,
    SUPERTX_HASH_NON_VALIDATED,
    USEROPS_ROOT_HASH,
    build_calldata,
    encode_erc20_transfer,
)


def test_encoded_transfer_constant_is_a_transfer_call():
    expected = encode_erc20_transfer("0xc7183455a4c133ae270771860664b6b7ec320bb1", 6 * 10**18)
    assert decode_hex(ENCODED_TRANSFER) == expected
    assert expected[:4] == ERC20_TRANSFER_SELECTOR == bytes.fromhex("a9059cbb")
    assert len(expected) == 4 + 32 + 32


def test_default_aux_hash_is_non_validated_flow():
    assert DEFAULT_AUX_HASH == SUPERTX_HASH_NON_VALIDATED
    assert DEFAULT_AUX_HASH != USEROPS_ROOT_HASH


@pytest.mark.parametrize("aux", [SUPERTX_HASH_NON_VALIDATED, USEROPS_ROOT_HASH])
def test_build_calldata_concatenates_verbatim(aux):
    call = decode_hex(ENCODED_TRANSFER)
    aux_b = decode_hex(aux)

    data = build_calldata(ENCODED_TRANSFER, aux)

    assert len(data) == len(call) + len(aux_b) == 100
    assert data[: len(call)] == call
    assert data[len(call):] == aux_b


def test_build_calldata_accepts_bytes_and_unprefixed_hex():
    assert build_calldata(b"\x01\x02", "0304") == b"\x01\x02\x03\x04"
    assert build_calldata("", b"") == b""


def test_build_calldata_rejects_non_hex():
    with pytest.raises(ValueError):
        build_calldata("0xzz", DEFAULT_AUX_HASH)
    with pytest.raises(ValueError):
        build_calldata(ENCODED_TRANSFER, 12)


def test_encode_erc20_transfer_validates_inputs():
    with pytest.raises(ValueError):
        encode_erc20_transfer("0x1234", 1)
    with pytest.raises(ValueError):
        encode_erc20_transfer("0xc7183455a4c133ae270771860664b6b7ec320bb1", -1)
