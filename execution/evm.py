from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from web3 import Web3
from web3.providers.rpc import HTTPProvider

# maxFeePerGas = baseFee * 12 / 10 + maxPriorityFeePerGas
BASE_FEE_MULTIPLIER_NUM = 12
BASE_FEE_MULTIPLIER_DEN = 10


@dataclass(frozen=True)
class TxRequest:
    """
    Caller-supplied part of a transaction; everything else comes from the endpoint.
    """

    to: str
    gas: int
    value: int
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "to": Web3.to_checksum_address(self.to),
            "gas": int(self.gas),
            "value": int(self.value),
            "data": Web3.to_hex(self.data),
        }


@dataclass
class ChainClient:
    """
    A web3 handle bound to one endpoint and one chain id.
    """

    w3: Web3
    chain_id: int
    rpc_url: str


def get_client(rpc_url: str, chain_id: int, *, timeout: float = 10.0) -> ChainClient:
    w3 = Web3(HTTPProvider(rpc_url, request_kwargs={"timeout": float(timeout)}))
    if not w3.is_connected():
        raise ConnectionError(f"RPC not reachable ({rpc_url})")
    return ChainClient(w3=w3, chain_id=int(chain_id), rpc_url=rpc_url)


def _max_fee_per_gas(base_fee: int, priority_fee: int) -> int:
    # ceil(base_fee * 1.2)
    scaled = -(-int(base_fee) * BASE_FEE_MULTIPLIER_NUM // BASE_FEE_MULTIPLIER_DEN)
    return scaled + int(priority_fee)


def prepare_transaction_request(client: ChainClient, sender: str, request: TxRequest) -> Dict[str, Any]:
    """
    Fill nonce, chain id and fee fields for `request` from the endpoint.

    EIP-1559 fields are used when the latest block has a base fee, otherwise a
    legacy gasPrice. Endpoint-supplied values are taken as-is.
    """
    w3 = client.w3
    tx = request.to_dict()
    tx["from"] = Web3.to_checksum_address(sender)
    tx["nonce"] = int(w3.eth.get_transaction_count(tx["from"], "pending"))
    tx["chainId"] = client.chain_id

    block = w3.eth.get_block("latest")
    base_fee: Optional[int] = block.get("baseFeePerGas")
    if base_fee is not None:
        priority = int(w3.eth.max_priority_fee)
        tx["type"] = 2
        tx["maxPriorityFeePerGas"] = priority
        tx["maxFeePerGas"] = _max_fee_per_gas(int(base_fee), priority)
    else:
        tx["gasPrice"] = int(w3.eth.gas_price)
    return tx
