from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from app.core.settings import Settings
from execution.evm import ChainClient, TxRequest, get_client, prepare_transaction_request
from observability import build_log_context, log_event
from payload.calldata import DEFAULT_AUX_HASH, ENCODED_TRANSFER, build_calldata
from signing import DecodedTransaction, Signer, decode_signed_transaction, get_signer


@dataclass(frozen=True)
class SerializedTransaction:
    raw: bytes
    decoded: DecodedTransaction

    @property
    def hex(self) -> str:
        return "0x" + self.raw.hex()


def _check_round_trip(request: TxRequest, decoded: DecodedTransaction) -> None:
    mismatched = []
    if (decoded.to or "").lower() != request.to.lower():
        mismatched.append("to")
    if decoded.gas != request.gas:
        mismatched.append("gas")
    if decoded.value != request.value:
        mismatched.append("value")
    if decoded.data != request.data:
        mismatched.append("data")
    if mismatched:
        raise ValueError(f"signed transaction does not match request: {', '.join(mismatched)}")


def serialize_transaction(
    settings: Settings,
    *,
    signer_factory: Callable[[Settings], Signer] = get_signer,
    client_factory: Optional[Callable[[Settings], ChainClient]] = None,
) -> SerializedTransaction:
    """
    Build the calldata, fetch defaults from the endpoint, sign and decode.

    The signer is created first so a malformed key fails before any RPC call,
    and preparation happens before signing so an unreachable endpoint never
    reaches the signer.
    """
    ctx = build_log_context(tool="serialize_txn", chain_id=settings.CHAIN_ID)
    log_event("settings_loaded", ctx=ctx, data=settings.to_dict(), level="debug")

    signer = signer_factory(settings)
    sender = signer.get_address()
    log_event("signer_ready", ctx=ctx, data={"signer_type": settings.SIGNER_TYPE.value, "address": sender})

    if client_factory is None:
        client = get_client(settings.RPC_URL, settings.CHAIN_ID, timeout=settings.HTTP_TIMEOUT_SEC)
    else:
        client = client_factory(settings)
    log_event("rpc_connected", ctx=ctx, data={"rpc_url": client.rpc_url})

    data = build_calldata(
        settings.ENCODED_TRANSFER or ENCODED_TRANSFER,
        settings.AUX_HASH or DEFAULT_AUX_HASH,
    )
    log_event("calldata_built", ctx=ctx, data={"data_bytes": len(data)})

    request = TxRequest(to=settings.TX_TO, gas=settings.TX_GAS, value=settings.TX_VALUE_WEI, data=data)
    tx = prepare_transaction_request(client, sender, request)
    log_event(
        "transaction_prepared",
        ctx=ctx,
        data={k: v for k, v in tx.items() if k != "data"},
        level="debug",
    )

    signed = signer.sign_transaction(tx)
    raw = bytes(signed.raw_transaction)
    decoded = decode_signed_transaction(raw)
    _check_round_trip(request, decoded)
    log_event("transaction_signed", ctx=ctx, data={**decoded.to_dict(), "bytes": len(raw)})

    return SerializedTransaction(raw=raw, decoded=decoded)
