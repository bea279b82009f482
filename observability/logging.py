from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from typing import Any, Dict, Optional

LOGGER_NAME = "serialized_txn"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "info") -> logging.Logger:
    """
    Attach a single stderr handler emitting one JSON object per line.

    stdout stays reserved for the serialized transaction.
    """
    logger = get_logger()
    logger.setLevel(_LEVELS.get((level or "info").strip().lower(), logging.INFO))
    # Drop handlers bound to an earlier sys.stderr.
    for h in [h for h in logger.handlers if getattr(h, "_serialized_txn", False)]:
        logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._serialized_txn = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def build_log_context(**fields: Any) -> Dict[str, Any]:
    """
    Per-run context merged into every event (run_id plus caller fields).
    """
    ctx: Dict[str, Any] = {"run_id": uuid.uuid4().hex[:12]}
    ctx.update({k: v for k, v in fields.items() if v is not None})
    return ctx


def log_event(
    event: str,
    *,
    ctx: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    level: str = "info",
) -> None:
    payload: Dict[str, Any] = {"ts_ms": int(time.time() * 1000), "event": event, "level": level}
    if ctx:
        payload.update(ctx)
    if data:
        payload["data"] = data
    get_logger().log(_LEVELS.get(level, logging.INFO), json.dumps(payload, sort_keys=True, default=str))
