"""
serialized-txn entrypoint.

Builds, signs and prints one transaction for the local dev chain. All inputs
come from the environment / `.env` (see app/core/settings.py); stdout carries
only the serialized transaction, logs go to stderr.
"""

from __future__ import annotations

import json
import sys

from app.core.settings import load_settings
from errors import classify_exception
from execution.pipeline import serialize_transaction
from observability import build_log_context, configure_logging, log_event


def main() -> int:
    try:
        configure_logging("info")
        settings = load_settings()
        configure_logging(settings.LOG_LEVEL)
        result = serialize_transaction(settings)
    except Exception as e:
        err = classify_exception(e)
        log_event("pipeline_failed", ctx=build_log_context(tool="serialize_txn"), data=err.to_dict(), level="error")
        print(json.dumps({"ok": False, "error": err.to_dict()}, sort_keys=True), file=sys.stderr)
        return 1

    print(f"Serialized transaction: {result.hex}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
