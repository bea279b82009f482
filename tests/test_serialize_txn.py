import io
import json
from unittest.mock import MagicMock, patch

import serialize_txn
from observability import configure_logging, get_logger


def test_main_prints_single_line(capsys):
    result = MagicMock(hex="0x02f8deadbeef")
    with patch("serialize_txn.serialize_transaction", return_value=result):
        assert serialize_txn.main() == 0

    out = capsys.readouterr().out
    assert out == "Serialized transaction: 0x02f8deadbeef\n"


def test_main_unreachable_endpoint_exits_nonzero(capsys):
    with patch("serialize_txn.serialize_transaction", side_effect=ConnectionError("RPC not reachable")):
        assert serialize_txn.main() == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    envelopes = [json.loads(line) for line in captured.err.splitlines() if '"ok"' in line]
    assert envelopes[-1]["ok"] is False
    assert envelopes[-1]["error"]["code"] == "rpc_unreachable"


def test_main_bad_settings_exits_nonzero(monkeypatch, capsys):
    monkeypatch.setenv("TX_TO", "nope")
    with patch("serialize_txn.serialize_transaction") as run:
        assert serialize_txn.main() == 1
    run.assert_not_called()
    assert "settings_invalid" in capsys.readouterr().err


def test_main_survives_handler_bound_to_closed_stderr(capsys):
    stale = io.StringIO()
    with patch("sys.stderr", stale):
        configure_logging("info")
    stale.close()

    with patch("serialize_txn.serialize_transaction", side_effect=ConnectionError("RPC not reachable")):
        assert serialize_txn.main() == 1
    assert "rpc_unreachable" in capsys.readouterr().err


def test_main_reconfigures_logging_each_run(capsys):
    result = MagicMock(hex="0x02")
    with patch("serialize_txn.serialize_transaction", return_value=result):
        assert serialize_txn.main() == 0
        assert serialize_txn.main() == 0
    handlers = [h for h in get_logger().handlers if getattr(h, "_serialized_txn", False)]
    assert len(handlers) == 1
