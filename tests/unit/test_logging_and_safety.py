import logging
import threading

import pytest

from lazyaws._logging import redact_key
from lazyaws.dynamodb import DynamoDbClient, ScanOutput
from lazyaws.request import Request
from tests.helpers.fakes import FakeTransport, first_page, item_ids, scan_body, wire_item

# --- Tests ---


def test_logging_lifecycle(boto_transport, mock_client, caplog):
    """Verify that logging occurs at expected levels while walking pages."""
    mock_client.scan.side_effect = [scan_body(["a"], next_key="secret-id"), scan_body(["b"])]

    caplog.set_level(logging.DEBUG, logger="lazyaws")

    items = list(DynamoDbClient(boto_transport).scan(TableName="test_log_items", Limit=1))

    assert len(items) == 2
    assert "Starting scan" in caplog.text  # INFO
    assert "Dispatching request" in caplog.text  # INFO
    assert "Decoded response" in caplog.text  # DEBUG
    assert "Prefetching next page" in caplog.text  # DEBUG
    assert "Pagination finished" in caplog.text  # DEBUG

    # We verify that 'extra' fields are present in the log records
    has_context = False
    for record in caplog.records:
        if hasattr(record, "table") and record.table == "test_log_items":
            has_context = True
            break
    assert has_context, "Log records missing 'table' context"


def test_continuation_key_is_redacted(caplog):
    """Continuation keys carry item data and must never reach the logs verbatim."""
    transport = FakeTransport([scan_body(["b"])])
    request = Request("Scan", {"TableName": "t"})
    start = first_page(ScanOutput, scan_body(["a"], next_key="secret-id"), transport, request)

    caplog.set_level(logging.DEBUG, logger="lazyaws")
    list(start)

    records = [r for r in caplog.records if r.getMessage() == "Prefetching next page"]
    assert len(records) == 1
    assert records[0].key_hash == redact_key(wire_item("secret-id"))
    assert records[0].page_number == 2
    assert "secret-id" not in caplog.text
    for record in caplog.records:
        assert "secret-id" not in str(record.__dict__)


def test_abandoned_walk_logs_release(caplog):
    transport = FakeTransport([scan_body(["b"])])
    request = Request("Scan", {"TableName": "t"})
    start = first_page(ScanOutput, scan_body(["a"], next_key="a"), transport, request)

    caplog.set_level(logging.DEBUG, logger="lazyaws")
    items = start.items()
    next(items)
    items.close()

    assert "Released pending prefetch" in caplog.text


@pytest.mark.parametrize(
    "key,expected",
    [
        (None, "<none>"),
        ("token", redact_key("token")),
    ],
)
def test_redact_key_simple(key, expected):
    assert redact_key(key) == expected


def test_redact_key_mapping():
    redacted = redact_key({"sk": {"N": "1"}, "pk": {"S": "user@example.com"}})

    assert "user@example.com" not in redacted
    # Keys stay readable and sorted, values are 8-char hashes
    assert redacted.index("'pk'") < redacted.index("'sk'")
    assert redacted == redact_key({"pk": {"S": "user@example.com"}, "sk": {"N": "1"}})


def test_redact_key_is_stable_and_distinct():
    assert redact_key("a") == redact_key("a")
    assert redact_key("a") != redact_key("b")
    assert len(redact_key("a")) == 8


def test_concurrent_walks_are_isolated():
    """Two walks over the same template keep separate prefetch slots."""
    request = Request("Scan", {"TableName": "t", "Limit": 1})
    walks = {}

    def walk(name: str) -> None:
        transport = FakeTransport([scan_body([f"{name}2"])])
        start = first_page(
            ScanOutput, scan_body([f"{name}1"], next_key=f"{name}1"), transport, request
        )
        walks[name] = (item_ids(start), transport)

    threads = [threading.Thread(target=walk, args=(name,)) for name in ("x", "y")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert walks["x"][0] == ["x1", "x2"]
    assert walks["y"][0] == ["y1", "y2"]
    assert walks["x"][1].sent[0].params["ExclusiveStartKey"] == wire_item("x1")
    assert walks["y"][1].sent[0].params["ExclusiveStartKey"] == wire_item("y1")
    # The shared template is never mutated
    assert "ExclusiveStartKey" not in request.params
