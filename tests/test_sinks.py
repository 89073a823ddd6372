import json

import pytest

from ocr_targets.exceptions import SinkError
from ocr_targets.sinks.local_storage import (
    DatasetRowSink,
    KeyValueSummarySink,
    dataset_dir,
    key_value_store_dir,
)
from ocr_targets.sinks.memory import MemoryRowSink, MemorySummarySink


def test_memory_row_sink_accepts_single_and_list():
    sink = MemoryRowSink()

    sink.push_data({"a": "1"})
    sink.push_data([{"a": "2"}, {"a": "3"}])

    assert sink.items == [{"a": "1"}, {"a": "2"}, {"a": "3"}]
    assert sink.push_calls == 2


def test_memory_summary_sink_overwrites():
    sink = MemorySummarySink()

    sink.set_value({"ok": False})
    sink.set_value({"ok": True})

    assert sink.value == {"ok": True}
    assert sink.writes == 2


def test_storage_layout(tmp_path):
    assert dataset_dir(tmp_path) == tmp_path / "datasets" / "default"
    assert key_value_store_dir(tmp_path, "other") == tmp_path / "key_value_stores" / "other"


def test_dataset_sink_writes_numbered_items(tmp_path):
    sink = DatasetRowSink(tmp_path / "ds")

    sink.push_data({"Invoice_ID": "INV-1"})
    sink.push_data([{"Invoice_ID": "INV-2"}, {"Invoice_ID": "INV-3"}])

    files = sorted(p.name for p in (tmp_path / "ds").iterdir())
    assert files == ["000000001.json", "000000002.json", "000000003.json"]
    second = json.loads((tmp_path / "ds" / "000000002.json").read_text(encoding="utf-8"))
    assert second == {"Invoice_ID": "INV-2"}
    assert sink.item_count == 3


def test_dataset_sink_purges_previous_run(tmp_path):
    directory = tmp_path / "ds"
    directory.mkdir()
    (directory / "000000009.json").write_text("{}", encoding="utf-8")

    DatasetRowSink(directory)

    assert list(directory.iterdir()) == []


def test_dataset_sink_rejects_unserializable_item(tmp_path):
    sink = DatasetRowSink(tmp_path / "ds")

    with pytest.raises(SinkError):
        sink.push_data({"bad": object()})


def test_key_value_sink_overwrites_output(tmp_path):
    sink = KeyValueSummarySink(tmp_path / "kv")

    sink.set_value({"ok": False, "reason": "NO_CSV"})
    sink.set_value({"ok": True, "reason": "COMPLETED"})

    stored = json.loads((tmp_path / "kv" / "OUTPUT.json").read_text(encoding="utf-8"))
    assert stored == {"ok": True, "reason": "COMPLETED"}
    assert sink.path.name == "OUTPUT.json"
