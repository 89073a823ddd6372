import json

import pytest

import main
from ocr_targets.logging import LoggingManager

ENV_VARS = [
    "STORAGE_DIR", "LOG_FILE", "INPUT_FILE", "OCR_TARGETS_CSV_FILE",
    "MAX_FILES", "EMISSION", "FIELD_MAPPING", "PROGRESS",
]


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "run.log"))
    monkeypatch.setattr(LoggingManager, "_instance", None)


def write_input(storage, payload):
    input_path = storage / "key_value_stores" / "default" / "INPUT.json"
    input_path.parent.mkdir(parents=True)
    input_path.write_text(json.dumps(payload), encoding="utf-8")


def read_output(storage):
    return json.loads((storage / "key_value_stores" / "default" / "OUTPUT.json").read_text(encoding="utf-8"))


def dataset_items(storage):
    directory = storage / "datasets" / "default"
    return [json.loads(p.read_text(encoding="utf-8")) for p in sorted(directory.glob("*.json"))]


def test_completed_run_writes_dataset_and_output(tmp_path):
    storage = tmp_path / "storage"
    header = ",".join(f"col{i}" for i in range(1, 13))
    rows = "\n".join(",".join(f"r{n}c{i}" for i in range(1, 13)) for n in range(1, 4))
    write_input(storage, {"ocrTargetsCsv": f"{header}\n{rows}\n", "maxFiles": 2})

    exit_code = main.main(["--storage-dir", str(storage), "--progress", "off"])

    assert exit_code == 0
    output = read_output(storage)
    assert output["ok"] is True
    assert output["reason"] == "COMPLETED"
    assert output["total_rows"] == 3
    assert output["processed_rows"] == 2
    items = dataset_items(storage)
    assert [item["Invoice_ID"] for item in items] == ["r1c1", "r2c1"]
    assert items[0]["Target_type"] == "r1c12"
    assert items[0]["ocr_status"] == "SKIPPED"


def test_missing_input_reports_no_csv(tmp_path):
    storage = tmp_path / "storage"

    exit_code = main.main(["--storage-dir", str(storage), "--progress", "off"])

    assert exit_code == 1
    output = read_output(storage)
    assert output["reason"] == "NO_CSV"
    assert output["processed_rows"] == 0
    assert dataset_items(storage) == []


def test_malformed_input_is_fatal(tmp_path):
    storage = tmp_path / "storage"
    input_path = storage / "key_value_stores" / "default" / "INPUT.json"
    input_path.parent.mkdir(parents=True)
    input_path.write_text("[broken", encoding="utf-8")

    exit_code = main.main(["--storage-dir", str(storage), "--progress", "off"])

    assert exit_code == 2
    assert not (storage / "key_value_stores" / "default" / "OUTPUT.json").exists()
