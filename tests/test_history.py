import json

import pytest

from core.engine import analyze
from history import CHAT_LIMIT, HistoryStore
from settings import set_setting


def _report(name, content="aes-256"):
    return analyze(content, name, timestamp="2024-01-01T00:00:00+00:00")


def test_record_sets_current_and_prepends(tmp_path):
    store = HistoryStore(tmp_path, limit=10)
    assert store.current() is None
    assert store.entries() == []

    first = store.record(_report("a.bin"))
    second = store.record(_report("b.bin", "md5"))

    assert store.current() == _report("b.bin", "md5")
    recs = store.entries()
    assert [r["source_name"] for r in recs] == ["b.bin", "a.bin"]
    assert recs[0]["id"] == second["id"] != first["id"]
    assert "stored_at" in recs[0]
    assert recs[0]["safety_level"] == "Danger"
    assert store.get(first["id"]) == _report("a.bin")
    assert store.get("missing") is None


def test_history_is_bounded_fifo(tmp_path):
    store = HistoryStore(tmp_path, limit=10)
    for i in range(12):
        store.record(_report(f"fw{i}.bin"))
    names = [r["source_name"] for r in store.entries()]
    assert len(names) == 10
    assert names[0] == "fw11.bin"
    assert names[-1] == "fw2.bin"


def test_default_limit_from_settings(data_home):
    set_setting("history_limit", 2)
    store = HistoryStore()
    assert store.base_dir == data_home
    for i in range(3):
        store.record(_report(f"fw{i}.bin"))
    assert [r["source_name"] for r in store.entries()] == ["fw2.bin", "fw1.bin"]


def test_invalid_limit(tmp_path):
    with pytest.raises(ValueError):
        HistoryStore(tmp_path, limit=0)


def test_corrupt_files_are_treated_as_empty(tmp_path):
    (tmp_path / "analysis_history.json").write_text("{broken", encoding="utf-8")
    (tmp_path / "current_report.json").write_text(json.dumps({"x": 1}), encoding="utf-8")
    store = HistoryStore(tmp_path, limit=10)
    assert store.entries() == []
    assert store.current() is None
    store.record(_report("ok.bin"))
    assert len(store.entries()) == 1


def test_clear(tmp_path):
    store = HistoryStore(tmp_path, limit=10)
    store.record(_report("a.bin"))
    store.clear()
    assert store.entries() == []
    assert store.current() is None


def test_chat_roundtrip_and_cap(tmp_path):
    store = HistoryStore(tmp_path, limit=10)
    assert store.load_chat() == []
    msgs = [{"role": "user", "content": str(i)} for i in range(CHAT_LIMIT + 5)]
    store.save_chat(msgs)
    loaded = store.load_chat()
    assert len(loaded) == CHAT_LIMIT
    assert loaded[0]["content"] == "5"


def test_failed_history_write_keeps_previous_state(tmp_path, monkeypatch):
    import history as history_mod

    store = HistoryStore(tmp_path, limit=10)
    store.record(_report("a.bin"))
    real_write = history_mod.write_json_atomic

    def failing_write(path, data):
        if path.name == "analysis_history.json":
            raise OSError("disk full")
        real_write(path, data)

    monkeypatch.setattr(history_mod, "write_json_atomic", failing_write)
    with pytest.raises(OSError):
        store.record(_report("b.bin", "md5"))

    assert store.current() == _report("a.bin")
    assert [r["source_name"] for r in store.entries()] == ["a.bin"]
