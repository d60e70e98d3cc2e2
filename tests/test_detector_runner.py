import json
from pathlib import Path

from detectors import SignatureAdapter
from detectors.runner import (
    collect_files,
    run_adapters,
    summarize_detections,
    write_ndjson_detections,
)


def test_runner_end_to_end(tmp_path: Path):
    d = tmp_path / "images"
    (d / "sub").mkdir(parents=True)
    f1 = d / "a.bin"
    f1.write_bytes(b"md5 sha-1")
    f2 = d / "sub" / "b.img"
    f2.write_bytes(b"nothing to see")

    files = collect_files([str(d), str(tmp_path / "gone")])
    assert files == [str(f1), str(f2)]

    dets = list(run_adapters([SignatureAdapter()], files))
    assert [x.rule for x in dets] == ["SHA-1", "MD5"]

    out = tmp_path / "out" / "detections.ndjson"
    assert write_ndjson_detections(dets, str(out)) == 2
    lines = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert lines[0]["rule"] == "SHA-1"
    assert lines[0]["engine"] == "signature"
    assert lines[1]["offset"] == 0

    assert summarize_detections(dets) == {str(f1): ["SHA-1", "MD5"]}


def test_write_empty(tmp_path: Path):
    out = tmp_path / "empty.ndjson"
    assert write_ndjson_detections([], str(out)) == 0
    assert out.read_text(encoding="utf-8") == ""
