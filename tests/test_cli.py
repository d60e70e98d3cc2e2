import json

import matplotlib

matplotlib.use("Agg")

import cli  # noqa: E402
from history import HistoryStore  # noqa: E402


def test_analyze_prints_report_and_records(tmp_path, capsys):
    fw = tmp_path / "fw.txt"
    fw.write_text("using aes-256 and sha1 for legacy compat", encoding="utf-8")
    out_json = tmp_path / "r.json"

    assert cli.main(["analyze", str(fw), "--json", str(out_json)]) == 0
    text = capsys.readouterr().out
    assert "Safety: 65% (Caution)" in text
    assert "AES-256" in text and "SHA-1" in text
    assert json.loads(out_json.read_text(encoding="utf-8"))["safety_percentage"] == 65
    assert [r["source_name"] for r in HistoryStore().entries()] == ["fw.txt"]


def test_analyze_fallback_no_history(tmp_path, capsys):
    fw = tmp_path / "blank.bin"
    fw.write_bytes(b"\x00\x00")
    assert cli.main(["analyze", str(fw), "--no-history"]) == 0
    text = capsys.readouterr().out
    assert "baseline configuration assumed" in text
    assert "Safety: 93% (Good)" in text
    assert HistoryStore().entries() == []


def test_analyze_errors_exit_2(tmp_path):
    assert cli.main(["analyze", str(tmp_path / "missing.bin")]) == 2
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    fw = tmp_path / "fw.bin"
    fw.write_bytes(b"aes")
    assert cli.main(["analyze", str(fw), "--catalog", str(bad)]) == 2


def test_scan_writes_ndjson(tmp_path, capsys):
    fw = tmp_path / "fw.bin"
    fw.write_bytes(b"RSA-1024 and DES")
    out = tmp_path / "d.ndjson"
    assert cli.main(["scan", str(fw), "--out", str(out)]) == 0
    assert "RSA-1024, DES" in capsys.readouterr().out
    assert len(out.read_text(encoding="utf-8").splitlines()) == 2


def test_history_ask_and_catalog(tmp_path, capsys):
    fw = tmp_path / "fw.bin"
    fw.write_bytes(b"md5")
    cli.main(["analyze", str(fw)])
    capsys.readouterr()

    assert cli.main(["history"]) == 0
    assert "fw.bin" in capsys.readouterr().out
    assert cli.main(["history", "--clear"]) == 0
    capsys.readouterr()
    assert cli.main(["history"]) == 0
    assert "No analyses recorded yet." in capsys.readouterr().out

    assert cli.main(["ask", "is", "md5", "ok?"]) == 0
    assert "MD5" in capsys.readouterr().out

    assert cli.main(["catalog"]) == 0
    listing = capsys.readouterr().out
    assert "AES-256" in listing and "ChaCha20" in listing
