from pathlib import Path

from core.catalog import build_catalog
from detectors import SignatureAdapter


def test_signature_adapter_reports_byte_offsets(tmp_path: Path):
    f = tmp_path / "fw.bin"
    f.write_bytes(b"\x7fELF\x00\x00mbedtls_aes_128\x00RSA-2048\x00")
    found = list(SignatureAdapter().scan_files([str(f)]))
    assert [d.rule for d in found] == ["AES-128", "RSA-2048"]
    aes = found[0]
    assert aes.engine == "signature"
    assert aes.path == str(f)
    assert aes.offset == 14
    assert aes.details["match_text"] == "aes_128"
    assert aes.details["strength"] == "Secure"
    assert aes.details["score"] == 90


def test_signature_adapter_custom_catalog_and_unreadable(tmp_path: Path):
    f = tmp_path / "fw.img"
    f.write_bytes(b"uses camellia")
    catalog = build_catalog([("Camellia", "camellia", "Secure", "Low", 90)])
    adapter = SignatureAdapter(catalog)
    found = list(adapter.scan_files([str(tmp_path / "missing.bin"), str(f)]))
    assert len(found) == 1
    assert found[0].rule == "Camellia"
    assert found[0].offset == 5


def test_no_fallback_in_evidence(tmp_path: Path):
    f = tmp_path / "blank.bin"
    f.write_bytes(b"\x00" * 32)
    assert list(SignatureAdapter().scan_files([str(f)])) == []
