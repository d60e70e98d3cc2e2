import json
import re

import pytest

from core import catalog
from core.catalog import CatalogConfigurationError, build_catalog, load_catalog
from core.models import RISK_LABELS, STRENGTH_LABELS


def test_entries_deterministic_and_valid():
    first = catalog.entries()
    assert first is catalog.entries()
    names = [e.name for e in first]
    assert len(names) == len(set(names))
    for e in first:
        assert e.strength in STRENGTH_LABELS
        assert e.risk in RISK_LABELS
        assert 0 <= e.score <= 100
        assert isinstance(e.pattern, re.Pattern)


def test_specific_variants_precede_family_token():
    names = [e.name for e in catalog.entries()]
    assert names.index("AES-256") < names.index("AES-128") < names.index("AES")
    assert names.index("RSA-4096") < names.index("RSA")
    assert names.index("3DES") < names.index("DES")
    assert names.index("ECC-256") < names.index("ECC")


def test_known_verdicts():
    md5 = catalog.get_entry("MD5")
    assert (md5.strength, md5.risk, md5.score) == ("Broken", "Critical", 10)
    sha1 = catalog.get_entry("SHA-1")
    assert (sha1.strength, sha1.risk, sha1.score) == ("Weak", "High", 30)
    assert catalog.get_entry("nope") is None


def test_bad_pattern_aborts_build():
    rows = [
        ("AES", r"aes", "Secure", "Low", 85),
        ("Broken", r"(unclosed", "Secure", "Low", 50),
    ]
    with pytest.raises(CatalogConfigurationError):
        build_catalog(rows)


@pytest.mark.parametrize(
    "row",
    [
        ("X", r"x", "Fantastic", "Low", 50),
        ("X", r"x", "Secure", "None", 50),
        ("X", r"x", "Secure", "Low", 101),
        ("X", r"x", "Secure", "Low", True),
        ("", r"x", "Secure", "Low", 50),
        ("X", "", "Secure", "Low", 50),
        ("X", r"x", "Secure"),
    ],
)
def test_invalid_rows_rejected(row):
    with pytest.raises(CatalogConfigurationError):
        build_catalog([row])


def test_duplicate_names_and_empty_catalog_rejected():
    with pytest.raises(CatalogConfigurationError):
        build_catalog([("A", "a", "Secure", "Low", 1), ("A", "b", "Secure", "Low", 2)])
    with pytest.raises(CatalogConfigurationError):
        build_catalog([])


def test_load_catalog_from_json(tmp_path):
    p = tmp_path / "sigs.json"
    p.write_text(
        json.dumps(
            [
                {"name": "Camellia", "pattern": "camellia", "strength": "Secure",
                 "risk": "Low", "score": 90},
                {"name": "RC2", "pattern": "\\brc2\\b", "strength": "Broken",
                 "risk": "Critical", "score": 5},
            ]
        ),
        encoding="utf-8",
    )
    loaded = load_catalog(p)
    assert [e.name for e in loaded] == ["Camellia", "RC2"]
    assert loaded[0].search("CAMELLIA-256-cbc")


def test_load_catalog_errors(tmp_path):
    with pytest.raises(CatalogConfigurationError):
        load_catalog(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogConfigurationError):
        load_catalog(bad)

    obj = tmp_path / "obj.json"
    obj.write_text(json.dumps({"name": "x"}), encoding="utf-8")
    with pytest.raises(CatalogConfigurationError):
        load_catalog(obj)

    missing_key = tmp_path / "missing_key.json"
    missing_key.write_text(json.dumps([{"name": "x", "pattern": "x"}]), encoding="utf-8")
    with pytest.raises(CatalogConfigurationError):
        load_catalog(missing_key)
