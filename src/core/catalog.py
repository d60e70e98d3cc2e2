# core/catalog.py
"""Signature catalog: the ordered table of algorithm patterns and verdicts.

Entries are evaluated in table order. Specific bit-width variants are listed
before their bare family token (AES-256 before AES); both may fire on the same
content and are reported as distinct canonical names.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from core.models import RISK_LABELS, STRENGTH_LABELS, SignatureEntry

logger = logging.getLogger(__name__)

PATTERN_FLAGS = re.IGNORECASE | re.ASCII


class CatalogConfigurationError(Exception):
    """A catalog definition could not be turned into a usable catalog."""


def _standalone(token: str, widths: Sequence[str] = ()) -> str:
    """Regex for a short family token that must stand on its own.

    Not preceded or followed by a letter/digit. Underscore counts as a
    delimiter so ``mbedtls_des_init`` still matches. When `widths` is given,
    the token is also not followed by a delimiter + one of those widths, so
    ``aes-256`` is reported as AES-256 only while ``rsa-3072`` is bare RSA.
    """
    if widths:
        alt = "|".join(widths)
        return rf"(?<![a-z0-9]){token}(?![a-z0-9]|[-_](?:{alt})(?!\d))"
    return rf"(?<![a-z0-9]){token}(?![a-z0-9])"


# (name, pattern, strength, risk, score)
SIGNATURE_DEFINITIONS: Tuple[Tuple[str, str, str, str, int], ...] = (
    # AES
    ("AES-256", r"aes[-_]?256", "Secure", "Low", 100),
    ("AES-192", r"aes[-_]?192", "Secure", "Low", 95),
    ("AES-128", r"aes[-_]?128", "Secure", "Low", 90),
    (
        "AES",
        _standalone("aes", ("128", "192", "256")) + r"|advanced encryption standard",
        "Secure",
        "Low",
        85,
    ),
    # RSA
    ("RSA-4096", r"rsa[-_]?4096", "Secure", "Low", 100),
    ("RSA-2048", r"rsa[-_]?2048", "Secure", "Low", 90),
    ("RSA-1024", r"rsa[-_]?1024", "Weak", "High", 40),
    ("RSA", _standalone("rsa", ("1024", "2048", "4096")), "Moderate", "Medium", 70),
    # SHA-2 / SHA-1
    ("SHA-512", r"sha[-_]?512", "Secure", "Low", 100),
    ("SHA-384", r"sha[-_]?384", "Secure", "Low", 95),
    ("SHA-256", r"sha[-_]?(?:256|224)|sha[-_]?2(?!\d)", "Secure", "Low", 90),
    ("SHA-1", r"sha[-_]?1(?!\d)", "Weak", "High", 30),
    # MD family
    ("MD5", _standalone("md5"), "Broken", "Critical", 10),
    ("MD4", _standalone("md4"), "Broken", "Critical", 5),
    # block ciphers
    ("3DES", r"3des|triple[-_ ]?des|des[-_]ede3?", "Moderate", "Medium", 50),
    (
        "DES",
        r"(?<![a-z0-9])(?<!triple[-_ ])(?<!3[-_])des(?![a-z0-9]|[-_]ede)",
        "Obsolete",
        "Critical",
        15,
    ),
    ("Blowfish", r"blowfish", "Moderate", "Medium", 60),
    # elliptic curves
    (
        "ECC-521",
        r"ecc[-_]?521|secp521r1|nistp521|(?<![a-z0-9])p[-_]?521(?!\d)",
        "Secure",
        "Low",
        100,
    ),
    (
        "ECC-384",
        r"ecc[-_]?384|secp384r1|nistp384|(?<![a-z0-9])p[-_]?384(?!\d)",
        "Secure",
        "Low",
        95,
    ),
    (
        "ECC-256",
        r"ecc[-_]?256|secp256[rk]1|prime256v1|nistp256|(?<![a-z0-9])p[-_]?256(?!\d)",
        "Secure",
        "Low",
        90,
    ),
    (
        "ECC",
        _standalone("ecc", ("256", "384", "521")) + r"|elliptic[-_ ]curve",
        "Secure",
        "Low",
        85,
    ),
    # newer primitives and stream ciphers
    ("SHA-3", r"sha[-_]?3(?!\d)|keccak", "Secure", "Low", 100),
    ("ChaCha20", r"chacha[-_]?20", "Secure", "Low", 95),
    ("RC4", _standalone("rc4") + r"|arcfour", "Broken", "Critical", 10),
)


def _compile(name: str, pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern, PATTERN_FLAGS)
    except re.error as e:
        raise CatalogConfigurationError(
            f"Signature {name!r}: pattern does not compile: {e}"
        ) from e


def build_catalog(
    definitions: Iterable[Sequence[Any]],
) -> Tuple[SignatureEntry, ...]:
    """Compile and validate definitions into an immutable catalog.

    Each definition is ``(name, pattern, strength, risk, score)``. Any invalid
    row aborts the whole build with CatalogConfigurationError.
    """
    entries = []
    seen = set()
    for idx, row in enumerate(definitions):
        try:
            name, pattern, strength, risk, score = row
        except (TypeError, ValueError) as e:
            raise CatalogConfigurationError(
                f"Signature #{idx}: expected (name, pattern, strength, risk, score)"
            ) from e
        if not isinstance(name, str) or not name.strip():
            raise CatalogConfigurationError(f"Signature #{idx}: empty name")
        if name in seen:
            raise CatalogConfigurationError(f"Duplicate canonical name: {name!r}")
        if not isinstance(pattern, str) or not pattern:
            raise CatalogConfigurationError(f"Signature {name!r}: empty pattern")
        if strength not in STRENGTH_LABELS:
            raise CatalogConfigurationError(
                f"Signature {name!r}: unknown strength {strength!r}"
            )
        if risk not in RISK_LABELS:
            raise CatalogConfigurationError(
                f"Signature {name!r}: unknown risk {risk!r}"
            )
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
            raise CatalogConfigurationError(
                f"Signature {name!r}: score must be an integer in 0..100"
            )
        entries.append(
            SignatureEntry(
                pattern=_compile(name, pattern),
                name=name,
                strength=strength,
                risk=risk,
                score=score,
            )
        )
        seen.add(name)
    if not entries:
        raise CatalogConfigurationError("Catalog has no signatures")
    return tuple(entries)


def load_catalog(path: str | Path) -> Tuple[SignatureEntry, ...]:
    """Build a catalog from a JSON file: a list of objects with
    name, pattern, strength, risk and score keys."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CatalogConfigurationError(f"Cannot read catalog {p}: {e}") from e
    if not isinstance(raw, list):
        raise CatalogConfigurationError(f"Catalog {p} must contain a JSON list")
    rows = []
    for idx, obj in enumerate(raw):
        if not isinstance(obj, dict):
            raise CatalogConfigurationError(f"Catalog {p}: entry #{idx} is not an object")
        try:
            rows.append(
                (obj["name"], obj["pattern"], obj["strength"], obj["risk"], obj["score"])
            )
        except KeyError as e:
            raise CatalogConfigurationError(
                f"Catalog {p}: entry #{idx} is missing {e.args[0]!r}"
            ) from e
    catalog = build_catalog(rows)
    logger.info("Loaded %d signatures from %s", len(catalog), p)
    return catalog


# Built once at import; a broken table must fail here, not mid-scan.
_CATALOG: Tuple[SignatureEntry, ...] = build_catalog(SIGNATURE_DEFINITIONS)
_BY_NAME: Dict[str, SignatureEntry] = {e.name: e for e in _CATALOG}


def entries() -> Tuple[SignatureEntry, ...]:
    return _CATALOG


def get_entry(name: str) -> Optional[SignatureEntry]:
    return _BY_NAME.get(name)
