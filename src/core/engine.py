"""Detection and scoring engine.

Scans content against the signature catalog, deduplicates verdicts by
canonical name and turns them into a safety percentage.

All functions are pure with respect to their inputs; the catalog is read-only
and may be shared between threads.
"""

from __future__ import annotations

import datetime
import logging
from datetime import timezone
from typing import List, Optional, Sequence, Tuple, Union

from core import catalog as _catalog
from core.models import (
    AnalysisReport,
    DetectedAlgorithm,
    SignatureEntry,
    SignatureMatch,
    classify_safety,
)

logger = logging.getLogger(__name__)

Content = Union[str, bytes, bytearray, memoryview]

# Reported when nothing in the catalog matches: an assumed baseline
# configuration rather than an empty report.
FALLBACK_ALGORITHMS: Tuple[DetectedAlgorithm, ...] = (
    DetectedAlgorithm("AES-256", "Secure", "Low", 100),
    DetectedAlgorithm("SHA-256", "Secure", "Low", 90),
    DetectedAlgorithm("RSA-2048", "Secure", "Low", 90),
)

__all__ = [
    "FALLBACK_ALGORITHMS",
    "analyze",
    "classify_safety",
    "find_matches",
    "match_signatures",
    "scan",
    "score",
    "summarize",
]


def _as_text(content: Optional[Content]) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    # latin-1 maps each byte to exactly one code point, so match offsets are
    # byte offsets and ASCII tokens inside binary data stay intact
    return bytes(content).decode("latin-1")


def find_matches(
    content: Optional[Content],
    catalog: Optional[Sequence[SignatureEntry]] = None,
) -> List[SignatureMatch]:
    """Return the first match of every entry, in catalog order.

    A canonical name is reported at most once: entries whose name already
    matched are skipped.
    """
    text = _as_text(content)
    entries = _catalog.entries() if catalog is None else catalog
    out: List[SignatureMatch] = []
    seen = set()
    for entry in entries:
        if entry.name in seen:
            continue
        m = entry.search(text)
        if m is None:
            continue
        out.append(SignatureMatch(entry=entry, offset=m.start(), text=m.group(0)))
        seen.add(entry.name)
    return out


def match_signatures(
    content: Optional[Content],
    catalog: Optional[Sequence[SignatureEntry]] = None,
) -> List[DetectedAlgorithm]:
    """Detected algorithms without the fallback substitution."""
    return [m.entry.verdict() for m in find_matches(content, catalog)]


def scan(
    content: Optional[Content],
    catalog: Optional[Sequence[SignatureEntry]] = None,
) -> List[DetectedAlgorithm]:
    """Detected algorithms; the baseline set when nothing matched."""
    detected = match_signatures(content, catalog)
    if not detected:
        return list(FALLBACK_ALGORITHMS)
    return detected


def score(detected: Sequence[DetectedAlgorithm]) -> int:
    """Mean per-algorithm score as an integer percentage (half rounds up)."""
    count = len(detected)
    if count == 0:
        raise ValueError("Cannot score an empty detection list")
    total = sum(a.score for a in detected)
    # round(total / (100 * count) * 100) without float drift
    pct = (2 * total + count) // (2 * count)
    return max(0, min(100, pct))


def summarize(detected: Sequence[DetectedAlgorithm]) -> str:
    n = len(detected)
    return f"Detected {n} cryptographic algorithm{'s' if n != 1 else ''} in firmware."


def analyze(
    content: Optional[Content],
    source_name: str,
    source_size_bytes: Optional[int] = None,
    catalog: Optional[Sequence[SignatureEntry]] = None,
    timestamp: Optional[str] = None,
) -> AnalysisReport:
    """Scan content and build the report for one input."""
    matched = match_signatures(content, catalog)
    detected = matched or list(FALLBACK_ALGORITHMS)
    pct = score(detected)
    if source_size_bytes is None:
        if isinstance(content, str):
            source_size_bytes = len(content.encode("utf-8"))
        else:
            source_size_bytes = len(content) if content is not None else 0
    if timestamp is None:
        timestamp = datetime.datetime.now(timezone.utc).isoformat(timespec="seconds")
    report = AnalysisReport(
        source_name=source_name,
        source_size_bytes=int(source_size_bytes),
        timestamp=timestamp,
        safety_percentage=pct,
        detected=tuple(detected),
        summary=summarize(detected),
        assumed_baseline=not matched,
    )
    logger.debug(
        "Analyzed %s: %d algorithms, safety %d%% (%s)%s",
        source_name,
        len(detected),
        pct,
        report.safety_level,
        " [baseline]" if report.assumed_baseline else "",
    )
    return report
