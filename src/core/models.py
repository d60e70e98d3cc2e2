"""Core data models for signature detection and analysis reports.

SignatureEntry: one compiled catalog row (pattern -> verdict).
DetectedAlgorithm: the verdict copied out of an entry when it matches.
SignatureMatch: where in the content an entry matched (evidence).
AnalysisReport: the scan output handed to persistence and renderers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Pattern, Tuple

STRENGTH_LABELS = ("Secure", "Moderate", "Weak", "Obsolete", "Broken")
RISK_LABELS = ("Low", "Medium", "High", "Critical")

SAFETY_GOOD = "Good"
SAFETY_CAUTION = "Caution"
SAFETY_DANGER = "Danger"

# Lower bounds (inclusive) of the Good and Caution buckets.
GOOD_THRESHOLD = 80
CAUTION_THRESHOLD = 50


def classify_safety(percentage: int) -> str:
    """Map a safety percentage to Good / Caution / Danger."""
    if percentage >= GOOD_THRESHOLD:
        return SAFETY_GOOD
    if percentage >= CAUTION_THRESHOLD:
        return SAFETY_CAUTION
    return SAFETY_DANGER


@dataclass(frozen=True)
class DetectedAlgorithm:
    name: str
    strength: str  # Secure | Moderate | Weak | Obsolete | Broken
    risk: str  # Low | Medium | High | Critical
    score: int  # 0..100

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectedAlgorithm":
        return cls(
            name=str(data["name"]),
            strength=str(data["strength"]),
            risk=str(data["risk"]),
            score=int(data["score"]),
        )


@dataclass(frozen=True)
class SignatureEntry:
    pattern: Pattern[str]
    name: str
    strength: str
    risk: str
    score: int

    def search(self, text: str):
        return self.pattern.search(text)

    def verdict(self) -> DetectedAlgorithm:
        return DetectedAlgorithm(self.name, self.strength, self.risk, self.score)


@dataclass(frozen=True)
class SignatureMatch:
    entry: SignatureEntry
    offset: int
    text: str


@dataclass(frozen=True)
class AnalysisReport:
    source_name: str
    source_size_bytes: int
    timestamp: str  # ISO-8601
    safety_percentage: int
    detected: Tuple[DetectedAlgorithm, ...] = field(default_factory=tuple)
    summary: str = ""
    # True when nothing matched and the baseline set was substituted
    assumed_baseline: bool = False

    @property
    def safety_level(self) -> str:
        return classify_safety(self.safety_percentage)

    @property
    def size_label(self) -> str:
        return f"{self.source_size_bytes / 1024:.2f} KB"

    def algorithm_names(self) -> Tuple[str, ...]:
        return tuple(a.name for a in self.detected)

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-compatible representation (used for persistence)."""
        return {
            "source_name": self.source_name,
            "source_size_bytes": self.source_size_bytes,
            "size_label": self.size_label,
            "timestamp": self.timestamp,
            "safety_percentage": self.safety_percentage,
            "safety_level": self.safety_level,
            "detected": [a.to_dict() for a in self.detected],
            "summary": self.summary,
            "assumed_baseline": self.assumed_baseline,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisReport":
        # derived keys (size_label, safety_level) and storage keys (id,
        # stored_at) are ignored
        detected = tuple(
            DetectedAlgorithm.from_dict(d) for d in data.get("detected") or ()
        )
        return cls(
            source_name=str(data["source_name"]),
            source_size_bytes=int(data.get("source_size_bytes", 0)),
            timestamp=str(data.get("timestamp", "")),
            safety_percentage=int(data["safety_percentage"]),
            detected=detected,
            summary=str(data.get("summary", "")),
            assumed_baseline=bool(data.get("assumed_baseline", False)),
        )

