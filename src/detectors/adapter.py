from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

from core.engine import find_matches
from core.models import SignatureEntry

logger = logging.getLogger(__name__)


@dataclass
class Detection:
    path: str
    offset: Optional[int]
    rule: str
    details: Dict[str, Any]
    engine: Optional[str] = None


class BaseAdapter:
    """Base detector adapter contract.

    Implementations should provide `scan_files` which takes a list of
    paths (strings or Path objects) and yields Detection objects.
    """

    def scan_files(self, files: Iterable[str]) -> Iterable[Detection]:
        raise NotImplementedError()


class SignatureAdapter(BaseAdapter):
    """Locate catalog signatures in raw file bytes.

    Yields one Detection per canonical name found in a file (its first
    occurrence), in catalog order. `offset` is the byte offset of the match.
    """

    engine = "signature"

    def __init__(self, catalog: Optional[Sequence[SignatureEntry]] = None):
        self.catalog = catalog

    def scan_files(self, files: Iterable[str]):
        for p in files:
            try:
                data = Path(p).read_bytes()
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", p, e)
                continue
            for m in find_matches(data, self.catalog):
                yield Detection(
                    path=str(p),
                    offset=m.offset,
                    rule=m.entry.name,
                    details={
                        "match_text": m.text,
                        "strength": m.entry.strength,
                        "risk": m.entry.risk,
                        "score": m.entry.score,
                    },
                    engine=self.engine,
                )
