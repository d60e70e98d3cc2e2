from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List

from .adapter import BaseAdapter, Detection

logger = logging.getLogger(__name__)


def _atomic_write_text(path: Path, text: str) -> None:
    """Write text to path atomically by writing to a temp file on the same
    directory and replacing the target. Ensures parent directory exists.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise


def collect_files(paths: Iterable[str]) -> List[str]:
    """Expand the given files and directories into a sorted file list.

    Missing paths are logged and skipped.
    """
    out: List[str] = []
    for raw in paths:
        p = Path(raw).expanduser()
        if p.is_file():
            out.append(str(p))
        elif p.is_dir():
            out.extend(str(f) for f in sorted(p.rglob("*")) if f.is_file())
        else:
            logger.warning("Path %s does not exist; skipping.", p)
    return out


def run_adapters(
    adapters: Iterable[BaseAdapter], files: Iterable[str]
) -> Iterable[Detection]:
    files = list(files)
    for adapter in adapters:
        for d in adapter.scan_files(files):
            yield d


def write_ndjson_detections(detections: Iterable[Detection], out_path: str) -> int:
    """Write one JSON object per detection; returns the number written."""
    lines = []
    for d in detections:
        obj = {
            "path": d.path,
            "offset": d.offset,
            "rule": d.rule,
            "details": d.details,
        }
        if d.engine:
            obj["engine"] = d.engine
        lines.append(json.dumps(obj, ensure_ascii=False))

    text = "\n".join(lines) + ("\n" if lines else "")
    _atomic_write_text(Path(out_path), text)
    logger.info("Wrote %d detections to %s", len(lines), out_path)
    return len(lines)


def summarize_detections(detections: Iterable[Detection]) -> Dict[str, List[str]]:
    """Map each path to the algorithm names found in it (detection order)."""
    by_path: Dict[str, List[str]] = {}
    for d in detections:
        names = by_path.setdefault(d.path, [])
        if d.rule not in names:
            names.append(d.rule)
    return by_path
