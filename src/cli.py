"""Command-line front end for CryptoFinder.

Usage (from repo root, or via the `cryptofinder` console script):
    python src/cli.py analyze firmware.bin --pdf report.pdf
    python src/cli.py scan ./images --out detections.ndjson
    python src/cli.py history
    python src/cli.py ask "is md5 still safe?"
    python src/cli.py catalog
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from core import advisor, engine
from core import catalog as signatures
from core.catalog import CatalogConfigurationError
from core.models import AnalysisReport
from detectors import SignatureAdapter
from detectors.runner import (
    collect_files,
    run_adapters,
    summarize_detections,
    write_ndjson_detections,
)
from file_handler import FileHandler
from history import HistoryStore
from settings import get_catalog_path, get_log_level, get_max_upload_bytes

logger = logging.getLogger("cryptofinder")


def _resolve_catalog(path: Optional[str]):
    """Catalog from --catalog, else the catalog_path setting, else built-in."""
    if path:
        return signatures.load_catalog(path)
    configured = get_catalog_path()
    if configured:
        return signatures.load_catalog(configured)
    return signatures.entries()


def format_report(report: AnalysisReport) -> str:
    lines = [
        f"File:   {report.source_name}",
        f"Size:   {report.size_label}",
        f"Date:   {report.timestamp}",
        f"Safety: {report.safety_percentage}% ({report.safety_level})",
        "",
        f"{'Algorithm':<12} {'Strength':<10} {'Risk':<10} Score",
    ]
    for a in report.detected:
        lines.append(f"{a.name:<12} {a.strength:<10} {a.risk:<10} {a.score:>5}")
    lines.append("")
    lines.append(report.summary)
    if report.assumed_baseline:
        lines.append("(no signatures matched; baseline configuration assumed)")
    return "\n".join(lines)


def cmd_analyze(args) -> int:
    catalog = _resolve_catalog(args.catalog)
    meta = FileHandler(max_bytes=get_max_upload_bytes()).handle_input(args.file)
    report = engine.analyze(
        meta["content"], meta["filename"], meta["size"], catalog=catalog
    )
    print(format_report(report))

    if not args.no_history:
        HistoryStore().record(report)
    if args.json:
        from report_export import export_json

        print(f"JSON report: {export_json(report, args.json)}")
    if args.pdf:
        from report_export import export_pdf

        print(f"PDF report: {export_pdf(report, args.pdf)}")
    return 0


def cmd_scan(args) -> int:
    catalog = _resolve_catalog(args.catalog)
    files = collect_files(args.paths)
    detections = list(run_adapters([SignatureAdapter(catalog)], files))
    count = write_ndjson_detections(detections, args.out)
    found = summarize_detections(detections)
    for path in files:
        names = found.get(path)
        print(f"{path}: {', '.join(names) if names else '-'}")
    print(f"Wrote {count} detections for {len(files)} files to {args.out}")
    return 0


def cmd_history(args) -> int:
    store = HistoryStore()
    if args.clear:
        store.clear()
        print("History cleared.")
        return 0
    records = store.entries()
    if not records:
        print("No analyses recorded yet.")
        return 0
    for rec in records:
        print(
            f"{rec.get('stored_at', '')[:19]}  {rec.get('safety_percentage', 0):>3}%  "
            f"{rec.get('safety_level', ''):<8} {rec.get('source_name', '')}  [{rec.get('id', '')[:8]}]"
        )
    return 0


def cmd_ask(args) -> int:
    question = " ".join(args.question)
    reply = advisor.answer(question)
    print(reply or advisor.GREETING)
    return 0


def cmd_catalog(args) -> int:
    catalog = _resolve_catalog(args.catalog)
    for e in catalog:
        print(f"{e.name:<12} {e.strength:<10} {e.risk:<10} {e.score:>3}  /{e.pattern.pattern}/")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cryptofinder",
        description="Detect cryptographic algorithms in firmware images and rate them.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("analyze", help="Analyze one firmware file")
    a.add_argument("file")
    a.add_argument("--pdf", default=None, help="Write a PDF report to this path")
    a.add_argument("--json", default=None, help="Write a JSON report to this path")
    a.add_argument("--catalog", default=None, help="JSON signature catalog to use")
    a.add_argument(
        "--no-history", action="store_true", help="Do not record this analysis"
    )
    a.set_defaults(func=cmd_analyze)

    s = sub.add_parser("scan", help="Locate signatures in files/directories")
    s.add_argument("paths", nargs="+")
    s.add_argument("--out", default="detections.ndjson")
    s.add_argument("--catalog", default=None)
    s.set_defaults(func=cmd_scan)

    h = sub.add_parser("history", help="List recorded analyses")
    h.add_argument("--clear", action="store_true")
    h.set_defaults(func=cmd_history)

    q = sub.add_parser("ask", help="Ask the advisor a question")
    q.add_argument("question", nargs="+")
    q.set_defaults(func=cmd_ask)

    c = sub.add_parser("catalog", help="List the signature catalog")
    c.add_argument("--catalog", default=None)
    c.set_defaults(func=cmd_catalog)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.getLevelName(get_log_level())
    if args.verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except CatalogConfigurationError as e:
        logger.error("Catalog configuration error: %s", e)
        return 2
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
