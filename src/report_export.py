"""Report export: JSON documents and matplotlib-rendered PDF reports.

The PDF has the sections of the on-screen results: title, file metadata,
safety score and a table of {Algorithm, Strength, Risk} per detection.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from core.models import SAFETY_CAUTION, SAFETY_GOOD, AnalysisReport

logger = logging.getLogger(__name__)

TITLE = "CryptoFinder Security Report"
ACCENT = "#00CCCC"
META_COLOR = "#646464"

LEVEL_COLORS = {
    SAFETY_GOOD: "#22C55E",
    SAFETY_CAUTION: "#EAB308",
}
DANGER_COLOR = "#EF4444"

RISK_COLORS = {
    "Low": "#22C55E",
    "Medium": "#EAB308",
    "High": "#EF4444",
    "Critical": "#EF4444",
}


def level_color(level: str) -> str:
    return LEVEL_COLORS.get(level, DANGER_COLOR)


def report_filename(report: AnalysisReport, ext: str) -> str:
    # keep the original name readable but filesystem-safe
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", report.source_name).strip("_") or "firmware"
    return f"CryptoFinder_Report_{safe}.{ext.lstrip('.')}"


def export_json(report: AnalysisReport, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Wrote JSON report %s", p)
    return p


def render_report_figure(report: AnalysisReport) -> Figure:
    """One A4 page describing `report`."""
    fig = Figure(figsize=(8.27, 11.69))
    fig.text(0.08, 0.95, TITLE, fontsize=20, color=ACCENT, weight="bold")

    fig.text(0.08, 0.91, f"File: {report.source_name}", fontsize=12, color=META_COLOR)
    fig.text(0.08, 0.89, f"Size: {report.size_label}", fontsize=12, color=META_COLOR)
    fig.text(0.08, 0.87, f"Date: {report.timestamp}", fontsize=12, color=META_COLOR)

    fig.text(
        0.08,
        0.82,
        f"Safety Score: {report.safety_percentage}% ({report.safety_level})",
        fontsize=16,
        color=level_color(report.safety_level),
        weight="bold",
    )
    fig.text(0.08, 0.80, report.summary, fontsize=10, color=META_COLOR)
    if report.assumed_baseline:
        fig.text(
            0.08,
            0.78,
            "No known signatures matched; a baseline secure configuration is assumed.",
            fontsize=9,
            color=META_COLOR,
            style="italic",
        )

    fig.text(0.08, 0.74, "Detected Algorithms:", fontsize=14, color=ACCENT)

    rows = [[a.name, a.strength, a.risk] for a in report.detected]
    # table height grows with the number of rows, capped to the page
    height = min(0.68, 0.035 * (len(rows) + 1))
    ax = fig.add_axes([0.08, 0.72 - height, 0.84, height])
    ax.axis("off")
    table = ax.table(
        cellText=rows,
        colLabels=["Algorithm", "Strength", "Risk"],
        loc="upper center",
        cellLoc="left",
        colLoc="left",
    )
    table.auto_set_font_size(False)
    table.set_fontsize(10)
    for (row, col), cell in table.get_celld().items():
        if row == 0:
            cell.set_text_props(weight="bold")
        elif col == 2:
            cell.set_text_props(color=RISK_COLORS.get(rows[row - 1][2], "black"))
    return fig


def export_pdf(report: AnalysisReport, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig = render_report_figure(report)
    with PdfPages(str(p)) as pdf:
        pdf.savefig(fig)
        info = pdf.infodict()
        info["Title"] = f"{TITLE}: {report.source_name}"
        info["Subject"] = report.summary
    logger.info("Wrote PDF report %s", p)
    return p


def score_chart(report: AnalysisReport, figsize=(6, 3)) -> Figure:
    """Horizontal bar chart of per-algorithm scores (results page)."""
    fig = Figure(figsize=figsize)
    ax = fig.add_subplot(111)
    names = [a.name for a in report.detected]
    scores = [a.score for a in report.detected]
    colors = [RISK_COLORS.get(a.risk, DANGER_COLOR) for a in report.detected]
    ax.barh(range(len(names))[::-1], scores, color=colors)
    ax.set_yticks(range(len(names))[::-1])
    ax.set_yticklabels(names)
    ax.set_xlim(0, 100)
    ax.set_xlabel("Strength score")
    ax.set_title("Algorithm strength")
    fig.tight_layout()
    return fig
