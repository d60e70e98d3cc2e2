import json

import matplotlib

matplotlib.use("Agg")

from core.engine import analyze  # noqa: E402
from core.models import AnalysisReport  # noqa: E402
from report_export import (  # noqa: E402
    export_json,
    export_pdf,
    level_color,
    render_report_figure,
    report_filename,
    score_chart,
)


def _report():
    return analyze(
        "using aes-256 and sha1 for legacy compat",
        "router fw v1.2.bin",
        timestamp="2024-01-01T00:00:00+00:00",
    )


def test_report_filename_is_filesystem_safe():
    assert report_filename(_report(), "pdf") == "CryptoFinder_Report_router_fw_v1.2.bin.pdf"
    assert report_filename(_report(), ".json").endswith(".bin.json")


def test_level_colors_differ():
    assert len({level_color("Good"), level_color("Caution"), level_color("Danger")}) == 3


def test_export_json_roundtrip(tmp_path):
    r = _report()
    out = export_json(r, tmp_path / "nested" / "r.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["safety_percentage"] == 65
    assert data["safety_level"] == "Caution"
    assert AnalysisReport.from_dict(data) == r


def test_render_figure_contains_sections():
    fig = render_report_figure(_report())
    texts = [t.get_text() for t in fig.texts]
    assert "CryptoFinder Security Report" in texts
    assert "File: router fw v1.2.bin" in texts
    assert "Safety Score: 65% (Caution)" in texts
    table = fig.axes[0].tables[0]
    cells = {k: c.get_text().get_text() for k, c in table.get_celld().items()}
    assert cells[(0, 0)] == "Algorithm"
    assert cells[(1, 0)] == "AES-256"
    assert cells[(2, 2)] == "High"


def test_export_pdf_writes_pdf(tmp_path):
    out = export_pdf(_report(), tmp_path / "report.pdf")
    assert out.read_bytes().startswith(b"%PDF")


def test_score_chart_has_one_bar_per_algorithm():
    fig = score_chart(_report())
    assert len(fig.axes[0].patches) == 2
