from __future__ import annotations

from tkinter import filedialog, messagebox

import customtkinter as ctk
import matplotlib

matplotlib.use("TkAgg")
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg  # noqa: E402

import report_export  # noqa: E402
from ui.nav import build_header  # noqa: E402
from ui.theme import (  # noqa: E402
    BG,
    BODY_FONT,
    BORDER,
    CARD_BG,
    DANGER,
    HEADING_FONT,
    MUTED,
    PRIMARY,
    PRIMARY_H,
    RISK_TEXT,
    SAFETY_TEXT,
    SCORE_FONT,
    TEXT,
)


class ResultsPage(ctk.CTkFrame):
    """Results page: safety score, detected algorithms and export.

    Renders `master.current_report`; with no report it shows a prompt to
    analyze a file from the dashboard.
    """

    def __init__(self, master, switch_page):
        super().__init__(master, fg_color=BG)
        self.switch_page = switch_page
        self._canvas = None

        build_header(
            self,
            "Analysis Results",
            "Cryptographic algorithms detected in the analyzed firmware.",
            switch_page,
        )

        self.body = ctk.CTkScrollableFrame(self, fg_color="transparent")
        self.body.pack(fill="both", expand=True, padx=22, pady=(6, 6))
        self.body.grid_columnconfigure(0, weight=1)

        # Sticky bottom bar
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.pack(fill="x", padx=22, pady=(4, 12))
        self.status = ctk.CTkLabel(bottom, text="", font=BODY_FONT, text_color=MUTED)
        self.status.pack(side="left")
        self.pdf_btn = ctk.CTkButton(
            bottom, text="Download PDF Report", height=34, corner_radius=8,
            fg_color=PRIMARY, hover_color=PRIMARY_H, text_color=BG,
            command=self._export_pdf,
        )
        self.pdf_btn.pack(side="right", padx=(8, 0))
        self.json_btn = ctk.CTkButton(
            bottom, text="Export JSON", height=34, corner_radius=8,
            fg_color="transparent", border_width=1, border_color=BORDER,
            text_color=TEXT, command=self._export_json,
        )
        self.json_btn.pack(side="right")

    # ---------- Lifecycle hooks ----------
    def on_enter(self):
        self.render(getattr(self.master, "current_report", None))

    def render(self, report):
        for w in self.body.winfo_children():
            w.destroy()
        self._canvas = None
        self._set_status("")

        state = "normal" if report is not None else "disabled"
        self.pdf_btn.configure(state=state)
        self.json_btn.configure(state=state)

        if report is None:
            ctk.CTkLabel(
                self.body,
                text="No analysis yet. Upload a firmware file on the dashboard.",
                font=BODY_FONT, text_color=MUTED,
            ).grid(row=0, column=0, pady=40)
            return

        self._build_overview(report).grid(row=0, column=0, sticky="ew", pady=(0, 10))
        self._build_table(report).grid(row=1, column=0, sticky="ew", pady=(0, 10))
        self._build_chart(report).grid(row=2, column=0, sticky="ew")

    # ---------- Sections ----------
    def _card(self):
        return ctk.CTkFrame(self.body, corner_radius=12, border_width=1,
                            border_color=BORDER, fg_color=CARD_BG)

    def _build_overview(self, report):
        card = self._card()
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(card, text="Overview", font=HEADING_FONT, text_color=TEXT)\
            .grid(row=0, column=0, sticky="w", padx=16, pady=(12, 4))
        meta = f"File: {report.source_name}    Size: {report.size_label}    Date: {report.timestamp}"
        ctk.CTkLabel(card, text=meta, font=BODY_FONT, text_color=MUTED)\
            .grid(row=1, column=0, sticky="w", padx=16)
        ctk.CTkLabel(card, text=report.summary, font=BODY_FONT, text_color=TEXT)\
            .grid(row=2, column=0, sticky="w", padx=16, pady=(6, 12))
        if report.assumed_baseline:
            ctk.CTkLabel(
                card,
                text="No known signatures matched; a baseline secure configuration is assumed.",
                font=BODY_FONT, text_color=MUTED,
            ).grid(row=3, column=0, sticky="w", padx=16, pady=(0, 12))

        color = SAFETY_TEXT.get(report.safety_level, DANGER)
        score = ctk.CTkFrame(card, fg_color="transparent")
        score.grid(row=0, column=1, rowspan=4, sticky="e", padx=16, pady=12)
        ctk.CTkLabel(score, text=f"{report.safety_percentage}%", font=SCORE_FONT, text_color=color)\
            .pack(anchor="e")
        ctk.CTkLabel(score, text=f"Safety: {report.safety_level}", font=BODY_FONT, text_color=color)\
            .pack(anchor="e")
        return card

    def _build_table(self, report):
        card = self._card()
        ctk.CTkLabel(card, text="Detected Algorithms", font=HEADING_FONT, text_color=TEXT)\
            .grid(row=0, column=0, columnspan=4, sticky="w", padx=16, pady=(12, 6))
        for i, col in enumerate(("Algorithm", "Strength", "Risk", "Score")):
            card.grid_columnconfigure(i, weight=1)
            ctk.CTkLabel(card, text=col, font=("Segoe UI", 13, "bold"), text_color=MUTED)\
                .grid(row=1, column=i, sticky="w", padx=16)
        for r, alg in enumerate(report.detected, start=2):
            ctk.CTkLabel(card, text=alg.name, font=BODY_FONT, text_color=TEXT)\
                .grid(row=r, column=0, sticky="w", padx=16, pady=2)
            ctk.CTkLabel(card, text=alg.strength, font=BODY_FONT, text_color=TEXT)\
                .grid(row=r, column=1, sticky="w", padx=16, pady=2)
            ctk.CTkLabel(card, text=alg.risk, font=BODY_FONT,
                         text_color=RISK_TEXT.get(alg.risk.lower(), TEXT))\
                .grid(row=r, column=2, sticky="w", padx=16, pady=2)
            ctk.CTkLabel(card, text=str(alg.score), font=BODY_FONT, text_color=TEXT)\
                .grid(row=r, column=3, sticky="w", padx=16, pady=2)
        ctk.CTkLabel(card, text="").grid(row=len(report.detected) + 2, column=0, pady=(0, 6))
        return card

    def _build_chart(self, report):
        card = self._card()
        fig = report_export.score_chart(report, figsize=(7, max(2.0, 0.45 * len(report.detected) + 1)))
        self._canvas = FigureCanvasTkAgg(fig, master=card)
        self._canvas.draw()
        self._canvas.get_tk_widget().pack(fill="x", padx=12, pady=12)
        return card

    # ---------- Export ----------
    def _export_pdf(self):
        self._export("pdf", report_export.export_pdf, [("PDF files", "*.pdf")])

    def _export_json(self):
        self._export("json", report_export.export_json, [("JSON files", "*.json")])

    def _export(self, ext, writer, filetypes):
        report = getattr(self.master, "current_report", None)
        if report is None:
            messagebox.showinfo("Nothing to Export", "No report is loaded.",
                                parent=self.winfo_toplevel())
            return
        path = filedialog.asksaveasfilename(
            parent=self.winfo_toplevel(),
            title=f"Export report as {ext.upper()}",
            defaultextension=f".{ext}",
            filetypes=filetypes + [("All files", "*.*")],
            initialfile=report_export.report_filename(report, ext),
        )
        if not path:
            return
        try:
            saved = writer(report, path)
        except OSError as e:
            self._set_status(f"Failed to export: {e}", error=True)
            return
        self._set_status(f"Saved {saved.name}")

    def _set_status(self, text: str, error: bool = False):
        self.status.configure(text=text, text_color=DANGER if error else MUTED)
