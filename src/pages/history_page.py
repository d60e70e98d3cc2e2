"""History page: the most recent analyses, newest first."""

import customtkinter as ctk

from core.models import AnalysisReport
from ui.nav import build_header
from ui.theme import (
    BG, BODY_FONT, BORDER, CARD_BG, DANGER, MUTED,
    OUTLINE_BR, OUTLINE_H, SAFETY_TEXT, TEXT,
)


class HistoryPage(ctk.CTkFrame):
    def __init__(self, master, switch_page):
        super().__init__(master, fg_color=BG)
        self.switch_page = switch_page

        build_header(
            self,
            "Analysis History",
            "Previously analyzed firmware files. Select one to reopen its results.",
            switch_page,
        )

        self.table = ctk.CTkScrollableFrame(
            self, corner_radius=12, border_width=1,
            border_color=BORDER, fg_color=CARD_BG,
        )
        self.table.pack(fill="both", expand=True, padx=22, pady=(6, 6))
        for i in range(4):
            self.table.grid_columnconfigure(i, weight=1 if i == 0 else 0)

        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.pack(fill="x", padx=22, pady=(4, 12))
        ctk.CTkButton(
            bottom, text="Clear History", height=32, corner_radius=8,
            fg_color="transparent", border_width=1, border_color=OUTLINE_BR,
            hover_color=OUTLINE_H, text_color=TEXT, command=self._clear,
        ).pack(side="right")

    def on_enter(self):
        self.refresh()

    def refresh(self):
        for w in self.table.winfo_children():
            w.destroy()

        records = self.master.history.entries()
        if not records:
            ctk.CTkLabel(self.table, text="No analyses recorded yet.",
                         font=BODY_FONT, text_color=MUTED)\
                .grid(row=0, column=0, sticky="w", padx=12, pady=12)
            return

        for i, col in enumerate(("File", "Analyzed", "Safety", "")):
            ctk.CTkLabel(self.table, text=col, font=("Segoe UI", 13, "bold"), text_color=MUTED)\
                .grid(row=0, column=i, sticky="w", padx=12, pady=(8, 4))

        for r, rec in enumerate(records, start=1):
            level = rec.get("safety_level", "")
            ctk.CTkLabel(self.table, text=rec.get("source_name", ""), font=BODY_FONT, text_color=TEXT)\
                .grid(row=r, column=0, sticky="w", padx=12, pady=3)
            ctk.CTkLabel(self.table, text=str(rec.get("timestamp", "")), font=BODY_FONT, text_color=MUTED)\
                .grid(row=r, column=1, sticky="w", padx=12, pady=3)
            ctk.CTkLabel(
                self.table,
                text=f"{rec.get('safety_percentage', 0)}% {level}",
                font=BODY_FONT,
                text_color=SAFETY_TEXT.get(level, DANGER),
            ).grid(row=r, column=2, sticky="w", padx=12, pady=3)
            ctk.CTkButton(
                self.table, text="Open", width=70, height=28, corner_radius=8,
                fg_color="transparent", border_width=1, border_color=OUTLINE_BR,
                hover_color=OUTLINE_H, text_color=TEXT,
                command=lambda rec=rec: self._open(rec),
            ).grid(row=r, column=3, sticky="e", padx=12, pady=3)

    def _open(self, rec):
        self.master.show_report(AnalysisReport.from_dict(rec), record=False)

    def _clear(self):
        self.master.history.clear()
        self.master.current_report = None
        self.refresh()
