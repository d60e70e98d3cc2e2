# src/pages/dashboard.py
"""
CryptoFinder Dashboard Page
--------------------------------
- Drag & drop or pick a firmware file (.bin / .img / text)
- Analysis runs on a worker thread; results page opens when done
"""

import threading
from typing import Any, Dict

import customtkinter as ctk

from file_handler import FileDropController, analyze_upload, open_file_picker
from ui.nav import build_header
from ui.theme import BG, BORDER, BODY_FONT, CARD_BG, DANGER, HEADING_FONT, MUTED, PRIMARY, PRIMARY_H, TEXT


class DashboardPage(ctk.CTkFrame):
    """Dashboard: firmware upload and analysis."""

    def __init__(self, master, switch_page, file_handler):
        super().__init__(master, fg_color=BG)
        self.switch_page = switch_page
        self.fh = file_handler
        self._busy = False

        build_header(
            self,
            "Firmware Analysis Dashboard",
            "Upload your firmware files for cryptographic security analysis.",
            switch_page,
        )

        # === Upload Section ===
        upload_card = ctk.CTkFrame(self, corner_radius=12, border_width=1,
                                   border_color=BORDER, fg_color=CARD_BG)
        upload_card.pack(fill="x", padx=22, pady=(16, 10))
        upload_card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(upload_card, text="Analyze by Upload", font=HEADING_FONT, text_color=TEXT)\
            .grid(row=0, column=0, sticky="w", padx=16, pady=(14, 2))
        ctk.CTkLabel(upload_card, text="Supported formats: .bin, .img and text files",
                     font=BODY_FONT, text_color=MUTED)\
            .grid(row=1, column=0, sticky="w", padx=16)

        self.drop_area = ctk.CTkFrame(
            upload_card, height=180,
            corner_radius=10, border_width=2, border_color=BORDER, fg_color=BG
        )
        self.drop_area.grid(row=2, column=0, sticky="ew", padx=16, pady=(8, 8))
        self.drop_area.grid_propagate(False)

        self.drop_label = ctk.CTkLabel(
            self.drop_area, text="Drop your firmware file here",
            font=("Segoe UI", 15, "bold"), text_color=TEXT,
        )
        self.drop_label.place(relx=0.5, rely=0.45, anchor="center")

        self.pick_btn = ctk.CTkButton(
            upload_card, text="Select Firmware File",
            width=180, height=36, corner_radius=8,
            fg_color=PRIMARY, hover_color=PRIMARY_H, text_color=BG,
            command=lambda: open_file_picker(self, self.fh, self._on_processed, self._set_status),
        )
        self.pick_btn.grid(row=3, column=0, sticky="w", padx=16, pady=(0, 8))

        self.status = ctk.CTkLabel(upload_card, text="", font=BODY_FONT, text_color=MUTED)
        self.status.grid(row=4, column=0, sticky="w", padx=16, pady=(0, 14))

        try:
            FileDropController(
                self.drop_area, self.fh, self._on_processed,
                on_status=self._set_status, on_border=self._set_border,
            )
        except (RuntimeError, AttributeError) as e:
            self.drop_label.configure(text="Drag & drop unavailable, use the button below")
            self._set_status(str(e), error=True)

        # === Catalog overview ===
        stats = ctk.CTkFrame(self, fg_color="transparent")
        stats.pack(fill="x", padx=22, pady=(8, 8))
        for col, (value, label) in enumerate((
            (str(len(master.catalog)), "Known Signatures"),
            ("Offline", "All analysis stays on this machine"),
            ("PDF", "Exportable Reports"),
        )):
            stats.grid_columnconfigure(col, weight=1)
            card = ctk.CTkFrame(stats, corner_radius=12, border_width=1,
                                border_color=BORDER, fg_color=CARD_BG)
            card.grid(row=0, column=col, sticky="ew", padx=(0 if col == 0 else 8, 0))
            ctk.CTkLabel(card, text=value, font=HEADING_FONT, text_color=PRIMARY)\
                .pack(anchor="w", padx=16, pady=(12, 0))
            ctk.CTkLabel(card, text=label, font=BODY_FONT, text_color=MUTED)\
                .pack(anchor="w", padx=16, pady=(0, 12))

    # ---- callbacks ----
    def _set_status(self, msg: str, error: bool = False):
        self.status.configure(text=msg, text_color=DANGER if error else MUTED)

    def _set_border(self, color):
        self.drop_area.configure(border_color=color or BORDER)

    def _set_busy(self, busy: bool):
        self._busy = busy
        self.pick_btn.configure(state="disabled" if busy else "normal")
        if busy:
            self.drop_label.configure(text="Analyzing Firmware…")
        else:
            self.drop_label.configure(text="Drop your firmware file here")

    def _on_processed(self, meta: Dict[str, Any]):
        if self._busy:
            self._set_status("An analysis is already running.", error=True)
            return
        self._set_busy(True)
        self._set_status(f"Detecting cryptographic algorithms in {meta['filename']}…")
        catalog = self.master.catalog

        def _worker():
            analyze_upload(
                meta,
                catalog,
                on_done=lambda report: self.after(0, self._on_report, report),
                on_error=lambda msg: self.after(0, self._on_failed, msg),
            )

        threading.Thread(target=_worker, daemon=True).start()

    def _on_failed(self, msg: str):
        self._set_busy(False)
        self._set_status(msg, error=True)

    def _on_report(self, report):
        self._set_busy(False)
        self._set_status("Firmware analysis complete!")
        self.master.show_report(report)
