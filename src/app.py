import logging

import customtkinter as ctk
from tkinterdnd2 import TkinterDnD

from core import catalog as signatures
from file_handler import FileHandler
from history import HistoryStore
from pages import AdvisorPage, DashboardPage, HistoryPage, ResultsPage
from settings import get_catalog_path, get_log_level, get_max_upload_bytes

logger = logging.getLogger(__name__)


class App(ctk.CTk, TkinterDnD.DnDWrapper):
    def __init__(self):
        super().__init__()
        # load the tkdnd Tcl package into this interpreter
        self.TkdndVersion = TkinterDnD._require(self)

        self.title("CryptoFinder")
        self.geometry("1200x800")
        self.minsize(900, 600)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        configured = get_catalog_path()
        self.catalog = (
            signatures.load_catalog(configured) if configured else signatures.entries()
        )
        self.file_handler = FileHandler(max_bytes=get_max_upload_bytes())
        self.history = HistoryStore()
        self.current_report = self.history.current()

        self._pages = {
            "dashboard": DashboardPage(self, self.switch_page, self.file_handler),
            "results": ResultsPage(self, self.switch_page),
            "history": HistoryPage(self, self.switch_page),
            "advisor": AdvisorPage(self, self.switch_page),
        }
        for p in self._pages.values():
            p.grid(row=0, column=0, sticky="nsew")
            p.grid_remove()

        self._current_page_name = "dashboard"
        self.switch_page(self._current_page_name)

    # -------- Navigation --------
    def switch_page(self, name: str):
        self._current_page_name = name
        for n, page in self._pages.items():
            if n == name:
                page.grid()
                if hasattr(page, "on_enter"):
                    page.on_enter()
            else:
                page.grid_remove()

    def show_report(self, report, record: bool = True):
        """Make `report` current (optionally recording it) and open results."""
        self.current_report = report
        if record:
            try:
                self.history.record(report)
            except OSError as e:
                logger.warning("Could not save analysis history: %s", e)
        self.switch_page("results")


if __name__ == "__main__":
    logging.basicConfig(level=get_log_level())
    ctk.set_appearance_mode("dark")
    ctk.set_default_color_theme("dark-blue")
    App().mainloop()
