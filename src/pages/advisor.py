# src/pages/advisor.py
"""
CryptoFinder Advisor Page
--------------------------------
- Offline keyword advisor on cryptographic best practice
- Transcript persists across sessions through the history store
"""

import logging

import customtkinter as ctk

from core.advisor import ChatSession
from ui.nav import build_header
from ui.theme import (
    BG, CARD_BG, BORDER, TEXT, MUTED,
    PRIMARY, PRIMARY_H, OUTLINE_BR, OUTLINE_H,
    HEADING_FONT, BODY_FONT
)

logger = logging.getLogger(__name__)

SUGGESTIONS = (
    "What is AES?",
    "Is MD5 still safe?",
    "RSA key size?",
    "Best practices",
)


class AdvisorPage(ctk.CTkFrame):
    def __init__(self, master, switch_page):
        super().__init__(master, fg_color=BG)
        self.switch_page = switch_page
        self.session = ChatSession(master.history.load_chat())

        build_header(
            self,
            "Crypto Advisor",
            "Ask about algorithms, key sizes and migration away from weak primitives.",
            switch_page,
        )

        # ===== Transcript =====
        chat_card = ctk.CTkFrame(
            self, corner_radius=12, border_width=1,
            border_color=BORDER, fg_color=CARD_BG,
        )
        chat_card.pack(fill="both", expand=True, padx=22, pady=(6, 8))
        chat_card.grid_columnconfigure(0, weight=1)
        chat_card.grid_rowconfigure(0, weight=1)

        self.transcript = ctk.CTkTextbox(
            chat_card,
            corner_radius=8,
            fg_color=BG,
            border_color=BORDER,
            border_width=1,
            text_color=TEXT,
            wrap="word",
        )
        self.transcript.grid(row=0, column=0, sticky="nsew", padx=16, pady=(14, 8))

        chips = ctk.CTkFrame(chat_card, fg_color="transparent")
        chips.grid(row=1, column=0, sticky="w", padx=16)
        for q in SUGGESTIONS:
            ctk.CTkButton(
                chips, text=q, height=28, corner_radius=14,
                fg_color="transparent", border_width=1,
                border_color=OUTLINE_BR, hover_color=OUTLINE_H, text_color=MUTED,
                command=lambda q=q: self._send(q),
            ).pack(side="left", padx=(0, 6))

        # ===== Input row =====
        row = ctk.CTkFrame(chat_card, fg_color="transparent")
        row.grid(row=2, column=0, sticky="ew", padx=16, pady=(8, 14))
        row.grid_columnconfigure(0, weight=1)

        self.entry = ctk.CTkEntry(
            row, placeholder_text="Ask about cryptographic algorithms…",
            height=36, font=BODY_FONT,
        )
        self.entry.grid(row=0, column=0, sticky="ew")
        self.entry.bind("<Return>", lambda _e: self._send(self.entry.get()))

        ctk.CTkButton(
            row, text="Send", width=84, height=36, corner_radius=8,
            fg_color=PRIMARY, hover_color=PRIMARY_H, text_color=BG,
            command=lambda: self._send(self.entry.get()),
        ).grid(row=0, column=1, padx=(8, 0))

        ctk.CTkButton(
            row, text="Clear", width=84, height=36, corner_radius=8,
            fg_color="transparent", border_width=1, border_color=OUTLINE_BR,
            hover_color=OUTLINE_H, text_color=TEXT,
            command=self._clear,
        ).grid(row=0, column=2, padx=(8, 0))

        ctk.CTkLabel(self, text="Answers come from a built-in knowledge base.",
                     font=("Segoe UI", 11), text_color=MUTED)\
            .pack(anchor="w", padx=22, pady=(0, 12))

        self._render()

    # ===== Lifecycle =====
    def on_enter(self):
        self.entry.focus_set()

    # ===== Internal Methods =====
    def _send(self, question: str):
        if self.session.ask(question) is None:
            return
        self.entry.delete(0, "end")
        self._persist()
        self._render()

    def _clear(self):
        self.session.reset()
        self._persist()
        self._render()

    def _persist(self):
        try:
            self.master.history.save_chat(self.session.messages)
        except OSError as e:
            logger.warning("Could not save chat history: %s", e)

    def _render(self):
        self.transcript.configure(state="normal")
        self.transcript.delete("1.0", "end")
        for m in self.session.messages:
            who = "You" if m["role"] == "user" else "Advisor"
            self.transcript.insert("end", f"{who}:\n{m['content']}\n\n")
        self.transcript.configure(state="disabled")
        self.transcript.see("end")
