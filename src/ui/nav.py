"""Shared page header with title, subtitle and navigation buttons."""

import customtkinter as ctk

from ui.theme import HEADING_FONT, MUTED, OUTLINE_BR, OUTLINE_H, TEXT

NAV_ITEMS = (
    ("dashboard", "Dashboard"),
    ("results", "Results"),
    ("history", "History"),
    ("advisor", "Advisor"),
)


def build_header(parent, title: str, subtitle: str, switch_page) -> ctk.CTkFrame:
    header = ctk.CTkFrame(parent, fg_color="transparent")
    header.pack(fill="x", padx=22, pady=(16, 6))
    header.grid_columnconfigure(0, weight=1)

    ctk.CTkLabel(header, text=title, font=HEADING_FONT, text_color=TEXT)\
        .grid(row=0, column=0, sticky="w")
    ctk.CTkLabel(header, text=subtitle, font=("Segoe UI", 12), text_color=MUTED)\
        .grid(row=1, column=0, sticky="w")

    nav = ctk.CTkFrame(header, fg_color="transparent")
    nav.grid(row=0, column=1, rowspan=2, sticky="e")
    for name, label in NAV_ITEMS:
        ctk.CTkButton(
            nav,
            text=label,
            width=92,
            height=30,
            corner_radius=8,
            fg_color="transparent",
            border_width=1,
            border_color=OUTLINE_BR,
            hover_color=OUTLINE_H,
            text_color=TEXT,
            command=lambda n=name: switch_page(n),
        ).pack(side="left", padx=(6, 0))
    return header
