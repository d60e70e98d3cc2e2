# src/ui/theme.py
"""
CryptoFinder dark theme
-----------------------
- Navy surfaces with a cyan accent
- Traffic-light colors shared by the score, risk column and charts
"""

# === Core Surfaces ===
BG         = "#0B1220"   # Main window background
CARD_BG    = "#15202E"   # Cards / panels
BORDER     = "#243244"   # Card borders and dividers

# === Typography Colors ===
TEXT       = "#E2E8F0"
MUTED      = "#94A3B8"

# === Accent ===
PRIMARY    = "#00CCCC"
PRIMARY_H  = "#00A3A3"

# === Outlines / Neutral Buttons ===
OUTLINE_BR = "#30363D"
OUTLINE_H  = "#1F2A37"

# === Safety / Risk ===
GOOD       = "#22C55E"
CAUTION    = "#EAB308"
DANGER     = "#EF4444"

RISK_TEXT = {"low": GOOD, "medium": CAUTION, "high": DANGER, "critical": DANGER}
SAFETY_TEXT = {"Good": GOOD, "Caution": CAUTION, "Danger": DANGER}

# === Fonts ===
TITLE_FONT   = ("Segoe UI", 32, "bold")
HEADING_FONT = ("Segoe UI", 20, "bold")
BODY_FONT    = ("Segoe UI", 13)
SCORE_FONT   = ("Segoe UI", 40, "bold")
MONO_FONT    = ("Consolas", 12)
