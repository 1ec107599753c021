"""Shared visual style helpers for the Tk UI (neutral minimalist palette)."""

import tkinter as tk

# Palette (white surfaces, near-black ink)
BG = "#ffffff"
CARD_BG = "#fafafa"
BORDER = "#e5e5e5"
TEXT = "#171717"
MUTED = "#737373"
ACCENT = "#171717"
ACCENT_DARK = "#404040"
SUCCESS = "#171717"
EMPTY_CELL = "#f5f5f5"
DANGER = "#dc2626"
HILITE = "#f5f5f5"
NOTE = "#f59e0b"         # amber dot for days with a note

# Typography
FONT_FAMILY = "Helvetica"
TITLE = (FONT_FAMILY, 18, "bold")
SUBTITLE = (FONT_FAMILY, 12)
HEADING = (FONT_FAMILY, 12, "bold")
BODY = (FONT_FAMILY, 11)
SMALL = (FONT_FAMILY, 9)
BUTTON = (FONT_FAMILY, 10, "bold")
MONO = ("Courier", 10)


def card(parent, **kwargs):
    """Flat frame with a hairline border."""
    return tk.Frame(
        parent,
        bg=CARD_BG,
        bd=0,
        highlightbackground=BORDER,
        highlightthickness=1,
        **kwargs,
    )


def heading_label(parent, text, font=TITLE):
    return tk.Label(parent, text=text, bg=parent.cget("bg"), fg=TEXT, font=font)


def muted_label(parent, text, font=BODY, wrap=None):
    return tk.Label(
        parent,
        text=text,
        bg=parent.cget("bg"),
        fg=MUTED,
        font=font,
        justify="left",
        wraplength=wrap,
        anchor="w",
    )


def primary_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=ACCENT,
        fg=BG,
        activebackground=ACCENT_DARK,
        activeforeground=BG,
        relief="flat",
        bd=0,
        font=BUTTON,
        padx=14,
        pady=7,
        cursor="hand2",
        highlightthickness=0,
    )


def ghost_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=BG,
        fg=TEXT,
        activebackground=HILITE,
        activeforeground=TEXT,
        relief="solid",
        bd=1,
        font=BUTTON,
        padx=12,
        pady=6,
        cursor="hand2",
    )


def entry(parent):
    return tk.Entry(
        parent,
        bg=BG,
        fg=TEXT,
        relief="solid",
        bd=1,
        highlightbackground=BORDER,
        highlightcolor=ACCENT,
        font=BODY,
    )


def day_cell(parent, text, done: bool, command, has_note: bool = False):
    """Square toggle used by the tracker grid and the month calendar."""
    return tk.Button(
        parent,
        text=text,
        command=command,
        width=3,
        bg=SUCCESS if done else EMPTY_CELL,
        fg=BG if done else (NOTE if has_note else MUTED),
        activebackground=ACCENT_DARK,
        activeforeground=BG,
        relief="flat",
        bd=0,
        font=BUTTON,
        cursor="hand2",
    )


def rate_bars(parent, points, width: int = 24):
    """Render (label, rate) points as a column of text bars."""
    frame = tk.Frame(parent, bg=parent.cget("bg"))
    for point in points:
        filled = round(point.rate * width / 100)
        line = f"{point.label:>7} {'█' * filled}{'·' * (width - filled)} {point.rate:>3}%"
        tk.Label(
            frame, text=line, font=MONO, bg=frame.cget("bg"), fg=TEXT, anchor="w"
        ).pack(fill="x")
    return frame
