import logging
import tkinter as tk
import tkinter.messagebox as mbox
from tkinter import ttk

import config
import exporter
from ui import theme

logger = logging.getLogger(__name__)

RANGE_LABELS = {
    "Current month": "current_month",
    "Last 30 days": "last_30",
    "All time": "all_time",
    "Custom": "custom",
}


class ExportView(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 6))
        theme.heading_label(header, "Data & Export", theme.TITLE).pack(anchor="w")
        theme.muted_label(
            header, f"Files are written to {config.EXPORT_PATH.resolve()}", wrap=720
        ).pack(anchor="w", pady=(4, 0))

        form = theme.card(self)
        form.pack(fill="x", padx=16, pady=8)
        inner = tk.Frame(form, bg=theme.CARD_BG)
        inner.pack(fill="x", padx=12, pady=10)
        inner.columnconfigure(1, weight=1)

        tk.Label(inner, text="Range", bg=theme.CARD_BG, fg=theme.TEXT, font=theme.BODY).grid(
            row=0, column=0, sticky="w", pady=4
        )
        self.range = ttk.Combobox(inner, values=list(RANGE_LABELS), state="readonly")
        self.range.set("Current month")
        self.range.grid(row=0, column=1, sticky="ew", padx=8, pady=4)

        tk.Label(
            inner, text="Custom (YYYY-MM-DD)", bg=theme.CARD_BG, fg=theme.TEXT, font=theme.BODY
        ).grid(row=1, column=0, sticky="w", pady=4)
        bounds = tk.Frame(inner, bg=theme.CARD_BG)
        bounds.grid(row=1, column=1, sticky="ew", padx=8)
        self.custom_start = theme.entry(bounds)
        self.custom_start.pack(side="left", fill="x", expand=True)
        tk.Label(bounds, text=" to ", bg=theme.CARD_BG, fg=theme.MUTED).pack(side="left")
        self.custom_end = theme.entry(bounds)
        self.custom_end.pack(side="left", fill="x", expand=True)

        actions = tk.Frame(self, bg=theme.BG)
        actions.pack(fill="x", padx=16, pady=8)
        theme.primary_button(actions, "Copy Markdown", self.copy_markdown).pack(side="left")
        theme.ghost_button(actions, "Save Markdown", self.save_markdown).pack(side="left", padx=8)
        theme.ghost_button(actions, "Save CSV", self.save_csv).pack(side="left")
        theme.ghost_button(actions, "Backup JSON", self.save_json).pack(side="left", padx=8)

        self.status = theme.muted_label(self, "", wrap=720)
        self.status.pack(anchor="w", padx=16, pady=(4, 0))

    def refresh(self):
        self.status.configure(text="")

    def _range(self):
        return exporter.resolve_export_range(
            RANGE_LABELS[self.range.get()],
            self.controller.repo.list_habits(),
            custom_start=self.custom_start.get(),
            custom_end=self.custom_end.get(),
        )

    def _write(self, content: str, prefix: str, extension: str):
        filename = exporter.export_filename(prefix, extension)
        try:
            path = exporter.write_export(content, filename, config.EXPORT_PATH)
        except OSError as exc:
            logger.exception("Export failed")
            mbox.showerror("Export failed", f"Could not write {filename}:\n{exc}")
            return
        self.status.configure(text=f"Saved {path}")

    def copy_markdown(self):
        start, end = self._range()
        markdown = exporter.to_markdown(self.controller.repo.list_habits(), start, end)
        self.clipboard_clear()
        self.clipboard_append(markdown)
        self.status.configure(text="Markdown copied to the clipboard.")

    def save_markdown(self):
        start, end = self._range()
        markdown = exporter.to_markdown(self.controller.repo.list_habits(), start, end)
        self._write(markdown, exporter.MARKDOWN_PREFIX, "md")

    def save_csv(self):
        start, end = self._range()
        self._write(
            exporter.to_csv(self.controller.repo.list_habits(), start, end),
            exporter.CSV_PREFIX,
            "csv",
        )

    def save_json(self):
        self._write(exporter.to_json(self.controller.repo.list_habits()), exporter.BACKUP_PREFIX, "json")
