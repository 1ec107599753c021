import tkinter as tk

from stats import average_rate, monthly_rates_window, total_completions, windowed_daily_rates
from ui import theme

DAILY_WINDOW = 14
MONTHLY_WINDOW = 6


class StatsView(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 10))
        theme.heading_label(header, "Stats", theme.TITLE).pack(side="left")
        theme.ghost_button(header, "Refresh", self.refresh).pack(side="right")

        figures = tk.Frame(self, bg=theme.BG)
        figures.pack(fill="x", padx=16)
        self.total_var = self._figure(figures, "TOTAL COMPLETIONS")
        self.average_var = self._figure(figures, f"AVG. CONSISTENCY ({DAILY_WINDOW}D)")

        self.daily_card = self._section(f"Daily Consistency ({DAILY_WINDOW}d)")
        self.monthly_card = self._section(f"Monthly Performance ({MONTHLY_WINDOW}m)")

    def _figure(self, parent, caption: str):
        box = theme.card(parent)
        box.pack(side="left", fill="x", expand=True, padx=(0, 8), pady=4)
        theme.muted_label(box, caption, font=theme.SMALL).pack(anchor="w", padx=12, pady=(10, 0))
        var = tk.StringVar()
        tk.Label(box, textvariable=var, font=theme.TITLE, bg=theme.CARD_BG, fg=theme.TEXT).pack(
            anchor="w", padx=12, pady=(0, 10)
        )
        return var

    def _section(self, title: str):
        frame = theme.card(self)
        frame.pack(fill="x", padx=16, pady=8)
        tk.Label(
            frame, text=title, font=theme.HEADING, bg=theme.CARD_BG, fg=theme.TEXT
        ).pack(anchor="w", padx=12, pady=(10, 0))
        body = tk.Frame(frame, bg=theme.CARD_BG)
        body.pack(fill="x", padx=12, pady=8)
        return body

    def refresh(self):
        habits = self.controller.repo.list_habits()
        for body in (self.daily_card, self.monthly_card):
            for w in body.winfo_children():
                w.destroy()

        if not habits:
            self.total_var.set("0")
            self.average_var.set("0%")
            theme.muted_label(self.daily_card, "No habits yet.").pack(anchor="w")
            return

        daily = windowed_daily_rates(habits, DAILY_WINDOW)
        self.total_var.set(str(total_completions(habits)))
        self.average_var.set(f"{average_rate(daily)}%")
        theme.rate_bars(self.daily_card, daily).pack(anchor="w")
        theme.rate_bars(self.monthly_card, monthly_rates_window(habits, MONTHLY_WINDOW)).pack(
            anchor="w"
        )
