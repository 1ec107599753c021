# ui/dashboard.py (Tracker screen)
import tkinter as tk
import tkinter.messagebox as mbox
from datetime import date

from dates import to_date_key
from models import is_completed, note_for
from stats import day_label, window_days
from ui import theme

GRID_DAYS = 7


class Dashboard(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 6))
        theme.heading_label(header, "Tracker", theme.TITLE).pack(side="left", anchor="w")
        theme.primary_button(header, "New Habit", lambda: controller.show("CreateHabit")).pack(
            side="right"
        )

        theme.muted_label(
            self,
            "Click a day to toggle it. Click a habit name for its month view and notes. "
            "Up/Down selects a row, Delete removes the selected habit.",
            wrap=720,
        ).pack(anchor="w", padx=16, pady=(0, 8))

        self.grid_card = theme.card(self)
        self.grid_card.pack(fill="both", expand=True, padx=16, pady=(0, 12))

        # keep runtime state
        self.rows = []  # list of dicts: {"frame":..., "id":..., "name":...}
        self.selected_idx = None

        self.bind_all("<Up>", self._move_up)
        self.bind_all("<Down>", self._move_down)
        self.bind_all("<Delete>", self._delete_selected)

    def refresh(self):
        for w in self.grid_card.winfo_children():
            w.destroy()
        self.rows.clear()
        self.selected_idx = None

        habits = self.controller.repo.list_habits()
        if not habits:
            empty = tk.Frame(self.grid_card, bg=theme.CARD_BG)
            empty.pack(fill="x", pady=6, padx=2)
            tk.Label(
                empty, text="No habits yet.", font=theme.HEADING, bg=theme.CARD_BG, fg=theme.TEXT
            ).pack(anchor="w", padx=12, pady=(10, 2))
            theme.muted_label(
                empty, "Create your first habit to start tracking.", wrap=700
            ).pack(anchor="w", padx=12, pady=(0, 12))
            return

        days = window_days(GRID_DAYS, date.today())
        head = tk.Frame(self.grid_card, bg=theme.CARD_BG)
        head.pack(fill="x", padx=12, pady=(10, 4))
        tk.Label(head, text="", width=22, bg=theme.CARD_BG).pack(side="left")
        for d in days:
            tk.Label(
                head,
                text=day_label(d),
                width=7,
                font=theme.SMALL,
                bg=theme.CARD_BG,
                fg=theme.TEXT if d == date.today() else theme.MUTED,
            ).pack(side="left")

        for i, habit in enumerate(habits):
            row = tk.Frame(
                self.grid_card,
                bg=theme.CARD_BG,
                highlightthickness=1,
                highlightbackground=theme.BORDER,
                padx=12,
                pady=8,
            )
            row.pack(fill="x", padx=12, pady=3)

            name = tk.Label(
                row,
                text=habit.name,
                width=20,
                anchor="w",
                bg=row.cget("bg"),
                fg=theme.TEXT,
                font=theme.SUBTITLE,
                cursor="hand2",
            )
            name.pack(side="left")
            name.bind("<Button-1>", lambda _e, hid=habit.id: self.controller.open_habit(hid))

            for d in days:
                key = to_date_key(d)
                cell = theme.day_cell(
                    row,
                    "✓" if is_completed(habit, key) else "·",
                    is_completed(habit, key),
                    lambda hid=habit.id, k=key: self.toggle(hid, k),
                    has_note=bool(note_for(habit, key)),
                )
                cell.pack(side="left", padx=8)

            del_btn = tk.Button(
                row,
                text="Delete",
                font=theme.BUTTON,
                bg=theme.BG,
                fg=theme.DANGER,
                relief="flat",
                bd=0,
                cursor="hand2",
                command=lambda hid=habit.id: self._delete_habit(hid),
            )
            del_btn.pack(side="right", padx=2)

            row.bind("<Button-1>", lambda _e, j=i: self._select_row(j))
            self.rows.append({"frame": row, "id": habit.id, "name": name})

        self._select_row(0)

    # ---------- Selection helpers ----------
    def _select_row(self, idx: int):
        if not self.rows:
            return
        idx = max(0, min(idx, len(self.rows) - 1))
        self.selected_idx = idx
        for r in self.rows:
            r["frame"].configure(bg=theme.CARD_BG, highlightbackground=theme.BORDER)
            r["name"].configure(bg=theme.CARD_BG)
        self.rows[idx]["frame"].configure(bg=theme.HILITE, highlightbackground=theme.ACCENT)
        self.rows[idx]["name"].configure(bg=theme.HILITE)

    def _active(self):
        # bindings are global: act only while the tracker is shown and no text field has focus
        focused = self.focus_get()
        return self.controller.current == "Dashboard" and not isinstance(focused, (tk.Entry, tk.Text))

    def _move_up(self, _event=None):
        if self.selected_idx is not None and self._active():
            self._select_row(self.selected_idx - 1)

    def _move_down(self, _event=None):
        if self.selected_idx is not None and self._active():
            self._select_row(self.selected_idx + 1)

    def _delete_selected(self, _event=None):
        if self.selected_idx is None or not self.rows or not self._active():
            return
        self._delete_habit(self.rows[self.selected_idx]["id"])

    def _delete_habit(self, habit_id: str):
        if not mbox.askyesno(
            "Delete habit?",
            "Are you sure you want to delete this habit?\nIts history and notes are removed too.",
        ):
            return
        self.controller.repo.delete_habit(habit_id)
        self.refresh()

    # ---------- Completion toggle ----------
    def toggle(self, habit_id: str, key: str):
        self.controller.repo.toggle_completion(habit_id, key)
        self.refresh()
