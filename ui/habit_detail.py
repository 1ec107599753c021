# ui/habit_detail.py (month calendar + notes for one habit)
import calendar
import tkinter as tk
from datetime import date

from dates import month_days, shift_month, to_date_key
from models import is_completed, note_for
from stats import habit_month_rate
from ui import theme

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class HabitDetail(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.habit_id = None
        self.year, self.month = date.today().year, date.today().month
        self.selected_key = None

        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 4))
        self.title = theme.heading_label(header, "", theme.TITLE)
        self.title.pack(side="left")
        theme.ghost_button(header, "Back", lambda: controller.show("Dashboard")).pack(side="right")

        edit = tk.Frame(self, bg=theme.BG)
        edit.pack(fill="x", padx=16, pady=(0, 6))
        edit.columnconfigure(1, weight=1)
        tk.Label(edit, text="Name", bg=theme.BG, fg=theme.MUTED, font=theme.SMALL).grid(
            row=0, column=0, sticky="w"
        )
        self.name = theme.entry(edit)
        self.name.grid(row=0, column=1, sticky="ew", padx=8, pady=2)
        tk.Label(edit, text="Description", bg=theme.BG, fg=theme.MUTED, font=theme.SMALL).grid(
            row=1, column=0, sticky="w"
        )
        self.description = theme.entry(edit)
        self.description.grid(row=1, column=1, sticky="ew", padx=8, pady=2)
        theme.ghost_button(edit, "Save details", self.save_details).grid(
            row=0, column=2, rowspan=2, padx=4
        )

        nav = tk.Frame(self, bg=theme.BG)
        nav.pack(fill="x", padx=16, pady=(6, 4))
        theme.ghost_button(nav, "<", lambda: self._step_month(-1)).pack(side="left")
        self.month_label = theme.heading_label(nav, "", theme.HEADING)
        self.month_label.pack(side="left", padx=10)
        theme.ghost_button(nav, ">", lambda: self._step_month(1)).pack(side="left")
        theme.ghost_button(nav, "Today", self._jump_to_today).pack(side="left", padx=8)
        self.rate_label = theme.muted_label(nav, "")
        self.rate_label.pack(side="right")

        self.calendar_card = theme.card(self)
        self.calendar_card.pack(fill="x", padx=16, pady=6)

        note_card = theme.card(self)
        note_card.pack(fill="x", padx=16, pady=(6, 12))
        self.day_label = theme.muted_label(note_card, "Select a day to edit its status and note.")
        self.day_label.pack(anchor="w", padx=12, pady=(10, 4))
        self.note = tk.Text(
            note_card, height=3, font=theme.BODY, relief="solid", bd=1, wrap="word",
            highlightbackground=theme.BORDER,
        )
        self.note.pack(fill="x", padx=12)
        buttons = tk.Frame(note_card, bg=theme.CARD_BG)
        buttons.pack(fill="x", padx=12, pady=(6, 10))
        theme.primary_button(buttons, "Save note", self.save_note).pack(side="left")
        theme.ghost_button(buttons, "Toggle done", self.toggle_selected).pack(side="left", padx=8)

    def open(self, habit_id: str):
        self.habit_id = habit_id
        today = date.today()
        self.year, self.month = today.year, today.month
        self.selected_key = None
        habit = self._habit()
        if habit:
            self.name.delete(0, "end")
            self.name.insert(0, habit.name)
            self.description.delete(0, "end")
            self.description.insert(0, habit.description or "")

    def _habit(self):
        return self.controller.repo.get_habit(self.habit_id) if self.habit_id else None

    def refresh(self):
        habit = self._habit()
        if habit is None:
            self.controller.show("Dashboard")
            return

        self.title.configure(text=habit.name)
        self.month_label.configure(text=date(self.year, self.month, 1).strftime("%B %Y"))
        self.rate_label.configure(
            text=f"{habit_month_rate(habit, self.year, self.month)}% completed this month"
        )

        for w in self.calendar_card.winfo_children():
            w.destroy()
        for col, name in enumerate(WEEKDAYS):
            tk.Label(
                self.calendar_card, text=name, font=theme.SMALL, bg=theme.CARD_BG, fg=theme.MUTED
            ).grid(row=0, column=col, padx=4, pady=(8, 2))

        # calendar.weekday: Monday == 0; the grid starts on Sunday
        offset = (calendar.weekday(self.year, self.month, 1) + 1) % 7
        today_key = to_date_key(date.today())
        for i, d in enumerate(month_days(self.year, self.month)):
            key = to_date_key(d)
            row, col = divmod(i + offset, 7)
            cell = theme.day_cell(
                self.calendar_card,
                str(d.day),
                is_completed(habit, key),
                lambda k=key: self.select_day(k),
                has_note=bool(note_for(habit, key)),
            )
            if key == self.selected_key or key == today_key:
                cell.configure(highlightthickness=2, highlightbackground=theme.ACCENT)
            cell.grid(row=row + 1, column=col, padx=4, pady=3)

        if self.selected_key:
            status = "done" if is_completed(habit, self.selected_key) else "not done"
            self.day_label.configure(text=f"{self.selected_key}: {status}")

    # ---------- Navigation ----------
    def _step_month(self, delta: int):
        self.year, self.month = shift_month(self.year, self.month, delta)
        self.refresh()

    def _jump_to_today(self):
        today = date.today()
        self.year, self.month = today.year, today.month
        self.select_day(to_date_key(today))

    # ---------- Day editing ----------
    def select_day(self, key: str):
        self.selected_key = key
        habit = self._habit()
        self.note.delete("1.0", "end")
        if habit and note_for(habit, key):
            self.note.insert("1.0", note_for(habit, key))
        self.refresh()

    def toggle_selected(self):
        if self.selected_key:
            self.controller.repo.toggle_completion(self.habit_id, self.selected_key)
            self.refresh()

    def save_note(self):
        if self.selected_key:
            self.controller.repo.set_note(
                self.habit_id, self.selected_key, self.note.get("1.0", "end")
            )
            self.refresh()

    def save_details(self):
        self.controller.repo.rename_habit(
            self.habit_id, self.name.get(), self.description.get()
        )
        self.refresh()
