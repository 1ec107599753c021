# ui/create_habit.py
import tkinter as tk
from tkinter import ttk

from models import CATEGORIES, DEFAULT_CATEGORY
from ui import theme


class CreateHabit(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        wrapper = theme.card(self)
        wrapper.pack(fill="x", padx=16, pady=18)

        header = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        header.pack(fill="x", padx=14, pady=(12, 2))
        theme.heading_label(header, "New Habit", theme.TITLE).pack(anchor="w")
        theme.muted_label(
            header,
            "Give it a name, and optionally a description and category.",
            wrap=720,
        ).pack(anchor="w", pady=(4, 0))

        form = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        form.pack(padx=14, pady=10, fill="x")
        form.columnconfigure(1, weight=1)

        for row, label in enumerate(("Name", "Description", "Category")):
            tk.Label(
                form, text=label, bg=wrapper.cget("bg"), fg=theme.TEXT, font=theme.BODY
            ).grid(row=row, column=0, sticky="w", pady=4)

        self.name = theme.entry(form)
        self.name.grid(row=0, column=1, sticky="ew", padx=8, pady=4)
        self.description = theme.entry(form)
        self.description.grid(row=1, column=1, sticky="ew", padx=8, pady=4)

        self.category = ttk.Combobox(form, values=CATEGORIES, state="readonly", font=theme.BODY)
        self.category.set(DEFAULT_CATEGORY)
        self.category.grid(row=2, column=1, sticky="ew", padx=8, pady=4)

        self.error = theme.muted_label(wrapper, "", wrap=720)
        self.error.configure(fg=theme.DANGER)
        self.error.pack(anchor="w", padx=14)

        controls = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        controls.pack(fill="x", padx=14, pady=(6, 14))
        theme.primary_button(controls, "Create", self.save).pack(side="left")
        theme.ghost_button(controls, "Cancel", self.cancel).pack(side="left", padx=8)

        self.name.bind("<Return>", lambda _e: self.save())

    def refresh(self):
        self.error.configure(text="")
        self.name.focus_set()

    def _clear(self):
        self.name.delete(0, "end")
        self.description.delete(0, "end")
        self.category.set(DEFAULT_CATEGORY)

    def cancel(self):
        self._clear()
        self.controller.show("Dashboard")

    def save(self):
        name = self.name.get().strip()
        if not name:
            self.error.configure(text="A habit needs a name.")
            return
        self.controller.repo.add_habit(
            name, self.description.get(), self.category.get() or DEFAULT_CATEGORY
        )
        self._clear()
        self.controller.show("Dashboard")
