import logging
import tkinter as tk

import config
from repo_json import JSONRepo
from ui import theme
from ui.coach_view import CoachView
from ui.create_habit import CreateHabit
from ui.dashboard import Dashboard
from ui.export_view import ExportView
from ui.habit_detail import HabitDetail
from ui.stats_view import StatsView

logger = logging.getLogger(__name__)

NAV = [("Tracker", "Dashboard"), ("Stats", "StatsView"), ("Coach", "CoachView"),
       ("Export", "ExportView")]


class App(tk.Tk):
    def __init__(self, repo=None):
        super().__init__()
        self.title("Habit Tracker")
        self.geometry("820x620")
        self.configure(bg=theme.BG)
        self.repo = repo or JSONRepo(config.storage_file())
        logger.info("Loaded %d habits from %s", len(self.repo.habits), self.repo.path)

        nav = tk.Frame(self, bg=theme.BG, highlightbackground=theme.BORDER, highlightthickness=1)
        nav.pack(fill="x")
        theme.heading_label(nav, "Habit Tracker", theme.HEADING).pack(side="left", padx=16, pady=10)
        for label, frame_name in reversed(NAV):
            theme.ghost_button(nav, label, lambda n=frame_name: self.show(n)).pack(
                side="right", padx=4, pady=8
            )

        container = tk.Frame(self, bg=theme.BG)
        container.pack(fill="both", expand=True)
        container.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        self.current = None
        self.frames = {}
        for F in (Dashboard, CreateHabit, HabitDetail, StatsView, CoachView, ExportView):
            frame = F(parent=container, controller=self)
            self.frames[F.__name__] = frame
            frame.grid(row=0, column=0, sticky="nsew")

        self.show("Dashboard")

    def show(self, name):
        frame = self.frames[name]
        self.current = name
        if hasattr(frame, "refresh"):
            frame.refresh()
        frame.tkraise()

    def open_habit(self, habit_id: str):
        self.frames["HabitDetail"].open(habit_id)
        self.show("HabitDetail")


def main():
    config.setup_logging()
    App().mainloop()


if __name__ == "__main__":
    main()
