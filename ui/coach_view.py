import queue
import tkinter as tk

from coach import CoachSession
from ui import theme

POLL_MS = 150


class CoachView(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.session = CoachSession(controller.repo.list_habits)
        # replies arrive on a worker thread; widgets are only touched from Tk
        self.replies = queue.Queue()

        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 6))
        theme.heading_label(header, "Coach", theme.TITLE).pack(side="left")
        self.status = theme.muted_label(header, "")
        self.status.pack(side="right")

        self.transcript = tk.Text(
            self, height=18, wrap="word", font=theme.BODY, relief="solid", bd=1,
            highlightbackground=theme.BORDER, state="disabled",
        )
        self.transcript.tag_configure("user", foreground=theme.MUTED, lmargin1=60, lmargin2=60)
        self.transcript.tag_configure("assistant", foreground=theme.TEXT)
        self.transcript.pack(fill="both", expand=True, padx=16, pady=6)

        ask = tk.Frame(self, bg=theme.BG)
        ask.pack(fill="x", padx=16, pady=(0, 14))
        self.question = theme.entry(ask)
        self.question.pack(side="left", fill="x", expand=True)
        self.question.bind("<Return>", lambda _e: self.send())
        self.send_btn = theme.primary_button(ask, "Ask", self.send)
        self.send_btn.pack(side="left", padx=(8, 0))

    def refresh(self):
        # first visit runs the initial analysis
        if not self.session.started and not self.session.busy:
            self._request(None)
        self._render()

    def send(self):
        text = self.question.get().strip()
        if not text or self.session.busy:
            return
        self.question.delete(0, "end")
        self._request(text)

    def _request(self, text):
        if self.session.ask_async(text, on_done=self.replies.put):
            self.send_btn.configure(state="disabled")
            self.status.configure(text="Thinking...")
            self._render(pending=text)
            self.after(POLL_MS, self._poll)

    def _poll(self):
        try:
            self.replies.get_nowait()
        except queue.Empty:
            self.after(POLL_MS, self._poll)
            return
        self.send_btn.configure(state="normal")
        self.status.configure(text="")
        self._render()

    def _render(self, pending=None):
        self.transcript.configure(state="normal")
        self.transcript.delete("1.0", "end")
        messages = list(self.session.messages)
        if pending and (not messages or messages[-1] != ("user", pending)):
            messages.append(("user", pending))
        for role, content in messages:
            self.transcript.insert("end", content.strip() + "\n\n", role)
        self.transcript.configure(state="disabled")
        self.transcript.see("end")
