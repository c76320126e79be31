from datetime import date
import tkinter as tk
from tkinter import ttk

import customtkinter as ctk
from tkcalendar import Calendar
from utils.date_helpers import format_date, normalize_date, parse_date

_ERROR_BORDER = "#F44336"
_NORMAL_BORDER = ("gray65", "gray35")


def _calendar_colors() -> tuple[str, str]:
    """(background, foreground) matching the current CTk appearance."""
    if ctk.get_appearance_mode() == "Dark":
        return "#2b2b2b", "#ffffff"
    return "#ffffff", "#000000"


class DatePickerWidget(ctk.CTkFrame):
    """Date entry (YYYY-MM-DD) with a tkcalendar popup.

    Slash and dot separated input is normalized when the entry loses focus.
    With allow_empty=True a blank entry is valid; the filter bar uses that
    for "no bound".
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        allow_empty: bool = False,
        width: int = 110,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._allow_empty = allow_empty
        self._popup: ctk.CTkToplevel | None = None
        self._var = tk.StringVar(value=initial_date or "")

        self._entry = ctk.CTkEntry(
            self, textvariable=self._var, width=width, placeholder_text="YYYY-MM-DD",
        )
        self._entry.grid(row=0, column=0, sticky="ew")
        for sequence in ("<FocusOut>", "<Return>"):
            self._entry.bind(sequence, lambda _e: self._normalize_entry())

        ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup).grid(
            row=0, column=1, padx=(4, 0)
        )

    # ── Public API ───────────────────────────────────────────────────────────

    def get(self) -> str:
        """ISO date, the raw text when it does not parse, or ''."""
        raw = self._var.get().strip()
        return (normalize_date(raw) or raw) if raw else ""

    def set(self, date_str: str):
        self._var.set(normalize_date(date_str) or date_str or "")
        self._entry.configure(border_color=_NORMAL_BORDER)

    def is_valid(self) -> bool:
        raw = self._var.get().strip()
        return parse_date(raw) is not None if raw else self._allow_empty

    def focus(self):
        self._entry.focus_set()

    # ── Internals ────────────────────────────────────────────────────────────

    def _normalize_entry(self):
        raw = self._var.get().strip()
        normalized = normalize_date(raw) if raw else ""
        if normalized is None:
            self._entry.configure(border_color=_ERROR_BORDER)
            return
        self.set(normalized)

    def _close_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._popup.destroy()
        self._popup = None

    def _toggle_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        bg, fg = _calendar_colors()
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = parse_date(self._var.get()) or date.today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year, month=current.month, day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg, foreground=fg,
            headersbackground=bg, headersforeground=fg,
            weekendbackground=bg, weekendforeground=fg,
            selectbackground="#1f6aa5",
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=(4, 2))
        cal.bind("<<CalendarSelected>>", lambda _e: self._pick(cal.get_date()))

        ctk.CTkButton(
            popup, text="Today", height=24,
            command=lambda: self._pick(format_date(date.today())),
        ).pack(fill="x", padx=4, pady=(0, 4))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

        popup.bind("<Escape>", lambda _e: self._close_popup())
        popup.bind("<FocusOut>", lambda _e: self._close_if_unfocused(popup))

    def _pick(self, iso_date: str):
        self.set(iso_date)
        self._close_popup()

    def _close_if_unfocused(self, popup):
        if not popup.winfo_exists():
            return
        focused = popup.focus_get()
        if focused is None or not str(focused).startswith(str(popup)):
            self._close_popup()
