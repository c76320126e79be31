import logging
from datetime import datetime

import customtkinter as ctk

_LEVEL_ICONS = {
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "❌",
}


class ActivityLogPanel(ctk.CTkFrame):
    """Read-only, timestamped log of what the user just did."""

    def __init__(self, master, height: int = 110, **kwargs):
        super().__init__(master, corner_radius=8, **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=8, pady=(6, 0))
        ctk.CTkLabel(
            header, text="Activity Log",
            font=ctk.CTkFont(size=12, weight="bold"),
        ).pack(side="left")
        ctk.CTkButton(
            header, text="Clear", width=60, height=22,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.clear,
        ).pack(side="right")

        self._text = ctk.CTkTextbox(self, height=height, font=ctk.CTkFont(size=11))
        self._text.grid(row=1, column=0, sticky="nsew", padx=8, pady=(4, 8))
        self._text.configure(state="disabled")

    def append(self, message: str):
        stamp = datetime.now().strftime("%H:%M:%S")
        self._text.configure(state="normal")
        self._text.insert("end", f"[{stamp}] {message}\n")
        self._text.see("end")
        self._text.configure(state="disabled")

    def clear(self):
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.configure(state="disabled")


class ActivityLogHandler(logging.Handler):
    """Mirrors log records into an ActivityLogPanel."""

    def __init__(self, panel: ActivityLogPanel, level=logging.INFO):
        super().__init__(level)
        self._panel = panel

    def emit(self, record: logging.LogRecord):
        try:
            icon = _LEVEL_ICONS.get(record.levelno, "")
            message = record.getMessage()
            self._panel.append(f"{icon} {message}" if icon else message)
        except Exception:
            self.handleError(record)
