import logging
from tkinter import filedialog

import customtkinter as ctk
from database.db_manager import DatabaseManager
from utils import app_config

logger = logging.getLogger(__name__)

APPEARANCE_MODES = ("System", "Light", "Dark")
DEFAULT_CURRENCY = "₹"
RESTART_NOTE = "Restart the app for the change to take effect."


class SettingsTab(ctk.CTkFrame):
    """Preferences split by where they live.

    Storage and logging come from config.json because they are needed before
    the DB is opened; appearance and currency live in app_settings.
    """

    def __init__(self, master, db: DatabaseManager, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._notify_refresh = notify_refresh

        self._folder_var = ctk.StringVar()
        self._appearance_var = ctk.StringVar()
        self._currency_var = ctk.StringVar()
        self._log_level_var = ctk.StringVar(value=app_config.get_log_level())
        self._status_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        body = ctk.CTkScrollableFrame(self, fg_color="transparent")
        body.grid(row=0, column=0, sticky="nsew")
        body.grid_columnconfigure(0, weight=1)

        self._build_storage(self._card(body, 0, "Storage"))
        self._build_display(self._card(body, 1, "Display"))
        self._build_logging(self._card(body, 2, "Logging"))

        ctk.CTkLabel(body, textvariable=self._status_var, text_color="#4CAF50").grid(
            row=3, column=0, pady=(0, 12)
        )
        self.refresh()

    def refresh(self):
        self._folder_var.set(app_config.get_db_folder() or "(current directory)")
        mode = self._db.get_setting("appearance_mode", "system").title()
        self._appearance_var.set(mode if mode in APPEARANCE_MODES else "System")
        self._currency_var.set(self._db.get_setting("currency_symbol", DEFAULT_CURRENCY))

    @staticmethod
    def _card(parent, row: int, title: str) -> ctk.CTkFrame:
        card = ctk.CTkFrame(parent, corner_radius=8)
        card.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        card.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(
            card, text=title, font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=12, pady=(10, 6))
        return card

    @staticmethod
    def _caption(card, row: int, text: str):
        ctk.CTkLabel(card, text=text, anchor="e", width=130).grid(
            row=row, column=0, padx=(12, 6), pady=5, sticky="e"
        )

    # ── Storage (config.json) ────────────────────────────────────────────────

    def _build_storage(self, card):
        self._caption(card, 1, "Database folder:")
        ctk.CTkEntry(card, textvariable=self._folder_var, state="readonly").grid(
            row=1, column=1, padx=4, pady=5, sticky="ew"
        )
        buttons = ctk.CTkFrame(card, fg_color="transparent")
        buttons.grid(row=1, column=2, padx=(4, 12))
        ctk.CTkButton(buttons, text="Browse…", width=80, command=self._choose_folder).pack(
            side="left", padx=(0, 4)
        )
        ctk.CTkButton(
            buttons, text="Reset", width=70,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._apply_folder(None),
        ).pack(side="left")

        ctk.CTkLabel(
            card, text=f"Currently open: {self._db.db_path}",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=2, column=0, columnspan=3, sticky="w", padx=12, pady=(0, 10))

    def _choose_folder(self):
        path = filedialog.askdirectory(title="Choose database folder")
        if path:
            self._apply_folder(path)

    def _apply_folder(self, path: str | None):
        app_config.set_db_folder(path)
        logger.info("Database folder set to %s", path or "current directory")
        self.refresh()
        self._status_var.set(RESTART_NOTE)

    # ── Display (app_settings table) ─────────────────────────────────────────

    def _build_display(self, card):
        self._caption(card, 1, "Appearance:")
        ctk.CTkSegmentedButton(
            card, values=list(APPEARANCE_MODES),
            variable=self._appearance_var,
            command=self._on_appearance,
        ).grid(row=1, column=1, padx=4, pady=5, sticky="w")

        self._caption(card, 2, "Currency symbol:")
        ctk.CTkEntry(card, textvariable=self._currency_var, width=60).grid(
            row=2, column=1, padx=4, pady=5, sticky="w"
        )
        ctk.CTkButton(card, text="Apply", width=80, command=self._on_currency).grid(
            row=2, column=2, padx=(4, 12), pady=(5, 10)
        )

    def _on_appearance(self, mode: str):
        self._db.set_setting("appearance_mode", mode.lower())
        ctk.set_appearance_mode(mode.lower())
        logger.info("Appearance set to %s", mode)
        self._notify_refresh("settings")

    def _on_currency(self):
        symbol = self._currency_var.get().strip() or DEFAULT_CURRENCY
        self._currency_var.set(symbol)
        self._db.set_setting("currency_symbol", symbol)
        logger.info("Currency symbol set to %s", symbol)
        self._status_var.set("Currency updated.")
        self._notify_refresh("settings")

    # ── Logging (config.json) ────────────────────────────────────────────────

    def _build_logging(self, card):
        self._caption(card, 1, "Console level:")
        ctk.CTkComboBox(
            card, values=list(app_config.LOG_LEVELS),
            variable=self._log_level_var, state="readonly", width=120,
            command=self._on_log_level,
        ).grid(row=1, column=1, padx=4, pady=5, sticky="w")

        ctk.CTkLabel(
            card, text=f"Errors are also written to {app_config.get_log_file()}",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=2, column=0, columnspan=3, sticky="w", padx=12, pady=(0, 10))

    def _on_log_level(self, level: str):
        app_config.set_log_level(level)
        logger.info("Log level set to %s", level)
        self._status_var.set(RESTART_NOTE)
