import logging

import customtkinter as ctk
from database.db_manager import DatabaseManager
from services.category_service import CategoryService
from services.classifier import CategoryClassifier
from services.report_service import ReportService
from services.transaction_service import TransactionService
from ui.components.activity_log import ActivityLogHandler, ActivityLogPanel
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT

logger = logging.getLogger(__name__)

# Categories drive classification, so a category edit refreshes every view of totals
_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "transactions"},
    "category":    {"dashboard", "transactions", "categories"},
    "settings":    {"dashboard", "transactions"},
    "full":        {"dashboard", "transactions", "categories", "settings"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        classifier: CategoryClassifier,
        db: DatabaseManager,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._classifier = classifier
        self._db = db

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._build_log_panel()
        self._build_tabs()

    def _get_currency(self) -> str:
        return self._db.get_setting("currency_symbol", "₹")

    def _build_log_panel(self):
        self._log_panel = ActivityLogPanel(self)
        self._log_panel.grid(row=1, column=0, sticky="ew", padx=8, pady=(0, 8))
        self._log_handler = ActivityLogHandler(self._log_panel)
        logging.getLogger().addHandler(self._log_handler)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=0, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Transactions", "Categories", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            report_service=self._report_svc,
            get_currency=self._get_currency,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transactions"),
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            report_service=self._report_svc,
            classifier=self._classifier,
            notify_refresh=self.notify_tabs_refresh,
            get_currency=self._get_currency,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._categories_tab = CategoriesTab(
            self._tabview.tab("Categories"),
            category_service=self._cat_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._categories_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            db=self._db,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        refreshers = {
            "dashboard": self._dashboard_tab.refresh,
            "transactions": self._transactions_tab.refresh,
            "categories": self._categories_tab.refresh,
            "settings": self._settings_tab.refresh,
        }
        for name, refresh in refreshers.items():
            if name not in tabs:
                continue
            try:
                refresh()
            except Exception:
                # A broken view must not take the window down
                logger.exception("Refreshing %s failed", name)

    def destroy(self):
        logging.getLogger().removeHandler(self._log_handler)
        super().destroy()
