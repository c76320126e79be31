import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO

from services.classifier import CategoryClassifier
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_file, get_log_level
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: logging + DB folder from pre-DB config ─────────────────────
    setup_logging(get_log_level(), log_file=get_log_file())
    db_folder = get_db_folder()

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=db_folder)

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    classifier = CategoryClassifier(category_dao)
    tx_svc = TransactionService(tx_dao)
    category_svc = CategoryService(category_dao)
    report_svc = ReportService(tx_dao, classifier)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        category_service=category_svc,
        report_service=report_svc,
        classifier=classifier,
        db=db,
    )
    logger.info("✅ Application started successfully (%s)", db.db_path)

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
