import csv
import logging
import sqlite3

import customtkinter as ctk
from tkinter import filedialog
from services.category_service import CategoryService
from services.classifier import CategoryClassifier
from services.report_service import ReportService
from services.transaction_service import TransactionService
from models.transaction import Transaction
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.date_picker import DatePickerWidget
from utils.constants import TYPE_COLORS
from utils.currency import format_currency

logger = logging.getLogger(__name__)

_MAX_RENDERED_ROWS = 200


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        classifier: CategoryClassifier,
        notify_refresh,   # callable
        get_currency,     # callable → str
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._classifier = classifier
        self._notify_refresh = notify_refresh
        self._get_currency = get_currency

        self._search_var = ctk.StringVar()
        self._rows: list[Transaction] = []

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search category or notes…", width=200,
        ).pack(side="left", padx=(8, 8), pady=6)

        ctk.CTkLabel(bar, text="From:").pack(side="left", padx=(4, 2))
        self._from_picker = DatePickerWidget(bar, allow_empty=True, width=100)
        self._from_picker.pack(side="left", padx=(0, 8))

        ctk.CTkLabel(bar, text="To:").pack(side="left", padx=(4, 2))
        self._to_picker = DatePickerWidget(bar, allow_empty=True, width=100)
        self._to_picker.pack(side="left", padx=(0, 8))

        ctk.CTkButton(bar, text="🔍 Filter", width=80, command=self._apply_filter).pack(
            side="left", padx=2
        )
        ctk.CTkButton(
            bar, text="Clear", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._clear_filter,
        ).pack(side="left", padx=2)

        ctk.CTkButton(bar, text="+ Transaction", width=110, command=self._open_add_form).pack(
            side="right", padx=(2, 8)
        )
        ctk.CTkButton(
            bar, text="Export CSV", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._export_csv,
        ).pack(side="right", padx=2)

        self._count_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._count_label.pack(side="right", padx=8)

    def _apply_filter(self):
        if not (self._from_picker.is_valid() and self._to_picker.is_valid()):
            logger.warning("Validation: filter dates must be YYYY-MM-DD")
            return
        self._load()
        logger.info("Filtered %d transactions (out of %d)", len(self._rows), self._tx_svc.count())

    def _clear_filter(self):
        self._search_var.set("")
        self._from_picker.set("")
        self._to_picker.set("")
        self._load()
        logger.info("Filters cleared")

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("Date", 90), ("Type", 70), ("Category", 150),
                ("Amount", 110), ("Notes", 300), ("Actions", 100)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    # ── Scrollable list ──────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        date_from = self._from_picker.get() if self._from_picker.is_valid() else ""
        date_to = self._to_picker.get() if self._to_picker.is_valid() else ""
        self._rows = self._tx_svc.search(self._search_var.get(), date_from or None, date_to or None)
        self._count_label.configure(text=f"{len(self._rows)} shown")

        if not self._rows:
            ctk.CTkLabel(
                self._scroll, text="No transactions found.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        currency = self._get_currency()
        for idx, tx in enumerate(self._rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx, currency)

        if len(self._rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(self._rows)} transactions. Use the filter to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction, currency: str):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        kind = self._classifier.kind_of(tx.category)
        color = TYPE_COLORS[kind]
        sign = "+" if self._classifier.is_income(tx.category) else "-"

        ctk.CTkLabel(row, text=tx.date, width=90, anchor="w").grid(row=0, column=0, padx=4, pady=4)
        ctk.CTkLabel(row, text=kind, width=70, anchor="w", text_color=color).grid(
            row=0, column=1, padx=4
        )
        ctk.CTkLabel(row, text=tx.category, width=150, anchor="w").grid(row=0, column=2, padx=4)
        ctk.CTkLabel(
            row, text=f"{sign}{format_currency(tx.amount, currency)}",
            width=110, anchor="e", text_color=color,
        ).grid(row=0, column=3, padx=4)
        ctk.CTkLabel(row, text=tx.notes or "-", width=300, anchor="w").grid(row=0, column=4, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=5, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._open_edit_form(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._delete_tx(t),
        ).pack(side="left")

    def _open_add_form(self):
        self._open_form()

    def _open_edit_form(self, tx: Transaction):
        logger.info("Editing transaction [%d]", tx.id)
        self._open_form(tx)

    def _open_form(self, tx: Transaction | None = None):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc, transaction=tx,
            on_saved=lambda: self._notify_refresh("transaction"),
        )
        self.wait_window(form)

    def _delete_tx(self, tx: Transaction):
        currency = self._get_currency()
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Transaction",
            "Are you sure you want to delete this transaction?",
            details=[
                ("Date", tx.date),
                ("Category", tx.category),
                ("Amount", format_currency(tx.amount, currency)),
            ],
        )
        if not dlg.result:
            return
        try:
            self._tx_svc.delete(tx.id)
        except sqlite3.Error:
            logger.exception("Deleting transaction [%d] failed", tx.id)
            return
        self._notify_refresh("transaction")

    def _export_csv(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile="transactions.csv",
        )
        if not path:
            return
        rows = self._report_svc.export_csv(self._rows)
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(rows)
        except OSError:
            logger.exception("Export to %s failed", path)
            return
        logger.info("Exported %d transactions to %s", len(rows) - 1, path)
