import logging
import sqlite3

import customtkinter as ctk
from models.category import Category
from services.category_service import CategoryService
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import CATEGORY_TYPES, EXPENSE, INCOME, TYPE_COLORS

logger = logging.getLogger(__name__)

_SHOW_ALL = "All"
_SECTION_TITLES = {INCOME: "💰 Income", EXPENSE: "💸 Expense"}


class CategoriesTab(ctk.CTkFrame):
    """Category list grouped by kind, with add / edit / delete."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._notify_refresh = notify_refresh
        self._show_var = ctk.StringVar(value=_SHOW_ALL)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkButton(
            bar, text="+ Add Category", width=130, command=self._open_form,
        ).pack(side="left", padx=(12, 8), pady=8)

        ctk.CTkSegmentedButton(
            bar, values=[_SHOW_ALL, *CATEGORY_TYPES],
            variable=self._show_var,
            command=lambda _value: self._load(),
        ).pack(side="left", padx=8, pady=8)

        self._count_lbl = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._count_lbl.pack(side="right", padx=12)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        categories = self._svc.get_all()
        n_income = sum(1 for c in categories if c.is_income)
        self._count_lbl.configure(
            text=f"{n_income} income · {len(categories) - n_income} expense"
        )

        if not categories:
            ctk.CTkLabel(
                self._scroll,
                text="No categories yet. Transactions fall back to the built-in income names.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        shown = self._show_var.get()
        kinds = CATEGORY_TYPES if shown == _SHOW_ALL else (shown,)
        row = 0
        for kind in kinds:
            group = [c for c in categories if c.type == kind]
            row = self._add_section(row, kind, group)

    def _add_section(self, row: int, kind: str, group: list[Category]) -> int:
        ctk.CTkLabel(
            self._scroll,
            text=f"{_SECTION_TITLES[kind]} ({len(group)})",
            text_color=TYPE_COLORS[kind],
            font=ctk.CTkFont(size=13, weight="bold"),
            anchor="w",
        ).grid(row=row, column=0, sticky="w", padx=6, pady=(10, 2))
        row += 1

        if not group:
            ctk.CTkLabel(
                self._scroll, text="None", text_color="gray60", anchor="w",
            ).grid(row=row, column=0, sticky="w", padx=16, pady=2)
            return row + 1

        for cat in group:
            self._add_row(row, cat)
            row += 1
        return row

    def _add_row(self, row: int, cat: Category):
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=row, column=0, sticky="ew", padx=4, pady=2)
        card.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            card, text=cat.icon or "·", width=32, font=ctk.CTkFont(size=16),
        ).grid(row=0, column=0, padx=(10, 0), pady=6)
        ctk.CTkLabel(
            card, text=cat.name, anchor="w", font=ctk.CTkFont(size=13),
        ).grid(row=0, column=1, padx=8, sticky="w")

        ctk.CTkButton(
            card, text="Edit", width=56, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_form(c),
        ).grid(row=0, column=2, padx=(4, 2))
        ctk.CTkButton(
            card, text="Delete", width=62, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat: self._on_delete(c),
        ).grid(row=0, column=3, padx=(2, 10))

    def _open_form(self, cat: Category | None = None):
        form = CategoryForm(self.winfo_toplevel(), self._svc, category=cat)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _on_delete(self, cat: Category):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Category",
            message=(
                f"Delete '{cat.name}'? Existing transactions keep their category label "
                "and will be classified by the built-in income list from now on."
            ),
            details=[("Name", cat.display_name), ("Type", cat.type)],
        )
        if not dlg.result:
            return
        try:
            self._svc.delete(cat.id)
        except sqlite3.Error:
            logger.exception("Deleting category [%d] failed", cat.id)
            self._load()
            return
        self._notify_refresh("category")
