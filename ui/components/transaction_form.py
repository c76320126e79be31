import logging
import sqlite3

import customtkinter as ctk
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from services import transaction_editor as editor
from models.transaction import Transaction
from ui.components.date_picker import DatePickerWidget

logger = logging.getLogger(__name__)


class TransactionForm(ctk.CTkToplevel):
    """Add or edit a transaction.

    Widget values are folded into an EditorState on save; the state, not
    the widgets, decides whether this is an add or an update.
    """

    _last_date: str = ""  # remembered between adds for the session

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        transaction: Transaction | None = None,
        on_saved=None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._on_saved = on_saved

        # Income categories first, then expenses
        self._cat_names = (
            [c.name for c in category_service.get_income_categories()]
            + [c.name for c in category_service.get_expense_categories()]
        )
        default_cat = self._cat_names[0] if self._cat_names else ""

        if transaction:
            self._state = editor.begin_edit(transaction)
            # Keep a label whose category has since been deleted
            if transaction.category not in self._cat_names:
                self._cat_names.append(transaction.category)
        else:
            self._state = editor.new_state(default_cat)
            if TransactionForm._last_date:
                self._state = editor.with_fields(self._state, date=TransactionForm._last_date)

        self.title("Edit Transaction" if self._state.is_editing else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._build()

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build(self):
        s = self._state
        r = 0

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(self, initial_date=s.date)
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="w")
        r += 1

        # Category
        self._label("Category:", r)
        self._cat_var = ctk.StringVar(value=s.category)
        self._cat_combo = ctk.CTkComboBox(
            self, values=self._cat_names,
            variable=self._cat_var, width=200, state="readonly",
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Amount
        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=s.amount)
        self._amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, width=200)
        self._amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Notes
        self._label("Notes:", r)
        self._notes_var = ctk.StringVar(value=s.notes)
        ctk.CTkEntry(self, textvariable=self._notes_var, width=200).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        self._status_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._status_var,
            text_color="#4CAF50", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        self._cancel_btn = ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        )
        self._cancel_btn.pack(side="left")
        ctk.CTkButton(
            btn_frame, text=s.submit_label, width=170,
            command=self._on_save,
        ).pack(side="right")

    def _collect_state(self) -> editor.EditorState:
        return editor.with_fields(
            self._state,
            date=self._date_picker.get(),
            category=self._cat_var.get(),
            amount=self._amount_var.get(),
            notes=self._notes_var.get(),
        )

    def _on_save(self):
        self._state = self._collect_state()
        try:
            request = editor.build_request(self._state)
        except editor.ValidationError as e:
            logger.warning("Validation: %s", e)
            self._error_var.set(str(e))
            self._focus_field(e.field)
            return

        try:
            self._tx_svc.save(request)
        except sqlite3.Error as e:
            logger.exception("Saving transaction failed")
            self._error_var.set(f"Could not save transaction: {e}")
            return

        if self._on_saved:
            self._on_saved()
        if request.editing_id is not None:
            self.destroy()
            return

        # Stay open for the next entry
        TransactionForm._last_date = request.date
        self._state = editor.after_submit(editor.with_fields(self._state, date=request.date))
        self._show_state()
        self._error_var.set("")
        self._status_var.set(f"Added {request.category} {request.amount:.2f} on {request.date}")
        self._cancel_btn.configure(text="Close")
        self._amount_entry.focus_set()

    def _show_state(self):
        s = self._state
        self._date_picker.set(s.date)
        self._cat_var.set(s.category)
        self._amount_var.set(s.amount)
        self._notes_var.set(s.notes)

    def _focus_field(self, field: str):
        if field == "date":
            self._date_picker.focus()
        elif field == "category":
            self._cat_combo.focus_set()
        elif field == "amount":
            self._amount_entry.focus_set()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
