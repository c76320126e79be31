"""Form state for adding/editing a transaction, kept out of the widgets.

The form holds an immutable EditorState. Every user action produces a new
state through the functions below, and `build_request` turns a state into
a validated TransactionRequest for TransactionService.save().
"""
import math
from dataclasses import dataclass, replace
from datetime import date

from models.transaction import Transaction
from utils.date_helpers import format_date, normalize_date


class ValidationError(ValueError):
    """Bad form input. `field` names the offending input for focusing."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class EditorState:
    editing_id: int | None = None
    date: str = ""
    category: str = ""
    amount: str = ""        # raw text as typed
    notes: str = ""

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submit_label(self) -> str:
        return "💾 Update Transaction" if self.is_editing else "➕ Add Transaction"


@dataclass(frozen=True)
class TransactionRequest:
    date: str               # 'YYYY-MM-DD'
    category: str
    amount: float
    notes: str = ""
    editing_id: int | None = None


def new_state(default_category: str = "", today: date | None = None) -> EditorState:
    return EditorState(
        date=format_date(today or date.today()),
        category=default_category,
    )


def begin_edit(tx: Transaction) -> EditorState:
    return EditorState(
        editing_id=tx.id,
        date=tx.date,
        category=tx.category,
        amount=f"{tx.amount:.2f}",
        notes=tx.notes,
    )


def with_fields(state: EditorState, **changes) -> EditorState:
    return replace(state, **changes)


def build_request(state: EditorState) -> TransactionRequest:
    iso_date = normalize_date(state.date)
    if iso_date is None:
        raise ValidationError("date", "Please select a valid date")

    category = state.category.strip()
    if not category:
        raise ValidationError("category", "Please select a category")

    amount_text = state.amount.strip()
    if not amount_text:
        raise ValidationError("amount", "Please enter an amount")
    try:
        amount = float(amount_text)
    except ValueError:
        raise ValidationError("amount", "Please enter a valid number for amount") from None
    if not math.isfinite(amount):
        raise ValidationError("amount", "Please enter a valid number for amount")
    if amount <= 0:
        raise ValidationError("amount", "Amount must be greater than 0")

    return TransactionRequest(
        date=iso_date,
        category=category,
        amount=amount,
        notes=state.notes.strip(),
        editing_id=state.editing_id,
    )


def after_submit(state: EditorState) -> EditorState:
    """State for the next entry once a request was saved.

    Editing mode ends and amount and notes are cleared; date and category
    carry over so a run of similar entries needs only the amount.
    """
    return EditorState(date=state.date, category=state.category)
