from datetime import date

import pytest

from models.transaction import Transaction
from services import transaction_editor as editor


def _filled(**changes):
    state = editor.EditorState(date="2024-01-05", category="Food", amount="12.50", notes=" lunch ")
    return editor.with_fields(state, **changes)


def test_new_state_defaults():
    state = editor.new_state("Salary", today=date(2024, 3, 9))
    assert state.date == "2024-03-09"
    assert state.category == "Salary"
    assert state.amount == ""
    assert not state.is_editing
    assert state.submit_label == "➕ Add Transaction"


def test_begin_edit_prefills_fields():
    tx = Transaction(id=7, date="2024-02-01", category="Rent", amount=900.0, notes="Feb")
    state = editor.begin_edit(tx)
    assert state.editing_id == 7
    assert state.amount == "900.00"
    assert state.is_editing
    assert state.submit_label == "💾 Update Transaction"


def test_with_fields_leaves_original_untouched():
    state = editor.new_state("Food", today=date(2024, 1, 1))
    changed = editor.with_fields(state, amount="5")
    assert state.amount == ""
    assert changed.amount == "5"


def test_build_request_normalizes():
    request = editor.build_request(_filled(date="2024/01/05"))
    assert request == editor.TransactionRequest(
        date="2024-01-05", category="Food", amount=12.5, notes="lunch", editing_id=None
    )


def test_build_request_keeps_editing_id():
    request = editor.build_request(_filled(editing_id=3))
    assert request.editing_id == 3


@pytest.mark.parametrize(
    "changes, field, message",
    [
        ({"date": "05/01/2024"}, "date", "Please select a valid date"),
        ({"date": ""}, "date", "Please select a valid date"),
        ({"category": "  "}, "category", "Please select a category"),
        ({"amount": ""}, "amount", "Please enter an amount"),
        ({"amount": "abc"}, "amount", "Please enter a valid number for amount"),
        ({"amount": "nan"}, "amount", "Please enter a valid number for amount"),
        ({"amount": "inf"}, "amount", "Please enter a valid number for amount"),
        ({"amount": "0"}, "amount", "Amount must be greater than 0"),
        ({"amount": "-4"}, "amount", "Amount must be greater than 0"),
    ],
)
def test_build_request_rejects_bad_input(changes, field, message):
    with pytest.raises(editor.ValidationError) as exc_info:
        editor.build_request(_filled(**changes))
    assert exc_info.value.field == field
    assert str(exc_info.value) == message


def test_after_submit_leaves_edit_mode():
    state = _filled(editing_id=3)
    nxt = editor.after_submit(state)
    assert not nxt.is_editing
    assert nxt.submit_label == "➕ Add Transaction"


def test_after_submit_keeps_date_and_category():
    nxt = editor.after_submit(_filled(date="2024-06-01", category="Rent"))
    assert nxt.date == "2024-06-01"
    assert nxt.category == "Rent"
    assert nxt.amount == ""
    assert nxt.notes == ""
