import sqlite3

import pytest

from database.db_manager import DatabaseManager
from utils.constants import DB_FILE, DEFAULT_CATEGORIES, EXPENSE, INCOME


def test_defaults_seeded(db, category_dao):
    assert category_dao.count() == len(DEFAULT_CATEGORIES)
    assert category_dao.get_type_by_name("Salary") == INCOME
    assert category_dao.get_type_by_name("Food") == EXPENSE
    assert db.get_setting("currency_symbol") == "₹"
    assert db.get_setting("appearance_mode") == "system"


def test_reinitialize_keeps_user_changes(db, category_dao):
    rent = category_dao.get_by_name("Rent")
    category_dao.delete(rent.id)
    db.set_setting("currency_symbol", "$")

    db.initialize()

    assert category_dao.get_by_name("Rent") is None
    assert category_dao.count() == len(DEFAULT_CATEGORIES) - 1
    assert db.get_setting("currency_symbol") == "$"


def test_get_setting_default(db):
    assert db.get_setting("missing", "fallback") == "fallback"


def test_open_creates_folder(tmp_path):
    folder = tmp_path / "nested" / "data"
    db = DatabaseManager.open(str(folder))
    try:
        assert (folder / DB_FILE).exists()
    finally:
        db.close()


def test_category_dao_crud(category_dao):
    cat = category_dao.create("Pets", EXPENSE, "🐶")
    assert cat.id is not None
    assert cat.display_name == "🐶 Pets"
    assert any(c.name == "Pets" for c in category_dao.get_all())

    updated = category_dao.update(cat.id, "Pet Care", EXPENSE, "🐶")
    assert updated.name == "Pet Care"
    assert category_dao.get_by_name("Pets") is None
    assert category_dao.get_all() == sorted(category_dao.get_all(), key=lambda c: c.name)

    category_dao.delete(cat.id)
    assert category_dao.get_by_id(cat.id) is None


def test_category_dao_by_type(category_dao):
    income = category_dao.get_by_type(INCOME)
    assert {c.name for c in income} == {"Salary", "Bonus", "Investment", "Gift", "Other Income"}
    assert all(c.is_income for c in income)


def test_category_dao_errors_propagate(category_dao):
    with pytest.raises(sqlite3.IntegrityError):
        category_dao.create("Food", EXPENSE)
    with pytest.raises(sqlite3.IntegrityError):
        category_dao.create("Weird", "Transfer")


def test_get_type_by_name_is_exact(category_dao):
    assert category_dao.get_type_by_name("salary") is None


def test_transaction_dao_crud(tx_dao):
    tx = tx_dao.create("2024-03-05", "Food", 12.5, "lunch")
    assert tx.id is not None
    assert tx.year_month == (2024, 3)

    updated = tx_dao.update(tx.id, "2024-03-06", "Transport", 7.0, "")
    assert updated.date == "2024-03-06"
    assert updated.category == "Transport"
    assert updated.amount == 7.0

    tx_dao.delete(tx.id)
    assert tx_dao.get_by_id(tx.id) is None
    assert tx_dao.count() == 0


def test_transaction_dao_accepts_any_category_name(tx_dao):
    tx = tx_dao.create("2024-03-05", "Not A Category", 1.0)
    assert tx_dao.get_by_id(tx.id).category == "Not A Category"


def test_transactions_newest_first(tx_dao):
    first = tx_dao.create("2024-01-01", "Food", 1.0)
    second = tx_dao.create("2024-02-01", "Food", 2.0)
    same_day = tx_dao.create("2024-02-01", "Rent", 3.0)
    assert [t.id for t in tx_dao.get_all()] == [same_day.id, second.id, first.id]


def test_search(tx_dao):
    tx_dao.create("2024-01-01", "Food", 10.0, "Weekly GROCERIES")
    tx_dao.create("2024-01-15", "Transport", 5.0, "bus")
    tx_dao.create("2024-02-01", "Salary", 100.0)

    assert [t.category for t in tx_dao.search(keyword="groceries")] == ["Food"]
    assert [t.category for t in tx_dao.search(keyword="SAL")] == ["Salary"]

    in_range = tx_dao.search(date_from="2024-01-01", date_to="2024-01-15")
    assert {t.category for t in in_range} == {"Food", "Transport"}

    assert tx_dao.search(keyword="bus", date_from="2024-01-16") == []


def test_search_keyword_folds_non_ascii_case(tx_dao):
    tx_dao.create("2024-04-01", "Food", 25.0, "CAFÉ")
    tx_dao.create("2024-04-02", "Épicerie", 8.0)

    assert [t.notes for t in tx_dao.search(keyword="CAFÉ")] == ["CAFÉ"]
    assert [t.notes for t in tx_dao.search(keyword="café")] == ["CAFÉ"]
    assert [t.category for t in tx_dao.search(keyword="épicerie")] == ["Épicerie"]


def test_search_keyword_is_literal(tx_dao):
    tx_dao.create("2024-04-01", "Food", 25.0, "pizza")
    tx_dao.create("2024-04-02", "Rent", 900.0, "100% paid")
    tx_dao.create("2024-04-03", "Utilities", 40.0, "power_bill")

    assert [t.category for t in tx_dao.search(keyword="%")] == ["Rent"]
    assert [t.category for t in tx_dao.search(keyword="_")] == ["Utilities"]
    assert [t.category for t in tx_dao.search(keyword="p_zza")] == []
    assert [t.category for t in tx_dao.search(keyword="%", date_to="2024-04-01")] == []
