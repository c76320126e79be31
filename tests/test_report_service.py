from models.summary import CategoryTotal, MonthlyTotal
from models.transaction import Transaction
from utils.constants import INCOME


def _tx(tx_id, date, category, amount, notes=""):
    return Transaction(id=tx_id, date=date, category=category, amount=amount, notes=notes)


def test_summarize_empty(report_service):
    summary = report_service.summarize([])
    assert summary.total_income == 0.0
    assert summary.total_expenses == 0.0
    assert summary.balance == 0.0


def test_summary_months_and_breakdown(report_service, sample_transactions):
    summary = report_service.summarize(sample_transactions)
    assert summary.total_income == 1000.0
    assert summary.total_expenses == 250.0
    assert summary.balance == 750.0

    assert report_service.group_by_month(sample_transactions) == [
        MonthlyTotal(2024, 1, 1000.0, 200.0),
        MonthlyTotal(2024, 2, 0.0, 50.0),
    ]
    assert report_service.expense_breakdown(sample_transactions, 2024, 1) == [
        CategoryTotal("Food", 200.0)
    ]


def test_reclassified_category_changes_totals(
    report_service, category_service, sample_transactions
):
    food = category_service.get_all()
    food = next(c for c in food if c.name == "Food")
    category_service.update(food.id, "Food", INCOME, food.icon)

    summary = report_service.summarize(sample_transactions)
    assert summary.total_income == 1250.0
    assert summary.total_expenses == 0.0
    assert report_service.expense_breakdown(sample_transactions, 2024, 1) == []


def test_balance_can_go_negative(report_service):
    txs = [_tx(1, "2024-03-01", "Salary", 100.0), _tx(2, "2024-03-02", "Rent", 400.0)]
    summary = report_service.summarize(txs)
    assert summary.balance == -300.0


def test_group_by_month_is_ascending_across_years(report_service):
    txs = [
        _tx(1, "2025-01-05", "Food", 10.0),
        _tx(2, "2023-12-31", "Salary", 500.0),
        _tx(3, "2024-06-15", "Food", 20.0),
    ]
    months = report_service.group_by_month(txs)
    assert [(m.year, m.month) for m in months] == [(2023, 12), (2024, 6), (2025, 1)]
    assert months[0].net == 500.0
    assert months[2].net == -10.0


def test_expense_breakdown_order_and_ties(report_service):
    txs = [
        _tx(1, "2024-05-01", "Transport", 30.0),
        _tx(2, "2024-05-02", "Food", 30.0),
        _tx(3, "2024-05-03", "Rent", 800.0),
        _tx(4, "2024-05-04", "Salary", 5000.0),
        _tx(5, "2024-04-30", "Healthcare", 999.0),
    ]
    breakdown = report_service.expense_breakdown(txs, 2024, 5)
    assert [c.category for c in breakdown] == ["Rent", "Food", "Transport"]
    assert all(c.total > 0 for c in breakdown)


def test_unknown_category_counts_as_expense(report_service):
    txs = [_tx(1, "2024-05-01", "Mystery", 12.5)]
    assert report_service.summarize(txs).total_expenses == 12.5
    assert report_service.expense_breakdown(txs, 2024, 5) == [CategoryTotal("Mystery", 12.5)]


def test_aggregation_does_not_touch_transaction_store(report_service, tx_dao):
    txs = [_tx(1, "2024-05-01", "Food", 12.5)]
    report_service.summarize(txs)
    report_service.group_by_month(txs)
    assert tx_dao.count() == 0


def test_latest_month_with_data(report_service, sample_transactions):
    assert report_service.latest_month_with_data([]) is None
    assert report_service.latest_month_with_data(sample_transactions) == (2024, 2)


def test_breakdown_falls_back_to_latest_month(report_service, sample_transactions):
    year, month, breakdown = report_service.breakdown_with_fallback(
        sample_transactions, 2024, 6
    )
    assert (year, month) == (2024, 2)
    assert breakdown == [CategoryTotal("Food", 50.0)]


def test_breakdown_keeps_requested_month_when_it_has_expenses(
    report_service, sample_transactions
):
    year, month, breakdown = report_service.breakdown_with_fallback(
        sample_transactions, 2024, 1
    )
    assert (year, month) == (2024, 1)
    assert breakdown == [CategoryTotal("Food", 200.0)]


def test_breakdown_falls_back_from_income_only_month(report_service):
    txs = [
        _tx(1, "2024-01-10", "Salary", 1000.0),
        _tx(2, "2024-03-05", "Food", 40.0),
        _tx(3, "2024-03-06", "Rent", 500.0),
    ]
    year, month, breakdown = report_service.breakdown_with_fallback(txs, 2024, 1)
    assert (year, month) == (2024, 3)
    assert breakdown == [CategoryTotal("Rent", 500.0), CategoryTotal("Food", 40.0)]


def test_breakdown_latest_month_with_only_income(report_service):
    txs = [
        _tx(1, "2024-01-15", "Food", 40.0),
        _tx(2, "2024-02-01", "Salary", 1000.0),
    ]
    assert report_service.breakdown_with_fallback(txs, 2024, 2) == (2024, 2, [])


def test_breakdown_with_no_data(report_service):
    assert report_service.breakdown_with_fallback([], 2024, 1) == (2024, 1, [])


def test_store_backed_helpers(report_service, sample_transactions):
    assert report_service.get_summary().balance == 750.0

    chart = report_service.get_monthly_chart_data()
    assert chart[0] == {"label": "Jan 2024", "income": 1000.0, "expense": 200.0, "net": 800.0}
    assert chart[1]["label"] == "Feb 2024"

    year, month, breakdown = report_service.get_category_breakdown(year_month=(2024, 1))
    assert (year, month) == (2024, 1)
    assert breakdown == [CategoryTotal("Food", 200.0)]


def test_export_csv(report_service, sample_transactions):
    rows = report_service.export_csv(sample_transactions)
    assert rows[0] == ["Date", "Type", "Category", "Amount", "Notes"]
    assert rows[1] == ["2024-01-10", "Income", "Salary", "1000.00", ""]
    assert rows[2] == ["2024-01-15", "Expense", "Food", "200.00", "groceries"]
    assert len(rows) == 4
