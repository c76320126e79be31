import logging
from collections import defaultdict
from typing import Iterable

from database.transaction_dao import TransactionDAO
from models.summary import CategoryTotal, MonthlyTotal, Summary
from models.transaction import Transaction
from services.classifier import CategoryClassifier
from utils.date_helpers import current_year_month, month_label

logger = logging.getLogger(__name__)


class ReportService:
    """Summary totals and chart series over a snapshot of transactions.

    The aggregation methods never touch the transaction table; they only
    consult the classifier. Each call classifies a given category name at
    most once, and nothing is remembered between calls.
    """

    def __init__(self, tx_dao: TransactionDAO, classifier: CategoryClassifier):
        self._tx_dao = tx_dao
        self._classifier = classifier

    def _income_lookup(self):
        kinds: dict[str, bool] = {}

        def is_income(category: str) -> bool:
            if category not in kinds:
                kinds[category] = self._classifier.is_income(category)
            return kinds[category]

        return is_income

    # ── Pure aggregation over a snapshot ─────────────────────────────────────

    def summarize(self, transactions: Iterable[Transaction]) -> Summary:
        is_income = self._income_lookup()
        income = 0.0
        expenses = 0.0
        for tx in transactions:
            if is_income(tx.category):
                income += abs(tx.amount)
            else:
                expenses += abs(tx.amount)
        return Summary(
            total_income=income,
            total_expenses=expenses,
            balance=income - expenses,
        )

    def group_by_month(self, transactions: Iterable[Transaction]) -> list[MonthlyTotal]:
        """One entry per (year, month) present, ascending."""
        is_income = self._income_lookup()
        # (year, month) -> [income, expense]
        buckets: dict[tuple[int, int], list[float]] = defaultdict(lambda: [0.0, 0.0])
        for tx in transactions:
            slot = 0 if is_income(tx.category) else 1
            buckets[tx.year_month][slot] += abs(tx.amount)
        return [
            MonthlyTotal(year, month, income, expense)
            for (year, month), (income, expense) in sorted(buckets.items())
        ]

    def expense_breakdown(
        self, transactions: Iterable[Transaction], year: int, month: int
    ) -> list[CategoryTotal]:
        """Expense totals per category for one month, largest first, ties by name."""
        is_income = self._income_lookup()
        totals: dict[str, float] = defaultdict(float)
        for tx in transactions:
            if tx.year_month != (year, month) or is_income(tx.category):
                continue
            totals[tx.category] += abs(tx.amount)
        ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        return [CategoryTotal(category, total) for category, total in ordered]

    @staticmethod
    def latest_month_with_data(
        transactions: Iterable[Transaction],
    ) -> tuple[int, int] | None:
        latest = max(transactions, key=lambda tx: tx.date, default=None)
        return latest.year_month if latest else None

    def breakdown_with_fallback(
        self, transactions: list[Transaction], year: int, month: int
    ) -> tuple[int, int, list[CategoryTotal]]:
        """Breakdown for (year, month), or for the latest month with data when
        the requested month has no expenses. Returns the month actually used."""
        breakdown = self.expense_breakdown(transactions, year, month)
        if breakdown:
            return year, month, breakdown
        latest = self.latest_month_with_data(transactions)
        if latest is None or latest == (year, month):
            return year, month, []
        logger.debug(
            "No expenses in %04d-%02d; showing %04d-%02d instead",
            year, month, latest[0], latest[1],
        )
        return latest[0], latest[1], self.expense_breakdown(transactions, *latest)

    # ── Store-backed helpers for the UI ──────────────────────────────────────

    def get_snapshot(self) -> list[Transaction]:
        return self._tx_dao.get_all()

    def get_summary(self, transactions: list[Transaction] | None = None) -> Summary:
        snapshot = self.get_snapshot() if transactions is None else transactions
        return self.summarize(snapshot)

    def get_monthly_chart_data(
        self, transactions: list[Transaction] | None = None
    ) -> list[dict]:
        """Return list of {label, income, expense, net} for the line chart."""
        snapshot = self.get_snapshot() if transactions is None else transactions
        return [
            {
                "label": month_label(m.year, m.month),
                "income": m.income,
                "expense": m.expense,
                "net": m.net,
            }
            for m in self.group_by_month(snapshot)
        ]

    def get_category_breakdown(
        self,
        transactions: list[Transaction] | None = None,
        year_month: tuple[int, int] | None = None,
    ) -> tuple[int, int, list[CategoryTotal]]:
        """Expense breakdown for the given month (default: current month) with
        the latest-month fallback applied."""
        snapshot = self.get_snapshot() if transactions is None else transactions
        year, month = year_month or current_year_month()
        return self.breakdown_with_fallback(snapshot, year, month)

    def export_csv(self, transactions: list[Transaction]) -> list[list[str]]:
        """Return rows suitable for CSV export."""
        rows = [["Date", "Type", "Category", "Amount", "Notes"]]
        for tx in sorted(transactions, key=lambda t: (t.date, t.id)):
            rows.append([
                tx.date,
                self._classifier.kind_of(tx.category),
                tx.category,
                f"{tx.amount:.2f}",
                tx.notes,
            ])
        return rows
