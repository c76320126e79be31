from typing import Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            date=row["date"],
            category=row["category"],
            amount=float(row["amount"]),
            notes=row["notes"] or "",
        )

    def get_all(self) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM transactions ORDER BY date DESC, id DESC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM transactions WHERE id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def search(
        self,
        keyword: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[Transaction]:
        """Date bounds (inclusive) are applied in SQL. The keyword is a literal,
        case-insensitive substring of category or notes, matched in Python
        since SQLite's LOWER() and LIKE only fold ASCII."""
        conn = self._db.get_connection()
        sql = "SELECT * FROM transactions WHERE 1=1"
        params: list = []

        if date_from:
            sql += " AND date >= ?"
            params.append(date_from)
        if date_to:
            sql += " AND date <= ?"
            params.append(date_to)

        sql += " ORDER BY date DESC, id DESC"
        rows = [self._row_to_model(r) for r in conn.execute(sql, params).fetchall()]
        if not keyword:
            return rows
        needle = keyword.casefold()
        return [
            tx for tx in rows
            if needle in tx.category.casefold() or needle in tx.notes.casefold()
        ]

    def count(self) -> int:
        conn = self._db.get_connection()
        return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]

    def create(
        self,
        date: str,
        category: str,
        amount: float,
        notes: str = "",
    ) -> Transaction:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO transactions (date, category, amount, notes)
               VALUES (?, ?, ?, ?)""",
            (date, category, amount, notes or ""),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        tx_id: int,
        date: str,
        category: str,
        amount: float,
        notes: str = "",
    ) -> Optional[Transaction]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE transactions
               SET date=?, category=?, amount=?, notes=?
               WHERE id=?""",
            (date, category, amount, notes or "", tx_id),
        )
        conn.commit()
        return self.get_by_id(tx_id)

    def delete(self, tx_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
