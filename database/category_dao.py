from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db
        self._all_cache: list | None = None

    def _invalidate_cache(self):
        self._all_cache = None

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            icon=row["icon"] or "",
        )

    def get_all(self) -> list[Category]:
        if self._all_cache is None:
            conn = self._db.get_connection()
            rows = conn.execute(
                "SELECT * FROM categories ORDER BY name ASC"
            ).fetchall()
            self._all_cache = [self._row_to_model(r) for r in rows]
        return list(self._all_cache)

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_name(self, name: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE name = ?", (name,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_type_by_name(self, name: str) -> Optional[str]:
        """Live exact-name lookup; bypasses the list cache."""
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT type FROM categories WHERE name = ?", (name,)
        ).fetchone()
        return row["type"] if row else None

    def get_by_type(self, type_filter: str) -> list[Category]:
        """type_filter: 'Income' or 'Expense'."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE type = ? ORDER BY name ASC",
            (type_filter,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def count(self) -> int:
        conn = self._db.get_connection()
        return conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]

    def create(self, name: str, type_: str, icon: str = "") -> Category:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO categories(name, type, icon) VALUES (?, ?, ?)",
            (name, type_, icon),
        )
        conn.commit()
        self._invalidate_cache()
        return self.get_by_id(cursor.lastrowid)

    def update(self, category_id: int, name: str, type_: str, icon: str = "") -> Category:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE categories SET name=?, type=?, icon=? WHERE id=?",
            (name, type_, icon, category_id),
        )
        conn.commit()
        self._invalidate_cache()
        return self.get_by_id(category_id)

    def delete(self, category_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        conn.commit()
        self._invalidate_cache()
