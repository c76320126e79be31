import logging
from database.transaction_dao import TransactionDAO
from models.transaction import Transaction
from services.transaction_editor import TransactionRequest

logger = logging.getLogger(__name__)


class TransactionService:
    """CRUD façade over the transaction store.

    Input is expected to be validated already (see transaction_editor);
    store errors propagate unchanged.
    """

    def __init__(self, tx_dao: TransactionDAO):
        self._dao = tx_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get_by_id(self, tx_id: int) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def count(self) -> int:
        return self._dao.count()

    def search(
        self,
        keyword: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[Transaction]:
        keyword = (keyword or "").strip() or None
        if not (keyword or date_from or date_to):
            return self._dao.get_all()
        return self._dao.search(keyword, date_from, date_to)

    def create(self, date: str, category: str, amount: float, notes: str = "") -> Transaction:
        tx = self._dao.create(date=date, category=category, amount=amount, notes=notes)
        logger.info("Added [%d] %s | %s | %.2f | %s", tx.id, tx.date, tx.category, tx.amount, tx.notes)
        return tx

    def update(
        self, tx_id: int, date: str, category: str, amount: float, notes: str = ""
    ) -> Transaction | None:
        tx = self._dao.update(tx_id, date, category, amount, notes)
        if tx is None:
            logger.warning("Update skipped: transaction [%d] not found", tx_id)
            return None
        logger.info("Updated [%d] %s | %s | %.2f | %s", tx.id, tx.date, tx.category, tx.amount, tx.notes)
        return tx

    def save(self, request: TransactionRequest) -> Transaction | None:
        """Create or update depending on request.editing_id."""
        if request.editing_id is None:
            return self.create(request.date, request.category, request.amount, request.notes)
        return self.update(
            request.editing_id, request.date, request.category, request.amount, request.notes
        )

    def delete(self, tx_id: int):
        self._dao.delete(tx_id)
        logger.info("Deleted transaction [%d]", tx_id)
