import pytest

from database.category_dao import CategoryDAO
from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from services.category_service import CategoryService
from services.classifier import CategoryClassifier
from services.report_service import ReportService
from services.transaction_service import TransactionService


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "finance.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def classifier(category_dao):
    return CategoryClassifier(category_dao)


@pytest.fixture
def category_service(category_dao):
    return CategoryService(category_dao)


@pytest.fixture
def tx_service(tx_dao):
    return TransactionService(tx_dao)


@pytest.fixture
def report_service(tx_dao, classifier):
    return ReportService(tx_dao, classifier)


@pytest.fixture
def empty_categories(category_dao):
    """Remove the seeded defaults so only the fallback list applies."""
    for cat in category_dao.get_all():
        category_dao.delete(cat.id)
    return category_dao


@pytest.fixture
def sample_transactions(tx_dao):
    tx_dao.create("2024-01-10", "Salary", 1000.0)
    tx_dao.create("2024-01-15", "Food", 200.0, "groceries")
    tx_dao.create("2024-02-01", "Food", 50.0)
    return tx_dao.get_all()
