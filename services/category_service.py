import logging
from database.category_dao import CategoryDAO
from models.category import Category
from utils.constants import CATEGORY_TYPES, EXPENSE, INCOME

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_id(self, category_id: int) -> Category | None:
        return self._dao.get_by_id(category_id)

    def get_income_categories(self) -> list[Category]:
        return self._dao.get_by_type(INCOME)

    def get_expense_categories(self) -> list[Category]:
        return self._dao.get_by_type(EXPENSE)

    def create(self, name: str, type_: str, icon: str = "") -> Category:
        name = self._validate(name, type_)
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValueError(f"A category named '{name}' already exists.")
        category = self._dao.create(name, type_, icon.strip())
        logger.info("Added category %s %s (%s)", category.icon, category.name, category.type)
        return category

    def update(self, category_id: int, name: str, type_: str, icon: str = "") -> Category:
        name = self._validate(name, type_)
        existing = [c for c in self._dao.get_all() if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in existing):
            raise ValueError(f"A category named '{name}' already exists.")
        category = self._dao.update(category_id, name, type_, icon.strip())
        logger.info("Updated category [%d] %s (%s)", category_id, name, type_)
        return category

    def delete(self, category_id: int):
        cat = self._dao.get_by_id(category_id)
        self._dao.delete(category_id)
        if cat:
            logger.info("Deleted category [%d] %s %s", cat.id, cat.icon, cat.name)

    def _validate(self, name: str, type_: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a category name.")
        if type_ not in CATEGORY_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        return name
