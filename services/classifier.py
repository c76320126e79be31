from database.category_dao import CategoryDAO
from utils.constants import EXPENSE, FALLBACK_INCOME_CATEGORIES, INCOME


class CategoryClassifier:
    """Decides whether a category name counts as income or expense.

    Every call reads the live categories table, so editing a category's
    type retroactively changes the kind of every transaction using it.
    Names missing from the table fall back to a fixed, case-insensitive
    list of income names; anything else is an expense.
    """

    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def is_income(self, category_name: str) -> bool:
        type_ = self._dao.get_type_by_name(category_name)
        if type_ is not None:
            return type_ == INCOME
        return (category_name or "").lower() in FALLBACK_INCOME_CATEGORIES

    def is_expense(self, category_name: str) -> bool:
        return not self.is_income(category_name)

    def kind_of(self, category_name: str) -> str:
        return INCOME if self.is_income(category_name) else EXPENSE
