from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Summary:
    total_income: float = 0.0
    total_expenses: float = 0.0
    balance: float = 0.0


class MonthlyTotal(NamedTuple):
    year: int
    month: int
    income: float
    expense: float

    @property
    def net(self) -> float:
        return self.income - self.expense


class CategoryTotal(NamedTuple):
    category: str
    total: float
