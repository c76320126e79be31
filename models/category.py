from dataclasses import dataclass
from utils.constants import INCOME


@dataclass
class Category:
    id: int
    name: str
    type: str           # 'Income' | 'Expense'
    icon: str = ""

    @property
    def is_income(self) -> bool:
        return self.type == INCOME

    @property
    def display_name(self) -> str:
        return f"{self.icon} {self.name}" if self.icon else self.name
