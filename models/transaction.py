from dataclasses import dataclass


@dataclass
class Transaction:
    id: int
    date: str               # 'YYYY-MM-DD'
    category: str           # category name, not a foreign key
    amount: float           # magnitude; kind comes from the category
    notes: str = ""

    @property
    def year(self) -> int:
        return int(self.date[:4])

    @property
    def month(self) -> int:
        return int(self.date[5:7])

    @property
    def year_month(self) -> tuple[int, int]:
        return self.year, self.month
