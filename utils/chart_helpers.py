from models.summary import CategoryTotal
from utils.constants import CHART_COLORS
from utils.currency import format_currency


def slice_colors(count: int) -> list[str]:
    """Pie colors, cycling through CHART_COLORS."""
    return [CHART_COLORS[i % len(CHART_COLORS)] for i in range(count)]


def legend_entries(breakdown: list[CategoryTotal], symbol: str) -> list[tuple[str, str]]:
    """(color, label) for every slice, in breakdown order."""
    return [
        (color, f"{item.category}: {format_currency(item.total, symbol)}")
        for color, item in zip(slice_colors(len(breakdown)), breakdown)
    ]
