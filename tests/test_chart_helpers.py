from models.summary import CategoryTotal
from utils.chart_helpers import legend_entries, slice_colors
from utils.constants import CHART_COLORS


def test_slice_colors_cycle():
    colors = slice_colors(len(CHART_COLORS) + 2)
    assert colors[:len(CHART_COLORS)] == list(CHART_COLORS)
    assert colors[len(CHART_COLORS):] == list(CHART_COLORS[:2])
    assert slice_colors(0) == []


def test_legend_covers_every_slice():
    breakdown = [CategoryTotal(f"Cat {i:02d}", 100.0 - i) for i in range(len(CHART_COLORS) + 3)]
    entries = legend_entries(breakdown, "$")
    assert len(entries) == len(breakdown)
    assert [color for color, _label in entries] == slice_colors(len(breakdown))
    assert entries[0] == (CHART_COLORS[0], "Cat 00: $100.00")
    assert entries[-1][1] == f"Cat {len(breakdown) - 1:02d}: ${100.0 - len(breakdown) + 1:,.2f}"
