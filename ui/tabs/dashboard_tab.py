import logging

import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from utils.chart_helpers import legend_entries, slice_colors
from utils.currency import format_currency
from utils.date_helpers import friendly_month

logger = logging.getLogger(__name__)


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        get_currency,   # callable → str
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._get_currency = get_currency

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_summary_cards()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=3)
        charts.grid_columnconfigure(1, weight=2)
        charts.grid_rowconfigure(0, weight=1)

        # Line chart
        line_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        line_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            line_outer, text="Monthly Income vs Expenses",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._line_fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._line_ax = self._line_fig.add_subplot(111)
        self._line_mpl = FigureCanvasTkAgg(self._line_fig, master=line_outer)
        self._line_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        # Pie chart
        pie_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        pie_outer.grid(row=0, column=1, sticky="nsew")
        self._pie_title = ctk.CTkLabel(
            pie_outer, text="Expense Distribution",
            font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._pie_title.pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=pie_outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        self._legend_frame = ctk.CTkFrame(pie_outer, fg_color="transparent")
        self._legend_frame.pack(fill="x", padx=8, pady=(0, 8))

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _load(self):
        # One snapshot feeds the cards and both charts
        snapshot = self._report_svc.get_snapshot()
        currency = self._get_currency()

        for w in self._card_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary(snapshot)
        card_data = [
            ("Income",   summary.total_income,   "#4CAF50"),
            ("Expenses", summary.total_expenses, "#F44336"),
            ("Balance",  summary.balance,        "#2196F3" if summary.balance >= 0 else "#FF9800"),
        ]
        for i, (label, value, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, value, color, currency)

        monthly = self._report_svc.get_monthly_chart_data(snapshot)
        year, month, breakdown = self._report_svc.get_category_breakdown(snapshot)

        self.after(50, lambda: self._draw_line_chart(monthly))
        self.after(50, lambda: self._draw_pie_chart(breakdown, bool(snapshot)))

        self._pie_title.configure(text=f"Expense Distribution: {friendly_month(year, month)}")
        for w in self._legend_frame.winfo_children():
            w.destroy()
        # Two columns
        for idx, (color, label) in enumerate(legend_entries(breakdown, currency)):
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.grid(row=idx // 2, column=idx % 2, sticky="w", padx=(0, 12), pady=1)
            ctk.CTkLabel(
                row, text="", width=14, height=14, corner_radius=3, fg_color=color,
            ).pack(side="left", padx=(0, 6))
            ctk.CTkLabel(
                row, text=label, anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")

    def _draw_line_chart(self, data: list[dict]):
        ax = self._line_ax
        ax.clear()
        self._style_ax(ax, self._line_fig)

        if not data:
            ax.text(0.5, 0.5, "No data available", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._line_mpl.draw_idle()
            return

        x = list(range(len(data)))
        ax.plot(x, [d["income"] for d in data], color="#4CAF50", marker="o",
                markersize=4, linewidth=2, label="Income")
        ax.plot(x, [d["expense"] for d in data], color="#F44336", marker="o",
                markersize=4, linewidth=2, label="Expenses")
        ax.set_xticks(x)
        ax.set_xticklabels([d["label"] for d in data], rotation=30, ha="right")
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        ax.legend(fontsize=8)
        self._line_mpl.draw_idle()

    def _draw_pie_chart(self, breakdown, has_data: bool):
        ax = self._pie_ax
        ax.clear()
        self._style_ax(ax, self._pie_fig)

        if not breakdown:
            message = "No expenses found" if has_data else "No data available"
            ax.text(0.5, 0.5, message, ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [item.total for item in breakdown],
            colors=slice_colors(len(breakdown)),
            startangle=90,
            wedgeprops={"edgecolor": "white", "linewidth": 2},
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

    def _make_card(self, parent, col, label, value, color, currency):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        sign = "-" if value < 0 else ""
        ctk.CTkLabel(
            card,
            text=f"{sign}{format_currency(abs(value), currency)}",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
