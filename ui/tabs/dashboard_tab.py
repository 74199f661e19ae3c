import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from models.category import get_category_info
from services.expense_service import ExpenseService
from utils.constants import TREND_LINE_COLOR


class DashboardTab(ctk.CTkFrame):
    """Summary cards for the current month plus category and 7-day charts."""

    def __init__(self, master, expense_service: ExpenseService, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._expense_svc = expense_service

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
        charts.grid_columnconfigure(0, weight=2)
        charts.grid_columnconfigure(1, weight=3)
        charts.grid_rowconfigure(0, weight=1)

        # Doughnut chart frame
        pie_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        pie_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            pie_outer, text="Spending by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=pie_outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        # Trend chart frame
        line_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        line_outer.grid(row=0, column=1, sticky="nsew")
        ctk.CTkLabel(
            line_outer, text="Daily Spending (Last 7 Days)",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._line_fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._line_ax = self._line_fig.add_subplot(111)
        self._line_mpl = FigureCanvasTkAgg(self._line_fig, master=line_outer)
        self._line_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)
        return fg

    def _load(self):
        summary = self._expense_svc.dashboard_summary()

        for w in self._card_frame.winfo_children():
            w.destroy()
        top = summary.top_category_this_month
        card_data = [
            ("Total Spent This Month", self._expense_svc.currency(summary.total_this_month), "#F44336"),
            ("Transactions", str(summary.transaction_count_this_month), "#2196F3"),
            ("Top Category", get_category_info(top).name if top else "None", "#4CAF50"),
        ]
        for i, (label, text, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, text, color)

        self.after(50, self._draw_category_chart)
        self.after(50, self._draw_trend_chart)

    def _draw_category_chart(self):
        ax = self._pie_ax
        ax.clear()
        fg = self._style_ax(ax, self._pie_fig)

        series = self._expense_svc.category_chart_series()
        if not series:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [p.value for p in series],
            colors=[p.color for p in series],
            labels=[p.label for p in series],
            startangle=90,
            wedgeprops={"width": 0.4, "edgecolor": "white", "linewidth": 2},
            textprops={"color": fg, "fontsize": 8},
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

    def _draw_trend_chart(self):
        ax = self._line_ax
        ax.clear()
        self._style_ax(ax, self._line_fig)

        points = self._expense_svc.trend_chart_series()
        x = list(range(len(points)))
        values = [p.value for p in points]
        ax.plot(x, values, color=TREND_LINE_COLOR, linewidth=2.5, marker="o",
                markerfacecolor=TREND_LINE_COLOR, markeredgecolor="white")
        ax.fill_between(x, values, color=TREND_LINE_COLOR, alpha=0.1)
        ax.set_xticks(x)
        ax.set_xticklabels([p.label for p in points])
        ax.set_ylim(bottom=0)
        ax.yaxis.set_major_formatter(lambda v, _: f"${v:.0f}")
        self._line_mpl.draw_idle()

    def _make_card(self, parent, col, label, text, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card,
            text=text,
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
