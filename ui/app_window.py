import customtkinter as ctk
from services.expense_service import ExpenseService
from services.data_service import DataService
from database.db_manager import DatabaseManager
from ui.components.alert_banner import AlertBanner
from ui.components.expense_form import ExpenseForm
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.expenses_tab import ExpensesTab
from ui.tabs.insights_tab import InsightsTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, SEVERITY_COLORS


_REFRESH_SCOPES: dict[str, set[str]] = {
    "expense":  {"dashboard", "expenses", "insights"},
    "settings": {"settings"},
    "full":     {"dashboard", "expenses", "insights", "settings"},
}


class AppWindow(ctk.CTk):
    """Presentation-state holder: tabs, chart widgets and banners.

    All data goes through ExpenseService; this window keeps nothing but
    widget state.
    """

    def __init__(
        self,
        expense_service: ExpenseService,
        data_service: DataService | None = None,
        db: DatabaseManager | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._expense_svc = expense_service
        self._data_svc = data_service
        self._db = db
        self._date_format = date_format

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()
        self._build_tabs()
        self._bind_shortcuts()

        # Startup warnings (e.g. unreadable saved data)
        self.after(200, self.show_pending_warnings)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self, command=self._on_tab_changed)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Expenses", "Insights", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            expense_service=self._expense_svc,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._expenses_tab = ExpensesTab(
            self._tabview.tab("Expenses"),
            expense_service=self._expense_svc,
            data_service=self._data_svc,
            open_add_form=self.open_add_form,
            notify_refresh=self.notify_tabs_refresh,
            notify=self.show_banner,
        )
        self._expenses_tab.grid(row=0, column=0, sticky="nsew")

        self._insights_tab = InsightsTab(
            self._tabview.tab("Insights"),
            expense_service=self._expense_svc,
        )
        self._insights_tab.grid(row=0, column=0, sticky="nsew")

        # Settings tab (only if db and data_service provided)
        if self._db and self._data_svc:
            self._settings_tab = SettingsTab(
                self._tabview.tab("Settings"),
                db=self._db,
                data_service=self._data_svc,
                notify_refresh=self.notify_tabs_refresh,
                notify=self.show_banner,
            )
            self._settings_tab.grid(row=0, column=0, sticky="nsew")
        else:
            self._settings_tab = None

    def _bind_shortcuts(self):
        self.bind_all("<Control-n>", lambda _e: self.open_add_form())
        self.bind_all("<Command-n>", lambda _e: self.open_add_form())
        self.bind_all("<Control-d>", lambda _e: self.show_tab("Dashboard"))
        self.bind_all("<Command-d>", lambda _e: self.show_tab("Dashboard"))
        self.bind_all("<Escape>", lambda _e: self._expenses_tab.clear_search())

    # ── Navigation ───────────────────────────────────────────────────────────
    def show_tab(self, name: str):
        self._tabview.set(name)
        self._on_tab_changed()

    def _on_tab_changed(self):
        current = self._tabview.get()
        if current == "Dashboard":
            self.after(100, self._dashboard_tab.refresh)
        elif current == "Insights":
            self._insights_tab.refresh()

    def open_add_form(self):
        form = ExpenseForm(self, self._expense_svc, date_format=self._date_format)
        self.wait_window(form)
        if form.saved:
            self.notify_tabs_refresh("expense")
            self.show_banner("Expense added successfully!", "success")
            self.show_tab("Dashboard")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard" in tabs: self._dashboard_tab.refresh()
        if "expenses"  in tabs: self._expenses_tab.refresh()
        if "insights"  in tabs: self._insights_tab.refresh()
        if "settings"  in tabs and self._settings_tab: self._settings_tab.refresh()
        self.show_pending_warnings()

    # ── Banners ──────────────────────────────────────────────────────────────
    def show_pending_warnings(self):
        for message in self._expense_svc.pop_warnings():
            self.show_banner(message, "error", timeout_ms=None)

    def show_banner(self, message: str, severity: str = "info", timeout_ms: int | None = 3000):
        banner = AlertBanner(
            self._banner_frame,
            message=message,
            color=SEVERITY_COLORS.get(severity, SEVERITY_COLORS["info"]),
            timeout_ms=timeout_ms,
        )
        banner.pack(fill="x", pady=2)
