import logging
import os
import sys
import customtkinter as ctk
import structlog

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO

from services.expense_service import ExpenseService
from services.data_service import DataService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level, get_random_seed
from utils.providers import Clock, RandomProvider


def main():
    # ── Logging ──────────────────────────────────────────────────────────────
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(get_log_level())
        ),
    )

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open_default(db_folder=get_db_folder())

    # ── Providers ────────────────────────────────────────────────────────────
    clock = Clock()
    rng = RandomProvider(get_random_seed())

    # ── Services ─────────────────────────────────────────────────────────────
    expense_svc = ExpenseService(
        ExpenseDAO(db), clock, rng,
        currency_symbol=db.get_setting("currency_symbol", "$"),
    )
    expense_svc.load()
    data_svc = DataService(expense_svc, clock)

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system")
    date_format = db.get_setting("date_format", "MM/DD/YYYY")
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        expense_service=expense_svc,
        data_service=data_svc,
        db=db,
        date_format=date_format,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
