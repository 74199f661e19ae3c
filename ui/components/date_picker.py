import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from utils.date_helpers import (
    parse_date, format_date, format_display_date, parse_display_date,
)
from datetime import date


def _parse_entry(raw: str, fmt_key: str) -> date | None:
    """Read an entry value typed in the display format or as ISO."""
    raw = raw.strip()
    if not raw:
        return None
    d = parse_display_date(raw, fmt_key)
    if d is None:
        d = parse_date(raw.replace("/", "-").replace(".", "-"))
    return d


class DatePickerWidget(ctk.CTkFrame):
    """Entry in the display format with a calendar popup button.

    .get() returns YYYY-MM-DD for the service layer, .set() takes the same.
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(
            value=format_display_date(initial_date, date_format) if initial_date else ""
        )

        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=120)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)
        self._entry.bind("<Return>", self._on_focus_out)

        ctk.CTkButton(
            self, text="📅", width=32, command=self._open_popup
        ).grid(row=0, column=1, padx=(4, 0))

    def get(self) -> str:
        """YYYY-MM-DD, the raw text when it does not parse, '' when empty."""
        raw = self._var.get().strip()
        d = _parse_entry(raw, self._date_format)
        return format_date(d) if d else raw

    def set(self, date_str: str):
        d = parse_date(date_str) if date_str else None
        if d:
            self._show(d)
        else:
            self._var.set(date_str or "")
        self._reset_border()

    def is_valid(self) -> bool:
        return _parse_entry(self._var.get(), self._date_format) is not None

    def _show(self, d: date):
        self._var.set(format_display_date(format_date(d), self._date_format))

    def _on_focus_out(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._reset_border()
            return
        d = _parse_entry(raw, self._date_format)
        if d:
            self._show(d)
            self._reset_border()
        else:
            self._entry.configure(border_color="#F44336")

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        if ctk.get_appearance_mode() == "Dark":
            bg, fg = "#2b2b2b", "#ffffff"
        else:
            bg, fg = "#ffffff", "#000000"
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = _parse_entry(self._var.get(), self._date_format) or date.today()

        # tkcalendar hands back yyyy-mm-dd; the entry shows the display format
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

        popup.bind("<FocusOut>", lambda e: self._maybe_close(popup))

    def _on_date_selected(self, cal):
        self.set(cal.get_date())
        self._close_popup()

    def _close_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
        self._popup = None

    def _maybe_close(self, popup):
        try:
            focused = popup.focus_get()
        except (KeyError, tk.TclError):
            # focus moved to a widget tkinter cannot name (e.g. a combobox popdown)
            focused = None
        if focused is None or not str(focused).startswith(str(popup)):
            self._close_popup()
