import customtkinter as ctk
from tkinter import filedialog, messagebox

from database.db_manager import DatabaseManager
from services.data_service import DataService
from services.errors import ImportFormatError, PersistenceError
from utils.app_config import get_db_folder, set_db_folder
from utils.constants import DB_FILE
from utils.date_helpers import DATE_FORMAT_OPTIONS


_RESTART_NOTE = "Restart the app for the change to take effect."
_DEFAULT_FOLDER = "(default: app folder)"
_OUTLINE = {"fg_color": "transparent", "border_width": 1, "text_color": ("gray10", "gray90")}
_DANGER = {"fg_color": "#F44336", "hover_color": "#D32F2F"}
_APPEARANCE_MODES = ["System", "Light", "Dark"]

# (setting key, default) for everything the preferences card edits
_PREFERENCES = (
    ("appearance_mode", "system"),
    ("currency_symbol", "$"),
    ("date_format", "MM/DD/YYYY"),
)


def _note(parent, text, row, color="gray60", **grid):
    """Small one-line caption under a control."""
    label = ctk.CTkLabel(parent, text=text, text_color=color,
                         font=ctk.CTkFont(size=11), anchor="w")
    label.grid(row=row, column=0, columnspan=3, sticky="w", padx=8, **grid)
    return label


class SettingsTab(ctk.CTkFrame):
    """Data folder, JSON backup and restore, and app preferences."""

    def __init__(
        self,
        master,
        db: DatabaseManager,
        data_service: DataService,
        notify_refresh,
        notify=None,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._data_svc = data_service
        self._notify_refresh = notify_refresh
        self._notify = notify or (lambda *_a, **_k: None)
        self._vars = {key: ctk.StringVar() for key, _ in _PREFERENCES}

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        body = ctk.CTkScrollableFrame(self, fg_color="transparent")
        body.grid(row=0, column=0, sticky="nsew")
        body.grid_columnconfigure(0, weight=1)

        self._build_folder_card(self._card(body, "Data Folder", 0))
        self._build_backup_card(self._card(body, "Backup & Restore", 1))
        self._build_preferences_card(self._card(body, "Preferences", 2))
        self.refresh()

    def refresh(self):
        """Show the values currently stored in app_settings."""
        values = {key: self._db.get_setting(key, default) for key, default in _PREFERENCES}
        self._vars["appearance_mode"].set(values["appearance_mode"].title())
        self._vars["currency_symbol"].set(values["currency_symbol"])
        if values["date_format"] in DATE_FORMAT_OPTIONS:
            self._vars["date_format"].set(values["date_format"])

    # ── Data folder ───────────────────────────────────────────────────────────

    def _build_folder_card(self, card):
        _note(card, f"Expenses are saved to {DB_FILE} in this folder.", 0, pady=(4, 6))

        self._folder_var = ctk.StringVar(value=get_db_folder() or _DEFAULT_FOLDER)
        ctk.CTkEntry(card, textvariable=self._folder_var, state="readonly", width=340).grid(
            row=1, column=0, padx=(8, 4), pady=4, sticky="ew"
        )
        ctk.CTkButton(card, text="Browse…", width=90, command=self._choose_folder).grid(
            row=1, column=1, padx=4
        )
        ctk.CTkButton(card, text="Use Default", width=110, command=self._default_folder,
                      **_OUTLINE).grid(row=1, column=2, padx=(4, 8))

        self._folder_note = _note(card, "", 2, color="#FF9800", pady=(0, 6))

    def _choose_folder(self):
        path = filedialog.askdirectory(title="Choose data folder")
        if path:
            self._set_folder(path)

    def _default_folder(self):
        self._set_folder(None)

    def _set_folder(self, path: str | None):
        set_db_folder(path)
        self._folder_var.set(path or _DEFAULT_FOLDER)
        self._folder_note.configure(text=_RESTART_NOTE)

    # ── Backup / restore ──────────────────────────────────────────────────────

    def _build_backup_card(self, card):
        buttons = ctk.CTkFrame(card, fg_color="transparent")
        buttons.grid(row=0, column=0, sticky="w", padx=8, pady=6)
        ctk.CTkButton(buttons, text="Export Data", width=130,
                      command=self._export).pack(side="left", padx=4)
        ctk.CTkButton(buttons, text="Import Data…", width=130,
                      command=self._import, **_OUTLINE).pack(side="left", padx=4)

        self._backup_note = _note(card, "", 1, color="#4CAF50", pady=(0, 6))

    def _export(self):
        path = filedialog.asksaveasfilename(
            title="Export Data",
            initialfile=self._data_svc.default_export_filename(),
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            self._data_svc.write_json(path)
        except OSError as e:
            messagebox.showerror("Export Failed", str(e))
            return
        self._backup_note.configure(text=f"Exported to {path}")
        self._notify("Data exported successfully!", "success")

    def _import(self):
        path = filedialog.askopenfilename(
            title="Import Data",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        dialog = _ImportModeDialog(self.winfo_toplevel())
        self.wait_window(dialog)
        if not dialog.mode:
            return

        try:
            count = self._data_svc.import_snapshot(self._data_svc.read_json(path), dialog.mode)
        except ImportFormatError as e:
            messagebox.showerror("Import Failed", f"Invalid file format.\n\n{e}")
            return

        self._notify_refresh("full")
        noun = "expense" if count == 1 else "expenses"
        self._backup_note.configure(text=f"Imported {count} {noun} ({dialog.mode}).")
        self._notify("Data imported successfully!", "success")

    # ── Preferences ───────────────────────────────────────────────────────────

    def _build_preferences_card(self, card):
        rows = (
            ("Appearance:", ctk.CTkComboBox(
                card, values=_APPEARANCE_MODES, state="readonly", width=180,
                variable=self._vars["appearance_mode"],
            )),
            ("Currency Symbol:", ctk.CTkEntry(
                card, width=60, textvariable=self._vars["currency_symbol"],
            )),
            ("Date Format:", ctk.CTkComboBox(
                card, values=DATE_FORMAT_OPTIONS, state="readonly", width=180,
                variable=self._vars["date_format"],
            )),
        )
        for row, (text, widget) in enumerate(rows):
            ctk.CTkLabel(card, text=text, anchor="e", width=120).grid(
                row=row, column=0, padx=(8, 4), pady=6, sticky="e"
            )
            widget.grid(row=row, column=1, padx=4, pady=6, sticky="w")

        _note(card, "Currency and date format apply after a restart.", len(rows))
        ctk.CTkButton(card, text="Save Preferences", width=150,
                      command=self._save_preferences).grid(
            row=len(rows) + 1, column=0, columnspan=2, pady=(10, 4)
        )
        self._prefs_note = _note(card, "", len(rows) + 2, color="#4CAF50", pady=(0, 8))

    def _save_preferences(self):
        appearance = self._vars["appearance_mode"].get().lower()
        self._vars["currency_symbol"].set(self._vars["currency_symbol"].get().strip() or "$")
        try:
            for key, _ in _PREFERENCES:
                value = appearance if key == "appearance_mode" else self._vars[key].get()
                self._db.set_setting(key, value)
        except PersistenceError as e:
            messagebox.showerror("Save Failed", str(e))
            return
        ctk.set_appearance_mode(appearance)
        self._prefs_note.configure(text="Preferences saved.")
        self._notify_refresh("settings")

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _card(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Titled card in the scrolling body; returns the content frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(outer, text=title, anchor="w",
                     font=ctk.CTkFont(size=14, weight="bold")).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 4)
        )
        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner


class _ImportModeDialog(ctk.CTkToplevel):
    """Asks whether an import replaces the history or merges into it."""

    _CHOICES = (
        ("merge", "Merge: add new expenses only", {}),
        ("replace", "Replace: overwrite all expenses", _DANGER),
    )

    def __init__(self, master):
        super().__init__(master)
        self.mode: str | None = None

        self.title("Import Data")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text="What should happen to the expenses you already have?",
            font=ctk.CTkFont(size=13), wraplength=280,
        ).grid(row=0, column=0, padx=24, pady=(20, 8), sticky="ew")

        for row, (mode, text, style) in enumerate(self._CHOICES, start=1):
            ctk.CTkButton(self, text=text, command=lambda m=mode: self._choose(m), **style).grid(
                row=row, column=0, padx=24, pady=4, sticky="ew"
            )
        ctk.CTkButton(self, text="Cancel", command=self.destroy, **_OUTLINE).grid(
            row=len(self._CHOICES) + 1, column=0, padx=24, pady=(8, 16), sticky="ew"
        )

        self.transient(master)
        self.grab_set()
        self._center()

    def _choose(self, mode: str):
        self.mode = mode
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
