import os
import customtkinter as ctk
from tkinter import filedialog
from models.category import category_choices, get_category_info
from services.expense_service import ExpenseService
from ui.components.date_picker import DatePickerWidget
from utils.constants import SUGGESTION_MIN_LENGTH


class ExpenseForm(ctk.CTkToplevel):
    """Add an expense. The category follows the description until the user
    picks one by hand."""

    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._expense_svc = expense_service
        self._date_format = date_format
        self._choices = category_choices()
        self._category_touched = False
        self._receipt: str | None = None
        self.saved = False

        self.title("Add Expense")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._build_fields()
        self._build_footer(6)

        self.transient(master)
        self.grab_set()
        self._center()
        self._desc_entry.focus_set()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build_fields(self):
        # Description + live hint
        self._label("Description:", 0)
        self._desc_var = ctk.StringVar()
        self._desc_var.trace_add("write", lambda *_: self._on_description_change())
        self._desc_entry = ctk.CTkEntry(
            self, textvariable=self._desc_var, width=240,
            placeholder_text="e.g. Lunch at restaurant",
        )
        self._desc_entry.grid(row=0, column=1, padx=(0, 16), pady=4, sticky="ew")

        self._hint_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._hint_var, text_color="#667eea",
            font=ctk.CTkFont(size=11), wraplength=240, anchor="w", justify="left",
        ).grid(row=1, column=1, padx=(0, 16), sticky="ew")

        # Amount
        self._label("Amount:", 2)
        self._amount_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._amount_var, width=240).grid(
            row=2, column=1, padx=(0, 16), pady=4, sticky="ew"
        )

        # Date
        self._label("Date:", 3)
        self._date_picker = DatePickerWidget(
            self,
            initial_date=self._expense_svc.today(),
            date_format=self._date_format,
        )
        self._date_picker.grid(row=3, column=1, padx=(0, 16), pady=4, sticky="w")

        # Category (empty means auto-detect on save)
        self._label("Category:", 4)
        self._cat_var = ctk.StringVar(value="")
        ctk.CTkComboBox(
            self,
            values=[f"{get_category_info(k).icon} {name}" for k, name in self._choices],
            variable=self._cat_var, width=240, state="readonly",
            command=lambda _v: self._on_category_picked(),
        ).grid(row=4, column=1, padx=(0, 16), pady=4, sticky="ew")

        # Receipt
        self._label("Receipt:", 5)
        receipt_row = ctk.CTkFrame(self, fg_color="transparent")
        receipt_row.grid(row=5, column=1, padx=(0, 16), pady=4, sticky="ew")
        ctk.CTkButton(
            receipt_row, text="Attach…", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._attach_receipt,
        ).pack(side="left")
        self._receipt_var = ctk.StringVar(value="No receipt")
        ctk.CTkLabel(
            receipt_row, textvariable=self._receipt_var, text_color="gray60",
        ).pack(side="left", padx=8)

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r + 1, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Add Expense", width=110,
            command=self._on_save,
        ).pack(side="right")
        self.bind("<Return>", lambda _e: self._on_save())

    # ── Category hint ────────────────────────────────────────────────────────

    def _on_description_change(self):
        text = self._desc_var.get().strip()
        if len(text) <= SUGGESTION_MIN_LENGTH:
            self._hint_var.set("")
            return
        key = self._expense_svc.suggest_category(text)
        self._hint_var.set(self._expense_svc.suggestion_message(text))
        if not self._category_touched:
            self._cat_var.set(self._display_for(key))

    def _on_category_picked(self):
        self._category_touched = True

    def _display_for(self, key: str) -> str:
        info = get_category_info(key)
        return f"{info.icon} {info.name}"

    def _selected_category(self) -> str | None:
        shown = self._cat_var.get()
        for key, _name in self._choices:
            if self._display_for(key) == shown:
                return key
        return None

    def _attach_receipt(self):
        path = filedialog.askopenfilename(
            title="Attach Receipt",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.gif"), ("PDF", "*.pdf"), ("All files", "*.*")],
        )
        if path:
            # only the file name is kept as a marker
            self._receipt = os.path.basename(path)
            self._receipt_var.set(self._receipt)

    # ── Save ─────────────────────────────────────────────────────────────────

    def _on_save(self):
        if not self._date_picker.is_valid():
            self._error_var.set("Invalid date.")
            return
        try:
            self._expense_svc.add_expense(
                description=self._desc_var.get(),
                amount=self._amount_var.get(),
                date=self._date_picker.get(),
                category=self._selected_category(),
                receipt=self._receipt,
            )
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
