import customtkinter as ctk
from services.expense_service import ExpenseService


class InsightsTab(ctk.CTkFrame):
    def __init__(self, master, expense_service: ExpenseService, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._expense_svc = expense_service

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        ctk.CTkLabel(
            bar, text="Smart Insights",
            font=ctk.CTkFont(size=15, weight="bold"),
        ).pack(side="left")
        ctk.CTkButton(bar, text="Refresh", width=90, command=self.refresh).pack(side="right")

        self._grid = ctk.CTkScrollableFrame(self, fg_color="transparent")
        self._grid.grid(row=1, column=0, sticky="nsew", padx=16, pady=12)
        self._grid.grid_columnconfigure(0, weight=1)

        self.refresh()

    def refresh(self):
        for w in self._grid.winfo_children():
            w.destroy()
        for row, insight in enumerate(self._expense_svc.insights()):
            card = ctk.CTkFrame(self._grid, fg_color=("gray90", "gray20"), corner_radius=10)
            card.grid(row=row, column=0, sticky="ew", pady=4)
            card.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(card, text=insight.icon, font=ctk.CTkFont(size=26), width=48).grid(
                row=0, column=0, rowspan=2, padx=(12, 4), pady=10
            )
            ctk.CTkLabel(
                card, text=insight.title, anchor="w",
                font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=0, column=1, sticky="ew", padx=(4, 12), pady=(10, 0))
            ctk.CTkLabel(
                card, text=insight.content, anchor="w", justify="left",
                wraplength=720, text_color="gray60",
            ).grid(row=1, column=1, sticky="ew", padx=(4, 12), pady=(0, 10))
