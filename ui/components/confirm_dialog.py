import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no question. Blocks until answered; read .result afterwards."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        confirm_text: str = "Delete",
        detail: str | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)

        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left",
            font=ctk.CTkFont(size=13), padx=20, pady=16,
        ).grid(row=0, column=0, sticky="ew")

        if detail:
            ctk.CTkLabel(
                self, text=detail, wraplength=360, justify="left",
                text_color="gray60", padx=20,
            ).grid(row=1, column=0, sticky="ew", pady=(0, 12))

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=2, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close(True),
        ).pack(side="left")

        self.bind("<Return>", lambda _e: self._close(True))
        self.bind("<Escape>", lambda _e: self._close(False))
        self.protocol("WM_DELETE_WINDOW", lambda: self._close(False))

        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

    def _close(self, result: bool):
        self.result = result
        self.destroy()
