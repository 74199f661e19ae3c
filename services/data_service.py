"""Export and import the whole expense history as a JSON snapshot, plus
CSV rows for spreadsheet export.
"""
import json

import structlog

from models.category import get_category_info
from models.expense import Expense
from services.errors import ImportFormatError
from services.expense_service import ExpenseService
from utils.constants import EXPORT_FORMAT_VERSION, SUPPORTED_FORMAT_MAJOR

logger = structlog.get_logger()

IMPORT_MODES = ("replace", "merge")


class DataService:
    def __init__(self, expense_service: ExpenseService, clock):
        self._expense_svc = expense_service
        self._clock = clock

    # ── Export ────────────────────────────────────────────────────────────────

    def export_snapshot(self) -> dict:
        """Return a full export dict (caller writes to disk)."""
        return {
            "expenses": [e.to_dict() for e in self._expense_svc.get_all()],
            "exportedAt": self._clock.now().isoformat(),
            "formatVersion": EXPORT_FORMAT_VERSION,
        }

    def default_export_filename(self) -> str:
        return f"expenseiq_data_{self._clock.today().isoformat()}.json"

    def write_json(self, path: str):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.export_snapshot(), f, indent=2, ensure_ascii=False)

    def export_csv_rows(self) -> list[list[str]]:
        """Return rows suitable for CSV export."""
        rows = [["Date", "Description", "Category", "Amount", "Receipt"]]
        for e in self._expense_svc.get_all():
            rows.append([
                e.date,
                e.description,
                get_category_info(e.category).name,
                f"{e.amount:.2f}",
                "Yes" if e.receipt else "No",
            ])
        return rows

    # ── Import ────────────────────────────────────────────────────────────────

    def read_json(self, path: str) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ImportFormatError(f"Could not read file: {e}") from e

    def import_snapshot(self, document, mode: str = "replace") -> int:
        """Import a previously exported snapshot.

        mode: 'replace' swaps the whole history; 'merge' adds records whose ids
        are not present yet. The document is validated in full first, so a
        rejected import leaves existing data untouched. Returns the number of
        expenses imported.
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Invalid import mode: {mode}")
        expenses = self.parse_snapshot(document)

        if mode == "replace":
            self._expense_svc.replace_all(expenses)
            imported = len(expenses)
        else:
            existing = self._expense_svc.get_all()
            known = {e.id for e in existing}
            new = [e for e in expenses if e.id not in known]
            self._expense_svc.replace_all([*new, *existing])
            imported = len(new)

        logger.info("snapshot_imported", count=imported, mode=mode)
        return imported

    def parse_snapshot(self, document) -> list[Expense]:
        if not isinstance(document, dict):
            raise ImportFormatError("Import file is not an ExpenseIQ export.")
        self._check_version(document.get("formatVersion", document.get("version")))

        records = document.get("expenses")
        if not isinstance(records, list):
            raise ImportFormatError("Import file has no expense list.")

        expenses = []
        seen: set[str] = set()
        for idx, record in enumerate(records, start=1):
            try:
                expense = Expense.from_dict(record)
            except ValueError as e:
                logger.info("import_rejected", record=idx, error=str(e))
                raise ImportFormatError(f"Expense #{idx}: {e}") from e
            if expense.id in seen:
                raise ImportFormatError(f"Expense #{idx}: duplicate id {expense.id}")
            seen.add(expense.id)
            expenses.append(expense)
        return expenses

    @staticmethod
    def _check_version(version):
        if version is None:
            return
        major = str(version).split(".", 1)[0]
        if major != str(SUPPORTED_FORMAT_MAJOR):
            logger.info("import_rejected", format_version=version)
            raise ImportFormatError(
                f"Unsupported export format version {version}; "
                f"this app reads version {SUPPORTED_FORMAT_MAJOR}.x."
            )
