"""Text reports and CSV export over the ledger windows."""

import csv
import io
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..constants import NO_DATA_TEXT, TOP_LIMIT, rupiah
from ..database import THIS_MONTH, TODAY, LedgerStore
from ..models import TransactionKind

logger = logging.getLogger(__name__)

CSV_HEADER = ["date", "kind", "amount", "category", "method", "note"]


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class ReportEngine:
    """Builds the lapor/saldo/top/export replies for one identity."""

    def __init__(self, store: LedgerStore):
        self.store = store

    def daily_report(self, owner: int) -> str:
        totals = self.store.aggregate_by_kind(owner, TODAY)
        return f"📊 Hari ini:\nMasuk: Rp{rupiah(totals.income)}\nKeluar: Rp{rupiah(totals.expense)}"

    def balance(self, owner: int) -> str:
        totals = self.store.aggregate_by_kind(owner, THIS_MONTH)
        return (
            f"💼 Saldo bulan ini: Rp{rupiah(totals.balance)} "
            f"(Masuk {rupiah(totals.income)} - Keluar {rupiah(totals.expense)})"
        )

    def top_categories(self, owner: int, limit: int = TOP_LIMIT) -> str:
        rows = self.store.top_categories(owner, THIS_MONTH, TransactionKind.EXPENSE, limit)
        if not rows:
            return NO_DATA_TEXT
        lines = [f"{i}. {category}: Rp{rupiah(total)}" for i, (category, total) in enumerate(rows, start=1)]
        return f"🏆 Top {limit} pengeluaran bulan ini:\n" + "\n".join(lines)

    def export(self, owner: int) -> Optional[CsvExport]:
        """CSV of this month's transactions, or None when there are none."""
        rows = self.store.export_rows(owner, THIS_MONTH)
        if not rows:
            return None

        buf = io.StringIO()
        buf.write(",".join(CSV_HEADER) + "\n")
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for row in rows:
            writer.writerow([row[col] if row[col] is not None else "" for col in CSV_HEADER])

        month = self.store.now().strftime("%Y-%m")
        return CsvExport(filename=f"export-{owner}-{month}.csv", content=buf.getvalue())


@contextmanager
def export_file(export: CsvExport, directory: Optional[str] = None) -> Iterator[Path]:
    """Write ``export`` to disk for the duration of the block, then delete it.

    The file is removed even when writing it fails part way.
    """
    path = Path(directory or os.getcwd()) / export.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(export.content, encoding="utf-8")
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Export file %s already gone", path)


__all__ = ["CSV_HEADER", "CsvExport", "ReportEngine", "export_file"]
