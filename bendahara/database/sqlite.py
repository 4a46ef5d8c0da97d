import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from ..constants import DEFAULT_CATEGORY
from ..errors import StoreError, ValidationError
from ..models import Totals, Transaction, TransactionKind, User
from .windows import TS_FORMAT, sql_bounds

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
MAX_AMOUNT = 2**63 - 1


class LedgerStore:
    """Manages all database operations for the ledger."""

    DEFAULT_DB_PATH = "money.db"

    def __init__(self, db_path: Optional[str] = None, clock: Callable[[], datetime] = datetime.now):
        """Open (and create if needed) the ledger database.

        Args:
            db_path: Optional custom database path (used by tests)
            clock: Source of local wall-clock time for inserts and windows
        """
        self.db_path = db_path or self.DEFAULT_DB_PATH
        self._clock = clock
        self._init_db()

    def _init_db(self):
        """Create all necessary tables if they don't exist."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS users (
                    tg_id INTEGER PRIMARY KEY,
                    name TEXT,
                    greeted INTEGER DEFAULT 0
                )
            ''')
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS txn (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    tg_id INTEGER NOT NULL REFERENCES users(tg_id),
                    kind TEXT CHECK(kind IN ('in', 'out')) NOT NULL,
                    amount INTEGER NOT NULL,
                    category TEXT,
                    method TEXT,
                    note TEXT,
                    ts DATETIME NOT NULL
                )
            ''')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_txn_owner_ts ON txn (tg_id, ts)')
            conn.commit()
            self._ensure_greeted_column(conn)

    @contextmanager
    def _connect(self):
        """Context manager for database connections. Ensures connections are always closed."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open {self.db_path}") from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    @staticmethod
    def _ensure_greeted_column(conn: sqlite3.Connection) -> None:
        """Add greeted column if the database was created before greetings existed."""
        cursor = conn.cursor()
        cursor.execute("PRAGMA table_info(users)")
        columns = [row[1] for row in cursor.fetchall()]
        if 'greeted' not in columns:
            cursor.execute("ALTER TABLE users ADD COLUMN greeted INTEGER DEFAULT 0")
            conn.commit()

    def now(self) -> datetime:
        """Current local time according to the store clock."""
        return self._clock().replace(microsecond=0)

    # ===== Users =====

    def get_user(self, identity: int) -> Optional[User]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT tg_id, name, greeted FROM users WHERE tg_id = ?', (identity,))
            row = cursor.fetchone()
        if not row:
            return None
        return User(identity=row[0], display_name=row[1], greeted=bool(row[2]))

    def upsert_user_greeted(self, identity: int) -> None:
        """Create the user row if needed and mark it greeted."""
        with self._connect() as conn:
            conn.execute('''
                INSERT INTO users (tg_id, name, greeted) VALUES (?, NULL, 1)
                ON CONFLICT(tg_id) DO UPDATE SET greeted = 1
            ''', (identity,))
            conn.commit()

    def upsert_user_name(self, identity: int, name: str) -> str:
        """Store the first word of ``name`` as the display name and return it."""
        parts = (name or "").split()
        if not parts:
            raise ValidationError("Name must not be empty")
        first = parts[0]
        with self._connect() as conn:
            conn.execute('''
                INSERT INTO users (tg_id, name) VALUES (?, ?)
                ON CONFLICT(tg_id) DO UPDATE SET name = excluded.name
            ''', (identity, first))
            conn.commit()
        return first

    # ===== Transactions =====

    def insert(
        self,
        owner: int,
        kind,
        amount: int,
        category: Optional[str] = DEFAULT_CATEGORY,
        method: Optional[str] = None,
        note: Optional[str] = None,
    ) -> Transaction:
        """Record one income or expense for ``owner``."""
        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 < amount <= MAX_AMOUNT:
            raise ValidationError("Amount must be a positive integer")
        try:
            kind = TransactionKind(kind)
        except ValueError as exc:
            raise ValidationError(f"Unknown transaction kind: {kind!r}") from exc
        category = (category or "").strip() or DEFAULT_CATEGORY
        ts = self.now()

        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('INSERT OR IGNORE INTO users (tg_id) VALUES (?)', (owner,))
            cursor.execute('''
                INSERT INTO txn (tg_id, kind, amount, category, method, note, ts)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (owner, kind.value, amount, category, method, note, ts.strftime(TS_FORMAT)))
            txn_id = cursor.lastrowid
            conn.commit()

        logger.debug("txn %s: owner=%s kind=%s amount=%s category=%s", txn_id, owner, kind.value, amount, category)
        return Transaction(
            id=txn_id,
            owner_identity=owner,
            kind=kind,
            amount=amount,
            category=category,
            method=method,
            note=note,
            timestamp=ts,
        )

    def delete_all_for_user(self, owner: int) -> int:
        """Remove every transaction owned by ``owner``."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM txn WHERE tg_id = ?', (owner,))
            count = cursor.fetchone()[0]
            cursor.execute('DELETE FROM txn WHERE tg_id = ?', (owner,))
            conn.commit()
        return count

    def delete_all(self) -> int:
        """Remove every transaction of every user."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM txn')
            count = cursor.fetchone()[0]
            cursor.execute('DELETE FROM txn')
            conn.commit()
        return count

    # ===== Aggregates =====

    def aggregate_by_kind(self, owner: int, window) -> Totals:
        start, end = sql_bounds(window, self.now())
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                SELECT kind, SUM(amount) FROM txn
                WHERE tg_id = ? AND ts >= ? AND ts < ?
                GROUP BY kind
            ''', (owner, start, end))
            sums = {kind: total for kind, total in cursor.fetchall()}
        return Totals(
            income=sums.get(TransactionKind.INCOME.value) or 0,
            expense=sums.get(TransactionKind.EXPENSE.value) or 0,
        )

    def top_categories(self, owner: int, window, kind=TransactionKind.EXPENSE, limit: int = 3) -> List[Tuple[str, int]]:
        """Categories ranked by total, ties kept in first-insertion order."""
        kind = TransactionKind(kind)
        start, end = sql_bounds(window, self.now())
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                SELECT category, SUM(amount) AS total FROM txn
                WHERE tg_id = ? AND kind = ? AND ts >= ? AND ts < ?
                GROUP BY category
                ORDER BY total DESC, MIN(id) ASC
                LIMIT ?
            ''', (owner, kind.value, start, end, limit))
            rows = cursor.fetchall()
        return [(category, total) for category, total in rows]

    def export_rows(self, owner: int, window) -> List[Dict]:
        """Rows for CSV rendering, oldest first."""
        start, end = sql_bounds(window, self.now())
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                SELECT ts, kind, amount, category, method, note FROM txn
                WHERE tg_id = ? AND ts >= ? AND ts < ?
                ORDER BY ts, id
            ''', (owner, start, end))
            rows = cursor.fetchall()

        return [
            {
                'date': row[0][:10],
                'kind': row[1],
                'amount': row[2],
                'category': row[3],
                'method': row[4],
                'note': row[5],
            }
            for row in rows
        ]
