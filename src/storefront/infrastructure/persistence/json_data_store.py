"""JSON-file-backed implementation of DataStore.

One file per table under a data directory. Every call reads the file,
applies its change and writes it back while holding a process-wide
lock, which makes each call atomic within this process and nothing
more.
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.repository.data_store import (
    TABLES,
    DataStore,
    Filters,
    StoreError,
    matches,
)

_lock = threading.RLock()


class JsonDataStore(DataStore):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- DataStore interface --------------------------------------------------

    def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        with _lock:
            rows = [row for row in self._load_raw(table) if matches(row, filters)]
        if order_by is not None:
            rows.sort(
                key=lambda row: (row.get(order_by) is None, row.get(order_by)),
                reverse=descending,
            )
        return rows

    def insert(self, table: str, record: dict) -> dict:
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        with _lock:
            rows = self._load_raw(table)
            if any(existing["id"] == row["id"] for existing in rows):
                raise StoreError(f"Duplicate id {row['id']!r} in {table}")
            rows.append(row)
            self._persist_raw(table, rows)
        return dict(row)

    def update(self, table: str, filters: Filters, patch: dict) -> None:
        with _lock:
            rows = self._load_raw(table)
            for row in rows:
                if matches(row, filters):
                    row.update(patch)
            self._persist_raw(table, rows)

    def delete(self, table: str, filters: Filters) -> None:
        with _lock:
            rows = self._load_raw(table)
            kept = [row for row in rows if not matches(row, filters)]
            if len(kept) != len(rows):
                self._persist_raw(table, kept)

    def count(self, table: str, filters: Filters | None = None) -> int:
        return len(self.select(table, filters))

    # --- File helpers ---------------------------------------------------------

    def _path(self, table: str) -> Path:
        if table not in TABLES:
            raise StoreError(f"Unknown table {table!r}")
        return self._data_dir / f"{table}.json"

    def _load_raw(self, table: str) -> list[dict]:
        path = self._path(table)
        if not path.exists():
            return []
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read {table}: {exc}") from exc

    def _persist_raw(self, table: str, rows: list[dict]) -> None:
        path = self._path(table)
        tmp = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StoreError(f"Cannot write {table}: {exc}") from exc
