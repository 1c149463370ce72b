"""Single JSON document holding products and the stock ledger.

Keeping both in one file lets a unit of work replace them together with
one atomic ``os.replace``: a reader sees either the old or the new
document, never half of a stock change.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

_LOCKS: dict[Path, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


class JsonStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def lock(self) -> threading.Lock:
        """The process-wide write lock for this file."""
        key = self._file_path.resolve()
        with _LOCKS_GUARD:
            return _LOCKS.setdefault(key, threading.Lock())

    def read(self) -> dict:
        data = json.loads(self._file_path.read_text(encoding="utf-8"))
        data.setdefault("products", [])
        data.setdefault("stock_history", [])
        return data

    def write(self, data: dict) -> None:
        """Replace the whole document atomically."""
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=".inventory-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, indent=2) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.write({"products": [], "stock_history": []})
