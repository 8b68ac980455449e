"""
Persisted selection state -- the only engine state kept outside storage.

Two keys are used: the active company's identity (a string) and the
"default data already seeded" marker (a bool).  Both survive restarts
when a file-backed store is used.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ledger_kernel.logging_config import get_logger

logger = get_logger("services.selection_store")

ACTIVE_COMPANY_KEY = "active_company_id"
SEEDED_KEY = "has_seeded_default_data"


class SelectionStore(ABC):
    """Key-value interface for selection state."""

    @abstractmethod
    def _read(self, key: str) -> Any: ...

    @abstractmethod
    def _write(self, key: str, value: Any) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None: ...

    def get_string(self, key: str) -> str | None:
        value = self._read(key)
        return value if isinstance(value, str) else None

    def set_string(self, key: str, value: str) -> None:
        self._write(key, str(value))

    def get_bool(self, key: str) -> bool:
        return self._read(key) is True

    def set_bool(self, key: str, value: bool) -> None:
        self._write(key, bool(value))


class InMemorySelectionStore(SelectionStore):
    """Process-local store; used by tests and embedded callers."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def _read(self, key: str) -> Any:
        return self._values.get(key)

    def _write(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileSelectionStore(SelectionStore):
    """
    Store backed by a small JSON object on disk.

    The file is re-read on every access and rewritten on every change, so
    two stores pointed at the same path stay consistent.  A missing file
    reads as empty.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Selection file {self.path} does not hold a JSON object")
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers see either the old file or the new one, never a partial write.
        with tempfile.NamedTemporaryFile(
            "w",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = f.name
        try:
            with open(tmp_path, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
        logger.debug("selection_state_written", extra={"path": str(self.path)})

    def _read(self, key: str) -> Any:
        return self._load().get(key)

    def _write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)
