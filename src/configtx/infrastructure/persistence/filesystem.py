"""
Filesystem implementation of the configuration store.

Committed documents are JSON files, one per scope:

{base_dir}/
    scopes/
        {scope}.json

Working copies and scope locks stay in memory; only commit touches disk.
"""

import json
import os
import re
from pathlib import Path

from configtx.domain.exceptions import PersistenceError
from configtx.domain.interfaces import Document
from configtx.infrastructure.persistence.memory import InMemoryConfigStore

SCOPE_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class FilesystemConfigStore(InMemoryConfigStore):
    """
    Durable configuration store.

    A commit serializes the whole working copy before writing, then replaces
    the scope file with write-to-temp + rename, so a failed commit leaves
    the previous file untouched.
    """

    def __init__(self, base_dir: str | Path):
        super().__init__()
        self._base_dir = Path(base_dir)
        self._scopes_dir = self._base_dir / "scopes"
        self._scopes_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _get_scope_path(self, scope: str) -> Path:
        if not SCOPE_PATTERN.match(scope):
            raise ValueError(f"Invalid scope name: '{scope}'")
        return self._scopes_dir / f"{scope}.json"

    def _read_committed(self, scope: str) -> Document:
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read committed document {path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Expected a JSON object in {path}, got {type(data).__name__}"
            )
        return data

    def _write_committed(self, scope: str, document: Document) -> None:
        path = self._get_scope_path(scope)
        try:
            payload = json.dumps(document, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Document for '{scope}' is not serializable: {e}") from e

        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)  # Atomic on POSIX
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    def _list_scopes(self) -> list[str]:
        return sorted(p.stem for p in self._scopes_dir.glob("*.json"))
