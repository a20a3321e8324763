"""Key-value storage backends for FoodFresh.

Each backend stores opaque string documents under string keys. Use
create_key_value_store() to get the backend selected by configuration.
"""

import os
import sqlite3
import tempfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Protocol


class BackendType(str, Enum):
    """Key-value storage backend types."""

    JSON = "json"
    SQLITE = "sqlite"
    MEMORY = "memory"


class KeyValueStore(Protocol):
    """Protocol defining the key-value store interface."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, mostly useful for tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileKeyValueStore:
    """Stores each key as its own ``<key>.json`` file in a data directory."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize file store.

        Args:
            data_dir: Directory for data files. Defaults to ./data
        """
        self.data_dir = data_dir or Path.cwd() / "data"
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        """Path to the file holding a key."""
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write a document atomically.

        The value goes to a temporary file in the same directory, which is
        then renamed over the target, so readers see either the old document
        or the new one.
        """
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class SQLiteKeyValueStore:
    """Stores documents as rows of a single ``kv`` table."""

    def __init__(self, db_path: Path | None = None):
        """Initialize SQLite store.

        Args:
            db_path: Path to the SQLite database file. Defaults to ./data/foodfresh.db
        """
        if db_path is None:
            db_path = Path.cwd() / "data" / "foodfresh.db"
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    @contextmanager
    def _get_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self) -> None:
        """Initialize database schema if not exists."""
        with self._get_connection() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    def get(self, key: str) -> str | None:
        with self._get_connection() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._get_connection() as conn:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))


def create_key_value_store(
    backend: BackendType = BackendType.JSON,
    data_dir: Path | None = None,
    db_path: Path | None = None,
) -> KeyValueStore:
    """Create a key-value store with the specified backend.

    Args:
        backend: Which backend to use (json, sqlite or memory)
        data_dir: Directory for data files (used by the JSON backend, also used
                  as base path for SQLite if db_path not specified)
        db_path: Path to SQLite database file (only used by SQLite backend)

    Returns:
        A JSONFileKeyValueStore, SQLiteKeyValueStore or MemoryKeyValueStore

    Example:
        # Use JSON files (default)
        kv = create_key_value_store()

        # Use SQLite with custom path
        kv = create_key_value_store(
            BackendType.SQLITE,
            db_path=Path("./my_data/foodfresh.db")
        )
    """
    if backend == BackendType.SQLITE:
        if db_path is None and data_dir is not None:
            db_path = data_dir / "foodfresh.db"
        return SQLiteKeyValueStore(db_path=db_path)
    if backend == BackendType.MEMORY:
        return MemoryKeyValueStore()
    return JSONFileKeyValueStore(data_dir=data_dir)
