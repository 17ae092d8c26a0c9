from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from pantrychef.services.exceptions import RepoError


class StoragePort(ABC):
    """String key/value storage, the shape of a browser's local/session storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...
    @abstractmethod
    def set(self, key: str, value: str) -> None: ...
    @abstractmethod
    def remove(self, key: str) -> None: ...


class MemoryStorage(StoragePort):
    """Lives as long as the process: used as session-scoped storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


# Advisory lock next to the data file (fcntl on *nix, msvcrt on Windows)
@contextmanager
def _locked(path: str) -> Iterator[None]:
    lock_path = path + ".lock"
    os.makedirs(os.path.dirname(lock_path) or ".", exist_ok=True)
    f = open(lock_path, "a+b")
    try:
        try:
            import fcntl  # type: ignore
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            unlock = lambda: fcntl.flock(f.fileno(), fcntl.LOCK_UN)  # noqa: E731
        except ImportError:
            import msvcrt  # type: ignore
            msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
            unlock = lambda: msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)  # noqa: E731
        try:
            yield
        finally:
            unlock()
    except OSError as e:
        raise RepoError(f"Could not lock {path}: {e}") from e
    finally:
        f.close()


def _atomic_write(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=d)
    try:
        with os.fdopen(fd, "wb") as w:
            w.write(data)
            w.flush()
            os.fsync(w.fileno())
        os.replace(tmp, path)
    except OSError as e:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise RepoError(f"Atomic write failed for {path}: {e}") from e


class JSONFileStorage(StoragePort):
    """
    Durable storage: one JSON object of string values in a single file.
    Every set/remove rewrites the whole file atomically, so a reader never
    sees a half-written map and a crash keeps the previous state.
    """

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "rb") as f:
                raw = f.read() or b"{}"
            obj = json.loads(raw.decode("utf-8"))
        except (OSError, ValueError) as e:
            raise RepoError(f"Failed to load storage from {self.path}: {e}") from e
        if not isinstance(obj, dict):
            raise RepoError(f"Storage file {self.path} does not hold a JSON object")
        return {str(k): str(v) for k, v in obj.items()}

    def _write(self, data: Dict[str, str]) -> None:
        payload = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        _atomic_write(self.path, payload)

    def get(self, key: str) -> Optional[str]:
        with _locked(self.path):
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with _locked(self.path):
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with _locked(self.path):
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)
