import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict

from ..errors import StorageError

logger = logging.getLogger(__name__)


class KeyedLocks:
    """
    Hands out one ``threading.Lock`` per key (collection name, professor directory).

    Requests run in FastAPI's threadpool, so two writers of the same document
    would otherwise interleave their read-modify-write cycles.
    """
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def get(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


def read_json(path: Path) -> Any:
    """Loads a whole JSON document. Any read or parse failure becomes a StorageError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read JSON document '{path}'.", exc_info=True)
        raise StorageError(f"Could not read '{path.name}'") from e


def write_json(path: Path, document: Any):
    """
    Replaces ``path`` with ``document`` (2-space indent).

    The content goes to a temp file in the same directory first and is then
    renamed over the target, so readers never see a half-written file.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
