import logging
import re
from pathlib import Path
from typing import Any, List

from ..errors import BadRequestError, NotFoundError, SnapshotWriteError, StorageError
from ..models.records import Professor
from .json_io import KeyedLocks, read_json, write_json

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".json"

# Anything outside letters, digits, space, '-', '_' and '.' is replaced in directory names.
_UNSAFE_NAME_CHARS = re.compile(r"[^\w .-]", re.UNICODE)

# Well below the usual 255-byte limit of a single path component.
MAX_SEGMENT_BYTES = 200


def _truncate(value: str, max_bytes: int) -> str:
    return value.encode("utf-8")[:max_bytes].decode("utf-8", "ignore")


def professor_dir_name(professor: Professor) -> str:
    """
    Directory name for a professor's snapshots: "{nom} {prenom}" with unsafe
    characters replaced by '_', cut to MAX_SEGMENT_BYTES, then suffixed with
    "-{id}". The id after the last '-' keeps two professors whose names
    sanitize to the same text in separate directories.
    """
    name = _UNSAFE_NAME_CHARS.sub("_", professor.full_name).strip().lstrip(".")
    name = _truncate(name, MAX_SEGMENT_BYTES).strip() or "professor"
    return f"{name}-{professor.id}"


def ensure_path_segment(value: str, what: str = "value") -> str:
    """Rejects anything that is not a single, plain path segment."""
    if (
        not value
        or value in (".", "..")
        or "/" in value
        or "\\" in value
        or "\x00" in value
        or len(value.encode("utf-8")) > MAX_SEGMENT_BYTES
    ):
        raise BadRequestError(f"Invalid {what}: '{value}'")
    return value


class AttendanceFiles:
    """
    One JSON snapshot per professor and date:
    ``<data_dir>/<professor dir>/<date>.json``.
    """
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._locks = KeyedLocks()

    def professor_dir(self, professor: Professor) -> Path:
        return self.data_dir / professor_dir_name(professor)

    def snapshot_path(self, professor: Professor, date: str) -> Path:
        return self.professor_dir(professor) / f"{ensure_path_segment(date, 'date')}{SNAPSHOT_SUFFIX}"

    def read_snapshot(self, professor: Professor, date: str) -> List[Any]:
        """Snapshot for (professor, date); an empty list when no session was recorded."""
        path = self.snapshot_path(professor, date)
        if not path.exists():
            return []
        return read_json(path)

    def write_snapshot(self, professor: Professor, date: str, snapshot: List[Any]) -> str:
        """Overwrites the snapshot for (professor, date) and returns its file name."""
        path = self.snapshot_path(professor, date)
        with self._locks.get(str(path.parent)):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                write_json(path, snapshot)
            except OSError as e:
                logger.error(f"Error writing snapshot '{path}'.", exc_info=True)
                raise SnapshotWriteError("Failed to update absence data") from e
        logger.info(f"Saved {len(snapshot)} attendance entries to '{path}'.")
        return path.name

    def list_snapshot_files(self, professor: Professor) -> List[str]:
        """File names in the professor's directory, newest (highest) name first."""
        directory = self.professor_dir(professor)
        try:
            # dot files are temp files of writes in progress
            files = [entry.name for entry in directory.iterdir() if entry.is_file() and not entry.name.startswith(".")]
        except FileNotFoundError as e:
            raise NotFoundError("Directory not found") from e
        except OSError as e:
            logger.error(f"Error listing '{directory}'.", exc_info=True)
            raise StorageError("Error reading attendance directory") from e
        if not files:
            raise NotFoundError("Directory is empty or not found")
        return sorted(files, reverse=True)

    def count_snapshot_files(self, professor: Professor) -> int:
        directory = self.professor_dir(professor)
        try:
            if not directory.is_dir():
                return 0
            return sum(1 for entry in directory.iterdir() if entry.suffix == SNAPSHOT_SUFFIX and entry.is_file())
        except OSError:
            # Only a display figure on /professors
            logger.warning(f"Error counting sessions in '{directory}'.", exc_info=True)
            return 0

    def read_snapshot_file(self, professor: Professor, filename: str) -> List[Any]:
        """Reads a file by the name returned from ``list_snapshot_files``."""
        path = self.professor_dir(professor) / ensure_path_segment(filename, "file name")
        if not path.is_file():
            raise NotFoundError("File not found")
        return read_json(path)
