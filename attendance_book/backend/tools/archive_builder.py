import itertools
import logging
import zipfile
from typing import Iterator, List

from ..db.attendance_files import SNAPSHOT_SUFFIX, AttendanceFiles
from ..models.records import Professor
from .csv_exporter import csv_name, to_csv

logger = logging.getLogger(__name__)

COMPRESS_LEVEL = 9


class _ChunkBuffer:
    """
    Write-only sink for ZipFile. It has no ``tell``/``seek``, so zipfile
    switches to streaming mode (data descriptors after each member) and
    whatever has been written so far can be handed out with ``drain``.
    """
    def __init__(self):
        self._chunks: List[bytes] = []

    def write(self, data) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def flush(self):
        pass

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


def build_zip(files: AttendanceFiles, professor: Professor) -> Iterator[bytes]:
    """
    Zips every ``.json`` snapshot of ``professor`` as ``<date>.csv``.

    The directory is listed right away, so a missing or empty directory raises
    NotFoundError before any byte is produced. The returned iterator then reads,
    converts and compresses one snapshot per step.
    """
    names = [name for name in files.list_snapshot_files(professor) if name.endswith(SNAPSHOT_SUFFIX)]
    return _stream(files, professor, names)


def _stream(files: AttendanceFiles, professor: Professor, names: List[str]) -> Iterator[bytes]:
    buffer = _ChunkBuffer()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL) as archive:
            for name in names:
                snapshot = files.read_snapshot_file(professor, name)
                archive.writestr(csv_name(name), to_csv(snapshot))
                chunk = buffer.drain()
                if chunk:
                    yield chunk
    except Exception:
        logger.error(f"Archive for '{professor.full_name}' aborted.", exc_info=True)
        raise
    yield buffer.drain()
    logger.info(f"Archive for '{professor.full_name}' finished ({len(names)} files).")


def prefetch(chunks: Iterator[bytes]) -> Iterator[bytes]:
    """
    Pulls the first chunk eagerly so a failure on the first snapshot is raised
    while an error response can still be sent.
    """
    try:
        first = next(chunks)
    except StopIteration:
        return iter(())
    return itertools.chain([first], chunks)
