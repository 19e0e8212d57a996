import csv
import io
from pathlib import PurePath
from typing import Any, Dict, List, Sequence

from ..errors import CsvFormatError

DELIMITER = ";"
ABSENT = "Absent"
PRESENT = "Present"


def _presence_row(record: Any, position: int) -> Dict[str, Any]:
    if not isinstance(record, dict) or "id" not in record:
        raise CsvFormatError(f"Attendance record #{position + 1} is malformed: {record!r}")
    row = dict(record)
    row["isAbsent"] = ABSENT if record.get("isAbsent") else PRESENT
    return row


def to_csv(snapshot: Sequence[Any]) -> str:
    """
    Turns an attendance snapshot into ';'-separated CSV text.

    ``isAbsent`` becomes "Absent" or "Present"; every other value is written
    unchanged. The header holds every field name in the order it first shows
    up across the records, and records missing a field get an empty cell.
    """
    if not isinstance(snapshot, (list, tuple)):
        raise CsvFormatError("Attendance snapshot is not a list")

    rows = [_presence_row(record, i) for i, record in enumerate(snapshot)]
    if not rows:
        return ""
    fieldnames: List[str] = []
    for row in rows:
        for key in row:
            if key not in fieldnames:
                fieldnames.append(key)

    buf = io.StringIO(newline="")
    writer = csv.DictWriter(buf, fieldnames=fieldnames, delimiter=DELIMITER, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    writer.writerows(rows)
    return buf.getvalue()


def csv_name(snapshot_filename: str) -> str:
    """``2024-01-01.json`` -> ``2024-01-01.csv``"""
    return f"{PurePath(snapshot_filename).stem}.csv"
