import logging
from typing import Any, Iterator, List, Tuple

from ..db.attendance_files import AttendanceFiles
from ..db.record_store import RecordStore
from ..models.records import AttendanceEntry, Professor, Student
from ..tools.archive_builder import build_zip, prefetch
from ..tools.csv_exporter import csv_name, to_csv

logger = logging.getLogger(__name__)


class ProfessorWithCount(Professor):
    """Professor enriched with the number of recorded sessions."""
    count: int = 0


class AttendanceService:
    """
    Service layer holding every attendance use case. Routers only translate
    requests and results; errors from the stores propagate unchanged.
    """
    def __init__(self, record_store: RecordStore, attendance_files: AttendanceFiles):
        self.record_store = record_store
        self.attendance_files = attendance_files

    # ===== Directory listings =====

    def list_students(self) -> List[Student]:
        return self.record_store.list_students()

    def list_professors_with_counts(self) -> List[ProfessorWithCount]:
        return [
            ProfessorWithCount(**professor.model_dump(), count=self.attendance_files.count_snapshot_files(professor))
            for professor in self.record_store.list_professors()
        ]

    # ===== Absences =====

    def mark_absent(self, date: str, professor_id: int, updates: List[AttendanceEntry]) -> str:
        """
        Applies the ``isAbsent`` flags of ``updates`` onto the full student list
        and stores the whole list as the snapshot of (professor, date).
        Unknown student ids are ignored.
        """
        professor = self.record_store.get_professor(professor_id)
        students = self.record_store.list_students()
        flags = {update.id: update.is_absent for update in updates}
        for student in students:
            if student.id in flags:
                student.is_absent = flags[student.id]
        snapshot = [student.model_dump(by_alias=True) for student in students]
        logger.info(f"Marking {sum(s.is_absent for s in students)} absences for '{professor.full_name}' on {date}.")
        return self.attendance_files.write_snapshot(professor, date, snapshot)

    def get_absence(self, professor_id: int, date: str) -> List[Any]:
        professor = self.record_store.get_professor(professor_id)
        return self.attendance_files.read_snapshot(professor, date)

    def update_absence(self, date: str, professor_id: int, entries: List[AttendanceEntry]) -> str:
        """Overwrites the snapshot of (professor, date) with exactly ``entries``."""
        professor = self.record_store.get_professor(professor_id)
        return self.attendance_files.write_snapshot(professor, date, [entry.to_document() for entry in entries])

    # ===== Exports =====

    def list_sessions(self, professor_id: int) -> List[str]:
        professor = self.record_store.get_professor(professor_id)
        return self.attendance_files.list_snapshot_files(professor)

    def export_session_csv(self, professor_id: int, element: str) -> Tuple[str, str]:
        """Returns ``(csv file name, csv text)`` for one listed snapshot file."""
        professor = self.record_store.get_professor(professor_id)
        snapshot = self.attendance_files.read_snapshot_file(professor, element)
        return csv_name(element), to_csv(snapshot)

    def export_all_sessions(self, professor_id: int) -> Tuple[str, Iterator[bytes]]:
        """Returns ``(zip file name, zip byte chunks)`` covering every session of the professor."""
        professor = self.record_store.get_professor(professor_id)
        chunks = build_zip(self.attendance_files, professor)
        return f"{professor.full_name}.zip", prefetch(chunks)

    # ===== Registration =====

    def create_professor(self, first_name: str, last_name: str) -> Professor:
        return self.record_store.create_professor(first_name, last_name)

    def create_student(self, first_name: str, last_name: str) -> Student:
        return self.record_store.create_student(first_name, last_name)
