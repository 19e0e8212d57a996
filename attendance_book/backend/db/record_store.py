import logging
from pathlib import Path
from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import NotFoundError, StorageError
from ..models.records import Professor, Student
from .json_io import KeyedLocks, read_json, write_json

logger = logging.getLogger(__name__)

PROFESSORS = "professors"
STUDENTS = "students"

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordStore:
    """
    Professors and students, each kept as one whole JSON array on disk
    (``professors.json`` / ``students.json`` in the store root).

    Collections are re-read on every call; nothing is cached in memory.
    """
    def __init__(self, root: Path):
        self.root = Path(root)
        self._locks = KeyedLocks()

    def _path(self, collection: str) -> Path:
        return self.root / f"{collection}.json"

    def _load(self, collection: str, model: Type[RecordT]) -> List[RecordT]:
        document = read_json(self._path(collection))
        if not isinstance(document, list):
            raise StorageError(f"'{collection}.json' does not hold a list")
        try:
            return [model.model_validate(item) for item in document]
        except ValidationError as e:
            logger.error(f"Malformed record in '{collection}.json'.", exc_info=True)
            raise StorageError(f"'{collection}.json' contains a malformed record") from e

    def _append(self, collection: str, model: Type[RecordT], **fields) -> RecordT:
        with self._locks.get(collection):
            records = self._load(collection, model)
            # count + 1; only moves past that if the file was edited by hand
            next_id = max([len(records)] + [r.id for r in records]) + 1
            record = model(id=next_id, **fields)
            records.append(record)
            try:
                write_json(self._path(collection), [r.model_dump(by_alias=True) for r in records])
            except OSError as e:
                logger.error(f"Could not write '{collection}.json'.", exc_info=True)
                raise StorageError(f"Failed to save {collection}") from e
        logger.info(f"Created {collection[:-1]} #{record.id}.")
        return record

    # ===== Professors =====

    def list_professors(self) -> List[Professor]:
        return self._load(PROFESSORS, Professor)

    def get_professor(self, professor_id: int) -> Professor:
        for professor in self.list_professors():
            if professor.id == professor_id:
                return professor
        raise NotFoundError("Professor not found")

    def create_professor(self, first_name: str, last_name: str) -> Professor:
        return self._append(PROFESSORS, Professor, nom=last_name, prenom=first_name)

    # ===== Students =====

    def list_students(self) -> List[Student]:
        return self._load(STUDENTS, Student)

    def create_student(self, first_name: str, last_name: str) -> Student:
        return self._append(STUDENTS, Student, nom=last_name, prenom=first_name)
