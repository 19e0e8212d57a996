# attendance_book/backend/errors.py


class AttendanceBookError(Exception):
    """Base class for all errors raised by the attendance book."""
    pass

class NotFoundError(AttendanceBookError):
    """A referenced professor, student, snapshot file or directory does not exist."""
    pass

class BadRequestError(AttendanceBookError):
    """The request carries a value that cannot be used as-is (e.g. an unsafe path segment)."""
    pass

class StorageError(AttendanceBookError):
    """Reading, parsing or writing a document on disk failed."""
    pass

class SnapshotWriteError(StorageError):
    """Persisting an attendance snapshot failed."""
    pass

class CsvFormatError(StorageError):
    """A snapshot record could not be turned into a CSV row."""
    pass
