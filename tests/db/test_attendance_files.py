import json

import pytest

from attendance_book.backend.db.attendance_files import MAX_SEGMENT_BYTES, AttendanceFiles, ensure_path_segment, professor_dir_name
from attendance_book.backend.errors import BadRequestError, NotFoundError, StorageError
from attendance_book.backend.models.records import Professor

JANE = Professor(id=1, nom="Doe", prenom="Jane")


def test_professor_dir_is_full_name_and_id(attendance_files: AttendanceFiles, store_root):
    assert attendance_files.professor_dir(JANE) == store_root / "data" / "Doe Jane-1"

@pytest.mark.parametrize("nom, prenom, expected", [
    ("../../etc", "x", "_.._etc x-7"),
    ("Müller", "Zoé", "Müller Zoé-7"),
    ("a/b", "c\\d", "a_b c_d-7"),
    ("..", "", "professor-7"),
])
def test_professor_dir_name_is_sanitized(nom, prenom, expected):
    assert professor_dir_name(Professor(id=7, nom=nom, prenom=prenom)) == expected

@pytest.mark.parametrize("value", ["", ".", "..", "../x", "a/b", "a\\b", "a\x00b", "9" * 300])
def test_unsafe_path_segments_are_rejected(value):
    with pytest.raises(BadRequestError):
        ensure_path_segment(value)

def test_read_missing_snapshot_returns_empty_list(attendance_files: AttendanceFiles):
    assert attendance_files.read_snapshot(JANE, "2024-01-01") == []

def test_write_then_read_round_trip(attendance_files: AttendanceFiles):
    snapshot = [
        {"id": 1, "nom": "Curie", "prenom": "Marie", "isAbsent": True},
        {"id": 2, "isAbsent": False},
    ]
    file_name = attendance_files.write_snapshot(JANE, "2024-01-01", snapshot)

    assert file_name == "2024-01-01.json"
    assert attendance_files.read_snapshot(JANE, "2024-01-01") == snapshot

def test_write_overwrites_existing_snapshot(attendance_files: AttendanceFiles):
    attendance_files.write_snapshot(JANE, "2024-01-01", [{"id": 1, "isAbsent": True}])
    attendance_files.write_snapshot(JANE, "2024-01-01", [{"id": 2, "isAbsent": False}])
    assert attendance_files.read_snapshot(JANE, "2024-01-01") == [{"id": 2, "isAbsent": False}]

def test_write_rejects_traversal_in_date(attendance_files: AttendanceFiles):
    with pytest.raises(BadRequestError):
        attendance_files.write_snapshot(JANE, "../../professors", [])

def test_read_corrupt_snapshot_raises(attendance_files: AttendanceFiles):
    directory = attendance_files.professor_dir(JANE)
    directory.mkdir(parents=True)
    (directory / "2024-01-01.json").write_text("[{", encoding="utf-8")
    with pytest.raises(StorageError):
        attendance_files.read_snapshot(JANE, "2024-01-01")

def test_list_missing_directory_raises_not_found(attendance_files: AttendanceFiles):
    with pytest.raises(NotFoundError):
        attendance_files.list_snapshot_files(JANE)

def test_list_empty_directory_raises_not_found(attendance_files: AttendanceFiles):
    attendance_files.professor_dir(JANE).mkdir(parents=True)
    with pytest.raises(NotFoundError):
        attendance_files.list_snapshot_files(JANE)

def test_list_is_strictly_descending(attendance_files: AttendanceFiles):
    for date in ["2024-01-15", "2023-12-31", "2024-02-01", "2024-01-02"]:
        attendance_files.write_snapshot(JANE, date, [])

    files = attendance_files.list_snapshot_files(JANE)
    assert files == ["2024-02-01.json", "2024-01-15.json", "2024-01-02.json", "2023-12-31.json"]
    assert all(a > b for a, b in zip(files, files[1:]))

def test_count_snapshot_files(attendance_files: AttendanceFiles):
    assert attendance_files.count_snapshot_files(JANE) == 0
    attendance_files.write_snapshot(JANE, "2024-01-01", [])
    attendance_files.write_snapshot(JANE, "2024-01-02", [])
    (attendance_files.professor_dir(JANE) / "notes.txt").write_text("x", encoding="utf-8")
    assert attendance_files.count_snapshot_files(JANE) == 2

def test_read_snapshot_file(attendance_files: AttendanceFiles):
    attendance_files.write_snapshot(JANE, "2024-01-01", [{"id": 1, "isAbsent": True}])
    assert attendance_files.read_snapshot_file(JANE, "2024-01-01.json") == [{"id": 1, "isAbsent": True}]

def test_read_snapshot_file_missing(attendance_files: AttendanceFiles):
    with pytest.raises(NotFoundError):
        attendance_files.read_snapshot_file(JANE, "2024-01-01.json")

def test_snapshot_is_written_as_indented_json(attendance_files: AttendanceFiles):
    attendance_files.write_snapshot(JANE, "2024-01-01", [{"id": 1}])
    raw = (attendance_files.professor_dir(JANE) / "2024-01-01.json").read_text(encoding="utf-8")
    assert raw == json.dumps([{"id": 1}], indent=2)

def test_long_professor_name_is_capped(attendance_files: AttendanceFiles):
    """A 300-character name must still map to a usable directory."""
    professor = Professor(id=3, nom="x" * 300, prenom="A")

    name = professor_dir_name(professor)
    assert len(name.encode("utf-8")) <= MAX_SEGMENT_BYTES + len("-3")
    assert name.endswith("-3")

    assert attendance_files.count_snapshot_files(professor) == 0
    attendance_files.write_snapshot(professor, "2024-01-01", [{"id": 1, "isAbsent": True}])
    assert attendance_files.read_snapshot(professor, "2024-01-01") == [{"id": 1, "isAbsent": True}]
    assert attendance_files.count_snapshot_files(professor) == 1

def test_truncation_keeps_multibyte_characters_whole():
    name = professor_dir_name(Professor(id=1, nom="é" * 150, prenom="A"))
    assert name == "é" * (MAX_SEGMENT_BYTES // 2) + "-1"

def test_names_sanitizing_alike_keep_separate_sessions(attendance_files: AttendanceFiles):
    slash = Professor(id=3, nom="Dupont/Martin", prenom="Jean")
    underscore = Professor(id=4, nom="Dupont_Martin", prenom="Jean")
    assert professor_dir_name(slash) != professor_dir_name(underscore)

    attendance_files.write_snapshot(slash, "2024-01-01", [{"id": 1, "isAbsent": True}])

    assert attendance_files.read_snapshot(underscore, "2024-01-01") == []
    assert attendance_files.count_snapshot_files(underscore) == 0
    with pytest.raises(NotFoundError):
        attendance_files.list_snapshot_files(underscore)

def test_list_skips_temp_files_of_pending_writes(attendance_files: AttendanceFiles):
    attendance_files.write_snapshot(JANE, "2024-01-01", [])
    (attendance_files.professor_dir(JANE) / ".2024-01-02.json.abc123.tmp").write_text("[", encoding="utf-8")

    assert attendance_files.list_snapshot_files(JANE) == ["2024-01-01.json"]

def test_only_temp_files_counts_as_empty_directory(attendance_files: AttendanceFiles):
    attendance_files.professor_dir(JANE).mkdir(parents=True)
    (attendance_files.professor_dir(JANE) / ".2024-01-02.json.abc123.tmp").write_text("[", encoding="utf-8")

    with pytest.raises(NotFoundError):
        attendance_files.list_snapshot_files(JANE)

def test_one_write_lock_per_professor(attendance_files: AttendanceFiles):
    for day in range(1, 6):
        attendance_files.write_snapshot(JANE, f"2024-01-0{day}", [])
    attendance_files.write_snapshot(Professor(id=2, nom="Hopper", prenom="Grace"), "2024-01-01", [])

    assert len(attendance_files._locks._locks) == 2
