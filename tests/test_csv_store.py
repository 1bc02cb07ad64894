"""Unit tests for the CSV store."""

import logging
from pathlib import Path

import pytest

from fitness_csv_logger.domain.fitness_entry import FitnessEntry
from fitness_csv_logger.infrastructure.csv_store import CSVStore
from fitness_csv_logger.utils.exceptions import ParsingError, ValidationError
from fitness_csv_logger.utils.parameters import StorageConfig

TEST_FILENAME = "test_fitness.csv"


@pytest.fixture
def store(tmp_path: Path) -> CSVStore:
    return CSVStore(StorageConfig(data_dir=str(tmp_path / "data")))


@pytest.fixture
def entries() -> list[FitnessEntry]:
    return [
        FitnessEntry(date="2024-01-01", heart_rate=70, steps=7500, calories=400, sleep_hours=8.0, weight_kg=71.0),
        FitnessEntry(date="2024-01-02", heart_rate=75, steps=8200, calories=450, sleep_hours=7.5, weight_kg=70.8),
        FitnessEntry(date="2024-01-03", heart_rate=68, steps=6800, calories=380, sleep_hours=8.5, weight_kg=71.2),
    ]


def write_raw(store: CSVStore, content: str) -> Path:
    path = store.resolve_path(TEST_FILENAME)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_save_and_load_cycle(store: CSVStore, entries: list[FitnessEntry]) -> None:
    """Test that saved entries load back in order with equal fields."""
    if not store.save(entries, TEST_FILENAME):
        raise AssertionError("Save operation should succeed")
    if not store.exists(TEST_FILENAME):
        raise AssertionError("File should exist after save")

    loaded = store.load(TEST_FILENAME)

    if len(loaded) != len(entries):
        raise AssertionError(f"Expected {len(entries)} entries, got {len(loaded)}")

    for original, restored in zip(entries, loaded):
        if restored.date != original.date:
            raise AssertionError(f"Date mismatch: {restored.date} != {original.date}")
        if (restored.heart_rate, restored.steps, restored.calories) != (
            original.heart_rate,
            original.steps,
            original.calories,
        ):
            raise AssertionError(f"Integer fields mismatch for {original.date}")
        if abs(restored.sleep_hours - original.sleep_hours) > 0.01:
            raise AssertionError(f"Sleep mismatch for {original.date}")
        if abs(restored.weight_kg - original.weight_kg) > 0.01:
            raise AssertionError(f"Weight mismatch for {original.date}")


def test_saved_file_layout(store: CSVStore, entries: list[FitnessEntry]) -> None:
    """Test the exact file content written by save."""
    store.save(entries[:1], TEST_FILENAME)

    content = store.resolve_path(TEST_FILENAME).read_text(encoding="utf-8")
    expected = "Date,HeartRate,Steps,Calories,Sleep,Weight\n2024-01-01,70,7500,400,8.0,71.0\n"
    if content != expected:
        raise AssertionError(f"Unexpected file content: {content!r}")


def test_save_empty_list_writes_header_only(store: CSVStore) -> None:
    """Test that an empty collection produces a header-only file."""
    if not store.save([], TEST_FILENAME):
        raise AssertionError("Should successfully save empty list")

    lines = store.resolve_path(TEST_FILENAME).read_text(encoding="utf-8").splitlines()
    if lines != [FitnessEntry.csv_header()]:
        raise AssertionError(f"Expected header only, got {lines}")

    loaded = store.load(TEST_FILENAME)
    if loaded != []:
        raise AssertionError(f"Expected no entries from header-only file, got {loaded}")

    data_dir = Path(store.data_dir)
    if not data_dir.is_dir():
        raise AssertionError("Data directory should be created automatically")


def test_save_none_raises(store: CSVStore) -> None:
    """Test that a missing collection is rejected before writing."""
    with pytest.raises(ValueError):
        store.save(None, TEST_FILENAME)

    if store.exists(TEST_FILENAME):
        raise AssertionError("No file should be written for None entries")


def test_save_overwrites_existing_file(store: CSVStore, entries: list[FitnessEntry]) -> None:
    """Test that save replaces previous content."""
    store.save(entries, TEST_FILENAME)
    store.save(entries[2:], TEST_FILENAME)

    loaded = store.load(TEST_FILENAME)
    if [entry.date for entry in loaded] != ["2024-01-03"]:
        raise AssertionError(f"Expected only the last save, got {loaded}")


def test_save_failure_returns_false(
    tmp_path: Path, entries: list[FitnessEntry], caplog: pytest.LogCaptureFixture
) -> None:
    """Test that an I/O failure is reported through the return value."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = CSVStore(StorageConfig(data_dir=str(blocker / "data")))

    with caplog.at_level(logging.ERROR):
        result = store.save(entries, TEST_FILENAME)

    if result is not False:
        raise AssertionError("Save into an unusable directory should return False")
    if "Save failed" not in caplog.text:
        raise AssertionError(f"Expected logged failure, got {caplog.text!r}")


def test_load_missing_file_returns_empty(store: CSVStore) -> None:
    """Test that loading a nonexistent file yields an empty list."""
    result = store.load("nonexistent.csv")

    if result != []:
        raise AssertionError(f"Expected empty list for missing file, got {result}")
    if store.exists("nonexistent.csv"):
        raise AssertionError("Should return False for non-existent file")


def test_invalid_path_is_contained(
    store: CSVStore, entries: list[FitnessEntry], caplog: pytest.LogCaptureFixture
) -> None:
    """Test that a filename the OS cannot represent fails softly in save and load."""
    with caplog.at_level(logging.ERROR):
        saved = store.save(entries, "bad\x00name.csv")
        loaded = store.load("bad\x00name.csv")

    if saved is not False:
        raise AssertionError("Save to an invalid path should return False")
    if loaded != []:
        raise AssertionError(f"Load from an invalid path should return [], got {loaded}")
    if store.exists("bad\x00name.csv"):
        raise AssertionError("An invalid path never exists")
    if "Save failed" not in caplog.text or "Load failed" not in caplog.text:
        raise AssertionError(f"Expected both failures logged, got {caplog.text!r}")


def test_unknown_encoding_is_contained(
    tmp_path: Path, entries: list[FitnessEntry], caplog: pytest.LogCaptureFixture
) -> None:
    """Test that a misconfigured encoding fails softly in save and load."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / TEST_FILENAME).write_text(
        "Date,HeartRate,Steps,Calories,Sleep,Weight\n2024-01-01,70,7500,400,8.0,71.0\n",
        encoding="utf-8",
    )
    store = CSVStore(StorageConfig(data_dir=str(data_dir), encoding="no-such-codec"))

    with caplog.at_level(logging.ERROR):
        loaded = store.load(TEST_FILENAME)
        saved = store.save(entries, "other.csv")

    if loaded != []:
        raise AssertionError(f"Expected [] for unknown encoding, got {loaded}")
    if saved is not False:
        raise AssertionError("Expected save to fail for unknown encoding")
    if "Load failed" not in caplog.text or "Save failed" not in caplog.text:
        raise AssertionError(f"Expected both failures logged, got {caplog.text!r}")


def test_load_undecodable_file_returns_empty(
    store: CSVStore, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that bytes invalid for the configured encoding give an empty result."""
    path = store.resolve_path(TEST_FILENAME)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"Date,HeartRate,Steps,Calories,Sleep,Weight\n2024-01-01,70,\xff\xfe,400,8.0,71.0\n")

    with caplog.at_level(logging.ERROR):
        loaded = store.load(TEST_FILENAME)

    if loaded != []:
        raise AssertionError(f"Expected [] for undecodable file, got {loaded}")
    if not any(record.levelno == logging.ERROR for record in caplog.records):
        raise AssertionError("Expected an ERROR record for the decode failure")


def test_load_directory_returns_empty(store: CSVStore, caplog: pytest.LogCaptureFixture) -> None:
    """Test that pointing load at a directory gives an empty result."""
    store.resolve_path("folder.csv").mkdir(parents=True)

    with caplog.at_level(logging.ERROR):
        loaded = store.load("folder.csv")

    if loaded != []:
        raise AssertionError(f"Expected [] for a directory, got {loaded}")
    if not any(record.levelno == logging.ERROR for record in caplog.records):
        raise AssertionError("Expected an ERROR record for the directory")
    if store.exists("folder.csv"):
        raise AssertionError("A directory is not a data file")


def test_malformed_lines_are_skipped(
    store: CSVStore, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that only valid lines are loaded, in file order."""
    write_raw(
        store,
        FitnessEntry.csv_header()
        + "\n"
        + "2024-01-01,70,7500,400,8.0,71.0\n"
        + "invalid,line,with,wrong,format\n"
        + "2024-01-02,75,8200,450,7.5,70.8\n"
        + "2024-01-03,invalid,8000,400,8.0,71.0\n",
    )

    with caplog.at_level(logging.WARNING):
        loaded = store.load(TEST_FILENAME)

    if [entry.date for entry in loaded] != ["2024-01-01", "2024-01-02"]:
        raise AssertionError(f"Expected first and third lines, got {loaded}")
    if caplog.text.count("Skipping invalid line") != 2:
        raise AssertionError(f"Expected two skip warnings, got {caplog.text!r}")


def test_load_skips_invalid_values_and_blank_lines(store: CSVStore) -> None:
    """Test that entry validation failures and blank lines do not abort loading."""
    write_raw(
        store,
        "anything at all\n"
        "\n"
        "2024-01-01,0,7500,400,8.0,71.0\n"
        "   \n"
        "2024-01-02,75,8200,450,30.0,70.8\n"
        "2024-01-03,68,6800,380,8.5,71.2\n",
    )

    loaded = store.load(TEST_FILENAME)

    if [entry.date for entry in loaded] != ["2024-01-03"]:
        raise AssertionError(f"Expected only the valid line, got {loaded}")


def test_load_accepts_windows_line_endings(store: CSVStore) -> None:
    """Test that CRLF files load like LF files."""
    write_raw(store, "Date,HeartRate,Steps,Calories,Sleep,Weight\r\n2024-01-01,70,7500,400,8.0,71.0\r\n")

    loaded = store.load(TEST_FILENAME)

    if len(loaded) != 1 or loaded[0].weight_kg != 71.0:
        raise AssertionError(f"Expected one entry, got {loaded}")


def test_parse_line_trims_fields(store: CSVStore) -> None:
    """Test that whitespace around fields is ignored."""
    entry = store.parse_line(" 2024-01-01 , 70 , 7500 , 400 , 8.0 , 71.0 ")

    if entry.date != "2024-01-01" or entry.heart_rate != 70 or entry.weight_kg != 71.0:
        raise AssertionError(f"Unexpected entry: {entry!r}")


def test_parse_line_errors(store: CSVStore) -> None:
    """Test the error raised for each kind of bad line."""
    with pytest.raises(ParsingError):
        store.parse_line("2024-01-01,70,7500,400,8.0")

    with pytest.raises(ParsingError):
        store.parse_line("2024-01-01,70,7500,400,8,0,71,0")

    with pytest.raises(ParsingError):
        store.parse_line("2024-01-01,70.5,7500,400,8.0,71.0")

    with pytest.raises(ParsingError):
        store.parse_line("")

    with pytest.raises(ValidationError):
        store.parse_line("2024-01-01,70,-1,400,8.0,71.0")


def test_parse_decimal_accepts_comma() -> None:
    """Test that both decimal separators are understood."""
    if CSVStore._parse_decimal("75,5") != 75.5:
        raise AssertionError("Expected comma decimal to parse")
    if CSVStore._parse_decimal(" 18.25 ") != 18.25:
        raise AssertionError("Expected dot decimal to parse")

    with pytest.raises(ValueError):
        CSVStore._parse_decimal("invalid")


@pytest.mark.parametrize(
    "line",
    [
        "2024-01-01,70,7_500,400,8.0,71.0",
        "2024-01-01,70,7500,400,8.0,inf",
        "2024-01-01,70,7500,400,nan,71.0",
        "2024-01-01,70,7500,400,8.0,1e400",
        "2024-01-01,70,7500,400,8_0,71.0",
        "2024-01-01,٧٠,7500,400,8.0,71.0",
    ],
)
def test_parse_line_rejects_non_plain_numbers(store: CSVStore, line: str) -> None:
    """Test that underscores, non-finite values and non-ASCII digits are not numbers."""
    with pytest.raises(ParsingError):
        store.parse_line(line)


def test_load_skips_non_plain_numbers(store: CSVStore) -> None:
    """Test that such lines are skipped on load and never written back."""
    write_raw(
        store,
        "Date,HeartRate,Steps,Calories,Sleep,Weight\n"
        "d,70,7_500,400,8.0,inf\n"
        "2024-01-02,+75,8200,450,7.5e0,70.8\n",
    )

    loaded = store.load(TEST_FILENAME)

    if [entry.date for entry in loaded] != ["2024-01-02"]:
        raise AssertionError(f"Expected only the plain line, got {loaded}")
    if loaded[0].heart_rate != 75 or loaded[0].sleep_hours != 7.5:
        raise AssertionError(f"Unexpected parsed values: {loaded[0]!r}")


def test_resolve_path(store: CSVStore) -> None:
    """Test that filenames are placed in the data directory unless already prefixed."""
    data_dir = store.data_dir

    resolved = store.resolve_path("fitness.csv")
    if resolved != Path(data_dir) / "fitness.csv":
        raise AssertionError(f"Unexpected path: {resolved}")

    prefixed = f"{data_dir}/fitness.csv"
    if store.resolve_path(prefixed) != Path(prefixed):
        raise AssertionError("Forward-slash prefixed path should be unchanged")

    backslashed = f"{data_dir}\\fitness.csv"
    if store.resolve_path(backslashed) != Path(backslashed):
        raise AssertionError("Backslash prefixed path should be unchanged")


def test_resolve_path_default_directory() -> None:
    """Test resolution against the default relative data directory."""
    store = CSVStore()

    if store.resolve_path("fitness.csv") != Path("data/fitness.csv"):
        raise AssertionError("Expected data/ prefix to be added")
    if store.resolve_path("data/fitness.csv") != Path("data/fitness.csv"):
        raise AssertionError("Expected data/ prefixed name to be kept")
    if store.resolve_path("database.csv") != Path("data/database.csv"):
        raise AssertionError("A name merely starting with 'data' must still be prefixed")


def test_ensure_data_directory_is_idempotent(store: CSVStore) -> None:
    """Test that creating the data directory twice is harmless."""
    store.ensure_data_directory()
    store.ensure_data_directory()

    if not Path(store.data_dir).is_dir():
        raise AssertionError("Data directory should exist")


def test_exists_after_save(store: CSVStore, entries: list[FitnessEntry]) -> None:
    """Test that exists flips to True once the file is saved."""
    if store.exists(TEST_FILENAME):
        raise AssertionError("File should not exist before save")

    store.save(entries, TEST_FILENAME)

    if not store.exists(TEST_FILENAME):
        raise AssertionError("File should exist after save")

    store.ensure_data_directory()
    if store.exists(""):
        raise AssertionError("A directory is not a data file")
