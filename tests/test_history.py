"""
Tests for the history log format and its file / in-memory backends.
"""
import pytest

from typeracer.history import FileHistoryLog, HistoryLogError, HistoryRecord, MemoryHistoryLog


SAMPLE = [
    HistoryRecord(timestamp=1_700_000_000, accuracy=1.0, wpm=42.5, cpm=213.0),
    HistoryRecord(timestamp=1_700_000_100, accuracy=0.1 + 0.2, wpm=1 / 3, cpm=2 / 3),
    HistoryRecord(timestamp=1_700_000_200, accuracy=0.0, wpm=0.0, cpm=1e-07),
]


def test_line_format():
    record = HistoryRecord(timestamp=1_700_000_000, accuracy=0.95, wpm=40.0, cpm=200.5)
    assert record.to_line() == "1700000000 0.95 40.0 200.5"


def test_line_is_lossless():
    for record in SAMPLE:
        assert HistoryRecord.from_line(record.to_line()) == record


@pytest.mark.parametrize(
    "line",
    [
        "",
        "1700000000 1.0 40.0",
        "1700000000 1.0 40.0 200.0 extra",
        "1700000000  1.0 40.0 200.0",
        "1700000000.5 1.0 40.0 200.0",
        "1700000000 one 40.0 200.0",
        "1700000000 1.0 20.0 inf",
        "1700000000 nan 20.0 nan",
        "1700000000 1.0 20.0 1e400",
        "1700000000 7.5 30.0 150.0",
        "1700000000 1.0 -3.0 150.0",
        "1700000000 1.0 1_0.5 150.0",
        "-1700000000 1.0 20.0 100.0",
    ],
)
def test_malformed_lines(line):
    with pytest.raises(HistoryLogError):
        HistoryRecord.from_line(line)


def test_file_round_trip(tmp_path):
    log = FileHistoryLog(tmp_path / "nested" / "history.log")
    for record in SAMPLE:
        log.append(record)
    assert log.read_all() == SAMPLE
    # a fresh reader sees the same thing
    assert FileHistoryLog(log.path).read_all() == SAMPLE


def test_file_appends_to_existing_content(tmp_path):
    path = tmp_path / "history.log"
    path.write_text(SAMPLE[0].to_line() + "\n", encoding="utf-8")
    FileHistoryLog(path).append(SAMPLE[1])
    assert path.read_text(encoding="utf-8").splitlines() == [SAMPLE[0].to_line(), SAMPLE[1].to_line()]


def test_missing_file_is_an_error(tmp_path):
    with pytest.raises(HistoryLogError):
        FileHistoryLog(tmp_path / "history.log").read_all()


def test_one_bad_line_fails_the_whole_read(tmp_path):
    path = tmp_path / "history.log"
    lines = [SAMPLE[0].to_line(), "garbage", SAMPLE[1].to_line()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with pytest.raises(HistoryLogError):
        FileHistoryLog(path).read_all()


def test_append_failure_is_reported(tmp_path):
    # a directory where the file should be
    path = tmp_path / "history.log"
    path.mkdir()
    with pytest.raises(HistoryLogError):
        FileHistoryLog(path).append(SAMPLE[0])


def test_memory_log_keeps_order():
    log = MemoryHistoryLog()
    for record in SAMPLE:
        log.append(record)
    result = log.read_all()
    assert result == SAMPLE
    result.clear()
    assert log.read_all() == SAMPLE
