import csv
import pytest
from pathlib import Path
from media_dater.reporting import ReportGenerator, count_files
from media_dater.exceptions import FileOperationError
from media_dater.models import BatchResult, CopyResult, DestinationPlan


def sample_result(tmp_path) -> BatchResult:
    staging = tmp_path / "tmp"
    plans = [
        DestinationPlan(Path("/src/a.jpg"), "2020.11.04_09.29.03_1.jpg", 1, "2020.11.04_d-wed"),
        DestinationPlan(Path("/src/b.jpg"), "b.jpg"),
        DestinationPlan(Path("/src/c.mp4"), "2020.11.05_10.00.00_2.mp4", 2, "2020.11.05_d-thurs"),
        DestinationPlan(Path("/src/d.jpg"), "d.jpg"),
    ]
    results = [
        CopyResult(Path("/src/a.jpg"), staging / "2020.11.04_09.29.03_1.jpg", ok=True),
        CopyResult(Path("/src/b.jpg"), staging / "b.jpg", ok=True),
        CopyResult(Path("/src/c.mp4"), staging / "2020.11.05_10.00.00_2.mp4", ok=False, error="Permission denied"),
    ]
    return BatchResult(folder_name="2020.11.05_d-thurs", plans=plans, results=results)


def test_count_files(tmp_path):
    (tmp_path / "a").write_text("a")
    (tmp_path / "b").write_text("b")
    (tmp_path / "sub").mkdir()
    assert count_files(tmp_path) == 3


def test_count_files_missing_dir(tmp_path):
    with pytest.raises(FileOperationError):
        count_files(tmp_path / "missing")


def test_write_csv(tmp_path):
    out = tmp_path / "report.csv"
    rows = ReportGenerator(sample_result(tmp_path)).write_csv(out)

    assert rows == 4
    with open(out, newline="", encoding="utf-8") as f:
        data = list(csv.DictReader(f))

    assert [r["Status"] for r in data] == ["Copied", "Copied", "Failed", "Not Copied"]
    assert data[0]["Sequence"] == "1"
    assert data[1]["Sequence"] == ""
    assert data[1]["Notes"] == "No timestamp, original name kept"
    assert data[2]["Notes"] == "Permission denied"


def test_summarize(tmp_path):
    lines = ReportGenerator(sample_result(tmp_path)).summarize()
    assert "Folder name:  2020.11.05_d-thurs" in lines
    assert "Timestamped:  2" in lines
    assert "Failed:       1" in lines
