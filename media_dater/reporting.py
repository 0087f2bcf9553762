import os
import csv
import logging
from pathlib import Path
from typing import Dict, List

from .exceptions import FileOperationError
from .models import BatchResult, CopyResult


def count_files(directory: Path) -> int:
    """Number of entries directly inside directory, for sanity-checking a run."""
    try:
        with os.scandir(directory) as it:
            return sum(1 for _ in it)
    except OSError as e:
        raise FileOperationError(f"Could not count files in {directory}: {e}") from e


class ReportGenerator:
    HEADERS = [
        "Source Path",
        "Destination Name",
        "Sequence",
        "Status",
        "Notes",
    ]

    def __init__(self, result: BatchResult):
        self.result = result

    def write_csv(self, output_csv: Path) -> int:
        """
        Writes one row per planned file. Files that were never dispatched
        (abort policy) are reported as 'Not Copied'.
        """
        by_source: Dict[Path, CopyResult] = {r.source: r for r in self.result.results}
        rows = 0

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)

            for plan in self.result.plans:
                copy = by_source.get(plan.source)
                if copy is None:
                    status, notes = "Not Copied", ""
                elif copy.ok:
                    status, notes = "Copied", "" if plan.is_timestamped else "No timestamp, original name kept"
                else:
                    status, notes = "Failed", copy.error or ""

                seq = plan.sequence if plan.sequence is not None else ""
                writer.writerow([str(plan.source), plan.filename, seq, status, notes])
                rows += 1

        logging.info(f"Report complete: {rows} rows -> {output_csv}")
        return rows

    def summarize(self) -> List[str]:
        lines = [
            f"Folder name:  {self.result.folder_name}",
            f"Considered:   {len(self.result.plans)}",
            f"Timestamped:  {len(self.result.timestamped)}",
            f"Copied:       {len(self.result.copied)}",
            f"Failed:       {len(self.result.failed)}",
        ]
        for line in lines:
            logging.info(line)
        for failure in self.result.failed:
            logging.warning(f"  failed: {failure.source} ({failure.error})")
        return lines
