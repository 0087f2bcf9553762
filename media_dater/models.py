import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from . import config


@dataclass(frozen=True)
class CandidateFile:
    """
    A media file found in the source directory.
    """
    path: Path
    ext: str                # lower-cased, with the dot
    kind: str               # image/video

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ResolvedTimestamp:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    weekday_tag: str

    @classmethod
    def from_datetime(cls, dt: datetime) -> "ResolvedTimestamp":
        # isoweekday(): Monday=1 .. Sunday=7, so % 7 puts Sunday at 0
        return cls(
            year=dt.year, month=dt.month, day=dt.day,
            hour=dt.hour, minute=dt.minute, second=dt.second,
            weekday_tag=config.WEEKDAY_TAGS[dt.isoweekday() % 7],
        )

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)


@dataclass(frozen=True)
class DestinationPlan:
    source: Path
    filename: str
    sequence: Optional[int] = None
    folder_contribution: Optional[str] = None

    @property
    def is_timestamped(self) -> bool:
        return self.sequence is not None


@dataclass
class CopyResult:
    source: Path
    destination: Path
    ok: bool
    error: Optional[str] = None


class BatchState:
    """
    Mutable state shared by one batch: the running folder name and the
    next sequence number. Both are only touched under the lock.
    """

    def __init__(self, default_folder: str = config.DEFAULT_FOLDER_NAME):
        self._lock = threading.Lock()
        self._folder_name = default_folder
        self._next_sequence = 1

    @property
    def folder_name(self) -> str:
        with self._lock:
            return self._folder_name

    def claim_sequence(self) -> int:
        with self._lock:
            seq = self._next_sequence
            self._next_sequence += 1
            return seq

    def record_folder(self, name: str):
        # Last writer wins
        with self._lock:
            self._folder_name = name


@dataclass
class BatchResult:
    folder_name: str
    plans: List[DestinationPlan] = field(default_factory=list)
    results: List[CopyResult] = field(default_factory=list)

    @property
    def copied(self) -> List[CopyResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[CopyResult]:
        return [r for r in self.results if not r.ok]

    @property
    def timestamped(self) -> List[DestinationPlan]:
        return [p for p in self.plans if p.is_timestamped]
