import re
from typing import Optional, Tuple

from .. import config
from ..models import CandidateFile, DestinationPlan, ResolvedTimestamp

_PLANNED_NAME_RE = re.compile(
    r'^(\d{4})\.(\d{2})\.(\d{2})_(\d{2})\.(\d{2})\.(\d{2})_(\d+)(\.[^.]+)?$'
)


def format_date(ts: ResolvedTimestamp) -> str:
    return config.DATE_PATTERN.format(year=ts.year, month=ts.month, day=ts.day)


def format_time(ts: ResolvedTimestamp) -> str:
    return config.TIME_PATTERN.format(hour=ts.hour, minute=ts.minute, second=ts.second)


def folder_name_for(ts: ResolvedTimestamp) -> str:
    return config.FOLDER_PATTERN.format(date=format_date(ts), weekday=ts.weekday_tag)


class NameSynthesizer:
    def plan(self,
             candidate: CandidateFile,
             resolved: Optional[ResolvedTimestamp],
             sequence: Optional[int] = None) -> DestinationPlan:
        """
        Builds the destination name for one candidate.

        With a timestamp: YYYY.MM.DD_HH.MM.SS_<seq><ext> plus a folder
        contribution. Without one the original file name is kept as-is.
        """
        if resolved is None:
            return DestinationPlan(source=candidate.path, filename=candidate.name)

        if sequence is None:
            raise ValueError(f"Timestamped file {candidate.name} needs a sequence number")

        filename = config.FILE_PATTERN.format(
            date=format_date(resolved),
            time=format_time(resolved),
            seq=sequence,
            ext=candidate.ext,
        )
        return DestinationPlan(
            source=candidate.path,
            filename=filename,
            sequence=sequence,
            folder_contribution=folder_name_for(resolved),
        )


def parse_planned_name(name: str) -> Optional[Tuple[Tuple[int, int, int, int, int, int], int]]:
    """
    Reverse of NameSynthesizer.plan for timestamped names.
    Returns ((year, month, day, hour, minute, second), seq) or None.
    """
    m = _PLANNED_NAME_RE.match(name)
    if not m:
        return None
    fields = tuple(int(g) for g in m.groups()[:6])
    return fields, int(m.group(7))
