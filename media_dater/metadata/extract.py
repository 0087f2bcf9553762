import os
import logging
from pathlib import Path
from datetime import datetime
from typing import BinaryIO, Callable, Dict, List, Optional

import exifread

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import CandidateFile, ResolvedTimestamp


def parse_exif_date(value: str) -> Optional[datetime]:
    """Parses an EXIF "YYYY:MM:DD HH:MM:SS" string, tolerating NUL padding."""
    clean = value.rstrip("\x00").strip()
    try:
        return datetime.strptime(clean, config.EXIF_DATE_FORMAT)
    except ValueError:
        return None


class FileProbe:
    """
    Per-file lookup context shared by the strategies of one resolution.
    EXIF tags are read at most once, and only if a strategy asks for them.
    """

    def __init__(self, path: Path, ext: str, fileobj: Optional[BinaryIO] = None):
        self.path = path
        self.ext = ext
        self._fileobj = fileobj
        self._tags: Optional[Dict] = None

    def exif_tags(self) -> Dict:
        if self._tags is None:
            try:
                self._tags = self._read_exif_tags()
            except MetadataExtractionError as e:
                logging.warning(str(e))
                self._tags = {}
        return self._tags

    def _read_exif_tags(self) -> Dict:
        try:
            if self._fileobj is not None:
                self._fileobj.seek(0)
                # details=False skips makernotes and thumbnails
                return exifread.process_file(self._fileobj, details=False)
            with self.path.open('rb') as f:
                return exifread.process_file(f, details=False)
        except OSError as e:
            raise MetadataExtractionError(f"Cannot open {self.path} for EXIF: {e}") from e
        except Exception as e:
            # exifread raises assorted errors on corrupt headers
            raise MetadataExtractionError(f"ExifRead failed for {self.path}: {e}") from e

    def mtime(self) -> Optional[float]:
        try:
            return os.stat(self.path).st_mtime
        except OSError as e:
            logging.warning(f"Cannot stat {self.path}: {e}")
            return None


Strategy = Callable[[FileProbe], Optional[datetime]]


class ExifTagStrategy:
    """Reads one DateTime-style EXIF tag."""

    def __init__(self, tag: str):
        self.tag = tag

    def __call__(self, probe: FileProbe) -> Optional[datetime]:
        tag = probe.exif_tags().get(self.tag)
        if tag is None:
            return None
        values = getattr(tag, 'values', None)
        if not isinstance(values, str):
            logging.debug(f"{self.tag} in {probe.path.name} is not in string format")
            return None
        dt = parse_exif_date(values)
        if dt is None:
            logging.debug(f"Unparseable {self.tag} in {probe.path.name}: {values!r}")
        return dt

    def __repr__(self):
        return f"ExifTagStrategy({self.tag!r})"


class ModificationTimeStrategy:
    """Falls back to the filesystem modification time (local time)."""

    def __call__(self, probe: FileProbe) -> Optional[datetime]:
        ts = probe.mtime()
        if ts is None:
            return None
        try:
            return datetime.fromtimestamp(ts)
        except (ValueError, OverflowError, OSError) as e:
            logging.warning(f"Unusable mtime {ts} on {probe.path}: {e}")
            return None

    def __repr__(self):
        return "ModificationTimeStrategy()"


class TimestampResolver:
    """
    Derives the capture timestamp of a media file.

    Strategies:
      - EXIF images: 'EXIF DateTimeOriginal' -> 'Image DateTime' (exifread).
      - Everything else (PNG/GIF, videos): file modification time.

    The first strategy to return a datetime wins. None means Absent: the
    file keeps its name and does not take part in folder naming.
    """

    def __init__(self, mtime_fallback_for_exif: bool = False):
        self.exif_chain: List[Strategy] = [ExifTagStrategy(tag) for tag in config.DATE_TAGS]
        if mtime_fallback_for_exif:
            self.exif_chain.append(ModificationTimeStrategy())
        self.plain_chain: List[Strategy] = [ModificationTimeStrategy()]

    def strategies_for(self, ext: str) -> List[Strategy]:
        if ext.lower() in config.EXIF_EXTS:
            return self.exif_chain
        return self.plain_chain

    def resolve(self, candidate: CandidateFile) -> Optional[ResolvedTimestamp]:
        return self._run(FileProbe(candidate.path, candidate.ext))

    def resolve_handle(self, fileobj: BinaryIO, ext: str, path: Path) -> Optional[ResolvedTimestamp]:
        """Resolves from an already open binary handle (used for EXIF reads)."""
        return self._run(FileProbe(path, ext.lower(), fileobj=fileobj))

    def _run(self, probe: FileProbe) -> Optional[ResolvedTimestamp]:
        for strategy in self.strategies_for(probe.ext):
            dt = strategy(probe)
            if dt is not None:
                logging.debug(f"{probe.path.name}: {dt} via {strategy!r}")
                return ResolvedTimestamp.from_datetime(dt)
        logging.info(f"No timestamp for {probe.path.name}, keeping original name")
        return None
