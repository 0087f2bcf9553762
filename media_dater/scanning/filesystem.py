import os
import logging
from pathlib import Path
from typing import Iterator

from .. import config
from ..exceptions import ScanError
from ..models import CandidateFile

# Visit results for a single directory entry
INCLUDE = 'include'
IGNORE = 'ignore'
SKIP_SUBTREE = 'skip-subtree'


def classify_extension(path: Path) -> str:
    """Maps a path to image/video/ignored by its (case-insensitive) extension."""
    if path.name.startswith("._"):
        return config.KIND_IGNORED
    return config.EXT_TO_KIND.get(path.suffix.lower(), config.KIND_IGNORED)


class MediaScanner:
    """
    Lists the media files directly inside a source directory.

    Sub-directories are never descended into; each one is reported as
    SKIP_SUBTREE and logged. Errors on a single entry are logged and the
    entry is dropped, only an unreadable root aborts the scan.
    """

    def scan(self, root: Path) -> Iterator[CandidateFile]:
        """
        Generator that yields a CandidateFile for every image/video in root,
        sorted by name (plain byte order, so "Y.jpg" before "x.jpg"). One-shot;
        call scan() again to restart.
        """
        try:
            with os.scandir(root) as it:
                entries = list(it)
        except OSError as e:
            raise ScanError(f"Cannot list source directory {root}: {e}") from e

        # Lexical byte order, like a directory walk
        entries.sort(key=lambda e: e.name)

        for entry in entries:
            verdict, candidate = self._visit(entry)
            if verdict == SKIP_SUBTREE:
                logging.info(f"Skipping dir: {entry.name}")
            elif verdict == INCLUDE and candidate is not None:
                yield candidate

    def _visit(self, entry: os.DirEntry):
        try:
            if entry.is_dir(follow_symlinks=False):
                return SKIP_SUBTREE, None
            if not entry.is_file():
                return IGNORE, None
        except OSError as e:
            logging.warning(f"Failure accessing path {entry.path}: {e}")
            return IGNORE, None

        return self._classify(Path(entry.path))

    def _classify(self, path: Path):
        kind = classify_extension(path)
        if kind == config.KIND_IGNORED:
            logging.debug(f"Ignoring {path.name}")
            return IGNORE, None
        return INCLUDE, CandidateFile(path=path, ext=path.suffix.lower(), kind=kind)

