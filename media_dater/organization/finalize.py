import os
import logging
from pathlib import Path
from typing import Optional

from .. import config
from ..exceptions import FinalizationError


class FolderFinalizer:
    """
    Renames the staging directory once the batch is done. On failure the
    staging directory is left where it is for manual recovery.
    """

    def __init__(self, separator: str = config.TITLE_SEPARATOR):
        self.separator = separator

    def target_path(self, staging_dir: Path, folder_name: str, title: Optional[str] = None) -> Path:
        name = folder_name
        title = self._clean_title(title)
        if title:
            name = f"{folder_name}{self.separator}{title}"
        return staging_dir.parent / name

    def finalize(self, staging_dir: Path, folder_name: str, title: Optional[str] = None) -> Path:
        target = self.target_path(staging_dir, folder_name, title)
        if target == staging_dir:
            logging.info(f"Folder already named {target}")
            return target
        # os.rename silently replaces empty directories on POSIX
        if target.exists():
            raise FinalizationError(f"Could not rename {staging_dir}: {target} already exists")
        try:
            staging_dir.rename(target)
        except OSError as e:
            raise FinalizationError(f"Could not rename {staging_dir} to {target}: {e}") from e

        logging.info(f"NEWPATH {target}")
        return target

    def _clean_title(self, title: Optional[str]) -> str:
        if not title:
            return ""
        cleaned = title.strip()
        for sep in {os.sep, os.altsep or os.sep, "/"}:
            cleaned = cleaned.replace(sep, "-")
        return cleaned
