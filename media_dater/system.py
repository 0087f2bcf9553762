"""
Process and directory setup done before a batch runs.
"""
import shutil
import logging
from pathlib import Path

from . import config
from .exceptions import SetupError

# Not available on Windows
try:
    import resource
except ImportError:
    resource = None


def raise_open_file_limit(desired: int = config.DESIRED_OPEN_FILES) -> int:
    """
    Raises the soft open-file limit towards `desired`, capped by the hard limit.
    Returns the soft limit in effect afterwards (0 if unknown).
    """
    if resource is None:
        logging.debug("resource module unavailable, leaving open-file limit alone")
        return 0

    soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    target = desired
    if hard != resource.RLIM_INFINITY:
        target = min(target, hard)
    if soft == resource.RLIM_INFINITY or soft >= target:
        return soft

    try:
        resource.setrlimit(resource.RLIMIT_NOFILE, (target, hard))
    except (ValueError, OSError) as e:
        logging.warning(f"Could not raise open-file limit to {target}: {e}")
        return soft

    logging.debug(f"Open-file soft limit raised from {soft} to {target}")
    return target


def prepare_staging_dir(dest_root: Path, name: str = config.STAGING_DIR_NAME) -> Path:
    """Removes any leftover staging directory under dest_root and recreates it empty."""
    staging = dest_root / name
    try:
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True)
    except OSError as e:
        raise SetupError(f"Error preparing staging directory {staging}: {e}") from e
    return staging
