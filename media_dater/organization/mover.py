import os
import shutil
import logging
import threading
from pathlib import Path
from typing import List
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .. import config
from ..models import CopyResult


def partial_path(dest: Path) -> Path:
    """Hidden sibling the bytes are written to before the final rename."""
    return dest.with_name(f".{dest.name}{config.PARTIAL_SUFFIX}")


def copy_file(src: Path, dest: Path) -> CopyResult:
    """
    Copies src to dest through a temporary name so a failed copy never
    leaves a truncated file under dest.
    """
    tmp = partial_path(dest)
    try:
        shutil.copy2(str(src), str(tmp))
        os.replace(tmp, dest)
    except OSError as e:
        try:
            tmp.unlink(missing_ok=True)
        except OSError as cleanup_err:
            logging.debug(f"Could not remove {tmp}: {cleanup_err}")
        logging.error(f"Failed to copy {src} -> {dest}: {e}")
        return CopyResult(src, dest, ok=False, error=str(e))
    return CopyResult(src, dest, ok=True)


class CopyDispatcher:
    """
    Runs file copies on a thread pool. join() is the completion barrier:
    it returns once every submitted copy has reported, failed or not.
    """

    def __init__(self, max_workers: int = config.DEFAULT_MAX_WORKERS, show_progress: bool = True):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self.show_progress = show_progress
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="copy")
        self._futures: List[Future] = []
        self._failed = threading.Event()

    @property
    def failed(self) -> bool:
        """True once any completed copy has failed."""
        return self._failed.is_set()

    def submit(self, src: Path, dest: Path) -> Future:
        future = self._executor.submit(copy_file, src, dest)
        future.add_done_callback(self._on_done)
        self._futures.append(future)
        return future

    def record_failure(self, src: Path, dest: Path, reason: str) -> Future:
        """Registers a copy that was refused before dispatch, so join() still reports it."""
        future: Future = Future()
        future.set_result(CopyResult(src, dest, ok=False, error=reason))
        self._failed.set()
        self._futures.append(future)
        return future

    def _on_done(self, future: Future):
        if future.exception() is not None or not future.result().ok:
            self._failed.set()

    def join(self) -> List[CopyResult]:
        """Waits for all dispatched copies; results come back in submission order."""
        for _ in tqdm(as_completed(self._futures), total=len(self._futures),
                      desc="Copying", disable=not self.show_progress):
            pass
        self._executor.shutdown(wait=True)
        return [f.result() for f in self._futures]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._executor.shutdown(wait=True)
