import logging
from pathlib import Path
from typing import Iterable, Optional, Set

from . import config
from .exceptions import BatchAbortedError
from .models import BatchResult, BatchState, CandidateFile
from .metadata.extract import TimestampResolver
from .organization.naming import NameSynthesizer
from .organization.mover import CopyDispatcher


class BatchCoordinator:
    def __init__(self,
                 resolver: Optional[TimestampResolver] = None,
                 synthesizer: Optional[NameSynthesizer] = None,
                 on_error: str = config.ON_ERROR_SKIP,
                 max_workers: int = config.DEFAULT_MAX_WORKERS,
                 show_progress: bool = True,
                 default_folder: str = config.DEFAULT_FOLDER_NAME):
        if on_error not in config.ON_ERROR_POLICIES:
            raise ValueError(f"Unknown error policy {on_error!r}, expected one of {config.ON_ERROR_POLICIES}")
        self.resolver = resolver or TimestampResolver()
        self.synthesizer = synthesizer or NameSynthesizer()
        self.on_error = on_error
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.default_folder = default_folder

    def run(self, candidates: Iterable[CandidateFile], staging_dir: Path) -> BatchResult:
        """
        Resolve -> Plan -> Dispatch for every candidate, then wait for all copies.

        Timestamps, sequence numbers and the folder name are settled here on
        the calling thread in traversal order; only the byte copies run on
        the pool. The folder name of the last timestamped candidate wins.

        Raises:
            BatchAbortedError: on_error='abort' and at least one copy failed.
        """
        state = BatchState(self.default_folder)
        result = BatchResult(folder_name=self.default_folder)
        planned: Set[str] = set()
        abort = self.on_error == config.ON_ERROR_ABORT

        with CopyDispatcher(self.max_workers, show_progress=self.show_progress) as dispatcher:
            for candidate in candidates:
                if abort and dispatcher.failed:
                    logging.warning(f"Copy failure seen, not dispatching {candidate.name} or later files")
                    break

                resolved = self.resolver.resolve(candidate)
                sequence = state.claim_sequence() if resolved is not None else None
                plan = self.synthesizer.plan(candidate, resolved, sequence)
                if plan.folder_contribution:
                    state.record_folder(plan.folder_contribution)
                result.plans.append(plan)

                dest = staging_dir / plan.filename
                if plan.filename in planned:
                    logging.error(f"Destination {plan.filename} already planned in this batch, skipping {candidate.name}")
                    dispatcher.record_failure(candidate.path, dest, "duplicate destination name")
                    continue
                planned.add(plan.filename)

                logging.debug(f"Dispatch {candidate.name} -> {plan.filename}")
                dispatcher.submit(candidate.path, dest)

            result.results = dispatcher.join()

        result.folder_name = state.folder_name
        failures = result.failed
        logging.info(f"Batch done: {len(result.copied)} copied, {len(failures)} failed, "
                     f"{len(result.timestamped)} timestamped. Folder: {result.folder_name}")

        if failures and abort:
            raise BatchAbortedError(failures, result)
        return result
