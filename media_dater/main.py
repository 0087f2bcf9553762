import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import BatchCoordinator
from .exceptions import BatchAbortedError, FinalizationError, MediaDaterError
from .metadata.extract import TimestampResolver
from .organization.finalize import FolderFinalizer
from .reporting import ReportGenerator, count_files
from .scanning.filesystem import MediaScanner
from .system import prepare_staging_dir, raise_open_file_limit


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to stderr and, optionally, a log file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="media-dater: copy a folder of photos/videos into one dated folder")

    p.add_argument("src", type=Path, nargs="?", default=Path(config.DEFAULT_SRC_DIR),
                   help=f"Source directory (default: {config.DEFAULT_SRC_DIR})")
    p.add_argument("dest", type=Path, nargs="?", default=Path(config.DEFAULT_DEST_DIR),
                   help=f"Destination root; the batch is staged in DEST/{config.STAGING_DIR_NAME} (default: {config.DEFAULT_DEST_DIR})")

    p.add_argument("-t", "--title", default="", help="Folder title appended to the dated folder name")
    p.add_argument("--separator", default=config.TITLE_SEPARATOR, help="Separator between folder name and title")
    p.add_argument("--on-error", choices=config.ON_ERROR_POLICIES, default=config.ON_ERROR_SKIP,
                   help="What to do when a file cannot be copied: log and skip it, or abort the batch")
    p.add_argument("--workers", type=int, default=config.DEFAULT_MAX_WORKERS, help="Parallel copy workers")
    p.add_argument("--exif-mtime-fallback", action="store_true",
                   help="Use file modification time for EXIF images with no usable DateTime tag")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file CSV report here")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def run(args) -> Path:
    """
    Executes one batch: stage -> scan -> copy -> report -> rename.
    Returns the final folder path.
    """
    src_root = args.src.resolve()
    dest_root = args.dest.resolve()

    logging.info("=== media-dater started ===")
    logging.info(f"Source: {src_root}")
    logging.info(f"Dest:   {dest_root}")

    raise_open_file_limit()
    staging = prepare_staging_dir(dest_root)

    coordinator = BatchCoordinator(
        resolver=TimestampResolver(mtime_fallback_for_exif=args.exif_mtime_fallback),
        on_error=args.on_error,
        max_workers=args.workers,
        show_progress=not args.no_progress,
    )
    result = coordinator.run(MediaScanner().scan(src_root), staging)

    if not result.plans:
        logging.warning("No srcFiles")

    # Consistency between source and staging
    logging.info(f"Number of files in {src_root}: {count_files(src_root)}")
    logging.info(f"Number of files in {staging}: {count_files(staging)}")

    reporter = ReportGenerator(result)
    reporter.summarize()
    if args.report_csv:
        reporter.write_csv(args.report_csv)

    final = FolderFinalizer(args.separator).finalize(staging, result.folder_name, args.title)
    print(final)
    return final


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        run(args)
    except BatchAbortedError as e:
        logging.error(f"Batch aborted: {e}. Staged files left in place.")
        sys.exit(1)
    except FinalizationError as e:
        logging.error(f"{e}. Staged files left in place for manual recovery.")
        sys.exit(1)
    except MediaDaterError as e:
        logging.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
