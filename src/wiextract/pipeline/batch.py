"""Batch Orchestration - Convert a directory of documents.

For every .doc/.docx file at the top level of a directory:
1. Read the file into an Attachment
2. Convert it (reading and conversion optionally run in worker processes)
3. Copy the source file into Success/, SuccessWithWarnings/ or Aborted/
   and write ``<filename>.result.json`` next to it

A file that cannot be read or routed is recorded as an error and the batch
moves on to the next file.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Union

from wiextract.config import Settings, settings as default_settings
from wiextract.models import Attachment, ConversionResult, ConversionStatus
from wiextract.pipeline.engine import convert_attachment

logger = logging.getLogger(__name__)


@dataclass
class BatchSummary:
    """Outcome of a batch run."""

    results: list[ConversionResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if not r.aborted)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.aborted)

    @property
    def with_warnings(self) -> int:
        return sum(1 for r in self.results if r.has_warnings)

    def summary_line(self) -> str:
        return (
            f"Processed {self.processed} docs. {self.successful} successful, "
            f"{self.failed} failed. {self.with_warnings} had warnings"
        )


def find_documents(
    directory: Union[str, Path],
    extensions: Optional[set[str]] = None,
) -> list[Path]:
    """List convertible files at the top level of a directory.

    Args:
        directory: Directory to scan (not recursive).
        extensions: Lower-case extensions with leading dot.

    Returns:
        Matching files sorted by name. Word lock files (~$*) are skipped.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    extensions = extensions or default_settings.normalized_extensions
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file()
        and p.suffix.lower() in extensions
        and not p.name.startswith("~$")
    )


def status_folder(status: ConversionStatus, settings: Optional[Settings] = None) -> str:
    """Folder name for a conversion status."""
    settings = settings or default_settings
    return {
        ConversionStatus.SUCCESS: settings.success_dir,
        ConversionStatus.SUCCESS_WITH_WARNINGS: settings.warnings_dir,
        ConversionStatus.ABORTED: settings.aborted_dir,
    }[status]


def route_result(
    attachment: Attachment,
    result: ConversionResult,
    output_root: Union[str, Path],
    settings: Optional[Settings] = None,
) -> Path:
    """Copy the source file into its status folder and write the result JSON.

    Returns:
        Path of the copied source file.
    """
    settings = settings or default_settings
    target_dir = Path(output_root) / status_folder(result.status, settings)
    target_dir.mkdir(parents=True, exist_ok=True)

    output_path = target_dir / attachment.file_name
    output_path.write_bytes(attachment.file_bytes)

    json_path = target_dir / f"{attachment.file_name}{settings.result_suffix}"
    json_path.write_text(result.to_json(), encoding="utf-8")

    logger.debug("Routed %s to %s", attachment.file_name, target_dir)
    return output_path


def _file_error(path: Path, exc: Exception) -> str:
    msg = f"Error processing filename '{path}': {exc}"
    logger.error(msg)
    return msg


def read_and_convert(
    path: Path,
    settings: Optional[Settings] = None,
) -> tuple[Attachment, ConversionResult]:
    """Read one file and convert it. Runs in worker processes for parallel batches."""
    attachment = Attachment.from_path(path)
    return attachment, convert_attachment(attachment, settings)


def _finish_file(
    path: Path,
    produce: Callable[[], tuple[Attachment, ConversionResult]],
    output_root: Path,
    settings: Settings,
    summary: BatchSummary,
) -> None:
    """Obtain one file's result and route it before the next file is handled."""
    try:
        attachment, result = produce()
        route_result(attachment, result, output_root, settings)
    except OSError as exc:
        summary.errors.append(_file_error(path, exc))
        return
    summary.results.append(result)


def process_directory(
    directory: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    workers: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> BatchSummary:
    """Convert and route every document in a directory.

    Each file is read, converted and routed before the next one is routed,
    so an interrupted batch leaves every finished file in its status folder.

    Args:
        directory: Input directory.
        output_dir: Root for the status folders (defaults to directory).
        workers: Worker processes for read and conversion (default from settings).
        settings: Settings override.

    Returns:
        BatchSummary with one result per converted file and file-level errors.
    """
    settings = settings or default_settings
    workers = workers or settings.max_workers
    output_root = Path(output_dir) if output_dir else Path(directory)
    summary = BatchSummary()

    paths = find_documents(directory, settings.normalized_extensions)
    logger.info("Found %d documents in %s", len(paths), directory)

    if workers > 1 and len(paths) > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(read_and_convert, path, settings) for path in paths]
            for path, future in zip(paths, futures):
                _finish_file(path, future.result, output_root, settings, summary)
    else:
        for path in paths:
            _finish_file(
                path, partial(read_and_convert, path, settings), output_root, settings, summary
            )

    logger.info(summary.summary_line())
    return summary
