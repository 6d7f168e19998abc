"""Convert single files, streams or whole directory trees."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from ..domain.configuration import ConverterConfig
from ..domain.errors import DestinationError, SourceNotFoundError
from ..domain.models import BatchReport
from ..infrastructure.filesystem import (
    copy_file,
    is_stream,
    is_up_to_date,
    open_destination,
    open_source,
    sync_timestamps,
)
from .assembler import convert


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
STDIN_TITLE = "stdin"


class BatchService:
    """Run conversions with skip-if-unchanged and timestamp sync."""

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def run(self, source: Optional[PathLike] = None, destination: Optional[PathLike] = None) -> BatchReport:
        source_path = Path(source) if source is not None else None
        destination_path = Path(destination) if destination is not None else None
        report = BatchReport()

        if is_stream(source_path):
            self._convert_stream(destination_path, report)
        elif source_path.is_dir():
            self._convert_tree(source_path, destination_path, report)
        elif source_path.is_file():
            self._convert_single(source_path, destination_path, report)
        else:
            raise SourceNotFoundError(source_path)

        logger.info(
            "Converted %d, copied %d, skipped %d file(s)",
            len(report.converted),
            len(report.copied),
            len(report.skipped),
        )
        return report

    def title_for(self, source: Optional[Path]) -> str:
        """Explicit title if configured, else the source's base name."""
        if self.config.title is not None:
            return self.config.title
        return STDIN_TITLE if is_stream(source) else source.name

    def output_name(self, source: Path) -> str:
        return source.stem + self.config.batch.output_suffix

    def is_convertible(self, path: Path) -> bool:
        return path.suffix.lower() in self.config.batch.source_suffixes

    def convert_file(self, source: Path, destination: Path, report: BatchReport) -> None:
        """Convert one file unless its output is already current."""
        options = self.config.batch
        if not options.force and is_up_to_date(source, destination):
            logger.info("Skipping %s (up to date)", destination)
            report.skipped.append(destination)
            return

        with open_source(source, options.encoding) as reader, open_destination(
            destination, options.encoding
        ) as writer:
            convert(reader, writer, self.title_for(source), self.config.hooks)
        if options.preserve_timestamps:
            sync_timestamps(source, destination)
        logger.info("Converted %s -> %s", source, destination)
        report.converted.append(destination)

    def copy_asset(self, source: Path, destination: Path, report: BatchReport) -> None:
        if not self.config.batch.force and is_up_to_date(source, destination):
            logger.debug("Skipping copy of %s (up to date)", source)
            report.skipped.append(destination)
            return
        copy_file(source, destination)
        logger.info("Copied %s -> %s", source, destination)
        report.copied.append(destination)

    def _convert_stream(self, destination: Optional[Path], report: BatchReport) -> None:
        encoding = self.config.batch.encoding
        if destination is not None and destination.is_dir():
            raise DestinationError("Cannot name output for stdin inside a directory", destination)
        with open_source(None, encoding) as reader, open_destination(destination, encoding) as writer:
            convert(reader, writer, self.title_for(None), self.config.hooks)
        if not is_stream(destination):
            report.converted.append(destination)

    def _convert_single(self, source: Path, destination: Optional[Path], report: BatchReport) -> None:
        if is_stream(destination):
            with open_source(source, self.config.batch.encoding) as reader, open_destination(
                None, self.config.batch.encoding
            ) as writer:
                convert(reader, writer, self.title_for(source), self.config.hooks)
            return
        if destination.is_dir():
            destination = destination / self.output_name(source)
        self.convert_file(source, destination, report)

    def _convert_tree(self, source: Path, destination: Optional[Path], report: BatchReport) -> None:
        if is_stream(destination):
            raise DestinationError("A directory source needs a destination directory")
        if destination.exists() and not destination.is_dir():
            raise DestinationError("Destination is not a directory", destination)
        source_root = source.resolve()
        destination_root = destination.resolve()
        if destination_root == source_root or source_root in destination_root.parents:
            raise DestinationError("Destination lies inside the source tree", destination)

        destination.mkdir(parents=True, exist_ok=True)
        for path in self._walk(source):
            relative = path.relative_to(source)
            if self.is_convertible(path):
                target = destination / relative.parent / self.output_name(path)
                self.convert_file(path, target, report)
            elif self.config.batch.copy_other_files:
                self.copy_asset(path, destination / relative, report)

    @staticmethod
    def _walk(root: Path) -> Iterator[Path]:
        for path in sorted(root.rglob("*")):
            if path.is_file():
                yield path


__all__ = ["BatchService", "STDIN_TITLE"]
