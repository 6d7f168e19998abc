"""Domain models for configuration management."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

from .models import HookRegistry


CONFIG_VERSION = "1.0.0"


@dataclass(frozen=True)
class LoggingSettings:
    """Logging defaults for a conversion run."""

    level: int = logging.WARNING
    format: str = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class BatchOptions:
    """Rules for file and directory conversion."""

    source_suffixes: Tuple[str, ...] = (".txt",)
    output_suffix: str = ".html"
    copy_other_files: bool = True
    force: bool = False
    preserve_timestamps: bool = True
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        # Suffix matching is case-insensitive
        object.__setattr__(
            self,
            "source_suffixes",
            tuple(suffix.lower() for suffix in self.source_suffixes),
        )


@dataclass(frozen=True)
class ConverterConfig:
    """Aggregated configuration for a conversion run."""

    version: str = CONFIG_VERSION
    title: Optional[str] = None
    hooks: HookRegistry = field(default_factory=HookRegistry)
    batch: BatchOptions = field(default_factory=BatchOptions)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, object]:
        """Convert the configuration into a JSON serialisable structure."""

        return {
            "version": self.version,
            "title": self.title,
            "hooks": {
                stage.value: [
                    getattr(hook, "__name__", repr(hook))
                    for hook in self.hooks.hooks_for(stage)
                ]
                for stage in self.hooks.stages()
            },
            "batch": {
                "source_suffixes": list(self.batch.source_suffixes),
                "output_suffix": self.batch.output_suffix,
                "copy_other_files": self.batch.copy_other_files,
                "force": self.batch.force,
                "preserve_timestamps": self.batch.preserve_timestamps,
                "encoding": self.batch.encoding,
            },
            "logging": {
                "level": logging.getLevelName(self.logging.level),
                "format": self.logging.format,
            },
            "source_path": str(self.source_path) if self.source_path else None,
        }


def with_cli_overrides(base_config: ConverterConfig, overrides: Dict[str, object]) -> ConverterConfig:
    """Create a new configuration with CLI overrides applied.

    ``None`` values leave the base setting untouched.
    """

    config = base_config
    if overrides.get("title") is not None:
        config = replace(config, title=overrides["title"])

    batch = config.batch
    if any(
        overrides.get(key) is not None
        for key in ("force", "copy_other_files", "preserve_timestamps")
    ):
        batch = replace(
            batch,
            force=(
                bool(overrides["force"])
                if overrides.get("force") is not None
                else batch.force
            ),
            copy_other_files=(
                bool(overrides["copy_other_files"])
                if overrides.get("copy_other_files") is not None
                else batch.copy_other_files
            ),
            preserve_timestamps=(
                bool(overrides["preserve_timestamps"])
                if overrides.get("preserve_timestamps") is not None
                else batch.preserve_timestamps
            ),
        )
        config = replace(config, batch=batch)

    if overrides.get("log_level") is not None:
        config = replace(
            config,
            logging=replace(config.logging, level=int(overrides["log_level"])),
        )

    return config
