"""Load converter configuration from JSON, YAML or Python files.

Sources are merged in a fixed order:
    1. Built-in defaults (``ConverterConfig()``)
    2. The config file given on the command line, or the one named by the
       ``TXT2HTML_CONFIG`` environment variable
    3. CLI overrides (applied later by ``with_cli_overrides``)

File structure (JSON or YAML)::

    title: Release notes
    hooks:
      pre: [linkify, url_to_image, mypackage.hooks:highlight]
      after_pre: [mypackage.hooks:footer]
    batch:
      source_suffixes: [.txt, .text]
      copy_other_files: false
    logging:
      level: INFO

A ``.py`` config is executed and may define ``TITLE``, ``HOOKS``, ``BATCH``
and ``LOGGING``. Inside ``HOOKS`` a hook may be a callable, the name of a
function defined in the script, or any reference a JSON file accepts.
"""
from __future__ import annotations

import json
import logging
import os
import runpy
from dataclasses import replace
from importlib import import_module
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..application.filters import BUILTIN_FILTERS
from ..domain.configuration import BatchOptions, ConverterConfig, LoggingSettings
from ..domain.errors import ConfigurationError
from ..domain.models import Hook, HookRegistry, Stage


CONFIG_ENV_VAR = "TXT2HTML_CONFIG"

logger = logging.getLogger(__name__)


def default_config_path() -> Optional[Path]:
    value = os.getenv(CONFIG_ENV_VAR, "").strip()
    return Path(value) if value else None


def resolve_hook(
    reference: Any,
    namespace: Optional[Mapping[str, Any]] = None,
    path: Optional[Path] = None,
) -> Hook:
    """Turn a hook reference into a callable.

    Accepts a callable, a built-in filter name, a name from ``namespace`` or
    a ``module:attribute`` import path.
    """
    if callable(reference):
        return reference
    if not isinstance(reference, str) or not reference.strip():
        raise ConfigurationError(f"Invalid hook reference: {reference!r}", path)

    name = reference.strip()
    if name in BUILTIN_FILTERS:
        return BUILTIN_FILTERS[name]
    if namespace is not None and name in namespace:
        candidate = namespace[name]
    elif ":" in name:
        module_name, _, attribute = name.partition(":")
        try:
            module = import_module(module_name)
        except ImportError as exc:
            raise ConfigurationError(f"Cannot import hook module '{module_name}': {exc}", path) from exc
        try:
            candidate = getattr(module, attribute)
        except AttributeError as exc:
            raise ConfigurationError(f"Module '{module_name}' has no hook '{attribute}'", path) from exc
    else:
        raise ConfigurationError(f"Unknown hook '{name}'", path)

    if not callable(candidate):
        raise ConfigurationError(f"Hook '{name}' is not callable", path)
    return candidate


def build_registry(
    data: Optional[Mapping[str, Any]],
    namespace: Optional[Mapping[str, Any]] = None,
    path: Optional[Path] = None,
) -> HookRegistry:
    """Build a HookRegistry from a ``{stage: [reference, ...]}`` mapping."""
    if not data:
        return HookRegistry()
    if not isinstance(data, Mapping):
        raise ConfigurationError("'hooks' must be a mapping of stage to hook list", path)

    chains: Dict[Stage, List[Hook]] = {}
    for stage_name, references in data.items():
        try:
            stage = Stage.from_string(str(stage_name))
        except ValueError as exc:
            raise ConfigurationError(str(exc), path) from exc
        if references is None:
            continue
        if isinstance(references, str) or callable(references):
            references = [references]
        elif not isinstance(references, (list, tuple)):
            raise ConfigurationError(
                f"Hooks for stage '{stage.value}' must be a name or a list, got {type(references).__name__}",
                path,
            )
        chains[stage] = [resolve_hook(ref, namespace, path) for ref in references]
    return HookRegistry(chains)


def _parse_level(value: Any, path: Optional[Path]) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown logging level '{value}'", path)
    return level


def _section(data: Mapping[str, Any], key: str, path: Optional[Path]) -> Mapping[str, Any]:
    section = data[key] or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"'{key}' must be a mapping, got {type(section).__name__}", path)
    return section


def config_from_mapping(
    data: Mapping[str, Any],
    namespace: Optional[Mapping[str, Any]] = None,
    path: Optional[Path] = None,
) -> ConverterConfig:
    config = ConverterConfig(source_path=path)

    if data.get("title") is not None:
        config = replace(config, title=str(data["title"]))

    config = replace(config, hooks=build_registry(data.get("hooks"), namespace, path))

    if "batch" in data:
        batch = _section(data, "batch", path)
        defaults = config.batch
        suffixes = batch.get("source_suffixes", defaults.source_suffixes)
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        if not isinstance(suffixes, (list, tuple)) or not all(isinstance(s, str) for s in suffixes):
            raise ConfigurationError("'batch.source_suffixes' must be a list of strings", path)
        config = replace(
            config,
            batch=BatchOptions(
                source_suffixes=tuple(suffixes),
                output_suffix=batch.get("output_suffix", defaults.output_suffix),
                copy_other_files=bool(batch.get("copy_other_files", defaults.copy_other_files)),
                force=bool(batch.get("force", defaults.force)),
                preserve_timestamps=bool(batch.get("preserve_timestamps", defaults.preserve_timestamps)),
                encoding=batch.get("encoding", defaults.encoding),
            ),
        )

    if "logging" in data:
        settings = _section(data, "logging", path)
        config = replace(
            config,
            logging=LoggingSettings(
                level=_parse_level(settings.get("level", config.logging.level), path),
                format=settings.get("format", config.logging.format),
            ),
        )
    return config


def _read_mapping(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read configuration: {exc}", path) from exc
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            raise ConfigurationError(f"Unsupported config format '{suffix}'", path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Malformed configuration: {exc}", path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Top level of the configuration must be a mapping", path)
    return data


def _run_script(path: Path) -> ConverterConfig:
    try:
        namespace = runpy.run_path(str(path))
    except Exception as exc:
        raise ConfigurationError(f"Config script failed: {exc}", path) from exc
    data = {
        "title": namespace.get("TITLE"),
        "hooks": namespace.get("HOOKS"),
    }
    if namespace.get("BATCH") is not None:
        data["batch"] = namespace["BATCH"]
    if namespace.get("LOGGING") is not None:
        data["logging"] = namespace["LOGGING"]
    return config_from_mapping(data, namespace, path)


def load_config(path: Optional[Path] = None) -> ConverterConfig:
    """Load configuration from ``path`` or from ``$TXT2HTML_CONFIG``."""
    if path is None:
        path = default_config_path()
    if path is None:
        return ConverterConfig()
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError("Configuration file not found", path)

    logger.info("Loading configuration from %s", path)
    if path.suffix.lower() == ".py":
        return _run_script(path)
    return config_from_mapping(_read_mapping(path), path=path)


__all__ = [
    "CONFIG_ENV_VAR",
    "build_registry",
    "config_from_mapping",
    "default_config_path",
    "load_config",
    "resolve_hook",
]
