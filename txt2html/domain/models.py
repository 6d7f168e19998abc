"""Domain models for the conversion pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Tuple


Hook = Callable[[str], str]


class Stage(Enum):
    """Points in the document where hook output is inserted."""

    TITLE = "title"
    AFTER_TITLE = "after_title"
    BEFORE_PRE = "before_pre"
    PRE = "pre"
    AFTER_PRE = "after_pre"

    @classmethod
    def from_string(cls, value: str) -> "Stage":
        """Convert a stage name such as ``after-title`` to a Stage."""
        normalized = value.strip().lower().replace("-", "_")
        for stage in cls:
            if stage.value == normalized:
                return stage
        raise ValueError(f"Unknown stage: {value}")

    @classmethod
    def all_stages(cls) -> List["Stage"]:
        return list(cls)


class HookRegistry:
    """Immutable ordered hooks per stage.

    Built once by the configuration layer; conversion only reads it.
    """

    def __init__(self, hooks: Mapping[Stage, Iterable[Hook]] | None = None) -> None:
        frozen: Dict[Stage, Tuple[Hook, ...]] = {}
        for stage, chain in (hooks or {}).items():
            chain = tuple(chain)
            if chain:
                frozen[stage] = chain
        self._hooks = MappingProxyType(frozen)

    def hooks_for(self, stage: Stage) -> Tuple[Hook, ...]:
        return self._hooks.get(stage, ())

    def extended(self, stage: Stage, *hooks: Hook) -> "HookRegistry":
        """Return a new registry with ``hooks`` appended to ``stage``."""
        merged = {key: list(value) for key, value in self._hooks.items()}
        merged.setdefault(stage, []).extend(hooks)
        return HookRegistry(merged)

    def stages(self) -> List[Stage]:
        return [stage for stage in Stage if stage in self._hooks]

    def __bool__(self) -> bool:
        return bool(self._hooks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HookRegistry):
            return NotImplemented
        return dict(self._hooks) == dict(other._hooks)

    def __repr__(self) -> str:
        names = {
            stage.value: [getattr(hook, "__name__", repr(hook)) for hook in chain]
            for stage, chain in self._hooks.items()
        }
        return f"HookRegistry({names})"


@dataclass
class BatchReport:
    """Outcome of a batch run."""

    converted: List[Path] = field(default_factory=list)
    copied: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.copied) + len(self.skipped)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert the report into a JSON serialisable structure."""
        return {
            "converted": [str(path) for path in self.converted],
            "copied": [str(path) for path in self.copied],
            "skipped": [str(path) for path in self.skipped],
        }
