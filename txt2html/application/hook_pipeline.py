"""Sequential hook chains run at each document stage."""
from __future__ import annotations

import logging
from typing import TextIO

from ..domain.models import HookRegistry, Stage


logger = logging.getLogger(__name__)


def apply_hooks(registry: HookRegistry, stage: Stage, text: str) -> str:
    """Feed ``text`` through the stage's hooks in registration order.

    With no hooks registered the input comes back unchanged. Hook exceptions
    propagate to the caller.
    """
    for hook in registry.hooks_for(stage):
        logger.debug("Running %s hook %s", stage.value, getattr(hook, "__name__", hook))
        text = hook(text)
    return text


def run_stage(
    registry: HookRegistry,
    stage: Stage,
    text: str,
    out: TextIO,
    emit_trailing_newline: bool = False,
) -> str:
    """Run a stage and write its result to ``out``.

    Nothing is written, not even the newline, when the result is empty.
    Returns the result so callers can inspect it.
    """
    result = apply_hooks(registry, stage, text)
    if result:
        out.write(result)
        if emit_trailing_newline:
            out.write("\n")
    return result


__all__ = ["apply_hooks", "run_stage"]
