"""Document assembly: the fixed HTML skeleton around the stage outputs."""
from __future__ import annotations

import io
import logging
from typing import Optional, TextIO

from ..domain.models import HookRegistry, Stage
from .encoder import encode_entities
from .hook_pipeline import run_stage


logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"


class DocumentAssembler:
    """Write a minimal HTML document for one body of text.

    Stages always run in the same order: title, after_title, before_pre, pre,
    after_pre. Only empty hook output changes what gets written.
    """

    def __init__(self, hooks: Optional[HookRegistry] = None) -> None:
        self.hooks = hooks if hooks is not None else HookRegistry()

    def assemble(self, body: str, out: TextIO, title: str = "") -> None:
        out.write(f"{DOCTYPE}\n")

        out.write("<title>")
        run_stage(self.hooks, Stage.TITLE, encode_entities(title), out)
        out.write("</title>\n")

        run_stage(self.hooks, Stage.AFTER_TITLE, "", out, emit_trailing_newline=True)
        run_stage(self.hooks, Stage.BEFORE_PRE, "", out, emit_trailing_newline=True)

        out.write("<pre>")
        run_stage(self.hooks, Stage.PRE, encode_entities(body.rstrip("\n")), out)
        out.write("</pre>\n")

        run_stage(self.hooks, Stage.AFTER_PRE, "", out)

    def render(self, body: str, title: str = "") -> str:
        buffer = io.StringIO()
        self.assemble(body, buffer, title)
        return buffer.getvalue()


def convert(
    source: TextIO,
    out: TextIO,
    title: str = "",
    hooks: Optional[HookRegistry] = None,
) -> None:
    """Read all of ``source`` and write the HTML document to ``out``."""
    body = source.read()
    logger.debug("Assembling document %r from %d characters", title, len(body))
    DocumentAssembler(hooks).assemble(body, out, title)


def render_document(body: str, title: str = "", hooks: Optional[HookRegistry] = None) -> str:
    """Return the HTML document for ``body`` as a string."""
    return DocumentAssembler(hooks).render(body, title)


__all__ = ["DOCTYPE", "DocumentAssembler", "convert", "render_document"]
