"""Plain text to HTML converter."""
from __future__ import annotations

__version__ = "1.0.0"

from .application.assembler import DocumentAssembler, convert, render_document
from .application.encoder import encode_entities
from .application.filters import linkify, url_to_image
from .domain.models import HookRegistry, Stage

__all__ = [
    "DocumentAssembler",
    "HookRegistry",
    "Stage",
    "__version__",
    "convert",
    "encode_entities",
    "linkify",
    "render_document",
    "url_to_image",
]
