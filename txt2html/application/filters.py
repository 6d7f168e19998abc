"""Built-in line filters that turn bare URL lines into links and images.

Each filter is a ``Hook`` (``str -> str``) and is normally registered into the
``pre`` stage by configuration. Patterns are anchored to the whole line, so a
line with anything beyond the documented shape passes through untouched.
A trailing carriage return from CRLF input stays outside the URL.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, Pattern

from ..domain.models import Hook


LINK_PATTERN: Pattern[str] = re.compile(
    r"(?P<indent> *)\[(?P<tag>.)\] (?P<url>(?:file|ftp|http|mailto|\.|/)[^\r]*)(?P<eol>\r?)"
)
IMAGE_PATTERN: Pattern[str] = re.compile(
    r"(?P<indent> *)(?P<url>(?:file|ftp|http|\.|/)[^\r]*\.(?:gif|jpeg|jpg|png))(?P<eol>\r?)"
)


def _rewrite_lines(text: str, rewrite: Callable[[str], str]) -> str:
    return "\n".join(rewrite(line) for line in text.split("\n"))


def linkify_line(line: str) -> str:
    """Rewrite ``[X] URL`` into ``[X] <a href="URL">URL</a>``."""
    match = LINK_PATTERN.fullmatch(line)
    if not match:
        return line
    url = match.group("url")
    return f'{match.group("indent")}[{match.group("tag")}] <a href="{url}">{url}</a>{match.group("eol")}'


def url_to_image_line(line: str) -> str:
    """Rewrite a bare image URL line into an ``<img>`` tag."""
    # TODO: add an alt attribute once there is a source for its text.
    match = IMAGE_PATTERN.fullmatch(line)
    if not match:
        return line
    return f'{match.group("indent")}<img src="{match.group("url")}">{match.group("eol")}'


def linkify(text: str) -> str:
    return _rewrite_lines(text, linkify_line)


def url_to_image(text: str) -> str:
    return _rewrite_lines(text, url_to_image_line)


BUILTIN_FILTERS: Dict[str, Hook] = {
    "linkify": linkify,
    "url_to_image": url_to_image,
}


__all__ = [
    "BUILTIN_FILTERS",
    "IMAGE_PATTERN",
    "LINK_PATTERN",
    "linkify",
    "linkify_line",
    "url_to_image",
    "url_to_image_line",
]
