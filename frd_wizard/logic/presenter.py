"""Display rendering for generated documents.

`render_document` applies a fixed pipeline of pure text steps. The order is
part of the contract:

1. escape ``&``, ``<`` and ``>``
2. ``**bold**`` -> ``<strong>bold</strong>``
3. ``*italic*`` -> ``<em>italic</em>``
4. ``\\n`` -> ``<br>``

Escaping must run first so the source cannot inject markup, and the later
steps must not escape the tags inserted by earlier ones. Bold must run before
italic or ``**x**`` would be read as two italic markers.
"""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")


def escape_html(text: str) -> str:
    return html.escape(text, quote=False)


def convert_bold(text: str) -> str:
    return _BOLD_RE.sub(r"<strong>\1</strong>", text)


def convert_italic(text: str) -> str:
    return _ITALIC_RE.sub(r"<em>\1</em>", text)


def convert_line_breaks(text: str) -> str:
    return text.replace("\n", "<br>")


RENDER_PIPELINE: List[Callable[[str], str]] = [
    escape_html,
    convert_bold,
    convert_italic,
    convert_line_breaks,
]


def render_document(text: str) -> str:
    out = text or ""
    for step in RENDER_PIPELINE:
        out = step(out)
    return out


def export_filename(product_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """Return a filesystem-safe markdown filename for an exported FRD."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d")
    slug = re.sub(r"[^a-z0-9]+", "-", (product_name or "").strip().lower()).strip("-")
    return f"frd-{slug}-{stamp}.md" if slug else f"frd-{stamp}.md"


__all__ = [
    "RENDER_PIPELINE",
    "escape_html",
    "convert_bold",
    "convert_italic",
    "convert_line_breaks",
    "render_document",
    "export_filename",
]
