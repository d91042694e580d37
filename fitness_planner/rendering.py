"""Markdown rendering for AI-generated plan text."""
from __future__ import annotations

import markdown
import nh3
from markupsafe import Markup


MARKDOWN_EXTENSIONS = ["sane_lists", "tables"]


def render_markdown(text: str | None) -> Markup:
    """Convert plan markdown to sanitised HTML safe to embed in a template.

    The text comes from the language model, so the generated HTML is passed
    through ``nh3`` before it is marked safe: scripts, event handlers and
    ``javascript:`` links are removed.
    """

    if not text:
        return Markup("")
    html = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    return Markup(nh3.clean(html))
