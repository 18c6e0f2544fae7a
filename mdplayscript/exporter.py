"""Render the token stream as HTML and export it as a standalone page."""

import html
import os
from typing import Iterable, Optional

from mdplayscript.constants import STYLESHEET, STYLESHEET_JA, DEFAULT_TITLE, VOID_TAGS
from mdplayscript.models import (
    Token,
    BLOCK_START,
    BLOCK_END,
    INLINE_START,
    INLINE_END,
    TEXT,
    SOFTBREAK,
    RAW,
)


def _attrs(attrs: dict) -> str:
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"' for name, value in attrs.items()
    )


def render_token(token: Token) -> str:
    """Render a single token as an HTML fragment."""
    if token.kind in (BLOCK_START, INLINE_START):
        if token.hidden:
            return ""
        if token.tag in VOID_TAGS:
            suffix = "\n" if token.kind == BLOCK_START or token.tag == "br" else ""
            return f"<{token.tag}{_attrs(token.attrs)} />{suffix}"
        return f"<{token.tag}{_attrs(token.attrs)}>"
    if token.kind == BLOCK_END:
        return "" if token.hidden else f"</{token.tag}>\n"
    if token.kind == INLINE_END:
        return f"</{token.tag}>"
    if token.kind == TEXT:
        return html.escape(token.content, quote=False)
    if token.kind == SOFTBREAK:
        return "\n"
    if token.kind == RAW:
        return token.content
    raise ValueError(f"Unknown token kind: {token.kind}")


def render_html(tokens: Iterable[Token]) -> str:
    """Render a token stream as an HTML fragment."""
    return "".join(render_token(token) for token in tokens)


def stylesheet_for(language: str) -> str:
    """Pick the stylesheet variant for a language code."""
    return STYLESHEET_JA if language == "ja" else STYLESHEET


def render_page(body: str, title: str = "", authors: Optional[list[str]] = None,
                language: str = "") -> str:
    """Wrap an HTML fragment in a page linking the play stylesheet.

    A title heading and the author list are added when given.
    """
    lang_attr = f' lang="{html.escape(language)}"' if language else ""
    parts = [
        f"<html{lang_attr}>\n",
        "<head>\n",
        f"  <title>{html.escape(title or DEFAULT_TITLE)}</title>\n",
        '  <meta charset="utf-8" />\n',
        f'  <link href="./{stylesheet_for(language)}" rel="stylesheet" />\n',
        "</head>\n",
        "<body>\n",
        '<div class="play">\n',
    ]
    if title:
        parts.append(f'<h1 class="title">{html.escape(title)}</h1>\n')
    if authors:
        names = "".join(f'<span class="author">{html.escape(a)}</span>' for a in authors)
        parts.append(f'<p class="authors">{names}</p>\n')
    parts.append(body)
    parts.append("</div>\n</body>\n</html>\n")
    return "".join(parts)


def export(page: str, output_path: str) -> str:
    """Write the page to output_path, creating parent directories.

    Returns the path written.
    """
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(page)
    return output_path
