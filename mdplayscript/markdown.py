"""Tokenize CommonMark with markdown-it-py and flatten it into the token model."""

from typing import Iterator, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken

from mdplayscript.models import (
    Token,
    BLOCK_START,
    BLOCK_END,
    INLINE_START,
    INLINE_END,
    TEXT,
    SOFTBREAK,
    text,
    raw,
)

# Escapes and entities arrive as text_special tokens only while text_join is off.
_md = MarkdownIt("commonmark").disable("text_join")


def split_custom_id(s: str) -> tuple[str, Optional[str]]:
    """Split a trailing "{#id}" off heading text.

    "Heading B {#section_b}" → ("Heading B", "section_b")
    """
    start = s.find("{#")
    if start < 0:
        return s, None
    end = s.find("}", start + 2)
    if end < 0:
        return s, None
    return s[:start].rstrip(), s[start + 2:end]


def _code(content: str, attrs: Optional[dict] = None) -> list[Token]:
    return [
        Token(kind=INLINE_START, tag="code", attrs=attrs or {}),
        text(content),
        Token(kind=INLINE_END, tag="code"),
    ]


def _inline(children: list[MdToken]) -> list[Token]:
    """Convert inline children, merging adjacent text runs.

    Escaped characters stay in runs of their own, marked as escaped.
    """
    tokens = []
    for child in children:
        if child.type == "text_special":
            tokens.append(Token(kind=TEXT, content=child.content, escaped=True))
        elif child.type == "text":
            if tokens and tokens[-1].kind == TEXT and not tokens[-1].escaped:
                tokens[-1].content += child.content
            else:
                tokens.append(text(child.content))
        elif child.type == "softbreak":
            tokens.append(Token(kind=SOFTBREAK))
        elif child.type == "hardbreak":
            tokens.append(Token(kind=INLINE_START, tag="br"))
        elif child.type == "code_inline":
            tokens.extend(_code(child.content))
        elif child.type == "html_inline":
            tokens.append(raw(child.content))
        elif child.type == "image":
            attrs = {"src": child.attrGet("src") or "", "alt": child.content}
            if child.attrGet("title"):
                attrs["title"] = child.attrGet("title")
            tokens.append(Token(kind=INLINE_START, tag="img", attrs=attrs))
        elif child.nesting == 1:
            tokens.append(Token(kind=INLINE_START, tag=child.tag, attrs=dict(child.attrs)))
        elif child.nesting == -1:
            tokens.append(Token(kind=INLINE_END, tag=child.tag))
        else:
            tokens.append(text(child.content))
    return tokens


def _heading(open_token: MdToken, inline: MdToken) -> list[Token]:
    children = _inline(inline.children or [])
    attrs = dict(open_token.attrs)
    if children and children[-1].kind == TEXT:
        content, custom_id = split_custom_id(children[-1].content)
        if custom_id is not None:
            attrs["id"] = custom_id
            children[-1].content = content
    return [Token(kind=BLOCK_START, tag=open_token.tag, attrs=attrs)] + children


def convert_tokens(md_tokens: list[MdToken]) -> Iterator[Token]:
    """Flatten markdown-it block tokens into the token model."""
    index = 0
    while index < len(md_tokens):
        tok = md_tokens[index]
        index += 1

        if tok.type == "heading_open" and index < len(md_tokens) and md_tokens[index].type == "inline":
            yield from _heading(tok, md_tokens[index])
            index += 1
        elif tok.type == "inline":
            yield from _inline(tok.children or [])
        elif tok.type in ("fence", "code_block"):
            lang = tok.info.strip().split(" ")[0] if tok.info else ""
            attrs = {"class": f"language-{lang}"} if lang else {}
            yield Token(kind=BLOCK_START, tag="pre")
            yield from _code(tok.content, attrs)
            yield Token(kind=BLOCK_END, tag="pre")
        elif tok.type == "html_block":
            yield raw(tok.content)
        elif tok.nesting == 1:
            yield Token(kind=BLOCK_START, tag=tok.tag, attrs=dict(tok.attrs), hidden=tok.hidden)
        elif tok.nesting == -1:
            yield Token(kind=BLOCK_END, tag=tok.tag, hidden=tok.hidden)
        elif tok.tag:
            # Void block elements such as <hr>
            yield Token(kind=BLOCK_START, tag=tok.tag, attrs=dict(tok.attrs))
        else:
            yield raw(tok.content)


def tokenize(source: str) -> Iterator[Token]:
    """Parse Markdown source into a token stream."""
    return convert_tokens(_md.parse(source))
