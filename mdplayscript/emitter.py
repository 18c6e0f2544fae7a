"""Build the output tokens for recognized speeches and monologue paragraphs."""

import re
from urllib.parse import quote

from mdplayscript.constants import VOID_TAGS
from mdplayscript.models import (
    Token,
    Speech,
    FilterState,
    Options,
    BLOCK_START,
    BLOCK_END,
    INLINE_START,
    INLINE_END,
    TEXT,
    SOFTBREAK,
    text,
)
from mdplayscript.speech import scan_parentheses, OPEN, CLOSE


def _span(content: str, tag: str = "span", cls: str = "") -> list[Token]:
    attrs = {"class": cls} if cls else {}
    return [
        Token(kind=INLINE_START, tag=tag, attrs=attrs),
        text(content),
        Token(kind=INLINE_END, tag=tag),
    ]


def anchor_id(character: str, index: int) -> str:
    """Anchor for the index-th speech of character, whitespace folded to "_"."""
    return re.sub(r"\s+", "_", character.strip()) + f"-{index}"


class BodyStyler:
    """Rewrite a speech body into narrative spans and direction spans.

    Parenthesis depth is carried across text runs, so a direction may
    contain inline markup and code spans. Elements still open when a
    direction ends are closed before it and reopened after it.
    """

    def __init__(self, state: FilterState, options: Options):
        self.options = options
        self.tag = "em" if state.in_monologue else "span"
        self.tokens: list[Token] = []
        self.stack: list[Token] = []
        self.direction = None
        self.depth = 0
        self.in_code = 0
        self.pending: list[str] = []
        self.strip_next = True

    @property
    def inside(self) -> bool:
        return self.direction is not None

    def _add_text(self, content: str) -> None:
        if self.strip_next:
            content = content.lstrip()
        if content:
            self.pending.append(content)
            self.strip_next = False

    def _flush(self, strip_end: bool = False) -> None:
        content = "".join(self.pending)
        self.pending.clear()
        if strip_end:
            content = content.rstrip()
        if not content:
            return
        if self.inside:
            self.tokens.append(text(content))
        else:
            self.tokens.extend(_span(content))

    def _close(self, start: Token) -> None:
        """Close start, closing and reopening anything opened after it."""
        index = max(i for i, item in enumerate(self.stack) if item is start)
        above = self.stack[index + 1:]
        del self.stack[index:]
        for item in reversed(above):
            self._end(item)
        self._end(start)
        for item in above:
            self.tokens.append(item)
            self.stack.append(item)

    def _end(self, start: Token) -> None:
        if self.tokens and self.tokens[-1] is start:
            self.tokens.pop()
        else:
            self.tokens.append(Token(kind=INLINE_END, tag=start.tag))

    def _open_direction(self) -> None:
        self._flush(strip_end=True)
        self.direction = Token(
            kind=INLINE_START, tag=self.tag, attrs={"class": self.options.direction_class}
        )
        self.tokens.append(self.direction)
        self.stack.append(self.direction)
        self.strip_next = True

    def _close_direction(self) -> None:
        self._flush(strip_end=True)
        direction, self.direction = self.direction, None
        self._close(direction)
        self.strip_next = True

    def _scan(self, run: str) -> None:
        pieces, self.depth = scan_parentheses(run, self.depth)
        for kind, chunk in pieces:
            if kind == OPEN:
                self._open_direction()
            elif kind == CLOSE:
                self._close_direction()
            else:
                self._add_text(chunk)

    def _inline_end(self, token: Token) -> None:
        self._flush()
        for item in reversed(self.stack):
            if item is not self.direction and item.tag == token.tag:
                self._close(item)
                return
        self.tokens.append(token)

    def feed(self, token: Token) -> None:
        if self.in_code:
            if token.kind == INLINE_END and token.tag == "code":
                self.in_code -= 1
                self._inline_end(token)
            else:
                self.tokens.append(token)
        elif token.kind == TEXT:
            if token.escaped:
                self._add_text(token.content)
            else:
                self._scan(token.content)
        elif token.kind == INLINE_START:
            self._flush()
            self.tokens.append(token)
            if token.tag not in VOID_TAGS:
                self.stack.append(token)
            if token.tag == "code":
                self.in_code += 1
        elif token.kind == INLINE_END:
            self._inline_end(token)
        elif token.kind == SOFTBREAK and self.options.replace_softbreak is not None:
            self._flush()
            self.tokens.append(text(self.options.replace_softbreak))
        else:
            self._flush()
            self.tokens.append(token)

    def finish(self) -> list[Token]:
        """Flush the trailing run. An unclosed direction ends with the body."""
        if self.inside:
            self._close_direction()
        else:
            self._flush(strip_end=True)
        return self.tokens


def styled_body(body: list[Token], state: FilterState, options: Options) -> list[Token]:
    """Style a speech body, keeping inline markup in place.

    Outer whitespace and whitespace where narrative meets a direction are
    trimmed. Inside a monologue, directions are emphasised. Code spans are
    copied untouched; softbreaks are replaced when configured.
    """
    styler = BodyStyler(state, options)
    for token in body:
        styler.feed(token)
    return styler.finish()


def emit_speech(speech: Speech, index: int, state: FilterState, options: Options) -> list[Token]:
    """Render one speech as a headed block.

    <div class="speech"><h5 id="Name-N"><a class="header" href="#Name-N">
    <span class="character">Name</span><span class="direction">Dir</span>
    </a></h5><p>...</p></div>
    """
    anchor = anchor_id(speech.character, index)
    heading = f"h{options.heading_level}"

    tokens = [
        Token(kind=BLOCK_START, tag="div", attrs={"class": options.speech_class}),
        Token(kind=BLOCK_START, tag=heading, attrs={"id": anchor}),
        Token(kind=INLINE_START, tag="a", attrs={"class": options.header_class, "href": "#" + quote(anchor)}),
    ]
    tokens.extend(_span(speech.character, cls=options.character_class))
    if speech.direction:
        tokens.extend(_span(speech.direction, cls=options.direction_class))
    tokens.append(Token(kind=INLINE_END, tag="a"))
    tokens.append(Token(kind=BLOCK_END, tag=heading))

    tokens.append(Token(kind=BLOCK_START, tag="p"))
    tokens.extend(styled_body(speech.body, state, options))
    tokens.append(Token(kind=BLOCK_END, tag="p"))
    tokens.append(Token(kind=BLOCK_END, tag="div"))
    return tokens


def emit_monologue(body: list[Token], state: FilterState, options: Options, hidden: bool = False) -> list[Token]:
    """Render a non-speech paragraph inside a monologue region.

    A hidden paragraph (tight list item) has no <p> to carry the class, so
    the body is wrapped in a span instead.
    """
    if hidden:
        return [
            Token(kind=BLOCK_START, tag="p", hidden=True),
            Token(kind=INLINE_START, tag="span", attrs={"class": options.monologue_class}),
            *styled_body(body, state, options),
            Token(kind=INLINE_END, tag="span"),
            Token(kind=BLOCK_END, tag="p", hidden=True),
        ]
    tokens = [Token(kind=BLOCK_START, tag="p", attrs={"class": options.monologue_class})]
    tokens.extend(styled_body(body, state, options))
    tokens.append(Token(kind=BLOCK_END, tag="p"))
    return tokens
