"""Streaming play script filter over a token stream."""

import logging
from typing import Iterable, Iterator, Optional

from mdplayscript.directives import apply_directive
from mdplayscript.emitter import emit_speech, emit_monologue
from mdplayscript.exporter import render_html
from mdplayscript.markdown import tokenize
from mdplayscript.models import Token, Options, BLOCK_START, BLOCK_END, RAW
from mdplayscript.session import Session
from mdplayscript.speech import parse_speeches

logger = logging.getLogger(__name__)


def _take_paragraph(tokens: Iterator[Token]) -> tuple[list[Token], Optional[Token]]:
    """Pull tokens up to the paragraph end. Returns (body, end token or None)."""
    body = []
    for token in tokens:
        if token.kind == BLOCK_END and token.tag == "p":
            return body, token
        body.append(token)
    return body, None


def _rewrite_paragraph(start: Token, body: list[Token], end: Optional[Token],
                       session: Session) -> Iterator[Token]:
    state = session.snapshot()
    # Inline directives take effect from the next block on.
    for token in body:
        if token.kind == RAW:
            apply_directive(session.state, token.content)

    speeches = parse_speeches(body)
    if speeches:
        for speech in speeches:
            index = session.anchors.allocate(speech.character)
            logger.debug("Speech %s-%d", speech.character, index)
            yield from emit_speech(speech, index, state, session.options)
    elif state.in_monologue:
        yield from emit_monologue(body, state, session.options, hidden=start.hidden)
    else:
        yield start
        yield from body
        if end is not None:
            yield end


def filter_tokens(tokens: Iterable[Token], session: Optional[Session] = None) -> Iterator[Token]:
    """Rewrite speech paragraphs in a token stream, passing everything else through.

    Pulls lazily from tokens, buffering at most one paragraph. Raw fragments
    are checked for directives and always forwarded unchanged. A session
    holds the toggle state and anchor counts; use a fresh one per document.
    """
    if session is None:
        session = Session()
    tokens = iter(tokens)
    for token in tokens:
        if token.kind == RAW:
            apply_directive(session.state, token.content)
            yield token
        elif token.kind == BLOCK_START and token.tag == "p" and session.state.enabled:
            body, end = _take_paragraph(tokens)
            yield from _rewrite_paragraph(token, body, end, session)
        else:
            yield token


def convert(text: str, options: Optional[Options] = None) -> str:
    """Convert a Markdown play script to an HTML fragment."""
    session = Session(options=options or Options())
    return render_html(filter_tokens(tokenize(text), session))
