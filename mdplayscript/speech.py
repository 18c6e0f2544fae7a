"""Recognize speech lines and split text runs into narrative and directions.

A speech line looks like ``Character (direction)> speech (aside)``. The
heading before the speech mark names the character and an optional
direction; parenthesised asides in the body become direction segments.
"""

from itertools import islice
from typing import Iterable, Optional

from mdplayscript.constants import SPEECH_MARK, DIRECTION_OPEN, DIRECTION_CLOSE
from mdplayscript.models import (
    Segment,
    Speech,
    Token,
    TEXT,
    SOFTBREAK,
    NARRATIVE,
    DIRECTION,
    text,
)


def _split_heading_direction(s: str) -> tuple[Optional[str], str]:
    """Split "(direction) rest" at the parenthesis closing the first one.

    Returns (None, "") when the parenthesis is never closed.
    """
    depth = 0
    for index, ch in enumerate(s):
        if ch == DIRECTION_OPEN:
            depth += 1
        elif ch == DIRECTION_CLOSE:
            depth -= 1
            if depth == 0:
                return s[1:index].strip(), s[index + 1:]
    return None, ""


def split_heading(line: str) -> Optional[tuple[str, Optional[str], str]]:
    """Split a speech line into (character, direction, body).

    The heading ends at the first single ">". A doubled ">>" is not a
    speech mark. Returns None when the line is not a speech.
    """
    pos = line.find(SPEECH_MARK)
    if pos < 0 or line.startswith(SPEECH_MARK, pos + 1):
        return None

    heading, body = line[:pos], line[pos + 1:]
    if "\n" in heading:
        return None

    paren = heading.find(DIRECTION_OPEN)
    if paren < 0:
        character, direction = heading.strip(), None
    else:
        character = heading[:paren].strip()
        direction, trailing = _split_heading_direction(heading[paren:])
        if direction is None or trailing.strip():
            return None

    if not character or DIRECTION_CLOSE in character:
        return None
    return character, direction, body


def leading_text(tokens: Iterable[Token]) -> tuple[str, int]:
    """Concatenate the text runs at the head of tokens. Returns (text, count).

    An escaped run ends the head, so an escaped ">" never reads as a speech mark.
    """
    parts = []
    for token in tokens:
        if token.kind != TEXT or token.escaped:
            break
        parts.append(token.content)
    return "".join(parts), len(parts)


def classify(tokens: list[Token]) -> Optional[Speech]:
    """Interpret a line group as a Speech, or None if it is ordinary content."""
    line, count = leading_text(tokens)
    if not count:
        return None
    parts = split_heading(line)
    if parts is None:
        return None

    character, direction, rest = parts
    body = [text(rest)] if rest else []
    body.extend(tokens[count:])
    return Speech(character=character, direction=direction, body=body)


def _starts_speech(tokens: list[Token], index: int) -> bool:
    line, count = leading_text(islice(tokens, index, None))
    return count > 0 and split_heading(line) is not None


def split_speeches(tokens: list[Token]) -> list[list[Token]]:
    """Split paragraph tokens at every line that opens a new speech.

    The softbreak ending one speech is dropped.
    """
    groups = [[]]
    after_break = False
    for index, token in enumerate(tokens):
        if after_break and token.kind == TEXT and _starts_speech(tokens, index):
            groups[-1].pop()
            groups.append([])
        groups[-1].append(token)
        after_break = token.kind == SOFTBREAK
    return groups


def parse_speeches(tokens: list[Token]) -> Optional[list[Speech]]:
    """Parse a paragraph into speeches.

    Returns None unless the paragraph's first line is a speech line, so
    paragraphs of ordinary prose are never split.
    """
    if classify(tokens) is None:
        return None
    return [classify(group) for group in split_speeches(tokens)]


OPEN = "open"
CLOSE = "close"


def scan_parentheses(run: str, depth: int = 0) -> tuple[list[tuple[str, str]], int]:
    """Break a text run into ("text", chunk), ("open", "") and ("close", "") pieces.

    depth is the nesting level carried in from earlier runs; the level
    reached at the end of this run is returned with the pieces. Only the
    outermost parentheses open and close; nested ones stay text, as does a
    stray ")" at level zero.
    """
    pieces = []
    pending = []

    def flush():
        if pending:
            pieces.append((TEXT, "".join(pending)))
            pending.clear()

    for ch in run:
        if ch == DIRECTION_OPEN:
            if depth == 0:
                flush()
                pieces.append((OPEN, ""))
            else:
                pending.append(ch)
            depth += 1
        elif ch == DIRECTION_CLOSE and depth > 0:
            depth -= 1
            if depth == 0:
                flush()
                pieces.append((CLOSE, ""))
            else:
                pending.append(ch)
        else:
            pending.append(ch)
    flush()
    return pieces, depth


def _flush(segments: list[Segment], pending: list[str], kind: str) -> None:
    if pending:
        segments.append(Segment(content="".join(pending), kind=kind))
        pending.clear()


def extract_directions(run: str) -> list[Segment]:
    """Split a text run into narrative and direction segments.

    Only the outermost parentheses delimit a direction; nested ones stay in
    its content. A stray ")" is narrative text and an unclosed "(" runs to
    the end of the run. Empty segments are not produced.
    """
    segments = []
    pending = []
    pieces, depth = scan_parentheses(run)
    for kind, chunk in pieces:
        if kind == OPEN:
            _flush(segments, pending, NARRATIVE)
        elif kind == CLOSE:
            _flush(segments, pending, DIRECTION)
        else:
            pending.append(chunk)
    _flush(segments, pending, DIRECTION if depth else NARRATIVE)
    return segments
