"""Data models for the play script filter."""

from dataclasses import dataclass, field
from typing import Optional

from mdplayscript.constants import (
    SPEECH_CLASS,
    CHARACTER_CLASS,
    DIRECTION_CLASS,
    HEADER_CLASS,
    MONOLOGUE_CLASS,
    SPEECH_HEADING_LEVEL,
    SOFTBREAK_REPLACEMENT,
)

BLOCK_START = "block_start"
BLOCK_END = "block_end"
TEXT = "text"
INLINE_START = "inline_start"
INLINE_END = "inline_end"
SOFTBREAK = "softbreak"
RAW = "raw"

NARRATIVE = "narrative"
DIRECTION = "direction"


@dataclass
class Token:
    kind: str                   # one of the kind constants above
    tag: str = ""               # element name for start/end tokens
    content: str = ""           # text run or raw fragment
    attrs: dict = field(default_factory=dict)
    hidden: bool = False        # start/end of a block rendered without tags
    escaped: bool = False       # text written as a backslash escape or entity


@dataclass
class Segment:
    content: str
    kind: str                   # "narrative" or "direction"


@dataclass
class Speech:
    character: str
    direction: Optional[str]    # post-name direction, e.g. "running"
    body: list                  # tokens following the speech mark


@dataclass
class FilterState:
    enabled: bool = True
    in_monologue: bool = False


@dataclass
class Options:
    speech_class: str = SPEECH_CLASS
    character_class: str = CHARACTER_CLASS
    direction_class: str = DIRECTION_CLASS
    header_class: str = HEADER_CLASS
    monologue_class: str = MONOLOGUE_CLASS
    heading_level: int = SPEECH_HEADING_LEVEL
    replace_softbreak: Optional[str] = SOFTBREAK_REPLACEMENT


def text(content: str) -> Token:
    return Token(kind=TEXT, content=content)


def raw(content: str) -> Token:
    return Token(kind=RAW, content=content)
