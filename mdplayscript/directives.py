"""Recognize playscript directives carried in raw passthrough fragments."""

import logging

from mdplayscript.constants import (
    COMMENT_OPEN,
    COMMENT_CLOSE,
    DIRECTIVE_ON,
    DIRECTIVE_OFF,
    DIRECTIVE_MONOLOGUE_BEGIN,
    DIRECTIVE_MONOLOGUE_END,
)
from mdplayscript.models import FilterState

logger = logging.getLogger(__name__)

# Directive marker → (FilterState field, new value)
DIRECTIVES = {
    DIRECTIVE_ON: ("enabled", True),
    DIRECTIVE_OFF: ("enabled", False),
    DIRECTIVE_MONOLOGUE_BEGIN: ("in_monologue", True),
    DIRECTIVE_MONOLOGUE_END: ("in_monologue", False),
}


def directive_name(fragment: str) -> str:
    """Return the directive carried by a raw fragment, or "" if none.

    Surrounding whitespace is ignored, as is one enclosing <!-- ... --> pair.
    """
    body = fragment.strip()
    if body.startswith(COMMENT_OPEN) and body.endswith(COMMENT_CLOSE):
        body = body[len(COMMENT_OPEN):len(body) - len(COMMENT_CLOSE)].strip()
    return body if body in DIRECTIVES else ""


def apply_directive(state: FilterState, fragment: str) -> bool:
    """Update state if the fragment is a directive. Returns True if it was."""
    name = directive_name(fragment)
    if not name:
        return False
    attr, value = DIRECTIVES[name]
    setattr(state, attr, value)
    logger.debug("Directive %s: %s=%s", name, attr, value)
    return True
