"""Per-document filtering session: toggle state, anchor counter and options."""

from dataclasses import dataclass, field, replace

from mdplayscript.models import FilterState, Options


class AnchorCounter:
    """Count how many times each character has spoken."""

    def __init__(self):
        self._counts: dict[str, int] = {}

    def allocate(self, character: str) -> int:
        """Return the occurrence index for character, then advance it."""
        index = self._counts.get(character, 0)
        self._counts[character] = index + 1
        return index

    def count(self, character: str) -> int:
        return self._counts.get(character, 0)

    def characters(self) -> list[str]:
        """Names that have spoken at least once, in order of first speech."""
        return list(self._counts)


@dataclass
class Session:
    state: FilterState = field(default_factory=FilterState)
    anchors: AnchorCounter = field(default_factory=AnchorCounter)
    options: Options = field(default_factory=Options)

    def snapshot(self) -> FilterState:
        """Copy of the current toggle state."""
        return replace(self.state)
