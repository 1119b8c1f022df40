"""Opening lookup by played moves and by free-text query."""

from __future__ import annotations

import re
from collections.abc import Iterable

from gambit.core.enums import Color
from gambit.core.notation.pgn import sans_to_transcript
from gambit.openings.models import Opening

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize(text: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    return " ".join(_NON_ALNUM_RE.sub(" ", text.lower()).split())


def _continues(transcript: str, prefix: str) -> bool:
    """*prefix* matches *transcript* whole or up to a token boundary."""
    return transcript == prefix or transcript.startswith(prefix + " ")


def score_opening(opening: Opening, query: str) -> int:
    """Relevance of *opening* for an already-normalised *query* (0 = no match)."""
    if not query:
        return 0
    code = normalize(opening.code)
    name = normalize(opening.name)
    score = 0

    if code == query:
        score += 100
    elif code.startswith(query):
        score += 60
    elif query in code:
        score += 30

    if name == query:
        score += 90
    elif name.startswith(query):
        score += 50
    elif query in name:
        score += 25

    score += 10 * len(set(query.split()) & set(name.split()))

    if query in normalize(opening.transcript):
        score += 5
    return score


class OpeningIndex:
    """Read-only index over a list of :class:`Opening` records."""

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[Opening]) -> None:
        self._records: tuple[Opening, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[Opening, ...]:
        return self._records

    def search_by_prefix(
        self, sans: list[str], side_to_move: Color = Color.WHITE
    ) -> list[Opening]:
        """Openings continuing the played moves, best for *side_to_move* first.

        An empty move list matches every record.
        """
        prefix = sans_to_transcript(sans)
        if prefix:
            matches = [o for o in self._records if _continues(o.transcript, prefix)]
        else:
            matches = list(self._records)
        return sorted(matches, key=lambda o: (-o.wins_for(side_to_move), o.name))

    def search_by_query(self, text: str, limit: int | None = None) -> list[Opening]:
        """Fuzzy search over code, name and moves."""
        query = normalize(text)
        scored = [(score_opening(o, query), o) for o in self._records]
        ranked = sorted(
            ((score, o) for score, o in scored if score > 0),
            key=lambda item: (-item[0], item[1].name),
        )
        results = [o for _, o in ranked]
        return results[:limit] if limit is not None else results

    def find_exact(self, sans: list[str]) -> Opening | None:
        """The record whose moves are exactly *sans*, if any."""
        if not sans:
            return None
        transcript = sans_to_transcript(sans)
        return next((o for o in self._records if o.transcript == transcript), None)

    def current_opening(self, sans: list[str]) -> Opening | None:
        """The most specific record the played moves have passed through."""
        if not sans:
            return None
        played = sans_to_transcript(sans)
        matches = [o for o in self._records if _continues(played, o.transcript)]
        if not matches:
            return None
        return max(matches, key=lambda o: len(o.transcript))
