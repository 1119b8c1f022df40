"""Named opening lookup."""

from gambit.openings.index import OpeningIndex, normalize, score_opening
from gambit.openings.loader import load_openings, parse_openings
from gambit.openings.models import Opening

__all__ = [
    "Opening",
    "OpeningIndex",
    "load_openings",
    "normalize",
    "parse_openings",
    "score_opening",
]
