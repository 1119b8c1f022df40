"""Reading opening datasets from JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from gambit.openings.index import OpeningIndex
from gambit.openings.models import Opening
from gambit.runtime_assets import openings_path

_LOGGER = logging.getLogger(__name__)


def parse_openings(records: list[dict[str, object]]) -> list[Opening]:
    if not isinstance(records, list):
        raise ValueError("Opening dataset must be a JSON array of records")
    return [Opening.from_record(record) for record in records]


def load_openings(path: str | Path | None = None) -> OpeningIndex:
    """Load an :class:`OpeningIndex`; the bundled dataset when *path* is None."""
    source = Path(path) if path is not None else openings_path()
    with source.open(encoding="utf-8") as fh:
        try:
            records = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Malformed opening dataset {source}: {exc}") from exc
    index = OpeningIndex(parse_openings(records))
    _LOGGER.info("Loaded %d openings from %s", len(index), source)
    return index
