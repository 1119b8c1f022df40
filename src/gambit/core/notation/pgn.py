"""Game transcript (PGN movetext) parsing and serialization."""

from __future__ import annotations

import re

from gambit.core.notation.models import Transcript
from gambit.core.notation.san import parse_san

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_MOVE_NUMBER_RE = re.compile(r"\s?\d+\.")


def sans_to_transcript(sans: list[str]) -> str:
    """Build movetext from SAN tokens: ``["e4", "e5", "Nf3"]`` → ``"1. e4 e5 2. Nf3"``."""
    parts: list[str] = []
    for ply, san in enumerate(sans):
        if ply % 2 == 0:
            parts.append(f"{(ply // 2) + 1}.")
        parts.append(san)
    return " ".join(parts)


def _split_headers(text: str) -> tuple[dict[str, str], str]:
    headers: dict[str, str] = {}
    move_lines: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            headers[key] = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            continue
        move_lines.append(line)
    return headers, " ".join(move_lines)


def parse_transcript(text: str) -> Transcript:
    """Parse a transcript into headers plus SAN tokens and parsed moves.

    Movetext is split on move-number markers; text before ``1.`` is ignored,
    as is anything from `` {`` to the end of each move pair.
    """
    headers, movetext = _split_headers(text)
    transcript = Transcript(headers=headers)

    chunks = _MOVE_NUMBER_RE.split(movetext)
    for chunk in chunks[1:]:
        pair = chunk.split(" {")[0]
        for token in pair.split():
            transcript.sans.append(token)
            transcript.moves.append(parse_san(token))
    return transcript
