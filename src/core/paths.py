"""Pure parsing helpers for the invalidation inputs."""

from __future__ import annotations

import re

from core.errors import ValidationError

_SURROUNDING_QUOTES_RE = re.compile(r'"(.*)"', re.DOTALL)

PATHS_EMPTY = "Paths is empty"
INVALIDATION_ID_EMPTY = "Invalidation ID is empty"


def strip_quotes(value: str) -> str:
    """Remove one layer of surrounding double quotes, if any."""

    match = _SURROUNDING_QUOTES_RE.fullmatch(value)
    return match.group(1) if match else value


def parse_paths(raw: str) -> list[str]:
    """Split comma-separated text into trimmed, unquoted entries.

    No filtering happens here: `""` gives `[""]`, which `validate_paths` rejects.
    """

    return [strip_quotes(item.strip()) for item in raw.split(",")]


def validate_paths(paths: list[str]) -> list[str]:
    """Return the path list to submit, or raise `ValidationError`.

    A single empty entry means the input was empty. In longer lists blank
    entries (from stray commas) are dropped; nothing left is also empty input.
    """

    kept = [p for p in paths if p != ""]
    if not kept:
        raise ValidationError(PATHS_EMPTY)
    return kept


def parse_invalidation_id(raw: str) -> str:
    """Trim and unquote an invalidation ID, rejecting empty values."""

    value = strip_quotes(raw.strip())
    if value == "":
        raise ValidationError(INVALIDATION_ID_EMPTY)
    return value
