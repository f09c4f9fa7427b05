"""Tolerant single-field lookups for small flat metadata records.

Cache metadata and provenance files are tiny JSON objects produced by other
tools. We only ever need one scalar out of them, so lookups search by key and
ignore whatever else the record carries. Valid JSON is walked depth-first in
document order (duplicate keys included, first one wins); anything else falls
back to a key/literal token scan.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator


_NOT_JSON = object()


class _Pairs(list):
    """A JSON object kept as its raw (key, value) pairs."""


def _load(text: str) -> Any:
    try:
        return json.loads(text, object_pairs_hook=_Pairs)
    except (ValueError, RecursionError):
        return _NOT_JSON


def _walk_pairs(node: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(node, _Pairs):
        for k, v in node:
            yield k, v
            yield from _walk_pairs(v)
    elif isinstance(node, list):
        for item in node:
            yield from _walk_pairs(item)


def _first(text: str, key: str, kind: type) -> Any:
    data = _load(text)
    if data is _NOT_JSON:
        return _NOT_JSON
    try:
        for k, v in _walk_pairs(data):
            if k == key and isinstance(v, kind):
                return v
    except RecursionError:
        return _NOT_JSON
    return None


def find_bool(text: str, key: str) -> bool | None:
    """First boolean stored under `key`, or None when there is none."""
    found = _first(text, key, bool)
    if found is not _NOT_JSON:
        return found
    m = re.search(r'"' + re.escape(key) + r'"\s*:\s*(true|false)\b', text, re.IGNORECASE)
    if not m:
        return None
    return m.group(1).lower() == "true"


def find_str(text: str, key: str) -> str | None:
    """First string stored under `key`, or None when there is none."""
    found = _first(text, key, str)
    if found is not _NOT_JSON:
        return found
    m = re.search(r'"' + re.escape(key) + r'"\s*:\s*"([^"]*)"', text)
    return m.group(1) if m else None
