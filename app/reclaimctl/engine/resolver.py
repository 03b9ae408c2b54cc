"""Root path resolution.

Turns raw, user- or config-supplied path strings into the validated list
of directories a sweep runs over: placeholders expanded, wildcards
expanded, duplicates collapsed and missing paths dropped.
"""

import glob
import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Windows-style %VAR% placeholder
_PERCENT_VAR = re.compile(r"%([^%]+)%")

_WILDCARD_CHARS = frozenset("*?[")


def expand_placeholders(raw: str) -> str:
    """Expand environment placeholders and a leading ``~``.

    Handles ``%VAR%`` on every platform (lookups are case-insensitive on
    Windows through ``os.environ``), plus ``$VAR`` and ``${VAR}``.
    Unknown variables are left in place, so the resulting path will not
    exist and the resolver drops it.

    Args:
        raw: Raw path string.

    Returns:
        Path string with known placeholders substituted.
    """

    def _lookup(match: re.Match[str]) -> str:
        return os.environ.get(match.group(1), match.group(0))

    expanded = _PERCENT_VAR.sub(_lookup, raw)
    expanded = os.path.expandvars(expanded)
    return os.path.expanduser(expanded)


def _normalize(path: str) -> str:
    """Absolute, normalised path string used for identity comparison."""
    return os.path.normcase(os.path.abspath(os.path.normpath(path)))


def _is_within(path: str, parent: str) -> bool:
    """Check whether normalised ``path`` equals or lies under ``parent``."""
    return path == parent or path.startswith(parent.rstrip(os.sep) + os.sep)


def _expand_wildcards(path: str) -> list[str]:
    if not any(ch in _WILDCARD_CHARS for ch in path):
        return [path]
    return sorted(glob.glob(path))


def resolve_paths(
    raw_paths: Iterable[str],
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Resolve raw path strings into existing, unique directories.

    Args:
        raw_paths: Raw paths; may contain placeholders and wildcards.
        exclude: Raw paths that must never be returned, together with
            anything beneath them (e.g. the working temp directory).

    Returns:
        Absolute directory paths in first-seen order. Missing inputs are
        dropped silently.
    """
    excluded = [_normalize(expand_placeholders(p)) for p in exclude if p]

    seen: set[str] = set()
    resolved: list[Path] = []

    for raw in raw_paths:
        if not raw or not raw.strip():
            continue

        for candidate in _expand_wildcards(expand_placeholders(raw.strip())):
            key = _normalize(candidate)
            if key in seen:
                continue
            seen.add(key)

            if any(_is_within(key, ex) for ex in excluded):
                logger.debug("Skipping excluded root: %s", candidate)
                continue

            if not os.path.isdir(candidate):
                logger.debug("Dropping non-existent root: %s", candidate)
                continue

            resolved.append(Path(os.path.abspath(os.path.normpath(candidate))))

    return resolved
