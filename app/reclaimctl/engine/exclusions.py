"""Exclusion patterns for sweep candidates.

Patterns are glob-style and matched against the entry name only, never
against the full path, so ``*.log`` keeps every log file in the tree
no matter how deep it sits.
"""

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ExclusionSet:
    """Ordered set of file-name glob patterns.

    Matching uses :func:`fnmatch.fnmatch`, which is case-insensitive on
    Windows and case-sensitive elsewhere, like the host filesystem.

    Attributes:
        patterns: Glob patterns, checked in order.
    """

    patterns: tuple[str, ...] = ()

    @classmethod
    def from_patterns(cls, *groups: Iterable[str]) -> "ExclusionSet":
        """Build an exclusion set from one or more pattern lists.

        Blank patterns and duplicates are dropped; first-seen order is kept.

        Args:
            groups: Pattern lists, e.g. configured patterns then CLI overrides.

        Returns:
            New ExclusionSet.
        """
        combined = (p.strip() for group in groups for p in group)
        return cls(patterns=tuple(dict.fromkeys(p for p in combined if p)))

    def matches(self, path: Path | str) -> bool:
        """Check whether an entry name matches any pattern.

        Args:
            path: Entry path or bare name; only the final component is used.

        Returns:
            True if the entry must never be a deletion candidate.
        """
        name = Path(path).name
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)
