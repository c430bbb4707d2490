"""Entry filtering: wildcard-based exclusion applied during a walk."""

from __future__ import annotations

from segpath.pattern import Pattern, compile_pattern


class PatternFilter:
    """Exclude entries whose name matches any of a set of patterns.

    Implements ``-I PATTERN`` exclusion behavior. Excluded directories
    are pruned, so nothing below them is visited.
    """

    def __init__(self, patterns: list[str] | None = None, dirs_only: bool = False) -> None:
        """Initialize pattern filter.

        Args:
            patterns: Optional wildcard pattern list.
            dirs_only: Only exclude directories; files are always kept.
        """
        self._patterns: list[Pattern] = [compile_pattern(p) for p in patterns or []]
        self._dirs_only = dirs_only

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            name: Entry name.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when any configured pattern matches.
        """
        if self._dirs_only and not is_dir:
            return False
        return any(pattern.matches(name) for pattern in self._patterns)
