# SPDX-License-Identifier: Apache-2.0
"""
Test identifiers and skip-table resolution.

An identifier is the ``/``-joined structural position of a test relative to
its suite directory::

    ref.json                                   file
    ref.json/escaped pointer ref               block
    ref.json/escaped pointer ref/slash valid   case

Skip tables hold identifiers in two forms: bare (applies to every suite that
has the same file/description) and suite-qualified (``draft7/ref.json/...``,
applies to that suite only). Matching is exact string equality against the
bare form first, then the suite-qualified form. There is no wildcard or
prefix matching beyond that single suite qualifier.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Tuple


def join_id(parent: str, *segments: str) -> str:
    """Join identifier segments with ``/``.

    An empty ``parent`` is the suite directory itself and adds no prefix. Later
    segments are always kept, so a block with an empty description still gets
    its own trailing ``/``.
    """
    if not parent:
        return "/".join(segments)
    return "/".join((parent,) + segments)


def _first_hit(table: AbstractSet[str], keys: Iterable[str]) -> bool:
    for key in keys:
        if key in table:
            return True
    return False


class SkipResolver:
    """Answers skip questions for identifiers within one suite."""

    def __init__(
        self,
        suite: str,
        unsupported: AbstractSet[str] = frozenset(),
        requires_relaxed: AbstractSet[str] = frozenset(),
    ) -> None:
        self.suite = suite
        self._unsupported = unsupported
        self._requires_relaxed = requires_relaxed

    def candidates(self, test_id: str) -> Tuple[str, str]:
        """Keys looked up for ``test_id``, in lookup order."""
        return (test_id, f"{self.suite}/{test_id}")

    def should_skip(self, test_id: str) -> bool:
        """True if ``test_id`` is unsupported and must not be loaded or run."""
        return _first_hit(self._unsupported, self.candidates(test_id))

    def requires_relaxed_mode(self, test_id: str) -> bool:
        """True if ``test_id`` is only valid under the relaxed engine mode."""
        return _first_hit(self._requires_relaxed, self.candidates(test_id))

    def __repr__(self) -> str:
        return (
            f"SkipResolver(suite={self.suite!r}, unsupported={len(self._unsupported)}, "
            f"requires_relaxed={len(self._requires_relaxed)})"
        )
