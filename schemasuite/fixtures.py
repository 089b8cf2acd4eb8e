# SPDX-License-Identifier: Apache-2.0
"""
Fixture model: one JSON file is an ordered list of blocks, each block holds
candidate schemas and ordered data cases.

Blocks are kept verbatim. ``Block.has_schema`` records whether the ``schema``
key was present at all, since ``false``, ``null`` and ``{}`` are all legal
schema values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Tuple

from schemasuite.drafts import Suite
from schemasuite.errors import SuiteStructureError


@dataclass(frozen=True)
class Case:
    description: str
    data: Any
    valid: bool


@dataclass(frozen=True)
class Block:
    description: str
    tests: Tuple[Case, ...]
    schema: Any = None
    has_schema: bool = False
    schemas: Tuple[Any, ...] = ()

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "Block":
        return cls(
            description=raw["description"],
            tests=tuple(
                Case(description=t["description"], data=t["data"], valid=t["valid"])
                for t in raw.get("tests", ())
            ),
            schema=raw.get("schema"),
            has_schema="schema" in raw,
            schemas=tuple(raw.get("schemas") or ()),
        )

    def candidate_schemas(self) -> List[Any]:
        """The singular ``schema`` (if present) followed by ``schemas``."""
        head = [self.schema] if self.has_schema else []
        return head + list(self.schemas)


@dataclass(frozen=True)
class TestFile:
    """One loaded fixture file, identified relative to its suite directory."""

    __test__ = False  # keep pytest from collecting this as a test class

    suite: Suite
    file_id: str
    blocks: Tuple[Block, ...] = field(default_factory=tuple)


def load_test_file(path: Path, suite: Suite, file_id: str) -> TestFile:
    """Read and parse one fixture file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SuiteStructureError(f"Invalid JSON in fixture {path}: {e}", str(path)) from e

    if not isinstance(raw, list):
        raise SuiteStructureError(
            f"Fixture {path} must contain a JSON array of blocks, got {type(raw).__name__}",
            str(path),
        )

    try:
        blocks = tuple(Block.from_json(b) for b in raw)
    except (KeyError, TypeError) as e:
        raise SuiteStructureError(f"Malformed block in fixture {path}: {e!r}", str(path)) from e

    return TestFile(suite=suite, file_id=file_id, blocks=blocks)
