# SPDX-License-Identifier: Apache-2.0
"""
Draft metadata and suite layout.

Maps suite names to the dialect URI used as the engine's ``$schema`` default,
and fixes the order in which suite roots are walked. draft3 runs after draft7
and needs the legacy format keywords enabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple


DRAFT_DIALECTS: Dict[str, str] = {
    "draft2019-09": "http://json-schema.org/draft/2019-09/schema#",
    "draft7": "http://json-schema.org/draft-07/schema#",
    "draft6": "http://json-schema.org/draft-06/schema#",
    "draft4": "http://json-schema.org/draft-04/schema#",
    "draft3": "http://json-schema.org/draft-03/schema#",
}

LEGACY_DRAFTS: FrozenSet[str] = frozenset({"draft3"})


def dialect_for(suite_name: str) -> Optional[str]:
    """Default dialect URI for a suite, or None for vendor corpora."""
    return DRAFT_DIALECTS.get(suite_name)


@dataclass(frozen=True)
class Suite:
    """A named top-level corpus rooted at ``base_directory``."""

    name: str
    base_directory: Path
    dialect_uri: Optional[str] = None
    uses_legacy_formats: bool = False

    @classmethod
    def for_name(cls, name: str, base_directory: Path) -> "Suite":
        return cls(
            name=name,
            base_directory=Path(base_directory),
            dialect_uri=dialect_for(name),
            uses_legacy_formats=name in LEGACY_DRAFTS,
        )


@dataclass(frozen=True)
class SuiteRoot:
    """Where a suite lives under the fixture root, and which corpus it belongs to."""

    name: str
    schema_dir: str
    group: str

    def suite(self, fixtures_root: Path) -> Suite:
        return Suite.for_name(self.name, Path(fixtures_root) / self.schema_dir / self.name)


# ---------------------------------------------------------------------------
# Corpus layout under the fixture root
# ---------------------------------------------------------------------------

TEST_SUITE_GROUP = "json-schema-test-suite"
EXTRA_GROUP = "extra"
AJV_GROUP = "ajv"

TEST_SUITE_TESTS_DIR = "JSON-Schema-Test-Suite/tests"
TEST_SUITE_REMOTES_DIR = "JSON-Schema-Test-Suite/remotes"
TEST_SUITE_REMOTES_BASE_URI = "http://localhost:1234/"

AJV_TESTS_DIR = "ajv-spec/tests"
AJV_REMOTES_DIR = "ajv-spec/remotes"

# Run order. draft3 is deliberately after draft7.
SUITE_ROOTS: Tuple[SuiteRoot, ...] = (
    SuiteRoot("draft4", TEST_SUITE_TESTS_DIR, TEST_SUITE_GROUP),
    SuiteRoot("draft6", TEST_SUITE_TESTS_DIR, TEST_SUITE_GROUP),
    SuiteRoot("draft7", TEST_SUITE_TESTS_DIR, TEST_SUITE_GROUP),
    SuiteRoot("draft3", TEST_SUITE_TESTS_DIR, TEST_SUITE_GROUP),
    SuiteRoot("draft2019-09", TEST_SUITE_TESTS_DIR, TEST_SUITE_GROUP),
    SuiteRoot("extra-tests", "", EXTRA_GROUP),
    SuiteRoot("issues", AJV_TESTS_DIR, AJV_GROUP),
    SuiteRoot("rules", AJV_TESTS_DIR, AJV_GROUP),
    SuiteRoot("schemas", AJV_TESTS_DIR, AJV_GROUP),
    SuiteRoot("extras.part", "ajv-spec", AJV_GROUP),
)

# Pushed into the shared registry, in this order, before the first ajv suite.
AJV_REMOTES: Tuple[str, ...] = (
    "bar",
    "foo",
    "buu",
    "tree",
    "node",
    "second",
    "first",
    "scope_change",
)

SUITE_NAMES: Tuple[str, ...] = tuple(r.name for r in SUITE_ROOTS)
