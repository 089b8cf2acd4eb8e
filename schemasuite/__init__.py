# SPDX-License-Identifier: Apache-2.0
"""
schemasuite: conformance driver for JSON Schema engines.

Runs an external engine (a ``validator`` / ``parser`` factory pair) against
the JSON-Schema-Test-Suite drafts plus vendor corpora, with per-identifier
skip lists and a fixed matrix of engine configuration variants.
"""

from schemasuite.drafts import SUITE_ROOTS, Suite, dialect_for
from schemasuite.engine import Engine, EngineHandle, EngineOptions, SchemaRegistry, load_engine
from schemasuite.errors import (
    ConfigError,
    EngineError,
    EngineLoadError,
    SchemaConstructionError,
    SuiteStructureError,
)
from schemasuite.executor import VARIANTS, ConfigurationVariant, execute_block
from schemasuite.identifiers import SkipResolver, join_id
from schemasuite.report import Assertion, Collector, Report
from schemasuite.runner import iter_blocks, run
from schemasuite.walker import walk

__version__ = "1.0.0"

__all__ = [
    "Assertion",
    "Collector",
    "ConfigError",
    "ConfigurationVariant",
    "Engine",
    "EngineError",
    "EngineHandle",
    "EngineLoadError",
    "EngineOptions",
    "Report",
    "SUITE_ROOTS",
    "SchemaConstructionError",
    "SchemaRegistry",
    "SkipResolver",
    "Suite",
    "SuiteStructureError",
    "VARIANTS",
    "dialect_for",
    "execute_block",
    "iter_blocks",
    "join_id",
    "load_engine",
    "run",
    "walk",
]
