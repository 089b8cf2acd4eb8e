# SPDX-License-Identifier: Apache-2.0
"""
Case executor: runs one fixture block through the engine.

For every candidate schema of a block and every configuration variant, one
engine handle is built and each data case is checked through both entry
points (``validate`` and ``parse``) against the expected validity. Blocks
listed as relaxed-only run in relaxed mode, and each variant also checks
that the strict mode refuses to build a validator for the schema.

Any exception escaping the engine is recorded as a single failure for the
block; sibling blocks are unaffected.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from schemasuite.engine import (
    MODE_DEFAULT,
    MODE_RELAXED,
    Engine,
    EngineHandle,
    EngineOptions,
    SchemaRegistry,
)
from schemasuite.error_context import attach_context, format_context
from schemasuite.fixtures import Block, Case, TestFile
from schemasuite.identifiers import SkipResolver, join_id
from schemasuite.report import Collector

logger = logging.getLogger(__name__)

TEST_NAME_PREFIX = "json-schema-test-suite"
STRICT_REJECTION_MESSAGE = "Throws without relaxed mode"


@dataclass(frozen=True)
class ConfigurationVariant:
    include_errors: bool
    all_errors: bool

    @property
    def label(self) -> str:
        if not self.include_errors:
            return "plain"
        return "include-errors+all-errors" if self.all_errors else "include-errors"


VARIANTS: Tuple[ConfigurationVariant, ...] = (
    ConfigurationVariant(include_errors=False, all_errors=False),
    ConfigurationVariant(include_errors=True, all_errors=False),
    ConfigurationVariant(include_errors=True, all_errors=True),
)


def block_id(test_file: TestFile, block: Block) -> str:
    return join_id(test_file.file_id, block.description)


def block_test_name(test_file: TestFile, block: Block) -> str:
    """Report name of a block test: ``<prefix> <suite>/<file>/<block>``."""
    return f"{TEST_NAME_PREFIX} {test_file.suite.name}/{block_id(test_file, block)}"


def wrap_schema(schema: Any) -> Any:
    """Bare strings name a schema by id; turn them into a ``$ref``."""
    if isinstance(schema, str):
        return {"$ref": schema}
    return schema


def _valid_of(result: Any) -> Any:
    if isinstance(result, Mapping):
        return result.get("valid")
    return getattr(result, "valid", None)


def _check(collector: Collector, outcome: Any, case: Case, where: str) -> bool:
    return collector.same(outcome, case.valid, f"{case.description} [{where}]")


def _run_cases(
    handle: EngineHandle,
    block: Block,
    key: str,
    resolver: SkipResolver,
    collector: Collector,
    label: str,
) -> None:
    for case in block.tests:
        if resolver.should_skip(join_id(key, case.description)):
            continue
        _check(collector, handle.validate(case.data), case, f"validate, {label}")
        _check(collector, _valid_of(handle.parse(json.dumps(case.data))), case, f"parse, {label}")


def execute_block(
    engine: Engine,
    test_file: TestFile,
    block: Block,
    resolver: SkipResolver,
    collector: Optional[Collector] = None,
    registry: Optional[SchemaRegistry] = None,
) -> Collector:
    """Run every schema x variant x case of ``block``, recording into ``collector``."""
    suite = test_file.suite
    key = block_id(test_file, block)
    if collector is None:
        collector = Collector(block_test_name(test_file, block), suite=suite.name)

    try:
        mode = MODE_RELAXED if resolver.requires_relaxed_mode(key) else MODE_DEFAULT
        schemas = block.candidate_schemas()
        for index, schema in enumerate(schemas):
            wrapped = wrap_schema(schema)
            for variant in VARIANTS:
                options = EngineOptions(
                    schemas=registry,
                    mode=mode,
                    schema_default=suite.dialect_uri,
                    extra_formats=suite.uses_legacy_formats,
                    include_errors=variant.include_errors,
                    all_errors=variant.all_errors,
                )
                label = variant.label if len(schemas) == 1 else f"schema {index}, {variant.label}"
                try:
                    handle = engine.handle(wrapped, options)
                    _run_cases(handle, block, key, resolver, collector, label)
                except Exception as exc:
                    attach_context(exc, suite=suite.name, block=key, schema=index, variant=variant.label, mode=mode)
                    raise

                if mode == MODE_RELAXED:
                    strict = dataclasses.replace(options, mode=MODE_DEFAULT)
                    collector.throws(
                        lambda: engine.validator(wrapped, strict),
                        f"{STRICT_REJECTION_MESSAGE} [{label}]",
                    )
    except Exception as exc:
        logger.debug("Block %s failed: %s (%s)", collector.name, exc, format_context(exc))
        collector.fail(exc)

    return collector
