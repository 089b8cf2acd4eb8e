# SPDX-License-Identifier: Apache-2.0
"""
Runner: walks every suite root in fixed order and executes its blocks.

Order is draft4, draft6, draft7, draft3, draft2019-09, extra-tests, then the
ajv corpora (issues, rules, schemas, extras.part). The shared registry is
seeded with the JSON-Schema-Test-Suite remotes up front; the ajv remotes are
appended just before the first ajv suite runs.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from schemasuite.config import SuiteConfig
from schemasuite.drafts import (
    AJV_GROUP,
    AJV_REMOTES,
    AJV_REMOTES_DIR,
    SUITE_NAMES,
    SUITE_ROOTS,
    TEST_SUITE_GROUP,
    TEST_SUITE_REMOTES_BASE_URI,
    TEST_SUITE_REMOTES_DIR,
    SuiteRoot,
)
from schemasuite.engine import Engine, SchemaRegistry, load_engine
from schemasuite.errors import SuiteStructureError
from schemasuite.executor import block_id, execute_block
from schemasuite.fixtures import Block, TestFile
from schemasuite.identifiers import SkipResolver
from schemasuite.report import Report
from schemasuite.skiplist import REQUIRES_RELAXED, UNSUPPORTED
from schemasuite.walker import walk

logger = logging.getLogger(__name__)


def resolver_for(suite_name: str) -> SkipResolver:
    return SkipResolver(suite_name, UNSUPPORTED, REQUIRES_RELAXED)


def select_roots(suites: Optional[Iterable[str]] = None) -> List[SuiteRoot]:
    """Suite roots to run, in run order, optionally filtered by name."""
    if suites is None:
        return list(SUITE_ROOTS)
    wanted = set(suites)
    unknown = sorted(wanted - set(SUITE_NAMES))
    if unknown:
        raise ValueError(f"Unknown suite(s): {', '.join(unknown)}")
    return [r for r in SUITE_ROOTS if r.name in wanted]


def build_registry(fixtures_root: Path) -> SchemaRegistry:
    """Registry seeded with the JSON-Schema-Test-Suite remotes, if present."""
    registry = SchemaRegistry()
    remotes = Path(fixtures_root) / TEST_SUITE_REMOTES_DIR
    if remotes.is_dir():
        count = registry.register_directory(remotes, TEST_SUITE_REMOTES_BASE_URI)
        logger.info("Registered %d remote schemas from %s", count, remotes)
    return registry


def register_ajv_remotes(registry: SchemaRegistry, fixtures_root: Path) -> None:
    remotes = Path(fixtures_root) / AJV_REMOTES_DIR
    for name in AJV_REMOTES:
        path = remotes / f"{name}.json"
        try:
            registry.register_file(path)
        except FileNotFoundError as e:
            raise SuiteStructureError(f"Missing ajv remote schema: {path}", str(path)) from e
    logger.info("Registered %d ajv remote schemas", len(AJV_REMOTES))


def iter_test_files(
    config: SuiteConfig,
    registry: SchemaRegistry,
    suites: Optional[Iterable[str]] = None,
) -> Iterator[TestFile]:
    """Every non-skipped fixture file, in run order."""
    ajv_registered = False
    for root in select_roots(suites):
        suite = root.suite(config.fixtures_root)
        if not suite.base_directory.is_dir():
            if root.group == TEST_SUITE_GROUP:
                raise SuiteStructureError(
                    f"Suite directory not found: {suite.base_directory}",
                    str(suite.base_directory),
                )
            logger.warning("Optional suite %s not found at %s; skipping", root.name, suite.base_directory)
            continue

        if root.group == AJV_GROUP and not ajv_registered:
            register_ajv_remotes(registry, config.fixtures_root)
            ajv_registered = True

        logger.info("Walking suite %s (%s)", suite.name, suite.base_directory)
        yield from walk(suite.base_directory, suite, resolver_for(suite.name))


def iter_blocks(
    config: SuiteConfig,
    registry: SchemaRegistry,
    suites: Optional[Iterable[str]] = None,
) -> Iterator[Tuple[TestFile, Block]]:
    """Every non-skipped block, in run order."""
    for test_file in iter_test_files(config, registry, suites):
        resolver = resolver_for(test_file.suite.name)
        for block in test_file.blocks:
            if resolver.should_skip(block_id(test_file, block)):
                continue
            yield test_file, block


def run(
    config: Optional[SuiteConfig] = None,
    engine: Optional[Engine] = None,
    suites: Optional[Iterable[str]] = None,
    fail_fast: bool = False,
) -> Report:
    """Execute every selected suite and return the aggregated report."""
    config = config or SuiteConfig.from_env()
    engine = engine or load_engine(config.engine)
    if suites is None:
        suites = config.suites

    registry = build_registry(config.fixtures_root)
    report = Report()
    start = time.time()
    for test_file, block in iter_blocks(config, registry, suites):
        collector = execute_block(
            engine, test_file, block, resolver_for(test_file.suite.name), registry=registry
        )
        report.add(collector)
        if fail_fast and not collector.ok:
            logger.info("Stopping after first failing test: %s", collector.name)
            break
    report.duration = time.time() - start
    return report
