# SPDX-License-Identifier: Apache-2.0
"""
Pytest plugin and shared fixtures for the schemasuite tests.

The plugin prints a per-suite summary of the corpus block tests
(tests/suite) after the run. The fixtures build throwaway fixture trees and
provide the scriptable fake engine used by the unit tests.
"""

from __future__ import annotations

import json
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from schemasuite.config import PLAIN_OUTPUT_ENV
from schemasuite.drafts import SUITE_NAMES, Suite
from schemasuite.executor import TEST_NAME_PREFIX
from tests.utils.fake_engine import FakeEngine
from tests.utils.fixture_builders import integer_block


# ---------------------------------------------------------------------------
# Per-suite terminal summary
# ---------------------------------------------------------------------------

_SUITE_FROM_NODEID = re.compile(re.escape(f"[{TEST_NAME_PREFIX} ") + r"([^/\]]+)/")


@dataclass
class SuiteTally:
    passed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed


class SchemaSuitePlugin:
    """Groups corpus block results by suite for the terminal summary."""

    def __init__(self) -> None:
        self.start_time: Optional[float] = None
        self.tallies: Dict[str, SuiteTally] = {}
        self.plain_output: bool = False

    def _fmt(self, emoji: str, text: str) -> str:
        if self.plain_output or not emoji:
            return text
        return f"{emoji} {text}"

    @staticmethod
    def suite_of(nodeid: str) -> Optional[str]:
        match = _SUITE_FROM_NODEID.search(nodeid)
        return match.group(1) if match else None

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        self.start_time = time.time()
        self.tallies = {}
        self.plain_output = os.getenv(PLAIN_OUTPUT_ENV, "").strip().lower() in {"1", "true", "yes", "plain"}

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.when != "call" and not (report.when == "setup" and report.failed):
            return
        suite = self.suite_of(report.nodeid)
        if suite is None:
            return
        tally = self.tallies.setdefault(suite, SuiteTally())
        if report.passed:
            tally.passed += 1
        elif report.failed:
            tally.failed += 1

    def pytest_terminal_summary(self, terminalreporter, exitstatus, config) -> None:
        if not self.tallies:
            return
        duration = time.time() - (self.start_time or time.time())
        terminalreporter.write_sep("=", "JSON Schema corpus summary")
        ordered = [s for s in SUITE_NAMES if s in self.tallies]
        ordered += sorted(s for s in self.tallies if s not in SUITE_NAMES)
        for suite in ordered:
            tally = self.tallies[suite]
            status = "✅" if tally.failed == 0 else "❌"
            terminalreporter.write_line(
                self._fmt(status, f"{suite:<14} {tally.passed}/{tally.total} blocks passing")
            )
        terminalreporter.write_line(f"Completed in {duration:.1f}s")


schemasuite_plugin = SchemaSuitePlugin()


def pytest_sessionstart(session: pytest.Session) -> None:
    schemasuite_plugin.pytest_sessionstart(session)


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    schemasuite_plugin.pytest_runtest_logreport(report)


def pytest_terminal_summary(terminalreporter, exitstatus, config) -> None:
    schemasuite_plugin.pytest_terminal_summary(terminalreporter, exitstatus, config)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "corpus: JSON Schema corpus block tests (tests/suite)")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON document at ``tmp_path/<relative>``, creating parents."""

    def _write(relative: str, document: Any) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_suite(tmp_path: Path) -> Callable[..., Suite]:
    def _make(name: str = "draft7", directory: Optional[Path] = None) -> Suite:
        return Suite.for_name(name, directory or tmp_path)

    return _make


@pytest.fixture
def corpus_root(tmp_path: Path, write_json) -> Path:
    """A minimal fixture root with every suite and both remote sets."""
    for name in ("draft4", "draft6", "draft7", "draft3", "draft2019-09"):
        write_json(f"JSON-Schema-Test-Suite/tests/{name}/integer.json", [integer_block("integers")])
    write_json("JSON-Schema-Test-Suite/remotes/integer.json", {"type": "integer"})
    write_json("JSON-Schema-Test-Suite/remotes/folder/folderInteger.json", {"type": "integer"})
    write_json("extra-tests/extra.json", [integer_block("extra")])
    for name in ("bar", "foo", "buu", "tree", "node", "second", "first", "scope_change"):
        write_json(f"ajv-spec/remotes/{name}.json", {"$id": f"http://localhost:1234/ajv/{name}.json"})
    for name in ("issues", "rules", "schemas"):
        write_json(f"ajv-spec/tests/{name}/case.json", [integer_block(name)])
    write_json("ajv-spec/extras.part/extras.json", [integer_block("extras")])
    return tmp_path
