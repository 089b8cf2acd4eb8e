# SPDX-License-Identifier: Apache-2.0
"""
Assertion collection and run reports.

A ``Collector`` records every assertion of one block test without raising,
so a mismatching case never stops its siblings. A ``Report`` aggregates
collectors per suite and renders a summary for the CLI or JSON for CI.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class Assertion:
    """One recorded check."""

    message: str
    ok: bool
    actual: Any = None
    expected: Any = None
    error: Optional[str] = None

    def describe(self) -> str:
        if self.ok:
            return f"ok {self.message}"
        if self.error is not None:
            return f"not ok {self.message}: {self.error}"
        return f"not ok {self.message}: expected {self.expected!r}, got {self.actual!r}"


class Collector:
    """Assertion sink for one named test."""

    def __init__(self, name: str, suite: str = "") -> None:
        self.name = name
        self.suite = suite
        self.assertions: List[Assertion] = []

    def same(self, actual: Any, expected: Any, message: str) -> bool:
        ok = actual == expected and type(actual) is type(expected)
        self.assertions.append(Assertion(message, ok, actual=actual, expected=expected))
        return ok

    def throws(self, fn: Callable[[], Any], message: str) -> bool:
        try:
            fn()
        except Exception:
            self.assertions.append(Assertion(message, True))
            return True
        self.assertions.append(Assertion(message, False, error="expected an exception"))
        return False

    def fail(self, exc: BaseException, message: Optional[str] = None) -> None:
        error = f"{type(exc).__name__}: {exc}"
        self.assertions.append(Assertion(message or error, False, error=error))

    @property
    def failures(self) -> List[Assertion]:
        return [a for a in self.assertions if not a.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def failure_text(self) -> str:
        return "\n".join(f"{self.name}: {a.describe()}" for a in self.failures)

    def __repr__(self) -> str:
        return f"Collector({self.name!r}, assertions={len(self.assertions)}, failures={len(self.failures)})"


@dataclass
class SuiteSummary:
    suite: str
    tests: int = 0
    failed_tests: int = 0
    assertions: int = 0
    failed_assertions: int = 0


@dataclass
class Report:
    """Aggregated results of a run, in execution order."""

    collectors: List[Collector] = field(default_factory=list)
    duration: float = 0.0

    def add(self, collector: Collector) -> None:
        self.collectors.append(collector)

    @property
    def ok(self) -> bool:
        return all(c.ok for c in self.collectors)

    @property
    def failed(self) -> List[Collector]:
        return [c for c in self.collectors if not c.ok]

    def summaries(self) -> Dict[str, SuiteSummary]:
        out: Dict[str, SuiteSummary] = {}
        for c in self.collectors:
            s = out.setdefault(c.suite, SuiteSummary(suite=c.suite))
            s.tests += 1
            s.assertions += len(c.assertions)
            failed = len(c.failures)
            s.failed_assertions += failed
            if failed:
                s.failed_tests += 1
        return out

    def as_dict(self) -> Dict[str, Any]:
        return {
            "success": self.ok,
            "duration": round(self.duration, 3),
            "suites": [asdict(s) for s in self.summaries().values()],
            "failures": [
                {"test": c.name, "assertions": [a.describe() for a in c.failures]}
                for c in self.failed
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), indent=2)
