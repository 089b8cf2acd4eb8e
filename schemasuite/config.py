# SPDX-License-Identifier: Apache-2.0
"""
Driver configuration from the environment.

    SCHEMASUITE_ROOT           Fixture root (default: <repo>/fixtures)
    SCHEMASUITE_ENGINE         Engine spec (default: schemasuite.engines.reference)
    SCHEMASUITE_SUITES         Comma-separated suite filter (default: all)
    SCHEMASUITE_LOG_LEVEL      Logging level name (default: WARNING)
    SCHEMASUITE_PLAIN_OUTPUT   Disable emoji in summaries (1/true/yes/plain)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

from schemasuite.drafts import SUITE_NAMES
from schemasuite.engine import DEFAULT_ENGINE
from schemasuite.errors import ConfigError

ROOT_ENV = "SCHEMASUITE_ROOT"
ENGINE_ENV = "SCHEMASUITE_ENGINE"
SUITES_ENV = "SCHEMASUITE_SUITES"
LOG_LEVEL_ENV = "SCHEMASUITE_LOG_LEVEL"
PLAIN_OUTPUT_ENV = "SCHEMASUITE_PLAIN_OUTPUT"

DEFAULT_FIXTURES_ROOT = Path(__file__).resolve().parents[1] / "fixtures"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_suites(value: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Split a comma-separated suite list, rejecting unknown names."""
    if not value or not value.strip():
        return None
    names = tuple(s.strip() for s in value.split(",") if s.strip())
    unknown = [n for n in names if n not in SUITE_NAMES]
    if unknown:
        raise ConfigError(
            f"Unknown suite(s): {', '.join(unknown)}. Available: {', '.join(SUITE_NAMES)}"
        )
    return names


def parse_log_level(value: Optional[str]) -> int:
    name = (value or "WARNING").strip().upper()
    if name not in _LOG_LEVELS:
        raise ConfigError(f"Invalid log level {value!r}; expected one of {', '.join(_LOG_LEVELS)}")
    return getattr(logging, name)


@dataclass(frozen=True)
class SuiteConfig:
    fixtures_root: Path = DEFAULT_FIXTURES_ROOT
    engine: str = DEFAULT_ENGINE
    suites: Optional[Tuple[str, ...]] = None
    log_level: int = logging.WARNING
    plain_output: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SuiteConfig":
        env = os.environ if environ is None else environ
        root = env.get(ROOT_ENV)
        return cls(
            fixtures_root=Path(root).resolve() if root else DEFAULT_FIXTURES_ROOT,
            engine=env.get(ENGINE_ENV) or DEFAULT_ENGINE,
            suites=parse_suites(env.get(SUITES_ENV)),
            log_level=parse_log_level(env.get(LOG_LEVEL_ENV)),
            plain_output=env.get(PLAIN_OUTPUT_ENV, "").strip().lower() in {"1", "true", "yes", "plain"},
        )

    def with_overrides(self, **overrides) -> "SuiteConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def configure_logging(config: SuiteConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
