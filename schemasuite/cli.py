# SPDX-License-Identifier: Apache-2.0
"""
schemasuite CLI

Run the JSON Schema conformance corpora against an engine with one command.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

try:
    import pytest
except ImportError:  # pragma: no cover
    pytest = None  # type: ignore[assignment]

from schemasuite.config import SuiteConfig, configure_logging
from schemasuite.drafts import SUITE_ROOTS
from schemasuite.engine import load_engine
from schemasuite.errors import SchemaSuiteError
from schemasuite.report import Report
from schemasuite.runner import run

SUITE_TEST_PATH = "tests/suite"

PYTEST_JOBS = os.environ.get("PYTEST_JOBS", "auto")
PYTEST_EXTRA_ARGS = os.environ.get("PYTEST_ARGS", "").split()


# --------------------------------------------------------------------------- #
# Internal helpers
# --------------------------------------------------------------------------- #

def _repo_root() -> str:
    """Best-effort guess of repo root."""
    here = os.path.abspath(os.path.dirname(__file__))
    return os.path.dirname(here)


def _fmt(plain: bool, emoji: str, text: str) -> str:
    return text if plain else f"{emoji} {text}"


def _print_report(report: Report, plain: bool, quiet: bool, verbose: bool) -> None:
    summaries = report.summaries()
    if not quiet:
        for s in summaries.values():
            status = "✅" if s.failed_tests == 0 else "❌"
            print(
                _fmt(plain, status, f"{s.suite:<14}")
                + f" tests={s.tests} failed={s.failed_tests}"
                + f" assertions={s.assertions} failed_assertions={s.failed_assertions}"
            )

    failed = report.failed
    if failed:
        print(_fmt(plain, "❌", f"{len(failed)} failing test(s):"))
        shown = failed if verbose else failed[:20]
        for c in shown:
            print(f"  {c.name}")
            for a in c.failures:
                print(f"      {a.describe()}")
        if len(shown) < len(failed):
            print(f"  ... and {len(failed) - len(shown)} more (use -v to show all)")
    elif not quiet:
        print(_fmt(plain, "✅", f"All {len(report.collectors)} tests passed in {report.duration:.1f}s"))


def _cmd_run(args: argparse.Namespace, config: SuiteConfig) -> int:
    config = config.with_overrides(
        engine=args.engine,
        fixtures_root=Path(args.root).resolve() if args.root else None,
        suites=tuple(args.suite) if args.suite else None,
    )
    engine = load_engine(config.engine)
    report = run(config, engine, fail_fast=args.fail_fast)

    if args.json:
        print(report.to_json())
    else:
        _print_report(report, config.plain_output, args.quiet, args.verbose)
    return 0 if report.ok else 1


def _cmd_list_suites(args: argparse.Namespace, config: SuiteConfig) -> int:
    for root in SUITE_ROOTS:
        suite = root.suite(config.fixtures_root)
        dialect = suite.dialect_uri or "-"
        present = "" if suite.base_directory.is_dir() else "  (missing)"
        print(f"{root.name:<14} {dialect:<48} {suite.base_directory}{present}")
    return 0


def _cmd_verify(args: argparse.Namespace, passthrough_args: List[str]) -> int:
    if pytest is None:  # pragma: no cover
        print(
            "error: pytest is required for 'verify'.\n"
            "Install test dependencies via:\n"
            "    pip install .[test]",
            file=sys.stderr,
        )
        return 1

    os.chdir(_repo_root())
    pytest_args = [SUITE_TEST_PATH, *PYTEST_EXTRA_ARGS, *passthrough_args]
    if args.quiet:
        pytest_args.append("-q")
    elif args.verbose:
        pytest_args.append("-vv")
    if PYTEST_JOBS != "1":
        pytest_args.extend(["-n", PYTEST_JOBS])
    return int(pytest.main(pytest_args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemasuite",
        description="JSON Schema engine conformance driver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schemasuite run
  schemasuite run -s draft7 -s draft2019-09 --json
  schemasuite run --engine mypkg.engine --root ./fixtures
  schemasuite list-suites
  schemasuite verify -- -x --tb=short

Configuration (environment variables):
  SCHEMASUITE_ROOT          Fixture root directory
  SCHEMASUITE_ENGINE        Engine spec (package.module[:attribute])
  SCHEMASUITE_SUITES        Comma-separated suite filter
  SCHEMASUITE_LOG_LEVEL     Logging level (default: WARNING)
  PYTEST_JOBS=4             Parallel pytest jobs for 'verify' (default: auto)
  PYTEST_ARGS="-x -s"       Additional pytest arguments for 'verify'
        """.strip(),
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Detailed output")

    subparsers = parser.add_subparsers(
        dest="command", required=True, help="command to execute", metavar="COMMAND"
    )

    run_parser = subparsers.add_parser("run", help="Run the conformance corpora directly")
    run_parser.add_argument("--engine", help="Engine spec (package.module[:attribute])")
    run_parser.add_argument("--root", help="Fixture root directory")
    run_parser.add_argument(
        "-s",
        "--suite",
        action="append",
        choices=[r.name for r in SUITE_ROOTS],
        help="Select suite(s) to run (can be used multiple times)",
    )
    run_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    run_parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing test")

    subparsers.add_parser("list-suites", help="List suites in run order")
    subparsers.add_parser("verify", help="Run the suites through pytest")
    return parser


# --------------------------------------------------------------------------- #
# main
# --------------------------------------------------------------------------- #

def main(argv: Optional[List[str]] = None) -> int:
    cli_args = list(sys.argv[1:] if argv is None else argv)
    passthrough_args: List[str] = []
    if "--" in cli_args:
        split_index = cli_args.index("--")
        passthrough_args = cli_args[split_index + 1:]
        cli_args = cli_args[:split_index]

    parser = build_parser()
    try:
        args = parser.parse_args(cli_args)
    except SystemExit as e:
        return int(e.code or 0)

    try:
        config = SuiteConfig.from_env()
        configure_logging(config)
        if args.command == "run":
            return _cmd_run(args, config)
        if args.command == "list-suites":
            return _cmd_list_suites(args, config)
        if args.command == "verify":
            return _cmd_verify(args, passthrough_args)
    except SchemaSuiteError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    # Unreachable with required=True
    print(f"error: unknown command '{args.command}'\n", file=sys.stderr)
    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
