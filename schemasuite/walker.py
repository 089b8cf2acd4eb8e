# SPDX-License-Identifier: Apache-2.0
"""
Depth-first walk over a suite directory.

Every entry gets its identifier (``relative_dir/name``) checked against the
skip resolver before anything else happens to it, so an unsupported file is
never opened and an unsupported directory is never listed. Entries ending in
``.json`` are fixture files; everything else must be a directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from schemasuite.drafts import Suite
from schemasuite.errors import SuiteStructureError
from schemasuite.fixtures import TestFile, load_test_file
from schemasuite.identifiers import SkipResolver, join_id

logger = logging.getLogger(__name__)


def walk(
    base_dir: Path,
    suite: Suite,
    resolver: SkipResolver,
    relative_dir: str = "",
) -> Iterator[TestFile]:
    """Yield every non-skipped fixture file under ``base_dir/relative_dir``."""
    directory = Path(base_dir) / relative_dir if relative_dir else Path(base_dir)
    try:
        entries = sorted(os.listdir(directory))
    except FileNotFoundError as e:
        raise SuiteStructureError(f"Suite directory not found: {directory}", str(directory)) from e
    except NotADirectoryError as e:
        raise SuiteStructureError(
            f"Expected a directory or a .json fixture: {directory}", str(directory)
        ) from e

    for name in entries:
        entry_id = join_id(relative_dir, name)
        if resolver.should_skip(entry_id):
            logger.debug("Skipping unsupported entry %s/%s", suite.name, entry_id)
            continue

        path = directory / name
        if name.endswith(".json"):
            yield load_test_file(path, suite, entry_id)
        else:
            yield from walk(base_dir, suite, resolver, entry_id)
