# SPDX-License-Identifier: Apache-2.0
"""
Attach test-position context to exceptions raised by an engine.

When an engine factory or entry point blows up, the executor records the
failure against the block rather than re-raising. The attached context
(suite, file, block, variant, schema index) travels on the exception as
``__schemasuite_context__`` so reports and logs can say where it happened
without rewriting the engine's message or type.

    try:
        handle = engine.handle(schema, options)
    except Exception as exc:
        attach_context(exc, suite="draft7", file_id="ref.json", block="...")
        collector.fail(exc)

Multiple calls merge; existing keys are kept.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

logger = logging.getLogger(__name__)

_ATTR = "__schemasuite_context__"


def attach_context(exc: BaseException, **context: Any) -> None:
    """Merge ``context`` into the exception's attached context."""
    try:
        merged: MutableMapping[str, Any] = {}
        existing = getattr(exc, _ATTR, None)
        if isinstance(existing, Mapping):
            merged.update(existing)
        for key, value in context.items():
            merged.setdefault(key, value)
        setattr(exc, _ATTR, merged)
    except (AttributeError, TypeError) as attachment_error:
        # Some C-level exceptions refuse new attributes.
        logger.debug(
            "Failed to attach error context to %s: %s",
            type(exc).__name__,
            attachment_error,
        )


def get_context(exc: BaseException) -> Mapping[str, Any]:
    """Return the attached context, or an empty mapping."""
    ctx = getattr(exc, _ATTR, None)
    return ctx if isinstance(ctx, Mapping) else {}


def format_context(exc: BaseException) -> str:
    """``key=value`` rendering of the attached context, in insertion order."""
    return ", ".join(f"{k}={v!r}" for k, v in get_context(exc).items())
