# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy shared by the driver and engine adapters."""

from __future__ import annotations


class SchemaSuiteError(Exception):
    """Base class for all driver errors."""


class ConfigError(SchemaSuiteError, ValueError):
    """Raised when a configuration value cannot be interpreted."""


class SuiteStructureError(SchemaSuiteError):
    """
    Raised when a fixture tree does not have the expected shape.

    Covers missing suite directories, entries that are neither ``.json``
    files nor directories, and fixture files that are not valid JSON.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class EngineError(SchemaSuiteError):
    """Base class for failures raised by an engine under test."""


class EngineLoadError(EngineError):
    """Raised when an engine spec cannot be imported or lacks its factories."""


class SchemaConstructionError(EngineError):
    """
    Raised by an engine factory that refuses a ``(schema, options)`` pair.

    Strict (``mode="default"``) engines raise this for schemas that only make
    sense in relaxed mode; it must happen at construction time, never when
    the resulting validator is called.
    """
