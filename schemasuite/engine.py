# SPDX-License-Identifier: Apache-2.0
"""
Engine contract.

An engine is any object or module exposing two factories::

    validator(schema, options) -> validate(data) -> bool
    parser(schema, options)    -> parse(json_text) -> {"valid": bool, ...}

Both factories receive the same ``EngineOptions``. A factory must raise at
construction time when it refuses a schema; the driver relies on that to
check relaxed-only fixtures against the strict mode.

Engines are selected with a ``package.module`` or ``package.module:attr``
spec, the same way the conformance plugin resolves adapters.
"""

from __future__ import annotations

import importlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from schemasuite.errors import EngineLoadError, SuiteStructureError

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "schemasuite.engines.reference"

MODE_DEFAULT = "default"
MODE_RELAXED = "relaxed"

Validate = Callable[[Any], bool]
Parse = Callable[[str], Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Shared schema registry
# ---------------------------------------------------------------------------

class SchemaRegistry:
    """
    Ordered, append-only collection of remote schema documents.

    Documents are keyed by URI so engines can resolve cross-document
    ``$ref``s. Populated before suites run and only read afterwards.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[str, Any]] = []
        self._uris: Dict[str, int] = {}

    @staticmethod
    def _id_of(document: Any) -> Optional[str]:
        if not isinstance(document, dict):
            return None
        uri = document.get("$id", document.get("id"))
        return uri if isinstance(uri, str) else None

    def register(self, document: Any, uri: Optional[str] = None) -> str:
        """Append ``document`` under ``uri`` (or its own ``$id``/``id``)."""
        uri = uri or self._id_of(document)
        if not uri:
            raise ValueError("Remote schema has no $id/id and no explicit URI")
        if uri in self._uris:
            raise ValueError(f"Duplicate remote schema URI: {uri}")
        self._uris[uri] = len(self._entries)
        self._entries.append((uri, document))
        logger.debug("Registered remote schema %s", uri)
        return uri

    def register_file(self, path: Path, uri: Optional[str] = None) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SuiteStructureError(f"Invalid JSON in remote schema {path}: {e}", str(path)) from e
        return self.register(document, uri)

    def register_directory(self, root: Path, base_uri: str) -> int:
        """Register every ``*.json`` under ``root`` as ``base_uri + relative path``."""
        root = Path(root)
        count = 0
        for path in sorted(root.rglob("*.json")):
            self.register_file(path, base_uri + path.relative_to(root).as_posix())
            count += 1
        return count

    def get(self, uri: str) -> Any:
        return self._entries[self._uris[uri]][1]

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._entries)

    def __contains__(self, uri: object) -> bool:
        return uri in self._uris

    def __iter__(self) -> Iterator[Any]:
        return (document for _, document in self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Options and handles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineOptions:
    """Options passed to both engine factories."""

    schemas: Optional[SchemaRegistry] = None
    mode: str = MODE_DEFAULT
    schema_default: Optional[str] = None
    extra_formats: bool = False
    include_errors: bool = False
    all_errors: bool = False

    def as_dict(self) -> Dict[str, Any]:
        """Options under their wire names, for mapping-based engines."""
        return {
            "schemas": self.schemas,
            "mode": self.mode,
            "$schemaDefault": self.schema_default,
            "extraFormats": self.extra_formats,
            "includeErrors": self.include_errors,
            "allErrors": self.all_errors,
        }


@dataclass(frozen=True)
class EngineHandle:
    """The two entry points built for one ``(schema, options)`` pair."""

    validate: Validate
    parse: Parse


@dataclass(frozen=True)
class Engine:
    """A loaded engine: its two factories plus the spec it came from."""

    validator: Callable[[Any, EngineOptions], Validate]
    parser: Callable[[Any, EngineOptions], Parse]
    name: str = "<engine>"

    def handle(self, schema: Any, options: EngineOptions) -> EngineHandle:
        """Build validator and parser once each; construction errors propagate."""
        return EngineHandle(
            validate=self.validator(schema, options),
            parse=self.parser(schema, options),
        )


def load_engine(spec: str = DEFAULT_ENGINE) -> Engine:
    """
    Resolve an engine from ``package.module`` or ``package.module:attr``.

    The resolved object (module or attribute) must expose callable
    ``validator`` and ``parser`` attributes.
    """
    module_name, _, attr = spec.partition(":")
    if not module_name:
        raise EngineLoadError(
            f"Invalid engine spec '{spec}'. Expected 'package.module[:attribute]'."
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise EngineLoadError(f"Failed to import engine module '{module_name}'.") from exc

    if attr:
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise EngineLoadError(
                f"Engine attribute '{attr}' not found in module '{module_name}'."
            ) from exc

    validator = getattr(target, "validator", None)
    parser = getattr(target, "parser", None)
    if not callable(validator) or not callable(parser):
        raise EngineLoadError(
            f"Engine '{spec}' must expose callable 'validator' and 'parser' factories."
        )

    logger.info("Loaded engine %s", spec)
    return Engine(validator=validator, parser=parser, name=spec)
