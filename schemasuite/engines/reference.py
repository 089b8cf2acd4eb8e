# SPDX-License-Identifier: Apache-2.0
"""
Reference engine backed by ``jsonschema`` and ``referencing``.

Implements the engine contract so the driver can run without a third-party
engine. It is a collaborator of the driver, not a JSON Schema
implementation in its own right: keyword semantics, format checking and
``$ref`` resolution all come from ``jsonschema``.

Modes
-----
``"default"`` (strict)
    Refuses, at construction time, schemas containing constructs that are
    legal but almost certainly mistakes:

    * ``additionalItems`` without an array-form ``items``
    * ``minContains`` / ``maxContains`` without ``contains``, or
      ``minContains > maxContains``
    * ``then`` / ``else`` without ``if``, or ``if`` without either
    * a boolean ``if``, or ``not: false``
    * an ``anyOf`` member that accepts everything (``true`` or ``{}``)
    * a ``oneOf`` member that rejects everything (``false``)
    * ``$ref`` with sibling keywords before draft2019-09 (siblings are
      ignored there)
    * percent-encoded JSON pointers in ``$ref`` before draft2019-09
``"relaxed"``
    Accepts all of the above.

Dialect selection uses the schema's own ``$schema``, then the
``schema_default`` option, then draft-07.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

from jsonschema import (
    Draft3Validator,
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
    FormatChecker,
)
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from referencing import Registry, Resource
from referencing.jsonschema import specification_with

from schemasuite.engine import MODE_RELAXED, EngineOptions, SchemaRegistry
from schemasuite.errors import SchemaConstructionError

logger = logging.getLogger(__name__)

FALLBACK_VALIDATOR: Type[Validator] = Draft7Validator

_DIALECTS: Dict[str, Type[Validator]] = {
    "json-schema.org/draft-03/schema": Draft3Validator,
    "json-schema.org/draft-04/schema": Draft4Validator,
    "json-schema.org/draft-06/schema": Draft6Validator,
    "json-schema.org/draft-07/schema": Draft7Validator,
    "json-schema.org/draft/2019-09/schema": Draft201909Validator,
    "json-schema.org/draft/2020-12/schema": Draft202012Validator,
}

# Drafts where $ref replaces the whole subschema.
_REF_OVERRIDES = (Draft3Validator, Draft4Validator, Draft6Validator, Draft7Validator)

# Keywords that may sit next to $ref without being silently ignored.
_REF_ANNOTATIONS = frozenset({
    "$ref", "$comment", "$id", "$schema", "id", "title", "description",
    "definitions", "default", "examples",
})

_SUBSCHEMA_KEYWORDS = (
    "additionalItems", "additionalProperties", "contains", "else", "if", "not",
    "propertyNames", "then", "unevaluatedItems", "unevaluatedProperties",
)
_SUBSCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf", "prefixItems")
_SUBSCHEMA_MAP_KEYWORDS = (
    "properties", "patternProperties", "definitions", "$defs", "dependentSchemas", "dependencies",
)


def _dialect_key(uri: str) -> str:
    for scheme in ("https://", "http://"):
        if uri.startswith(scheme):
            uri = uri[len(scheme):]
            break
    return uri.rstrip("#")


def validator_class(schema: Any, options: EngineOptions) -> Type[Validator]:
    """Pick the jsonschema validator class for ``schema``."""
    declared = schema.get("$schema") if isinstance(schema, dict) else None
    for uri in (declared, options.schema_default):
        if isinstance(uri, str):
            cls = _DIALECTS.get(_dialect_key(uri))
            if cls is not None:
                return cls
    return FALLBACK_VALIDATOR


# ---------------------------------------------------------------------------
# Strict-mode checks
# ---------------------------------------------------------------------------

def _subschemas(schema: Dict[str, Any]) -> Iterator[Tuple[str, Any]]:
    for keyword in _SUBSCHEMA_KEYWORDS:
        if keyword in schema:
            yield keyword, schema[keyword]
    for keyword in ("items", "extends"):
        value = schema.get(keyword)
        if isinstance(value, list):
            for i, sub in enumerate(value):
                yield f"{keyword}/{i}", sub
        elif value is not None:
            yield keyword, value
    for keyword in _SUBSCHEMA_LIST_KEYWORDS:
        value = schema.get(keyword)
        if isinstance(value, list):
            for i, sub in enumerate(value):
                yield f"{keyword}/{i}", sub
    for keyword in _SUBSCHEMA_MAP_KEYWORDS:
        value = schema.get(keyword)
        if isinstance(value, dict):
            for name, sub in value.items():
                yield f"{keyword}/{name}", sub


def strict_violations(schema: Any, cls: Type[Validator], path: str = "#") -> Iterator[str]:
    """Yield a message for every construct the strict mode refuses."""
    if not isinstance(schema, dict):
        return

    if "additionalItems" in schema and not isinstance(schema.get("items"), list):
        yield f"{path}: additionalItems has no effect without array items"

    if "contains" not in schema:
        for keyword in ("minContains", "maxContains"):
            if keyword in schema:
                yield f"{path}: {keyword} has no effect without contains"
    min_contains, max_contains = schema.get("minContains"), schema.get("maxContains")
    if isinstance(min_contains, (int, float)) and isinstance(max_contains, (int, float)):
        if min_contains > max_contains:
            yield f"{path}: minContains is greater than maxContains"

    if "if" in schema:
        if "then" not in schema and "else" not in schema:
            yield f"{path}: if has no effect without then or else"
        if isinstance(schema["if"], bool):
            yield f"{path}: if must not be a boolean schema"
    else:
        for keyword in ("then", "else"):
            if keyword in schema:
                yield f"{path}: {keyword} has no effect without if"

    if schema.get("not") is False:
        yield f"{path}: not false rejects everything"

    for i, sub in enumerate(schema.get("anyOf") or ()):
        if sub is True or sub == {}:
            yield f"{path}/anyOf/{i}: anyOf member accepts everything"

    for i, sub in enumerate(schema.get("oneOf") or ()):
        if sub is False:
            yield f"{path}/oneOf/{i}: oneOf member rejects everything"

    ref = schema.get("$ref")
    if isinstance(ref, str) and issubclass(cls, _REF_OVERRIDES):
        siblings = sorted(set(schema) - _REF_ANNOTATIONS)
        if siblings:
            yield f"{path}: keywords next to $ref are ignored: {', '.join(siblings)}"
        fragment = ref.partition("#")[2]
        if "%" in fragment:
            yield f"{path}: percent-encoded JSON pointer in $ref"

    for location, sub in _subschemas(schema):
        yield from strict_violations(sub, cls, f"{path}/{location}")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def _registry_for(schemas: Optional[SchemaRegistry], cls: Type[Validator]) -> Registry:
    specification = specification_with(cls.META_SCHEMA["$schema"])
    registry: Registry = Registry()
    if schemas:
        registry = registry.with_resources(
            (uri, Resource.from_contents(document, default_specification=specification))
            for uri, document in schemas.items()
        )
    return registry.crawl()


def _build(schema: Any, options: EngineOptions) -> Validator:
    if not isinstance(schema, (dict, bool)):
        raise SchemaConstructionError(
            f"Schema must be an object or boolean, got {type(schema).__name__}"
        )

    cls = validator_class(schema, options)

    if options.mode != MODE_RELAXED:
        problems = list(strict_violations(schema, cls))
        if problems:
            logger.debug("Strict mode refused schema: %s", problems)
            raise SchemaConstructionError("Strict mode: " + "; ".join(problems))

    try:
        cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaConstructionError(f"Invalid schema for {cls.__name__}: {e.message}") from e

    format_checker = FormatChecker() if options.extra_formats else cls.FORMAT_CHECKER
    return cls(schema, registry=_registry_for(options.schemas, cls), format_checker=format_checker)


def _render_error(error: Any) -> Dict[str, Any]:
    return {
        "keywordLocation": "#/" + "/".join(str(p) for p in error.schema_path),
        "instanceLocation": error.json_path,
        "message": error.message,
    }


class _Validate:
    """Boolean entry point; ``errors`` holds details when requested."""

    def __init__(self, instance: Validator, options: EngineOptions) -> None:
        self._instance = instance
        self._include_errors = options.include_errors
        self._all_errors = options.all_errors
        self.errors: Optional[List[Dict[str, Any]]] = None

    def __call__(self, data: Any) -> bool:
        if not self._include_errors:
            return self._instance.is_valid(data)

        errors = self._instance.iter_errors(data)
        if self._all_errors:
            found = [_render_error(e) for e in errors]
        else:
            first = next(errors, None)
            found = [] if first is None else [_render_error(first)]
        self.errors = found or None
        return not found


def validator(schema: Any, options: EngineOptions) -> _Validate:
    return _Validate(_build(schema, options), options)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parser(schema: Any, options: EngineOptions):
    validate = validator(schema, options)

    def parse(text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            return {"valid": False, "error": f"JSON parse error: {e}"}
        if validate(data):
            return {"valid": True, "value": data}
        result: Dict[str, Any] = {"valid": False}
        if options.include_errors:
            result["errors"] = validate.errors
        return result

    return parse
