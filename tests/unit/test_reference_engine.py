# SPDX-License-Identifier: Apache-2.0
"""
Reference engine (jsonschema + referencing).

Asserts:
  • Both entry points agree with jsonschema's verdict
  • Dialect selection: own $schema, then default, then draft-07
  • Strict mode refuses ambiguous constructs at construction time
  • Relaxed mode accepts them, and strict mode accepts what the relaxed table omits
  • Error details follow includeErrors / allErrors
  • Remote documents from the shared registry resolve through $ref
"""

import pytest
from jsonschema import Draft4Validator, Draft7Validator, Draft201909Validator

from schemasuite.engine import MODE_RELAXED, EngineOptions, SchemaRegistry
from schemasuite.engines import reference
from schemasuite.errors import SchemaConstructionError
from schemasuite.runner import resolver_for

DRAFT7 = "http://json-schema.org/draft-07/schema#"
DRAFT2019 = "http://json-schema.org/draft/2019-09/schema#"


def _opts(**kwargs):
    kwargs.setdefault("schema_default", DRAFT7)
    return EngineOptions(**kwargs)


def test_validate_and_parse_agree():
    schema = {"type": "integer"}
    validate = reference.validator(schema, _opts())
    parse = reference.parser(schema, _opts())

    assert validate(5) is True
    assert validate("x") is False
    assert parse("5") == {"valid": True, "value": 5}
    assert parse('"x"')["valid"] is False


def test_parse_rejects_malformed_and_non_standard_json():
    parse = reference.parser({}, _opts())
    assert parse("{")["valid"] is False
    assert parse("NaN")["valid"] is False
    assert parse("null")["valid"] is True


@pytest.mark.parametrize(
    "schema, default, expected",
    [
        ({"$schema": "http://json-schema.org/draft-04/schema#"}, DRAFT7, Draft4Validator),
        ({"$schema": "https://json-schema.org/draft/2019-09/schema"}, None, Draft201909Validator),
        ({}, DRAFT2019, Draft201909Validator),
        ({}, None, Draft7Validator),
        (True, None, Draft7Validator),
        ({"$schema": "http://example.com/unknown"}, DRAFT2019, Draft201909Validator),
    ],
)
def test_dialect_selection(schema, default, expected):
    assert reference.validator_class(schema, EngineOptions(schema_default=default)) is expected


@pytest.mark.parametrize(
    "schema",
    [
        {"items": {}, "additionalItems": False},
        {"minContains": 1},
        {"contains": {}, "minContains": 3, "maxContains": 1},
        {"then": {"type": "integer"}},
        {"if": {"type": "integer"}},
        {"if": True, "then": {}},
        {"not": False},
        {"anyOf": [{}, {"type": "integer"}]},
        {"anyOf": [True, False]},
        {"oneOf": [True, False, False]},
        {"properties": {"foo": {"$ref": "#/definitions/a", "maxItems": 2}}, "definitions": {"a": {}}},
        {"properties": {"p": {"$ref": "#/definitions/percent%25field"}}, "definitions": {"percent%field": {}}},
        {"allOf": [{"else": {}}]},
    ],
)
def test_strict_mode_refuses_and_relaxed_accepts(schema):
    with pytest.raises(SchemaConstructionError):
        reference.validator(schema, _opts())
    with pytest.raises(SchemaConstructionError):
        reference.parser(schema, _opts())
    assert callable(reference.validator(schema, _opts(mode=MODE_RELAXED)))


@pytest.mark.parametrize(
    "schema, data, expected",
    [
        ({"not": True}, "foo", False),
        ({"anyOf": [False, False]}, "foo", False),
        ({"oneOf": [True, True, True]}, "foo", False),
        ({"oneOf": [{"type": "number"}, {}]}, "foo", True),
        ({"oneOf": [{"type": "number"}, {}]}, 123, False),
    ],
)
def test_strict_mode_accepts_unlisted_boolean_combinators(schema, data, expected):
    validate = reference.validator(schema, _opts())
    assert validate(data) is expected


@pytest.mark.parametrize(
    "block_id",
    [
        "not.json/not with boolean schema true",
        "anyOf.json/anyOf with boolean schemas, all false",
        "oneOf.json/oneOf with boolean schemas, all true",
        "oneOf.json/oneOf with empty schema",
    ],
)
def test_strictly_accepted_blocks_are_not_marked_relaxed(block_id):
    assert not resolver_for("draft7").requires_relaxed_mode(block_id)


def test_ref_siblings_allowed_from_2019_09():
    schema = {"$defs": {"a": {"type": "integer"}}, "$ref": "#/$defs/a", "maximum": 3}
    validate = reference.validator(schema, _opts(schema_default=DRAFT2019))
    assert validate(2) is True
    assert validate(5) is False
    assert validate("x") is False


def test_ref_siblings_ignored_in_relaxed_draft7():
    schema = {
        "definitions": {"reffed": {"type": "array"}},
        "properties": {"foo": {"$ref": "#/definitions/reffed", "maxItems": 2}},
    }
    validate = reference.validator(schema, _opts(mode=MODE_RELAXED))
    assert validate({"foo": [1, 2, 3]}) is True
    assert validate({"foo": "x"}) is False


def test_invalid_schema_is_a_construction_error():
    with pytest.raises(SchemaConstructionError):
        reference.validator({"type": 12}, _opts())
    with pytest.raises(SchemaConstructionError):
        reference.validator("not a schema", _opts())


def test_error_details_follow_variant():
    schema = {"type": "object", "required": ["a", "b"]}

    plain = reference.validator(schema, _opts())
    assert plain({}) is False
    assert plain.errors is None

    first = reference.validator(schema, _opts(include_errors=True))
    assert first({}) is False
    assert len(first.errors) == 1

    every = reference.validator(schema, _opts(include_errors=True, all_errors=True))
    assert every({}) is False
    assert len(every.errors) == 2
    assert {"keywordLocation", "instanceLocation", "message"} <= set(every.errors[0])

    assert every({"a": 1, "b": 2}) is True
    assert every.errors is None


def test_parse_reports_errors_when_requested():
    parse = reference.parser({"type": "integer"}, _opts(include_errors=True))
    result = parse('"x"')
    assert result["valid"] is False
    assert result["errors"]


def test_remote_ref_resolves_through_registry():
    registry = SchemaRegistry()
    registry.register({"type": "integer"}, uri="http://localhost:1234/integer.json")
    schema = {"$ref": "http://localhost:1234/integer.json"}

    validate = reference.validator(schema, _opts(schemas=registry))
    assert validate(1) is True
    assert validate("a") is False


def test_string_schema_wrapped_as_ref_resolves_by_id():
    registry = SchemaRegistry()
    registry.register({"$id": "http://localhost:1234/ajv/positive.json", "type": "integer", "minimum": 1})
    validate = reference.validator({"$ref": "http://localhost:1234/ajv/positive.json"}, _opts(schemas=registry))
    assert validate(3) is True
    assert validate(0) is False
