# SPDX-License-Identifier: Apache-2.0
"""
Known exceptions to the conformance corpora.

REQUIRES_RELAXED
    Blocks whose schemas the strict engine must reject at construction time.
    They run in relaxed mode, and the executor additionally checks that the
    strict engine refuses them.

UNSUPPORTED
    Files, blocks or cases that are never loaded or run.

Entries are bare identifiers (matched in every suite) or suite-qualified
ones (``<suite>/<identifier>``). See ``schemasuite.identifiers``.
"""

from __future__ import annotations

from typing import FrozenSet


REQUIRES_RELAXED: FrozenSet[str] = frozenset({
    # Keywords that have no effect without a sibling
    "additionalItems.json/items is schema, no additionalItems",
    "additionalItems.json/additionalItems as false without items",
    "additionalItems.json/additionalItems should not look in applicators, valid case",
    "maxContains.json/maxContains without contains is ignored",
    "minContains.json/minContains without contains is ignored",
    "minContains.json/maxContains < minContains",
    "if-then-else.json/if with boolean schema true",
    "if-then-else.json/if with boolean schema false",
    "if-then-else.json/ignore if without then or else",
    "if-then-else.json/ignore then without if",
    "if-then-else.json/ignore else without if",
    "if-then-else.json/non-interference across combined schemas",
    "unevaluatedProperties.json/unevaluatedProperties with nested unevaluatedProperties",
    # Trivial boolean or empty subschemas in applicators
    "not.json/not with boolean schema false",
    "anyOf.json/anyOf with one empty schema",
    "anyOf.json/anyOf with boolean schemas, all true",
    "anyOf.json/anyOf with boolean schemas, some true",
    "oneOf.json/oneOf with boolean schemas, one true",
    "oneOf.json/oneOf with boolean schemas, more than one true",
    "oneOf.json/oneOf with boolean schemas, all false",

    # $ref siblings, changed in draft2019-09
    "draft7/ref.json/escaped pointer ref",
    "draft6/ref.json/escaped pointer ref",
    "draft4/ref.json/escaped pointer ref",
    "draft3/ref.json/escaped pointer ref",
    "ref.json/ref overrides any sibling keywords",

    "draft3/additionalItems.json/additionalItems should not look in applicators",
    "draft3/additionalProperties.json/additionalProperties should not look in applicators",

    "draft2019-09/optional/refOfUnknownKeyword.json/reference of a root arbitrary keyword ",
    "draft2019-09/optional/refOfUnknownKeyword.json/reference of an arbitrary keyword of a sub-schema",
    "draft2019-09/unevaluatedProperties.json/nested unevaluatedProperties, outer true, inner false, properties outside",
    "draft2019-09/unevaluatedProperties.json/nested unevaluatedProperties, outer true, inner false, properties inside",

    # ajv corpora
    "rules/if.json/then/else without if should be ignored",
    "rules/if.json/if without then/else should be ignored",
    "rules/anyOf.json/anyOf with one of schemas empty",
    "schemas/cosmicrealms.json/schema from cosmicrealms benchmark",
    "schemas/advanced.json/advanced schema from z-schema benchmark (https://github.com/zaggino/z-schema)",
    "issues/27_1_recursive_raml_schema.json/JSON Schema for a standard RAML object (#27)",
    "issues/62_resolution_scope_change.json/resolution scope change - change folder (#62)",
    "issues/70_swagger_schema.json/Swagger api schema does not compile (#70)",
})


UNSUPPORTED: FrozenSet[str] = frozenset({
    # Formats
    "format.json/validation of IRIs",
    "format.json/validation of IRI references",
    "format.json/validation of IDN hostnames",
    "format.json/validation of IDN e-mail addresses",
    "optional/format/iri-reference.json",
    "optional/format/iri.json",
    "optional/format/idn-email.json",
    "optional/format/idn-hostname.json",

    "optional/zeroTerminatedFloats.json",

    # draft3 keywords and semantics
    "draft3/extends.json",
    "draft3/disallow.json",
    "draft3/type.json",
    "draft3/required.json",
    "draft3/enum.json/enums in properties",
    "draft3/ref.json/remote ref, containing refs itself",
    "draft3/optional/ecmascript-regex.json/ECMA 262 regex dialect recognition",

    # ajv-only behavior
    "rules/format.json/whitelisted unknown format is valid",
    "rules/format.json/validation of URL strings",
    "rules/format.json/validation of JSON-pointer URI fragment strings",
    "issues/33_json_schema_latest.json/use latest json schema as v4 (#33)",
})
