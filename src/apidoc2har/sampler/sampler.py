"""Schema sampler.

Produces one deterministic example value for a dereferenced JSON Schema
node. Explicit values declared by the document (`const`, `example`,
`default`, `examples`, `enum`) win over values generated from constraints.
"""

import logging
from typing import Any

from apidoc2har.errors import SamplingError
from apidoc2har.sampler.numeric import read_count, sample_number
from apidoc2har.sampler.policy import SamplingPolicy
from apidoc2har.sampler.strings import sample_string

logger = logging.getLogger(__name__)

NUMERIC_KEYWORDS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf")
STRING_KEYWORDS = ("minLength", "maxLength", "pattern", "format")

_LOWER_BOUNDS = ("minimum", "minLength", "minItems", "minProperties")
_UPPER_BOUNDS = ("maximum", "maxLength", "maxItems", "maxProperties")


class Sampler:
    """Samples schema nodes according to a SamplingPolicy."""

    def __init__(self, policy: SamplingPolicy | None = None):
        self.policy = policy or SamplingPolicy()

    def sample(self, schema: dict | None) -> Any:
        """Return one value satisfying `schema`, or raise SamplingError."""
        return self._sample(schema or {}, 0, frozenset())

    def _sample(self, schema: dict, depth: int, seen: frozenset) -> Any:
        if not isinstance(schema, dict):
            return None
        if id(schema) in seen or depth > self.policy.max_depth:
            logger.debug("Stopped sampling at a circular or too deep schema (depth %d)", depth)
            return None
        seen = seen | {id(schema)}

        if "const" in schema:
            return schema["const"]
        if schema.get("example") is not None:
            return schema["example"]
        if schema.get("default") is not None:
            return schema["default"]
        examples = schema.get("examples")
        if isinstance(examples, list) and examples:
            return examples[0]
        enum = schema.get("enum")
        if isinstance(enum, list) and enum:
            return enum[0]

        if schema.get("allOf"):
            return self._sample(merge_all_of(schema), depth + 1, seen)

        for keyword in ("oneOf", "anyOf"):
            options = schema.get(keyword)
            if options:
                siblings = {k: v for k, v in schema.items() if k != keyword}
                return self._sample(merge_schemas(siblings, options[0]), depth + 1, seen)

        schema_type = infer_type(schema)
        if schema_type == "object":
            return self._sample_object(schema, depth, seen)
        if schema_type == "array":
            return self._sample_array(schema, depth, seen)
        if schema_type == "string":
            return sample_string(schema, self.policy)
        if schema_type in ("integer", "number"):
            return sample_number(schema, schema_type, self.policy)
        if schema_type == "boolean":
            return self.policy.default_boolean
        return None

    def _sample_object(self, schema: dict, depth: int, seen: frozenset) -> dict:
        required = schema.get("required")
        required = set(required) if isinstance(required, list) else set()
        properties = schema.get("properties") or {}

        result = {}
        for name, prop in properties.items():
            if not isinstance(prop, dict):
                continue
            if name not in required and not self.policy.include_optional_properties:
                continue
            if self.policy.skip_read_only and prop.get("readOnly"):
                continue
            result[name] = self._sample(prop, depth + 1, seen)

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict) and not properties and self.policy.include_optional_properties:
            result["property1"] = self._sample(additional, depth + 1, seen)

        return result

    def _sample_array(self, schema: dict, depth: int, seen: frozenset) -> list:
        min_items = read_count(schema, "minItems")
        max_items = read_count(schema, "maxItems")
        if min_items is not None and max_items is not None and min_items > max_items:
            raise SamplingError(
                f"Cannot sample array by boundaries: {min_items} <= length <= {max_items}"
            )

        length = min_items if min_items is not None else self.policy.default_array_length
        if max_items is not None:
            length = min(length, max_items)

        items = schema.get("items")
        if isinstance(items, list):
            items = items[0] if items else {}
        if not isinstance(items, dict):
            items = {}

        return [self._sample(items, depth + 1, seen) for _ in range(length)]


def infer_type(schema: dict) -> str | None:
    """Resolve the schema type, guessing from keywords when `type` is absent."""
    declared = schema.get("type")
    if isinstance(declared, list):
        candidates = [t for t in declared if t != "null"]
        if candidates:
            return candidates[0]
        return "null" if declared else None
    if declared:
        return declared

    if "properties" in schema or "additionalProperties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    if any(key in schema for key in NUMERIC_KEYWORDS):
        return "number"
    if any(key in schema for key in STRING_KEYWORDS):
        return "string"
    return None


def merge_all_of(schema: dict, seen: frozenset = frozenset()) -> dict:
    """Fold the `allOf` members of `schema` into a single schema."""
    seen = seen | {id(schema)}
    merged = {k: v for k, v in schema.items() if k != "allOf"}
    for member in schema.get("allOf") or []:
        if not isinstance(member, dict) or id(member) in seen:
            continue
        if member.get("allOf"):
            member = merge_all_of(member, seen)
        merged = merge_schemas(merged, member)
    return merged


def merge_schemas(base: dict, extra: dict) -> dict:
    """Combine two schemas: properties and required are unioned, bounds tightened."""
    result = dict(base)
    for key, value in extra.items():
        current = result.get(key)
        if key == "properties" and isinstance(current, dict) and isinstance(value, dict):
            result[key] = {**current, **value}
        elif key == "required" and isinstance(current, list) and isinstance(value, list):
            result[key] = list(dict.fromkeys([*current, *value]))
        elif key in _LOWER_BOUNDS and _both_numbers(current, value):
            result[key] = max(current, value)
        elif key in _UPPER_BOUNDS and _both_numbers(current, value):
            result[key] = min(current, value)
        else:
            result[key] = value
    return result


def _both_numbers(a, b) -> bool:
    return all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in (a, b))
