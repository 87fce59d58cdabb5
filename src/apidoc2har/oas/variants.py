"""Where each OpenAPI version keeps a parameter's explicit value and schema.

OAS v2 stores the schema keywords inline on the parameter and its value in
`default`; OAS v3 nests them under `schema` and prefers `example`. The
variant is chosen once per document from its DocumentFormat.
"""

from dataclasses import dataclass
from typing import Any, Callable

from apidoc2har.errors import UnsupportedFormatError
from apidoc2har.models import DocumentFormat

# Parameter Object fields that are not schema keywords in OAS v2
_OAS2_PARAMETER_FIELDS = ("name", "in", "description", "required", "allowEmptyValue", "collectionFormat")


@dataclass(frozen=True)
class ParameterVariant:
    value_key: str
    get_parameter_value: Callable[[dict], Any]
    get_schema: Callable[[dict], dict]

    def get_value_json_pointer(self, param_pointer: str) -> str:
        return f"{param_pointer}/{self.value_key}"


def _oas2_value(param: dict):
    if param.get("default") is not None:
        return param["default"]
    items = param.get("items")
    return items.get("default") if isinstance(items, dict) else None


def _oas2_schema(param: dict) -> dict:
    if param.get("in") == "body":
        return param.get("schema") or {}
    return {k: v for k, v in param.items() if k not in _OAS2_PARAMETER_FIELDS}


def _oas3_value(param: dict):
    if param.get("example") is not None:
        return param["example"]

    examples = param.get("examples")
    if isinstance(examples, dict):
        for example in examples.values():
            if isinstance(example, dict) and example.get("value") is not None:
                return example["value"]

    schema = param.get("schema")
    if isinstance(schema, dict) and schema.get("default") is not None:
        return schema["default"]
    return None


def _oas3_schema(param: dict) -> dict:
    if isinstance(param.get("schema"), dict):
        return param["schema"]
    # parameters may describe themselves through a single media type instead
    for media in (param.get("content") or {}).values():
        if isinstance(media, dict):
            return media.get("schema") or {}
    return {}


VARIANTS: dict[DocumentFormat, ParameterVariant] = {
    DocumentFormat.OAS2: ParameterVariant("default", _oas2_value, _oas2_schema),
    DocumentFormat.OAS3: ParameterVariant("example", _oas3_value, _oas3_schema),
}


def get_variant(doc_format: DocumentFormat) -> ParameterVariant:
    try:
        return VARIANTS[doc_format]
    except KeyError:
        raise UnsupportedFormatError(f"No parameter variant for {doc_format}") from None
