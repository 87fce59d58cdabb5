"""Parameter extraction: declared parameters paired with sampled values."""

from apidoc2har.models import DocumentFormat, LocationParam
from apidoc2har.oas.variants import get_variant
from apidoc2har.pointer import compile_pointer
from apidoc2har.sampler.sampler import Sampler

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# OAS v2 form fields travel in the request body
_LOCATION_ALIASES = {"formData": "body"}


def normalize_location(location: str | None) -> str | None:
    return _LOCATION_ALIASES.get(location, location)


def get_parameters(spec: dict, path: str, method: str) -> list[tuple[dict, str]]:
    """Merge path-level and operation-level parameters, each with its JSON pointer.

    Operation-level parameters replace path-level ones with the same name and location.
    """
    path_item = (spec.get("paths") or {}).get(path) or {}
    operation = path_item.get(method) or {}

    merged: dict[tuple, tuple[dict, str]] = {}
    for owner, params in (
        (["paths", path], path_item.get("parameters")),
        (["paths", path, method], operation.get("parameters")),
    ):
        for idx, param in enumerate(params or []):
            if not isinstance(param, dict):
                continue
            pointer = compile_pointer([*owner, "parameters", idx])
            merged[(param.get("name"), param.get("in"))] = (param, pointer)

    return list(merged.values())


def filter_location_params(params: list[dict], location: str) -> list[dict]:
    """Keep the named parameters declared in `location`, in declaration order."""
    return [
        p for p in params
        if isinstance(p.get("name"), str) and p["name"] and normalize_location(p.get("in")) == location
    ]


class ParameterSampler:
    """Samples the parameters of one document, using its format's value sources."""

    def __init__(self, spec: dict, doc_format: DocumentFormat, sampler: Sampler):
        self.spec = spec
        self.variant = get_variant(doc_format)
        self.sampler = sampler

    def sample_location_params(self, path: str, method: str, location: str) -> list[LocationParam]:
        pairs = get_parameters(self.spec, path, method)
        pointers = {id(param): pointer for param, pointer in pairs}
        params = filter_location_params([param for param, _ in pairs], location)
        return [self.sample_param(param, pointers[id(param)]) for param in params]

    def sample_param(self, param: dict, pointer: str) -> LocationParam:
        value = self.variant.get_parameter_value(param)
        if value is None:
            value = self.sampler.sample(self.variant.get_schema(param))
        return LocationParam(
            param=param,
            value=value,
            value_json_pointer=self.variant.get_value_json_pointer(pointer),
        )
