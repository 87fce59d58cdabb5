"""Everything a location converter needs to know about one operation."""

from dataclasses import dataclass

from apidoc2har.models import DocumentFormat, LocationParam
from apidoc2har.oas.params import ParameterSampler
from apidoc2har.pointer import compile_pointer
from apidoc2har.sampler.policy import SamplingPolicy
from apidoc2har.sampler.sampler import Sampler


@dataclass
class OperationContext:
    spec: dict
    doc_format: DocumentFormat
    path: str
    method: str
    params: ParameterSampler
    sampler: Sampler

    @property
    def path_item(self) -> dict:
        return self.spec["paths"][self.path]

    @property
    def operation(self) -> dict:
        return self.path_item[self.method]

    @property
    def policy(self) -> SamplingPolicy:
        return self.sampler.policy

    @property
    def is_oas2(self) -> bool:
        return self.doc_format is DocumentFormat.OAS2

    def pointer(self, *tokens) -> str:
        return compile_pointer(["paths", self.path, self.method, *tokens])

    def location_params(self, location: str) -> list[LocationParam]:
        return self.params.sample_location_params(self.path, self.method, location)

    def security_schemes(self) -> list[dict]:
        """Schemes of the first security requirement that applies to the operation."""
        requirements = self.operation.get("security", self.spec.get("security"))
        if not requirements:
            return []

        if self.is_oas2:
            definitions = self.spec.get("securityDefinitions") or {}
        else:
            definitions = (self.spec.get("components") or {}).get("securitySchemes") or {}

        return [definitions[name] for name in requirements[0] if name in definitions]
