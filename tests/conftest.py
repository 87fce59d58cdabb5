from pathlib import Path

import pytest

from apidoc2har.models import DocumentFormat
from apidoc2har.oas.context import OperationContext
from apidoc2har.oas.params import ParameterSampler
from apidoc2har.parser.loader import load_document
from apidoc2har.sampler.sampler import Sampler

FIXTURES = Path(__file__).parent / "fixtures"


def operation_spec(operation: dict, path: str = "/pets", method: str = "get", swagger: bool = False, **extra) -> dict:
    """Wrap a single operation into a minimal OpenAPI document."""
    spec = {"swagger": "2.0"} if swagger else {"openapi": "3.0.3"}
    spec["paths"] = {path: {method: operation}}
    spec.update(extra)
    return spec


@pytest.fixture
def make_ctx():
    def _make(spec: dict, path: str = "/pets", method: str = "get", sampler: Sampler | None = None):
        doc_format = DocumentFormat.OAS2 if "swagger" in spec else DocumentFormat.OAS3
        sampler = sampler or Sampler()
        params = ParameterSampler(spec, doc_format, sampler)
        return OperationContext(spec, doc_format, path, method, params, sampler)

    return _make


@pytest.fixture
def petstore():
    return load_document(FIXTURES / "petstore.yaml")


@pytest.fixture
def petstore_v2():
    return load_document(FIXTURES / "petstore-v2.json")
