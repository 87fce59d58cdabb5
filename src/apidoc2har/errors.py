"""Errors raised while turning an API description into HAR requests.

Every error raised for a single operation derives from ConversionError,
so the converter can skip that operation and keep going.
"""


class ConversionError(Exception):
    """Base class for failures local to one operation or request item."""


class SamplingError(ConversionError):
    """The schema constraints admit no value."""


class UndefinedVariableError(ConversionError):
    """A template token has no binding anywhere in the scope chain."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: `{name}`")
        self.name = name


class CyclicVariableError(ConversionError):
    """A template token refers back to itself through other variables."""

    def __init__(self, chain: list[str]):
        path = " -> ".join(f"`{name}`" for name in chain)
        super().__init__(f"Cyclic variable reference: {path}")
        self.chain = chain


class InvalidDocumentError(Exception):
    """The document could not be loaded or did not pass validation."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class UnsupportedFormatError(Exception):
    """The document is neither OpenAPI v2/v3 nor a Postman collection."""
