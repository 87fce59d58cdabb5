"""Top-level conversion of an API description into HAR requests.

Each operation (OpenAPI path + method, or Postman request item) converts
independently: a ConversionError skips that operation only and is reported
in the result's failures.
"""

import logging
from typing import Callable, Iterable, Mapping, Protocol

from apidoc2har.errors import ConversionError, InvalidDocumentError
from apidoc2har.models import ConversionFailure, ConversionResult, DocumentFormat, Request
from apidoc2har.oas.converter import OasConverter
from apidoc2har.parser.detect import detect_format
from apidoc2har.postman.converter import PostmanConverter
from apidoc2har.postman.generators import Generator
from apidoc2har.sampler.policy import SamplingPolicy
from apidoc2har.sampler.sampler import Sampler
from apidoc2har.validator import Validator

logger = logging.getLogger(__name__)


class OperationSource(Protocol):
    def operations(self) -> Iterable[tuple[str, Callable[[], Request]]]: ...


class Converter:
    def __init__(
        self,
        policy: SamplingPolicy | None = None,
        generators: Mapping[str, Generator] | None = None,
        validator: Validator | None = None,
    ):
        self.sampler = Sampler(policy)
        self.generators = generators
        self.validator = validator

    def convert(
        self,
        document: dict,
        environment=None,
        global_variables=None,
        doc_format: DocumentFormat | None = None,
    ) -> ConversionResult:
        """Convert every operation of `document`, collecting per-operation failures."""
        doc_format = doc_format or detect_format(document)

        if self.validator is not None:
            errors = self.validator.verify(document)
            if errors:
                raise InvalidDocumentError(f"Document has {len(errors)} validation error(s)", errors)

        source = self._create_source(document, doc_format, environment, global_variables)
        result = ConversionResult()
        for label, convert in source.operations():
            try:
                result.requests.append(convert())
            except ConversionError as e:
                logger.warning("Skipping %s: %s", label, e)
                result.failures.append(
                    ConversionFailure(location=label, message=str(e), error_type=type(e).__name__)
                )

        logger.info(
            "Converted %d request(s) from %s document, skipped %d",
            len(result.requests),
            doc_format.value,
            len(result.failures),
        )
        return result

    def _create_source(self, document, doc_format, environment, global_variables) -> OperationSource:
        if doc_format is DocumentFormat.POSTMAN:
            return PostmanConverter(document, self.generators, environment, global_variables)
        return OasConverter(document, doc_format, self.sampler)


def convert(document: dict, **kwargs) -> list[Request]:
    """Convert `document` with the default policy, returning only the requests."""
    return Converter().convert(document, **kwargs).requests
