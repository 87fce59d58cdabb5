"""Auto-detect the format of a loaded API description."""

from apidoc2har.errors import UnsupportedFormatError
from apidoc2har.models import DocumentFormat

POSTMAN_SCHEMA_HOST = "schema.getpostman.com"


def detect_format(document) -> DocumentFormat:
    """Detect whether `document` is OpenAPI v2, OpenAPI v3 or a Postman collection."""
    if isinstance(document, dict):
        if "openapi" in document:
            return DocumentFormat.OAS3
        if "swagger" in document:
            return DocumentFormat.OAS2

        info = document.get("info")
        if isinstance(info, dict):
            if "_postman_id" in info or POSTMAN_SCHEMA_HOST in str(info.get("schema", "")):
                return DocumentFormat.POSTMAN
            if "item" in document:
                return DocumentFormat.POSTMAN

    raise UnsupportedFormatError(
        "Cannot detect document format: expected OpenAPI v2/v3 or a Postman collection"
    )
