"""Data models shared by the converters.

Sampled parameters, request body fragments and the HAR request shapes
they are assembled into.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentFormat(str, Enum):
    OAS2 = "oas2"
    OAS3 = "oas3"
    POSTMAN = "postman"


class Location(str, Enum):
    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"
    BODY = "body"


class LocationParam(BaseModel):
    """A declared parameter paired with its value and where that value lives."""

    model_config = ConfigDict(frozen=True)

    param: dict
    value: Any = None
    value_json_pointer: str


class RequestBodyParam(BaseModel):
    """One request body candidate for a single media type."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    value: Any = None
    value_json_pointer: str


class _HarModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Header(_HarModel):
    name: str
    value: str


class QueryString(_HarModel):
    name: str
    value: str


class Cookie(_HarModel):
    name: str
    value: str


class PostDataParam(_HarModel):
    name: str
    value: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")
    content_type: str | None = Field(default=None, alias="contentType")


class PostData(_HarModel):
    mime_type: str = Field(alias="mimeType")
    text: str = ""
    params: list[PostDataParam] | None = None


class Request(_HarModel):
    """A HAR 1.2 request record."""

    method: str
    url: str
    http_version: str = Field(default="HTTP/1.1", alias="httpVersion")
    headers: list[Header] = []
    query_string: list[QueryString] = Field(default=[], alias="queryString")
    cookies: list[Cookie] = []
    post_data: PostData | None = Field(default=None, alias="postData")
    headers_size: int = Field(default=-1, alias="headersSize")
    body_size: int = Field(default=-1, alias="bodySize")

    def to_har(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ConversionFailure(BaseModel):
    location: str  # "GET /pets" or a Postman item pointer
    message: str
    error_type: str


class ConversionResult(BaseModel):
    requests: list[Request] = []
    failures: list[ConversionFailure] = []
