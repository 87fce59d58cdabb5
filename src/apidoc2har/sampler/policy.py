"""Sampling policy: every constant the sampler and converters fall back to.

A policy can be loaded from YAML to override any of the defaults:

    default_number: 7
    include_optional_properties: false
    formats:
      date-time: "2024-01-01T00:00:00Z"
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from apidoc2har.errors import InvalidDocumentError

DEFAULT_FORMATS = {
    "date-time": "2019-08-24T14:15:22Z",
    "date": "2019-08-24",
    "time": "14:15:22Z",
    "duration": "P3D",
    "email": "user@example.com",
    "idn-email": "user@example.com",
    "hostname": "example.com",
    "idn-hostname": "example.com",
    "ipv4": "192.168.0.1",
    "ipv6": "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    "uri": "http://example.com",
    "uri-reference": "../dictionary",
    "iri": "http://example.com/entity/1",
    "iri-reference": "/entity/1",
    "uri-template": "http://example.com/{endpoint}",
    "uuid": "095be615-a8ad-4c33-8e9c-c7612fbf6c9f",
    "json-pointer": "/json/pointer",
    "relative-json-pointer": "1/relative/json/pointer",
    "regex": "/regex/",
    "password": "pa$$word",
    "byte": "ZXhhbXBsZQ==",
    "binary": "",
}


class SamplingPolicy(BaseModel):
    """Named defaults used when a schema leaves a choice open."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_number: int | float = 42
    number_epsilon: float = 0.001
    default_string: str = "lorem"
    default_boolean: bool = True
    default_array_length: int = 1
    include_optional_properties: bool = True
    skip_read_only: bool = True
    max_depth: int = 12
    formats: dict[str, str] = DEFAULT_FORMATS

    api_key: str = "api_key"
    basic_credentials: str = "user:password"
    bearer_token: str = "token"
    default_base_url: str = "https://example.com"


def load_policy(file_path: Path) -> SamplingPolicy:
    """Load a SamplingPolicy from a YAML file; missing keys keep their defaults."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise InvalidDocumentError(f"Cannot parse policy file {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidDocumentError(f"Policy file {file_path} must contain a mapping")

    if "formats" in data:
        data["formats"] = {**DEFAULT_FORMATS, **(data["formats"] or {})}

    try:
        return SamplingPolicy(**data)
    except ValidationError as e:
        raise InvalidDocumentError(f"Invalid policy file {file_path}: {e}") from e
