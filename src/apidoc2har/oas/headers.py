"""Header converter: media type negotiation, header parameters and credentials."""

import base64
from urllib.parse import unquote

from apidoc2har.encoding import to_text
from apidoc2har.models import Header, Location, LocationParam, PostData
from apidoc2har.oas.context import OperationContext
from apidoc2har.oas.query import OAS2_DELIMITERS
from apidoc2har.oas.uri_template import expand

BEARER_SCHEME_TYPES = ("oauth2", "openIdConnect")


def convert_headers(ctx: OperationContext, post_data: PostData | None = None) -> list[Header]:
    headers = []
    if post_data is not None:
        headers.append(Header(name="content-type", value=post_data.mime_type))
    headers.extend(create_accept_headers(ctx))
    headers.extend(_convert_header_param(ctx, p) for p in ctx.location_params(Location.HEADER))
    headers.extend(create_security_headers(ctx))
    return headers


def create_accept_headers(ctx: OperationContext) -> list[Header]:
    """Accept header from the media types of the lowest numeric response status."""
    responses = ctx.operation.get("responses")
    if not isinstance(responses, dict):
        return []

    codes = [int(code) for code in responses if str(code).isdigit()]
    if not codes:
        return []
    lowest = min(codes)

    if ctx.is_oas2:
        media_types = ctx.operation.get("produces", ctx.spec.get("produces")) or []
    else:
        response = responses.get(str(lowest), responses.get(lowest))
        content = response.get("content") if isinstance(response, dict) else None
        media_types = list(content) if isinstance(content, dict) else []

    return [Header(name="accept", value=media_types[0])] if media_types else []


def create_security_headers(ctx: OperationContext) -> list[Header]:
    headers = []
    for scheme in ctx.security_schemes():
        header = _parse_security_scheme(ctx, scheme)
        if header is not None:
            headers.append(header)
    return headers


def _parse_security_scheme(ctx: OperationContext, scheme: dict) -> Header | None:
    scheme_type = scheme.get("type")

    if scheme_type == "apiKey":
        if scheme.get("in") == "header" and scheme.get("name"):
            return Header(name=scheme["name"], value=ctx.policy.api_key)
        return None

    # OAS v2 declares `type: basic`, OAS v3 `type: http` with a `scheme`
    http_scheme = scheme_type if scheme_type == "basic" else str(scheme.get("scheme", "")).lower()
    if http_scheme == "basic":
        credentials = base64.b64encode(ctx.policy.basic_credentials.encode()).decode()
        return Header(name="authorization", value=f"Basic {credentials}")
    if http_scheme == "bearer" or scheme_type in BEARER_SCHEME_TYPES:
        return Header(name="authorization", value=f"Bearer {ctx.policy.bearer_token}")
    return None


def _convert_header_param(ctx: OperationContext, location_param: LocationParam) -> Header:
    param, value = location_param.param, location_param.value

    if ctx.is_oas2:
        if isinstance(value, list):
            delimiter = OAS2_DELIMITERS.get(param.get("collectionFormat", "csv"), ",")
            return Header(name=param["name"], value=delimiter.join(to_text(v) for v in value))
        return Header(name=param["name"], value=to_text(value))

    template = "{x*}" if param.get("explode") else "{x}"
    return Header(name=param["name"], value=unquote(expand(template, {"x": value})))
