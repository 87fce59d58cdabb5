"""Request body converter.

Every declared request media type yields one RequestBodyParam; the first
one becomes the HAR postData.
"""

from apidoc2har.encoding import (
    MULTIPART_FORM_DATA,
    encode_body,
    encode_multipart,
    encode_urlencoded,
    to_text,
)
from apidoc2har.models import Location, PostData, PostDataParam, RequestBodyParam
from apidoc2har.oas.context import OperationContext
from apidoc2har.oas.params import get_parameters

DEFAULT_MEDIA_TYPE = "application/json"


def convert_body(ctx: OperationContext) -> PostData | None:
    if ctx.is_oas2:
        form = _oas2_form_data(ctx)
        if form is not None:
            return form

    fragments = body_params(ctx)
    if not fragments:
        return None
    first = fragments[0]
    return encode_body(first.mime_type, first.value)


def body_params(ctx: OperationContext) -> list[RequestBodyParam]:
    if ctx.is_oas2:
        return _oas2_body_params(ctx)
    return _oas3_body_params(ctx)


def _oas3_body_params(ctx: OperationContext) -> list[RequestBodyParam]:
    request_body = ctx.operation.get("requestBody")
    content = request_body.get("content") if isinstance(request_body, dict) else None
    if not isinstance(content, dict):
        return []

    fragments = []
    for mime_type, media in content.items():
        media = media if isinstance(media, dict) else {}
        example = _media_example(media)
        if example is not None:
            value, pointer = example, ctx.pointer("requestBody", "content", mime_type, "example")
        else:
            value = ctx.sampler.sample(media.get("schema"))
            pointer = ctx.pointer("requestBody", "content", mime_type, "schema")
        fragments.append(RequestBodyParam(mime_type=mime_type, value=value, value_json_pointer=pointer))
    return fragments


def _media_example(media: dict):
    if media.get("example") is not None:
        return media["example"]
    examples = media.get("examples")
    if isinstance(examples, dict):
        for example in examples.values():
            if isinstance(example, dict) and example.get("value") is not None:
                return example["value"]
    return None


def _oas2_consumes(ctx: OperationContext) -> list[str]:
    return ctx.operation.get("consumes", ctx.spec.get("consumes")) or []


def _oas2_body_params(ctx: OperationContext) -> list[RequestBodyParam]:
    """Expand the legacy `in: body` parameter into one fragment per consumed media type."""
    for param, pointer in get_parameters(ctx.spec, ctx.path, ctx.method):
        if param.get("in") != "body":
            continue
        schema = param.get("schema") or {}
        value = schema.get("default")
        if value is None:
            value = ctx.sampler.sample(schema)
        return [
            RequestBodyParam(mime_type=mime_type, value=value, value_json_pointer=f"{pointer}/schema/default")
            for mime_type in _oas2_consumes(ctx) or [DEFAULT_MEDIA_TYPE]
        ]
    return []


def _oas2_form_data(ctx: OperationContext) -> PostData | None:
    fields = [p for p in ctx.location_params(Location.BODY) if p.param.get("in") == "formData"]
    if not fields:
        return None

    if MULTIPART_FORM_DATA in _oas2_consumes(ctx):
        params = []
        for field in fields:
            if field.param.get("type") == "file":
                params.append(PostDataParam(name=field.param["name"], value="", file_name=field.param["name"]))
            else:
                params.append(PostDataParam(name=field.param["name"], value=to_text(field.value)))
        return encode_multipart(params)

    return encode_urlencoded([(field.param["name"], to_text(field.value)) for field in fields])
