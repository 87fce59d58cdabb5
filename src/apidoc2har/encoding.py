"""Turning sampled values into HAR string values and request bodies."""

import json
from urllib.parse import quote, urlencode
from xml.etree import ElementTree

from apidoc2har.models import PostData, PostDataParam

MULTIPART_BOUNDARY = "956888039105887155673143"

FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM_DATA = "multipart/form-data"


def to_text(value) -> str:
    """Render a scalar the way it appears on the wire; structures become JSON."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def encode_body(mime_type: str, value) -> PostData:
    """Encode `value` as the body text for `mime_type`."""
    essence = mime_type.split(";")[0].strip().lower()

    if _is_json(essence):
        return PostData(mime_type=mime_type, text=json.dumps(value, ensure_ascii=False))
    if essence == FORM_URLENCODED:
        return encode_urlencoded(_form_pairs(value))
    if essence == MULTIPART_FORM_DATA:
        return encode_multipart([PostDataParam(name=k, value=v) for k, v in _form_pairs(value)])
    if essence.endswith("/xml") or essence.endswith("+xml"):
        return PostData(mime_type=mime_type, text=encode_xml(value))
    return PostData(mime_type=mime_type, text=to_text(value))


def encode_urlencoded(pairs: list[tuple[str, str]]) -> PostData:
    return PostData(
        mime_type=FORM_URLENCODED,
        text=urlencode(pairs, quote_via=quote),
        params=[PostDataParam(name=k, value=v) for k, v in pairs],
    )


def encode_multipart(params: list[PostDataParam]) -> PostData:
    lines = []
    for param in params:
        disposition = f'Content-Disposition: form-data; name="{param.name}"'
        lines.append(f"--{MULTIPART_BOUNDARY}")
        if param.file_name is not None:
            lines.append(f'{disposition}; filename="{param.file_name}"')
            lines.append(f"Content-Type: {param.content_type or 'application/octet-stream'}")
        else:
            lines.append(disposition)
        lines.append("")
        lines.append(param.value or "")
    lines.append(f"--{MULTIPART_BOUNDARY}--")

    return PostData(
        mime_type=f"{MULTIPART_FORM_DATA}; boundary={MULTIPART_BOUNDARY}",
        text="\r\n".join(lines) + "\r\n",
        params=params,
    )


def encode_xml(value, root: str = "root") -> str:
    element = _xml_element(root, value)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ElementTree.tostring(element, encoding="unicode")


def _xml_element(tag: str, value) -> ElementTree.Element:
    element = ElementTree.Element(tag)
    if isinstance(value, dict):
        for key, child in value.items():
            # arrays repeat the property element
            for item in child if isinstance(child, list) else [child]:
                element.append(_xml_element(key, item))
    elif isinstance(value, list):
        for item in value:
            element.append(_xml_element("item", item))
    else:
        element.text = to_text(value)
    return element


def _form_pairs(value) -> list[tuple[str, str]]:
    if not isinstance(value, dict):
        return [] if value is None else [("value", to_text(value))]

    pairs = []
    for key, item in value.items():
        if isinstance(item, list):
            pairs.extend((key, to_text(v)) for v in item)
        else:
            pairs.append((key, to_text(item)))
    return pairs


def _is_json(essence: str) -> bool:
    return essence in ("application/json", "text/json") or essence.endswith("+json")
