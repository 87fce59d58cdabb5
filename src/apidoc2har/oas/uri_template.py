"""RFC 6570 URI template expansion, levels 1 to 4.

Used for OpenAPI path (`simple`, `label`, `matrix`) and header (`simple`)
parameter serialization:

    >>> expand("/pets/{;id*}", {"id": [1, 2]})
    '/pets/;id=1;id=2'
"""

import re
from typing import NamedTuple
from urllib.parse import quote

from apidoc2har.encoding import to_text

_EXPRESSION = re.compile(r"\{([^{}]+)\}")
_RESERVED = ":/?#[]@!$&'()*+,;="


class _Operator(NamedTuple):
    first: str
    sep: str
    named: bool
    if_empty: str
    allow_reserved: bool


_OPERATORS = {
    "": _Operator("", ",", False, "", False),
    "+": _Operator("", ",", False, "", True),
    "#": _Operator("#", ",", False, "", True),
    ".": _Operator(".", ".", False, "", False),
    "/": _Operator("/", "/", False, "", False),
    ";": _Operator(";", ";", True, "", False),
    "?": _Operator("?", "&", True, "=", False),
    "&": _Operator("&", "&", True, "=", False),
}


def expand(template: str, values: dict) -> str:
    """Expand every `{...}` expression in `template`; undefined variables expand to nothing."""
    return _EXPRESSION.sub(lambda match: _expand_expression(match.group(1), values), template)


def _expand_expression(expression: str, values: dict) -> str:
    op_char = expression[0] if expression[0] in "+#./;?&" else ""
    op = _OPERATORS[op_char]
    varspecs = expression[len(op_char):].split(",")

    parts = []
    for varspec in varspecs:
        name, explode, prefix = _parse_varspec(varspec)
        expanded = _expand_variable(op, name, values.get(name), explode, prefix)
        if expanded is not None:
            parts.append(expanded)

    return op.first + op.sep.join(parts) if parts else ""


def _parse_varspec(varspec: str) -> tuple[str, bool, int | None]:
    if varspec.endswith("*"):
        return varspec[:-1], True, None
    if ":" in varspec:
        name, _, length = varspec.partition(":")
        return name, False, int(length) if length.isdigit() else None
    return varspec, False, None


def _expand_variable(op: _Operator, name: str, value, explode: bool, prefix: int | None) -> str | None:
    if value is None or value == [] or value == {}:
        return None

    def enc(item) -> str:
        return _encode(to_text(item), op.allow_reserved)

    def named(text: str) -> str:
        if not op.named:
            return text
        return f"{name}={text}" if text else f"{name}{op.if_empty}"

    if isinstance(value, list):
        if explode:
            return op.sep.join(named(enc(item)) for item in value)
        return named(",".join(enc(item) for item in value))

    if isinstance(value, dict):
        if explode:
            return op.sep.join(f"{enc(k)}={enc(v)}" for k, v in value.items())
        return named(",".join(f"{enc(k)},{enc(v)}" for k, v in value.items()))

    text = to_text(value)
    if prefix is not None:
        text = text[:prefix]
    return named(_encode(text, op.allow_reserved))


def _encode(text: str, allow_reserved: bool) -> str:
    return quote(text, safe=_RESERVED if allow_reserved else "")
