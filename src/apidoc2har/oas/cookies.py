"""Cookie converter."""

from apidoc2har.encoding import to_text
from apidoc2har.models import Cookie, Header, Location
from apidoc2har.oas.context import OperationContext


def convert_cookies(ctx: OperationContext) -> list[Cookie]:
    cookies = []
    for location_param in ctx.location_params(Location.COOKIE):
        value = location_param.value
        if isinstance(value, list):
            text = ",".join(to_text(v) for v in value)
        elif isinstance(value, dict):
            text = ",".join(t for k, v in value.items() for t in (k, to_text(v)))
        else:
            text = to_text(value)
        cookies.append(Cookie(name=location_param.param["name"], value=text))

    for scheme in ctx.security_schemes():
        if scheme.get("type") == "apiKey" and scheme.get("in") == "cookie" and scheme.get("name"):
            cookies.append(Cookie(name=scheme["name"], value=ctx.policy.api_key))

    return cookies


def cookie_header(cookies: list[Cookie]) -> Header | None:
    if not cookies:
        return None
    return Header(name="cookie", value="; ".join(f"{c.name}={c.value}" for c in cookies))
