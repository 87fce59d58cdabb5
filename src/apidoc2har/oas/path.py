"""Path converter: substitutes `{name}` tokens of the path template."""

from apidoc2har.encoding import to_text
from apidoc2har.models import Location, LocationParam
from apidoc2har.oas.context import OperationContext
from apidoc2har.oas.query import OAS2_DELIMITERS
from apidoc2har.oas.uri_template import expand

STYLE_OPERATORS = {"simple": "", "label": ".", "matrix": ";"}


def convert_path(ctx: OperationContext) -> str:
    path = ctx.path
    for location_param in ctx.location_params(Location.PATH):
        token = "{" + location_param.param["name"] + "}"
        path = path.replace(token, _serialize(ctx, location_param))
    return path


def _serialize(ctx: OperationContext, location_param: LocationParam) -> str:
    param, value = location_param.param, location_param.value

    if ctx.is_oas2:
        collection_format = param.get("collectionFormat", "csv")
        if isinstance(value, list) and collection_format != "csv":
            delimiter = OAS2_DELIMITERS.get(collection_format, ",")
            value = delimiter.join(to_text(v) for v in value)
        return expand("{x}", {"x": value})

    operator = STYLE_OPERATORS.get(param.get("style", "simple"), "")
    # matrix style names the value after the parameter itself
    name = param["name"] if operator == ";" else "x"
    template = "{" + operator + name + ("*" if param.get("explode") else "") + "}"
    return expand(template, {name: value})
