"""Query string converter."""

from apidoc2har.encoding import to_text
from apidoc2har.models import Location, LocationParam, QueryString
from apidoc2har.oas.context import OperationContext

OAS2_DELIMITERS = {"csv": ",", "ssv": " ", "tsv": "\t", "pipes": "|"}
OAS3_DELIMITERS = {"form": ",", "spaceDelimited": " ", "pipeDelimited": "|"}


def convert_query(ctx: OperationContext) -> list[QueryString]:
    result = []
    for location_param in ctx.location_params(Location.QUERY):
        if ctx.is_oas2:
            result.extend(_serialize_oas2(location_param))
        else:
            result.extend(_serialize_oas3(location_param))

    for scheme in ctx.security_schemes():
        if scheme.get("type") == "apiKey" and scheme.get("in") == "query" and scheme.get("name"):
            result.append(QueryString(name=scheme["name"], value=ctx.policy.api_key))

    return result


def _serialize_oas2(location_param: LocationParam) -> list[QueryString]:
    param = location_param.param
    collection_format = param.get("collectionFormat", "csv")
    return query_pairs(
        param["name"],
        location_param.value,
        explode=collection_format == "multi",
        delimiter=OAS2_DELIMITERS.get(collection_format, ","),
    )


def _serialize_oas3(location_param: LocationParam) -> list[QueryString]:
    param, value = location_param.param, location_param.value
    style = param.get("style", "form")
    explode = param.get("explode", style == "form")

    if style == "deepObject" and isinstance(value, dict):
        return [QueryString(name=f"{param['name']}[{k}]", value=to_text(v)) for k, v in value.items()]

    return query_pairs(param["name"], value, explode, OAS3_DELIMITERS.get(style, ","))


def query_pairs(name: str, value, explode: bool, delimiter: str = ",") -> list[QueryString]:
    """Serialize one parameter value into query pairs.

    Exploded arrays repeat the name and exploded objects use their own keys;
    otherwise items are joined by `delimiter`.
    """
    if isinstance(value, list):
        if explode:
            return [QueryString(name=name, value=to_text(item)) for item in value]
        return [QueryString(name=name, value=delimiter.join(to_text(item) for item in value))]

    if isinstance(value, dict):
        if explode:
            return [QueryString(name=k, value=to_text(v)) for k, v in value.items()]
        flat = [text for k, v in value.items() for text in (k, to_text(v))]
        return [QueryString(name=name, value=delimiter.join(flat))]

    return [QueryString(name=name, value=to_text(value))]
