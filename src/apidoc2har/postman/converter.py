"""Postman Collection v2.0/v2.1 converter: one HAR request per request item."""

import base64
import json
import logging
from functools import partial
from typing import Callable, Iterator, Mapping
from urllib.parse import parse_qsl, quote, urlencode

from apidoc2har.encoding import encode_multipart, encode_urlencoded, to_text
from apidoc2har.models import Header, PostData, PostDataParam, QueryString, Request
from apidoc2har.postman.generators import Generator, default_generators
from apidoc2har.postman.scope import LexicalScope
from apidoc2har.postman.variables import create_env_variable_parser, create_url_variable_parser

logger = logging.getLogger(__name__)

RAW_LANGUAGE_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "html": "text/html",
    "javascript": "application/javascript",
    "text": "text/plain",
}


class PostmanConverter:
    """Converts the request items of a Postman collection.

    Variables resolve through collection -> folder -> item -> environment
    scopes, innermost first; global variables are the last resort.
    """

    def __init__(
        self,
        collection: dict,
        generators: Mapping[str, Generator] | None = None,
        environment=None,
        global_variables=None,
    ):
        self.collection = collection
        self.generators = generators if generators is not None else default_generators()
        self.environment = environment
        self.env_parser = create_env_variable_parser(global_variables or (), self.generators)

    def operations(self) -> Iterator[tuple[str, Callable[[], Request]]]:
        root = LexicalScope("", self.collection.get("variable") or [])
        for pointer, item, scope, auth in self._walk(
            self.collection.get("item") or [], "/item", root, self.collection.get("auth")
        ):
            label = f"{item.get('name') or pointer} ({pointer})"
            yield label, partial(self.convert_item, item, scope, auth)

    def _walk(self, items: list, pointer: str, scope: LexicalScope, auth: dict | None) -> Iterator:
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            item_pointer = f"{pointer}/{idx}"
            item_scope = scope.child(item_pointer, item["variable"]) if item.get("variable") else scope
            item_auth = item.get("auth") or auth

            if "item" in item:
                yield from self._walk(item["item"] or [], f"{item_pointer}/item", item_scope, item_auth)
            elif "request" in item:
                if self.environment:
                    item_scope = item_scope.child("environment", self.environment)
                yield item_pointer, item, item_scope, item_auth

    def convert_item(self, item: dict, scope: LexicalScope, inherited_auth: dict | None = None) -> Request:
        request = item["request"]
        if isinstance(request, str):
            request = {"url": request}

        url, query = self._convert_url(request.get("url") or "", scope)
        headers = self._convert_headers(request.get("header"), scope)
        auth_headers, auth_query = self._convert_auth(request.get("auth") or inherited_auth, scope)
        headers.extend(auth_headers)
        query.extend(auth_query)
        post_data = self._convert_body(request.get("body"), scope)

        if post_data is not None and not any(h.name.lower() == "content-type" for h in headers):
            headers.append(Header(name="content-type", value=post_data.mime_type))
        if query:
            url += "?" + urlencode([(q.name, q.value) for q in query], quote_via=quote)

        return Request(
            method=str(request.get("method") or "GET").upper(),
            url=url,
            headers=headers,
            query_string=query,
            post_data=post_data,
        )

    def _parse(self, value, scope: LexicalScope) -> str:
        return self.env_parser.parse(to_text(value), scope)

    def _convert_url(self, url, scope: LexicalScope) -> tuple[str, list[QueryString]]:
        if isinstance(url, str):
            url = {"raw": url}

        if url.get("host"):
            address = _assemble_url(url)
            raw_query = None
        else:
            raw = (url.get("raw") or "").split("#")[0]
            address, _, raw_query = raw.partition("?")

        url_parser = create_url_variable_parser(url.get("variable") or [], self.generators)
        address = self._parse(url_parser.parse(address), scope)
        if "://" not in address:
            address = "http://" + address.lstrip("/")

        if isinstance(url.get("query"), list):
            query = [
                QueryString(name=self._parse(q.get("key") or "", scope), value=self._parse(q.get("value"), scope))
                for q in url["query"]
                if isinstance(q, dict) and not q.get("disabled")
            ]
        else:
            query = [
                QueryString(name=name, value=value)
                for name, value in parse_qsl(self._parse(raw_query or "", scope), keep_blank_values=True)
            ]
        return address, query

    def _convert_headers(self, headers, scope: LexicalScope) -> list[Header]:
        if isinstance(headers, str):
            # v2.0 allows "Name: value" lines
            records = []
            for line in headers.splitlines():
                name, sep, value = line.partition(":")
                if sep:
                    records.append({"key": name.strip(), "value": value.strip()})
            headers = records

        return [
            Header(name=self._parse(h.get("key") or "", scope), value=self._parse(h.get("value"), scope))
            for h in headers or []
            if isinstance(h, dict) and not h.get("disabled")
        ]

    def _convert_auth(self, auth: dict | None, scope: LexicalScope) -> tuple[list[Header], list[QueryString]]:
        auth_type = (auth or {}).get("type")
        if not auth_type or auth_type == "noauth":
            return [], []

        params = {k: self._parse(v, scope) for k, v in _auth_params(auth.get(auth_type)).items()}

        if auth_type == "apikey":
            name, value = params.get("key", ""), params.get("value", "")
            if params.get("in") == "query":
                return [], [QueryString(name=name, value=value)]
            return [Header(name=name, value=value)], []
        if auth_type == "basic":
            credentials = f"{params.get('username', '')}:{params.get('password', '')}"
            token = base64.b64encode(credentials.encode()).decode()
            return [Header(name="authorization", value=f"Basic {token}")], []
        if auth_type == "bearer":
            return [Header(name="authorization", value=f"Bearer {params.get('token', '')}")], []

        logger.debug("Ignoring unsupported auth type %r", auth_type)
        return [], []

    def _convert_body(self, body: dict | None, scope: LexicalScope) -> PostData | None:
        if not isinstance(body, dict) or body.get("disabled"):
            return None
        mode = body.get("mode")

        if mode == "raw":
            language = ((body.get("options") or {}).get("raw") or {}).get("language", "text")
            mime_type = RAW_LANGUAGE_TYPES.get(language, "text/plain")
            return PostData(mime_type=mime_type, text=self._parse(body.get("raw"), scope))

        if mode == "urlencoded":
            pairs = [
                (self._parse(p.get("key") or "", scope), self._parse(p.get("value"), scope))
                for p in body.get("urlencoded") or []
                if isinstance(p, dict) and not p.get("disabled")
            ]
            return encode_urlencoded(pairs)

        if mode == "formdata":
            params = []
            for field in body.get("formdata") or []:
                if not isinstance(field, dict) or field.get("disabled"):
                    continue
                name = self._parse(field.get("key") or "", scope)
                if field.get("type") == "file":
                    src = field.get("src")
                    file_name = (src[0] if isinstance(src, list) and src else src) or name
                    params.append(PostDataParam(name=name, value="", file_name=str(file_name), content_type=field.get("contentType")))
                else:
                    params.append(PostDataParam(name=name, value=self._parse(field.get("value"), scope)))
            return encode_multipart(params)

        if mode == "graphql":
            graphql = body.get("graphql") or {}
            variables = self._parse(graphql.get("variables") or "", scope)
            payload = {"query": self._parse(graphql.get("query"), scope), "variables": _load_json(variables)}
            return PostData(mime_type="application/json", text=json.dumps(payload))

        if mode == "file":
            return PostData(mime_type="application/octet-stream", text="")

        return None


def _assemble_url(url: dict) -> str:
    host = url.get("host")
    host = ".".join(host) if isinstance(host, list) else str(host)
    address = f"{url['protocol']}://{host}" if url.get("protocol") else host

    if url.get("port"):
        address += f":{url['port']}"

    path = url.get("path")
    if isinstance(path, list):
        path = "/".join(seg if isinstance(seg, str) else str(seg.get("value", "")) for seg in path)
    if path:
        address += "/" + path.lstrip("/")
    return address


def _auth_params(params) -> dict:
    # v2.1 stores auth attributes as [{key, value}], v2.0 as a plain mapping
    if isinstance(params, list):
        return {p["key"]: p.get("value") for p in params if isinstance(p, dict) and "key" in p}
    if isinstance(params, dict):
        return params
    return {}


def _load_json(text: str):
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("GraphQL variables are not valid JSON, sending them as text")
        return text
