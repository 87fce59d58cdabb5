"""OpenAPI v2/v3 converter: one HAR request per (path, method)."""

import logging
from functools import partial
from typing import Callable, Iterator
from urllib.parse import quote, urlencode, urlparse

from apidoc2har.models import DocumentFormat, Request
from apidoc2har.oas.body import convert_body
from apidoc2har.oas.context import OperationContext
from apidoc2har.oas.cookies import convert_cookies, cookie_header
from apidoc2har.oas.headers import convert_headers
from apidoc2har.oas.params import HTTP_METHODS, ParameterSampler
from apidoc2har.oas.path import convert_path
from apidoc2har.oas.query import convert_query
from apidoc2har.sampler.sampler import Sampler

logger = logging.getLogger(__name__)


class OasConverter:
    """Converts the operations of a dereferenced OpenAPI document."""

    def __init__(self, spec: dict, doc_format: DocumentFormat, sampler: Sampler):
        self.spec = spec
        self.doc_format = doc_format
        self.sampler = sampler
        self.params = ParameterSampler(spec, doc_format, sampler)

    def operations(self) -> Iterator[tuple[str, Callable[[], Request]]]:
        for path, path_item in (self.spec.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            for method in HTTP_METHODS:
                if isinstance(path_item.get(method), dict):
                    yield f"{method.upper()} {path}", partial(self.convert, path, method)

    def convert(self, path: str, method: str) -> Request:
        logger.debug("Converting %s %s", method.upper(), path)
        ctx = OperationContext(self.spec, self.doc_format, path, method, self.params, self.sampler)

        post_data = convert_body(ctx)
        query = convert_query(ctx)
        cookies = convert_cookies(ctx)
        headers = convert_headers(ctx, post_data)
        header = cookie_header(cookies)
        if header is not None:
            headers.append(header)

        url = self.base_url(ctx) + convert_path(ctx)
        if query:
            url += "?" + urlencode([(q.name, q.value) for q in query], quote_via=quote)

        return Request(
            method=method.upper(),
            url=url,
            headers=headers,
            query_string=query,
            cookies=cookies,
            post_data=post_data,
        )

    def base_url(self, ctx: OperationContext) -> str:
        if self.doc_format is DocumentFormat.OAS2:
            return self._oas2_base_url()
        return self._oas3_base_url(ctx)

    def _oas2_base_url(self) -> str:
        default = urlparse(self.sampler.policy.default_base_url)
        scheme = (self.spec.get("schemes") or [default.scheme or "https"])[0]
        host = self.spec.get("host") or default.netloc
        base_path = (self.spec.get("basePath") or "").rstrip("/")
        return f"{scheme}://{host}{base_path}"

    def _oas3_base_url(self, ctx: OperationContext) -> str:
        servers = ctx.operation.get("servers") or ctx.path_item.get("servers") or self.spec.get("servers")
        server = servers[0] if servers and isinstance(servers[0], dict) else {}
        url = server.get("url") or "/"

        for name, variable in (server.get("variables") or {}).items():
            default = variable.get("default")
            if default is None and variable.get("enum"):
                default = variable["enum"][0]
            url = url.replace("{" + name + "}", str(default if default is not None else ""))

        if "://" not in url:
            url = self.sampler.policy.default_base_url.rstrip("/") + "/" + url.lstrip("/")
        return url.rstrip("/")
