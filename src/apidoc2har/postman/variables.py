"""Variable substitution for Postman templates.

Two flavors share one algorithm and differ in their token syntax and in the
variables seeding the root of the lookup chain:

- environment parser: `{{name}}`, seeded with global variables;
- URL parser: `:name` path segments, seeded with the request's `url.variable`.

Resolution of a token:

1. a registered dynamic generator (`$randomInt`) produces the value; a
   dynamic token is generated once per `parse` call and reused for every
   occurrence in that call;
2. otherwise the token is looked up in the scope chain, then the root, and
   its value substituted recursively; a variable declared without a value
   leaves the token as written;
3. an unknown token raises UndefinedVariableError and a token that refers
   back to itself raises CyclicVariableError.
"""

import re
from typing import Iterable, Mapping

from apidoc2har.encoding import to_text
from apidoc2har.errors import CyclicVariableError, UndefinedVariableError
from apidoc2har.postman.generators import Generator, default_generators
from apidoc2har.postman.scope import LexicalScope

ENV_VARIABLE_PATTERN = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")
URL_VARIABLE_PATTERN = re.compile(r"(?<=/):([A-Za-z0-9_][\w.\-]*)")


class VariableParser:
    def __init__(
        self,
        generators: Mapping[str, Generator],
        variables: Iterable[Mapping] | Mapping = (),
        pattern: re.Pattern = ENV_VARIABLE_PATTERN,
    ):
        self.generators = generators
        self.root = LexicalScope("", variables)
        self.pattern = pattern

    def parse(self, value: str, scope: LexicalScope | None = None) -> str:
        if not value:
            return value
        return self._substitute(value, scope, {}, [])

    def _substitute(self, value: str, scope: LexicalScope | None, memo: dict, chain: list[str]) -> str:
        return self.pattern.sub(
            lambda match: self._resolve(match.group(1), match.group(0), scope, memo, chain),
            value,
        )

    def _resolve(self, token: str, raw: str, scope: LexicalScope | None, memo: dict, chain: list[str]) -> str:
        if token in self.generators:
            if token not in memo:
                memo[token] = to_text(self.generators[token]())
            return memo[token]

        if token in chain:
            raise CyclicVariableError([*chain, token])

        variable = (scope.find(token) if scope is not None else None) or self.root.find(token)
        if variable is None:
            raise UndefinedVariableError(token)
        if variable.value is None:
            return raw

        return self._substitute(to_text(variable.value), scope, memo, [*chain, token])


def create_env_variable_parser(
    variables: Iterable[Mapping] | Mapping = (),
    generators: Mapping[str, Generator] | None = None,
) -> VariableParser:
    return VariableParser(
        generators if generators is not None else default_generators(), variables, ENV_VARIABLE_PATTERN
    )


def create_url_variable_parser(
    variables: Iterable[Mapping] | Mapping = (),
    generators: Mapping[str, Generator] | None = None,
) -> VariableParser:
    return VariableParser(
        generators if generators is not None else default_generators(), variables, URL_VARIABLE_PATTERN
    )
