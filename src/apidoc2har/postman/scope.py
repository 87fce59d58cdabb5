"""Lexical scopes for Postman variables.

Collection, folder and environment variables form a chain of scopes: a
lookup tries the innermost scope first and walks up through its parents.
"""

from typing import Any, Iterable, Mapping

from pydantic import BaseModel


class Variable(BaseModel):
    key: str
    value: Any = None


class LexicalScope:
    def __init__(
        self,
        json_pointer: str = "",
        variables: Iterable[Mapping] | Mapping[str, Any] = (),
        parent: "LexicalScope | None" = None,
    ):
        self.json_pointer = json_pointer
        self.parent = parent
        self._variables = _to_variables(variables)

    def find(self, name: str) -> Variable | None:
        scope = self
        while scope is not None:
            if name in scope._variables:
                return scope._variables[name]
            scope = scope.parent
        return None

    def child(self, json_pointer: str, variables: Iterable[Mapping] | Mapping[str, Any] = ()) -> "LexicalScope":
        return LexicalScope(json_pointer, variables, parent=self)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __repr__(self) -> str:
        return f"LexicalScope({self.json_pointer!r}, {sorted(self._variables)})"


def _to_variables(variables) -> dict[str, Variable]:
    """Accept Postman variable records or a plain name -> value mapping."""
    if isinstance(variables, Mapping):
        return {str(k): Variable(key=str(k), value=v) for k, v in variables.items()}

    result = {}
    for record in variables or []:
        if not isinstance(record, Mapping):
            continue
        # collections mark off switches with `disabled`, environment exports with `enabled`
        if record.get("disabled") or record.get("enabled") is False:
            continue
        key = record.get("key", record.get("id"))
        if key is None:
            continue
        result[str(key)] = Variable(key=str(key), value=record.get("value"))
    return result
