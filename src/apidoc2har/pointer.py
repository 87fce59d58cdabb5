"""JSON pointer helpers (RFC 6901)."""

from apidoc2har.errors import InvalidDocumentError


def escape_token(token) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def compile_pointer(tokens) -> str:
    """Build a pointer from raw tokens: ['paths', '/pets', 'get'] -> '/paths/~1pets/get'."""
    return "".join(f"/{escape_token(token)}" for token in tokens)


def get_pointer(document, pointer: str):
    """Return the node `pointer` addresses inside `document`."""
    node = document
    if not pointer:
        return node

    for raw in pointer.lstrip("/").split("/"):
        token = unescape_token(raw)
        try:
            node = node[int(token)] if isinstance(node, list) else node[token]
        except (KeyError, IndexError, ValueError, TypeError):
            raise InvalidDocumentError(f"Cannot resolve JSON pointer '{pointer}'") from None
    return node
