"""Load API descriptions from disk.

JSON and YAML documents are both read with PyYAML. Local `$ref` pointers
(`#/components/schemas/Pet`) are replaced in place by the objects they
address, so circular references become circular object graphs.
"""

import logging
from pathlib import Path

import yaml

from apidoc2har.errors import InvalidDocumentError
from apidoc2har.pointer import get_pointer

logger = logging.getLogger(__name__)

MAX_REF_HOPS = 32


def load_document(file_path: Path) -> dict:
    """Parse a JSON/YAML file and resolve its local references."""
    text = file_path.read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidDocumentError(f"Cannot parse {file_path}: {e}") from e

    if not isinstance(document, dict):
        raise InvalidDocumentError(f"{file_path} does not contain a JSON/YAML object")

    return resolve_local_refs(document)


def load_variables(file_path: Path):
    """Load a Postman environment/globals export or a flat name -> value mapping."""
    data = load_document(file_path)
    return data["values"] if isinstance(data.get("values"), list) else data


def resolve_local_refs(document: dict) -> dict:
    visited: set[int] = set()

    def follow(node):
        hops = 0
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if not ref.startswith("#"):
                logger.warning("External $ref not supported: %s", ref)
                return node
            node = get_pointer(document, ref[1:])
            hops += 1
            if hops > MAX_REF_HOPS:
                raise InvalidDocumentError(f"Too many $ref hops resolving '{ref}'")
        return node

    def walk(node):
        if id(node) in visited:
            return
        visited.add(id(node))
        children = list(node.items()) if isinstance(node, dict) else list(enumerate(node))
        for key, child in children:
            resolved = follow(child)
            if resolved is not child:
                node[key] = resolved
            if isinstance(resolved, (dict, list)):
                walk(resolved)

    walk(document)
    return document
