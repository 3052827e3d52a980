"""AST serialization: JSON round-trip for texmark documents and tokens.

Converts nodes, tokens and diagnostics to/from JSON-compatible dicts.
Used by ``texmark --dump`` and handy for debugging and snapshot tests.

All output is deterministic (sorted keys).

Example:
    from texmark import parse
    from texmark.serialization import to_json, from_json

    doc = parse("# Hello **World**")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from enum import Enum
from typing import Any, TypeAlias

from texmark.errors import Diagnostic, ErrorKind
from texmark.location import Position
from texmark.nodes import Branch, BranchKind, Document, Leaf, LeafKind, MacroDef
from texmark.tokens import Token, TokenKind

# Registry of type names to classes for deserialization
_TYPES: dict[str, type] = {
    "Document": Document,
    "Leaf": Leaf,
    "Branch": Branch,
    "MacroDef": MacroDef,
    "Diagnostic": Diagnostic,
    "Token": Token,
    "Position": Position,
}

# Enum-valued fields, stored by member name
_ENUM_FIELDS: dict[tuple[str, str], type[Enum]] = {
    ("Leaf", "kind"): LeafKind,
    ("Branch", "kind"): BranchKind,
    ("Diagnostic", "kind"): ErrorKind,
    ("Token", "kind"): TokenKind,
}

Serializable: TypeAlias = Document | Leaf | Branch | MacroDef | Diagnostic | Token | Position


def to_dict(obj: Serializable) -> dict[str, Any]:
    """Convert a node, token or diagnostic to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        obj: Any texmark value with a registered type.

    Returns:
        Dict with ``_type`` and all fields.

    """
    result: dict[str, Any] = {"_type": type(obj).__name__}
    for f in fields(obj):
        result[f.name] = _serialize_value(getattr(obj, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if type(value).__name__ in _TYPES:
        return to_dict(value)
    if isinstance(value, (tuple, list)):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Serializable:
    """Reconstruct a typed value from a dict produced by ``to_dict``.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized value"
        raise ValueError(msg)

    cls = _TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        enum_cls = _ENUM_FIELDS.get((type_name, f.name))
        if enum_cls is not None:
            kwargs[f.name] = enum_cls[data[f.name]]
        else:
            kwargs[f.name] = _deserialize_value(data[f.name])

    return cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict) and "_type" in value:
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string (sorted keys)."""
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


def tokens_to_json(tokens: Sequence[Token], *, indent: int | None = None) -> str:
    """Serialize a token list to a JSON array."""
    return json.dumps([to_dict(token) for token in tokens], sort_keys=True, indent=indent)


def tokens_from_json(data: str) -> list[Token]:
    return [from_dict(item) for item in json.loads(data)]
