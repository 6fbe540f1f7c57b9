"""Loading of PHP-Parser JSON dumps into node trees.

nikic/PHP-Parser can serialize its AST as JSON (`php-parse --json-dump
--resolve-names file.php`). This module converts such a dump into the Node
trees the metrics framework walks, so a file is read and converted once and
the resulting roots are handed to the analysis.

Both PHP-Parser 4 and 5 encodings are accepted: names may be a `parts` list
(v4) or a `name` string (v5), and property items may be tagged
`Stmt_PropertyProperty` (v4) or `PropertyItem` (v5).

load_tree_from_file returns None for unreadable files and invalid JSON,
leaving it to callers to decide how to report the failure.
"""

import json
import logging
from pathlib import Path

from scope_metrics.models import Node, NodeKind

logger = logging.getLogger(__name__)

_NODE_TYPES: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind if kind != NodeKind.OTHER}
_NODE_TYPES["PropertyItem"] = NodeKind.PROPERTY

# Keys holding node data rather than child nodes
_NAME_KEYS = frozenset({"nodeType", "attributes", "name", "namespacedName"})


class TreeFormatError(ValueError):
    """Raised when a JSON document is not a PHP-Parser node dump."""


def _name_to_string(raw: object) -> str | None:
    """Convert a serialized Name, Identifier or plain string to text."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        parts = raw.get("parts")
        if isinstance(parts, list):
            return "\\".join(str(part) for part in parts)
        name = raw.get("name")
        if isinstance(name, str):
            return name
    msg = f"Cannot read a name from {raw!r}"
    raise TreeFormatError(msg)


def _is_node(raw: object) -> bool:
    return isinstance(raw, dict) and "nodeType" in raw


def convert_node(raw: dict[str, object]) -> Node:
    """Convert one serialized node and its descendants.

    Children are collected from every other key holding a node or a list of
    nodes, in document order.

    Raises:
        TreeFormatError: If the node or one of its names is malformed
    """
    node_type = raw.get("nodeType")
    if not isinstance(node_type, str):
        msg = f"Node without a nodeType: {raw!r}"
        raise TreeFormatError(msg)

    attributes = raw.get("attributes")
    line = attributes.get("startLine", 0) if isinstance(attributes, dict) else 0
    if not isinstance(line, int):
        line = 0

    children: list[Node] = []
    for key, value in raw.items():
        if key in _NAME_KEYS:
            continue
        if _is_node(value):
            children.append(convert_node(value))  # pyright: ignore[reportArgumentType]
        elif isinstance(value, list):
            children.extend(convert_node(item) for item in value if _is_node(item))

    kind = _NODE_TYPES.get(node_type, NodeKind.OTHER)
    if kind == NodeKind.OTHER:
        # Names of expressions and other statements are not needed
        return Node(kind=kind, line=line, children=children)

    return Node(
        kind=kind,
        line=line,
        name=_name_to_string(raw.get("name")),
        namespaced_name=_name_to_string(raw.get("namespacedName")),
        children=children,
    )


def load_tree_from_string(text: str, source_name: str = "<string>") -> tuple[Node, ...] | None:
    """Convert a JSON dump into root nodes.

    Args:
        text: JSON document, a list of top-level statements
        source_name: Name used in log messages

    Returns:
        Tuple of root nodes, or None if the text is not valid JSON

    Raises:
        TreeFormatError: If the JSON is valid but not a node dump
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Cannot parse %s: %s", source_name, e)
        return None

    if _is_node(document):
        document = [document]
    if not isinstance(document, list) or not all(_is_node(item) for item in document):
        msg = f"{source_name} is not a PHP-Parser JSON dump"
        raise TreeFormatError(msg)

    return tuple(convert_node(item) for item in document)


def load_tree_from_file(file_path: Path) -> tuple[Node, ...] | None:
    """Read and convert a JSON dump file.

    Returns:
        Tuple of root nodes on success, None on failure
        (file not found, unreadable, or invalid JSON)
    """
    if not file_path.exists():
        logger.warning("File %s does not exist", file_path)
        return None

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", file_path, e)
        return None

    return load_tree_from_string(text, str(file_path))
