"""Assigns qualified names and unique identities to declarations.

The IdentityBuilder observes namespaces, types and members during the walk.
For each one it computes a qualified name, derives an identity of the form
"<qualified name>#<line>", links it to the identity of the enclosing scope and
pushes it onto the scope stack until the matching leave call.

Results are recorded twice: in the `identities` side table, which downstream
processors receive explicitly, and as node attributes for other consumers.
"""

import logging
from collections.abc import Iterable
from typing import override

from scope_metrics.models import (
    ATTR_IDENTITY,
    ATTR_PARENT_IDENTITY,
    ATTR_QUALIFIED_NAME,
    GLOBAL_IDENTITY,
    Node,
    NodeIdentity,
    NodeKind,
    Scope,
    ScopeStack,
    make_identity,
)
from scope_metrics.scope_tracker import (
    add_scope,
    build_function_name,
    build_member_name,
    build_namespace_name,
    create_initial_stack,
    current_identity,
    drop_last_scope,
    get_enclosing_type,
)

logger = logging.getLogger(__name__)

# PHP reports anonymous classes under this prefix; the builder appends "$<ordinal>" per walk
ANONYMOUS_CLASS_NAME = "class@anonymous"

type IdentityTable = dict[Node, NodeIdentity]


class IdentityBuilder:
    """Processor that builds the identity of every scope and member declaration.

    A builder instance serves exactly one walk; its scope stack and side table
    are mutated in place.

    Attributes:
        scope_stack: Currently open declarations, rooted at the global sentinel
        identities: Side table from declaration node to its identity data
        anonymous_count: Anonymous classes named so far in this walk
    """

    def __init__(self) -> None:
        """Initialize the builder with the global scope and an empty side table."""
        self.scope_stack: ScopeStack = create_initial_stack()
        self.identities: IdentityTable = {}
        self.anonymous_count = 0

    def supported_kinds(self) -> Iterable[NodeKind]:
        """Return every declaration kind that receives an identity."""
        return (
            NodeKind.CONST,
            NodeKind.CLASS,
            NodeKind.METHOD,
            NodeKind.FUNCTION,
            NodeKind.INTERFACE,
            NodeKind.NAMESPACE,
            NodeKind.PROPERTY,
            NodeKind.TRAIT,
        )

    def enter_node(self, node: Node, kind: NodeKind) -> None:
        """Assign identity data to the node and open its scope."""
        qualified_name = self._qualified_name(node, kind)

        if kind == NodeKind.NAMESPACE and not qualified_name:
            # A "namespace { }" block is the global namespace itself
            identity = GLOBAL_IDENTITY
        else:
            identity = make_identity(qualified_name, node.line)

        record = NodeIdentity(
            qualified_name=qualified_name,
            identity=identity,
            parent_identity=current_identity(self.scope_stack),
        )
        self.identities[node] = record

        node.set_attribute(ATTR_QUALIFIED_NAME, record.qualified_name)
        node.set_attribute(ATTR_IDENTITY, record.identity)
        node.set_attribute(ATTR_PARENT_IDENTITY, record.parent_identity)

        self.scope_stack = add_scope(
            self.scope_stack, Scope(kind=kind, identity=identity, qualified_name=qualified_name)
        )
        logger.debug("Pushed scope %s (depth %d)", identity, len(self.scope_stack))

    def leave_node(self, node: Node, kind: NodeKind) -> None:
        """Close the scope opened when the node was entered."""
        logger.debug("Popped scope %s", current_identity(self.scope_stack))
        self.scope_stack = drop_last_scope(self.scope_stack)

    def _qualified_name(self, node: Node, kind: NodeKind) -> str:
        match kind:
            case NodeKind.CLASS | NodeKind.INTERFACE | NodeKind.TRAIT:
                return node.namespaced_name or node.name or self._anonymous_class_name()
            case NodeKind.METHOD | NodeKind.PROPERTY | NodeKind.CONST:
                return build_member_name(self._enclosing_type_name(node), kind, node.name or "")
            case NodeKind.FUNCTION:
                return build_function_name(node.namespaced_name or node.name or "")
            case NodeKind.NAMESPACE:
                return build_namespace_name(node.name)
            case NodeKind.OTHER:
                msg = f"IdentityBuilder does not handle {kind}"
                raise ValueError(msg)

    def _enclosing_type_name(self, node: Node) -> str:
        enclosing = get_enclosing_type(self.scope_stack)
        if enclosing is None:
            logger.debug("Member %r on line %d has no enclosing type", node.name, node.line)
            return ""
        return enclosing.qualified_name

    def _anonymous_class_name(self) -> str:
        # Anonymous classes on the same line of different files must not share an identity
        name = f"{ANONYMOUS_CLASS_NAME}${self.anonymous_count}"
        self.anonymous_count += 1
        return name
