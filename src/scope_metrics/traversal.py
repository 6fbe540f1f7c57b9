"""Depth-first traversal driver for parsed node trees.

NodeTraverser delivers the hook sequence every visitor relies on: one
before_traverse call, an enter_node call before a node's children are
visited, a leave_node call after all of them, and one after_traverse call
bracketing the whole walk.
"""

from collections.abc import Sequence

from scope_metrics.models import Node


class NodeVisitor:
    """Base class for traversal visitors. All hooks are no-ops."""

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        """Called once before the walk starts."""

    def enter_node(self, node: Node) -> None:
        """Called before the node's children are visited."""

    def leave_node(self, node: Node) -> None:
        """Called after all of the node's children are visited."""

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        """Called once after the walk completes."""


class NodeTraverser:
    """Walks node trees depth-first, calling visitors in the order they were added."""

    def __init__(self) -> None:
        """Initialize the traverser with no visitors."""
        self.visitors: list[NodeVisitor] = []

    def add_visitor(self, visitor: NodeVisitor) -> None:
        """Add a visitor to be called for every node."""
        self.visitors.append(visitor)

    def traverse(self, nodes: Sequence[Node]) -> None:
        """Walk all root nodes and their descendants once.

        Exceptions raised by a visitor propagate to the caller and abort the walk.
        """
        for visitor in self.visitors:
            visitor.before_traverse(nodes)

        for node in nodes:
            self._traverse_node(node)

        for visitor in self.visitors:
            visitor.after_traverse(nodes)

    def _traverse_node(self, node: Node) -> None:
        for visitor in self.visitors:
            visitor.enter_node(node)

        for child in node.children:
            self._traverse_node(child)

        for visitor in self.visitors:
            visitor.leave_node(node)
