"""Routes traversal callbacks to the processors interested in each node kind.

Several independent analyses share one walk by registering processors with a
ProcessorDispatcher. Each processor names the node kinds it wants to see; the
dispatcher looks the node's kind up in its registration table and calls the
interested processors in registration order, on enter and on leave alike.

Registration order is part of the contract: a processor may read attributes an
earlier-registered processor wrote during the same enter call on the same node.
"""

import logging
from collections.abc import Iterable
from typing import Protocol, override

from scope_metrics.models import Node, NodeKind
from scope_metrics.traversal import NodeVisitor

logger = logging.getLogger(__name__)


class Processor(Protocol):
    """An analysis step that observes selected node kinds during a walk."""

    def supported_kinds(self) -> Iterable[NodeKind]:
        """Return the node kinds this processor wants to observe."""
        ...

    def enter_node(self, node: Node, kind: NodeKind) -> None:
        """Handle entry into a node of a supported kind."""
        ...

    def leave_node(self, node: Node, kind: NodeKind) -> None:
        """Handle leaving a node of a supported kind."""
        ...


class ProcessorDispatcher(NodeVisitor):
    """Traversal visitor that fans node callbacks out to registered processors.

    The dispatcher holds no domain state. Processor exceptions are not caught;
    they abort dispatch for the current node and end the walk.

    Attributes:
        processors: Registration table mapping node kind to its processors,
            in registration order
    """

    def __init__(self) -> None:
        """Initialize the dispatcher with an empty registration table."""
        super().__init__()
        self.processors: dict[NodeKind, list[Processor]] = {}

    def register(self, processor: Processor) -> None:
        """Register a processor for every node kind it supports.

        Must be called before the walk begins.
        """
        for kind in processor.supported_kinds():
            self.processors.setdefault(kind, []).append(processor)
        logger.debug("Registered processor %s", type(processor).__name__)

    @override
    def enter_node(self, node: Node) -> None:
        """Run every interested processor's enter hook, in registration order."""
        for processor in self.processors.get(node.kind, ()):
            processor.enter_node(node, node.kind)

    @override
    def leave_node(self, node: Node) -> None:
        """Run every interested processor's leave hook, in registration order."""
        for processor in self.processors.get(node.kind, ()):
            processor.leave_node(node, node.kind)
