"""Main analysis orchestrator for node count metrics."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from scope_metrics.metrics import NodeCountMetrics
from scope_metrics.models import Node
from scope_metrics.php_ast import load_tree_from_file
from scope_metrics.processors.dispatcher import ProcessorDispatcher
from scope_metrics.processors.identity_builder import IdentityBuilder
from scope_metrics.processors.node_counter import NodeCounter
from scope_metrics.traversal import NodeTraverser

logger = logging.getLogger(__name__)


def create_dispatcher() -> tuple[ProcessorDispatcher, NodeCounter]:
    """Create a dispatcher with fresh processors registered in dependency order.

    The IdentityBuilder must run before the NodeCounter on every node, because
    the counter reads the identities the builder records on entry.

    Returns:
        The dispatcher and the counter whose results it will collect
    """
    builder = IdentityBuilder()
    counter = NodeCounter(builder.identities)

    dispatcher = ProcessorDispatcher()
    dispatcher.register(builder)
    dispatcher.register(counter)
    return dispatcher, counter


def analyze_nodes(nodes: Sequence[Node]) -> NodeCountMetrics:
    """Run one complete walk over the given root nodes.

    Every call starts from empty state, so independent runs never share counters.

    Args:
        nodes: Top-level statements of one or more parsed files

    Returns:
        Metrics facade over the completed walk
    """
    dispatcher, counter = create_dispatcher()

    traverser = NodeTraverser()
    traverser.add_visitor(dispatcher)
    traverser.traverse(nodes)

    return NodeCountMetrics(counter)


def analyze_files(file_paths: Iterable[Path]) -> NodeCountMetrics:
    """Analyze several PHP-Parser JSON dumps in a single walk.

    Files that cannot be loaded are skipped with a warning. A namespace declared
    in several files counts as one package, but its per-scope bucket is keyed by
    identity: files whose "namespace X;" sits on the same line share one bucket,
    while a declaration on another line gets a bucket of its own.
    """
    nodes: list[Node] = []
    for file_path in file_paths:
        tree = load_tree_from_file(file_path)
        if tree is None:
            logger.warning("Skipping %s", file_path)
            continue
        nodes.extend(tree)

    return analyze_nodes(nodes)


def analyze_file(file_path: str) -> NodeCountMetrics:
    """Analyze a single PHP-Parser JSON dump."""
    return analyze_files([Path(file_path)])
