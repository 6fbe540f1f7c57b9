"""Counts declarations per enclosing scope and project-wide.

The NodeCounter reads the identity side table built by IdentityBuilder during
the same walk. Each declaration increments one counter on its parent's bucket
and the matching project total; types and namespaces additionally get a bucket
of their own the first time their identity is seen.
"""

import logging
from collections.abc import Iterable, Mapping

from scope_metrics.models import (
    GLOBAL_IDENTITY,
    MetricKey,
    Node,
    NodeIdentity,
    NodeKind,
    ProjectTotals,
    ScopeIdentity,
)

logger = logging.getLogger(__name__)

# Counter each declaration kind increments on its parent's bucket
_PARENT_METRIC: dict[NodeKind, MetricKey] = {
    NodeKind.CLASS: MetricKey.CLASSES,
    NodeKind.INTERFACE: MetricKey.INTERFACES,
    NodeKind.TRAIT: MetricKey.TRAITS,
    NodeKind.METHOD: MetricKey.METHODS,
    NodeKind.FUNCTION: MetricKey.FUNCTIONS,
}

_NAMESPACE_METRICS = (MetricKey.CLASSES, MetricKey.FUNCTIONS, MetricKey.INTERFACES, MetricKey.TRAITS)
_TYPE_METRICS = (MetricKey.METHODS,)


def _zeroed(keys: Iterable[MetricKey]) -> dict[MetricKey, int]:
    return dict.fromkeys(keys, 0)


class NodeCounter:
    """Processor that maintains per-scope metric buckets and project totals.

    Counters only ever increase during a walk. An instance serves exactly one walk.

    Attributes:
        identities: Side table written by the IdentityBuilder registered before this processor
        node_metrics: Metric bucket per scope identity, pre-seeded for the global scope
        totals: Project-wide counters keyed by metric key
    """

    def __init__(self, identities: Mapping[Node, NodeIdentity]) -> None:
        """Initialize the counter with the identity side table it reads from."""
        self.identities = identities
        self.node_metrics: dict[ScopeIdentity, dict[MetricKey, int]] = {
            GLOBAL_IDENTITY: _zeroed(_NAMESPACE_METRICS),
        }
        self.totals: dict[MetricKey, int] = _zeroed(MetricKey)
        self._seen_namespaces: set[str] = set()

    def supported_kinds(self) -> Iterable[NodeKind]:
        """Return the declaration kinds that are counted."""
        return (
            NodeKind.CLASS,
            NodeKind.METHOD,
            NodeKind.FUNCTION,
            NodeKind.INTERFACE,
            NodeKind.NAMESPACE,
            NodeKind.TRAIT,
        )

    def enter_node(self, node: Node, kind: NodeKind) -> None:
        """Count the node against its parent and the project totals.

        Raises:
            KeyError: If the node has no identity yet, which means this
                processor was registered before the IdentityBuilder
        """
        record = self.identities[node]

        if kind == NodeKind.NAMESPACE:
            self._enter_namespace(record)
            return

        if kind.is_type_like and record.identity not in self.node_metrics:
            self.node_metrics[record.identity] = _zeroed(_TYPE_METRICS)

        metric = _PARENT_METRIC[kind]
        parent_metrics = self.node_metrics.setdefault(record.parent_identity, {})
        parent_metrics[metric] = parent_metrics.get(metric, 0) + 1
        self.totals[metric] += 1

    def leave_node(self, node: Node, kind: NodeKind) -> None:
        """Nothing to do; all counting happens on entry."""

    def project_totals(self) -> ProjectTotals:
        """Return a snapshot of the project-wide counters."""
        return ProjectTotals(
            packages=self.totals[MetricKey.PACKAGES],
            classes=self.totals[MetricKey.CLASSES],
            interfaces=self.totals[MetricKey.INTERFACES],
            methods=self.totals[MetricKey.METHODS],
            functions=self.totals[MetricKey.FUNCTIONS],
            traits=self.totals[MetricKey.TRAITS],
        )

    def _enter_namespace(self, record: NodeIdentity) -> None:
        # Re-entering an identity keeps its bucket as is
        if record.identity not in self.node_metrics:
            self.node_metrics[record.identity] = _zeroed(_NAMESPACE_METRICS)

        # The unnamed namespace is the global scope, not a package
        if record.qualified_name and record.qualified_name not in self._seen_namespaces:
            self._seen_namespaces.add(record.qualified_name)
            self.totals[MetricKey.PACKAGES] += 1
            logger.debug("Counted package %s", record.qualified_name)
