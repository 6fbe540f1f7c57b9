"""Read-only query surface over the results of a node count walk."""

from scope_metrics.models import (
    ATTR_IDENTITY,
    MetricKey,
    Node,
    ProjectTotals,
    ScopeIdentity,
    ScopeMetricsRow,
)
from scope_metrics.processors.node_counter import NodeCounter


class NodeCountMetrics:
    """Exposes per-scope metrics and project totals collected by a NodeCounter.

    Queries never mutate the counter and return copies, so repeated calls
    return identical results. Querying mid-walk returns the partial counts.
    """

    def __init__(self, counter: NodeCounter) -> None:
        """Wrap the counter whose results should be exposed."""
        self._counter = counter

    def project_totals(self) -> ProjectTotals:
        """Return the six project-wide declaration counts."""
        return self._counter.project_totals()

    def project_metrics(self) -> dict[MetricKey, int]:
        """Return the project totals keyed by metric key."""
        return self.project_totals().as_metrics()

    def metrics_for(self, target: Node | str) -> dict[MetricKey, int]:
        """Return the metric bucket of a node or identity.

        An empty mapping means the declaration kind carries no bucket of its
        own, or the identity was never produced by the walk.
        """
        if isinstance(target, Node):
            identity = target.get_attribute(ATTR_IDENTITY)
            if not isinstance(identity, str):
                return {}
        else:
            identity = target

        return dict(self._counter.node_metrics.get(ScopeIdentity(identity), {}))

    def scope_rows(self) -> tuple[ScopeMetricsRow, ...]:
        """Return every metric bucket in the order its scope was first seen."""
        return tuple(
            ScopeMetricsRow(identity=identity, metrics=dict(metrics))
            for identity, metrics in self._counter.node_metrics.items()
        )
