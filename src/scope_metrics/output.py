"""Rich formatting and display for node count metrics."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .metrics import NodeCountMetrics
from .models import MetricKey, ProjectTotals, ScopeMetricsRow

_TOTAL_LABELS: tuple[tuple[MetricKey, str], ...] = (
    (MetricKey.PACKAGES, "Packages"),
    (MetricKey.CLASSES, "Classes"),
    (MetricKey.INTERFACES, "Interfaces"),
    (MetricKey.TRAITS, "Traits"),
    (MetricKey.METHODS, "Methods"),
    (MetricKey.FUNCTIONS, "Functions"),
)

# Packages are only counted project-wide
_SCOPE_KEYS = tuple(key for key in MetricKey if key != MetricKey.PACKAGES)


def format_totals_table(totals: ProjectTotals) -> Table:
    """Create Rich table displaying project totals."""
    table = Table(title="Project Totals")

    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Key", style="dim")
    table.add_column("Count", justify="right", style="magenta")

    metrics = totals.as_metrics()
    for key, label in _TOTAL_LABELS:
        table.add_row(label, str(key), str(metrics[key]))

    return table


def format_scope_table(rows: tuple[ScopeMetricsRow, ...]) -> Table:
    """Create Rich table displaying the metric bucket of every scope."""
    table = Table(title="Scope Metrics")

    table.add_column("Scope", style="cyan", no_wrap=True)
    for key in _SCOPE_KEYS:
        table.add_column(str(key), justify="right")

    for row in rows:
        # Kinds a bucket does not track are shown as blank
        cells = [str(row.metrics[key]) if key in row.metrics else "" for key in _SCOPE_KEYS]
        table.add_row(Text(row.identity), *cells)

    return table


def display_results(console: Console, metrics: NodeCountMetrics, *, show_scopes: bool = False) -> None:
    """Display project totals and, optionally, per-scope metrics."""
    totals = metrics.project_totals()
    if totals == ProjectTotals():
        console.print("[yellow]No declarations found to analyze.[/yellow]")
        return

    console.print(format_totals_table(totals))

    if show_scopes:
        console.print(format_scope_table(metrics.scope_rows()))
