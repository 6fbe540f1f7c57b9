"""Core data models for the scope metrics analyzer."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import NewType

ScopeIdentity = NewType("ScopeIdentity", str)

GLOBAL_IDENTITY = ScopeIdentity("@global")

# Attribute keys written onto nodes during identity assignment
ATTR_QUALIFIED_NAME = "qualified_name"
ATTR_IDENTITY = "identity"
ATTR_PARENT_IDENTITY = "parent_identity"


def make_identity(qualified_name: str, line: int) -> ScopeIdentity:
    """Create a ScopeIdentity from a qualified name and its declaration line.

    Example:
        >>> make_identity("Circle", 7)
        'Circle#7'
    """
    return ScopeIdentity(f"{qualified_name}#{line}")


class NodeKind(Enum):
    """Node types the metrics framework distinguishes.

    Values are the PHP-Parser nodeType tags. Everything else is OTHER.
    """

    CONST = "Const"
    CLASS = "Stmt_Class"
    INTERFACE = "Stmt_Interface"
    TRAIT = "Stmt_Trait"
    METHOD = "Stmt_ClassMethod"
    FUNCTION = "Stmt_Function"
    NAMESPACE = "Stmt_Namespace"
    PROPERTY = "Stmt_PropertyProperty"
    OTHER = "other"

    @property
    def is_type_like(self) -> bool:
        """Whether this kind declares a class, interface or trait."""
        return self in (NodeKind.CLASS, NodeKind.INTERFACE, NodeKind.TRAIT)

    @property
    def is_member(self) -> bool:
        """Whether this kind is owned by an enclosing type."""
        return self in (NodeKind.METHOD, NodeKind.PROPERTY, NodeKind.CONST)


class MetricKey(StrEnum):
    """Metric keys shared with downstream reporting."""

    PACKAGES = "nop"
    CLASSES = "noc"
    INTERFACES = "noi"
    METHODS = "nom"
    FUNCTIONS = "nof"
    TRAITS = "not"


@dataclass(eq=False)
class Node:
    """A tree element handed to the framework by the parser.

    Nodes hash and compare by object identity so they can key side tables.
    The framework only writes into `attributes`; it never restructures the tree.
    """

    kind: NodeKind
    line: int = 0
    name: str | None = None
    namespaced_name: str | None = None  # e.g. "Shapes\\Circle", when the parser resolved names
    children: list["Node"] = field(default_factory=list)
    attributes: dict[str, object] = field(default_factory=dict)

    def get_attribute(self, key: str, default: object = None) -> object:
        """Return the attribute stored under key, or default."""
        return self.attributes.get(key, default)

    def set_attribute(self, key: str, value: object) -> None:
        """Store an attribute on this node."""
        self.attributes[key] = value

    def has_attribute(self, key: str) -> bool:
        """Check whether an attribute is stored under key."""
        return key in self.attributes

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all of its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class Scope:
    """One open declaration on the scope stack."""

    kind: NodeKind
    identity: ScopeIdentity
    qualified_name: str


# The root entry is a Scope with kind OTHER and the global identity
type ScopeStack = tuple[Scope, ...]


@dataclass(frozen=True)
class NodeIdentity:
    """Identity data assigned to a single declaration during a walk."""

    qualified_name: str
    identity: ScopeIdentity
    parent_identity: ScopeIdentity


@dataclass(frozen=True)
class ProjectTotals:
    """Whole-run declaration counts."""

    packages: int = 0
    classes: int = 0
    interfaces: int = 0
    methods: int = 0
    functions: int = 0
    traits: int = 0

    def as_metrics(self) -> dict[MetricKey, int]:
        """Return the totals keyed by metric key."""
        return {
            MetricKey.PACKAGES: self.packages,
            MetricKey.CLASSES: self.classes,
            MetricKey.INTERFACES: self.interfaces,
            MetricKey.METHODS: self.methods,
            MetricKey.FUNCTIONS: self.functions,
            MetricKey.TRAITS: self.traits,
        }


type NodeMetrics = Mapping[MetricKey, int]


@dataclass(frozen=True)
class ScopeMetricsRow:
    """Metrics of one scope bucket, used for reporting."""

    identity: ScopeIdentity
    metrics: NodeMetrics
