"""Scope tracking utilities for identity assignment.

This module provides utilities for tracking the currently open declarations
during a walk, enabling qualified names and identities for namespaces, types
and their members. All functions are pure and work with immutable stacks.

Key Components:
    - Pure scope stack functions: add_scope, drop_last_scope, create_initial_stack
    - Lookups: current_identity, get_enclosing_type
    - Name builders: build_namespace_name, build_member_name, build_function_name

Qualified names follow the PHP conventions the parser emits:
"Shapes\\Circle", "Shapes\\Circle::area()", "Shapes\\Circle::$radius",
"Shapes\\Circle::PI" and "Shapes\\draw()".
"""

from scope_metrics.models import GLOBAL_IDENTITY, NodeKind, Scope, ScopeIdentity, ScopeStack

NAMESPACE_SEPARATOR = "\\"
MEMBER_SEPARATOR = "::"
CALL_MARKER = "()"
PROPERTY_MARKER = "$"


def create_initial_stack() -> ScopeStack:
    """Create an initial scope stack with just the global sentinel scope.

    Returns:
        Initial stack containing only the global scope
    """
    return (Scope(kind=NodeKind.OTHER, identity=GLOBAL_IDENTITY, qualified_name=""),)


def add_scope(stack: ScopeStack, scope: Scope) -> ScopeStack:
    """Add a new scope onto the scope stack.

    This is a pure function that returns a new stack rather than
    modifying the input stack.

    Args:
        stack: Current scope stack (not modified)
        scope: The scope to add

    Returns:
        New stack with the scope appended
    """
    return (*stack, scope)


def drop_last_scope(stack: ScopeStack) -> ScopeStack:
    """Return a new stack without the last scope.

    Args:
        stack: Current scope stack

    Returns:
        New stack with the top scope removed

    Raises:
        AssertionError: If attempting to remove the global sentinel scope
    """
    assert len(stack) > 1, "Cannot pop global scope"
    return stack[:-1]


def current_identity(stack: ScopeStack) -> ScopeIdentity:
    """Return the identity on top of the stack, or the global sentinel for an empty stack."""
    if not stack:
        return GLOBAL_IDENTITY
    return stack[-1].identity


def get_enclosing_type(stack: ScopeStack) -> Scope | None:
    """Find the innermost open class, interface or trait.

    Searches backward through the stack so that a member declared after a
    nested type has closed still resolves to its own type.

    Args:
        stack: Current scope context

    Returns:
        The nearest type-like scope, or None outside of any type
    """
    for scope in reversed(stack):
        if scope.kind.is_type_like:
            return scope
    return None


def build_namespace_name(path: str | None) -> str:
    """Join the segments of a namespace path.

    Leading, trailing and doubled separators are dropped, so "\\Shapes\\Flat"
    and "Shapes\\Flat" produce the same name. A missing path yields "".
    """
    if not path:
        return ""
    return NAMESPACE_SEPARATOR.join(part for part in path.split(NAMESPACE_SEPARATOR) if part)


def build_member_name(type_name: str, kind: NodeKind, name: str) -> str:
    """Build the qualified name of a method, property or constant.

    Each member kind gets its own marker so that a method, a property and a
    constant sharing a bare name never collide with each other or the type.

    Args:
        type_name: Qualified name of the enclosing type ("" outside any type)
        kind: METHOD, PROPERTY or CONST
        name: Bare member name

    Returns:
        The member's qualified name

    Raises:
        ValueError: If kind is not a member kind

    Example:
        >>> build_member_name("Shapes\\\\Circle", NodeKind.METHOD, "area")
        'Shapes\\\\Circle::area()'
    """
    match kind:
        case NodeKind.METHOD:
            return f"{type_name}{MEMBER_SEPARATOR}{name}{CALL_MARKER}"
        case NodeKind.PROPERTY:
            return f"{type_name}{MEMBER_SEPARATOR}{PROPERTY_MARKER}{name}"
        case NodeKind.CONST:
            return f"{type_name}{MEMBER_SEPARATOR}{name}"
        case _:
            msg = f"Not a member kind: {kind}"
            raise ValueError(msg)


def build_function_name(qualified_name: str) -> str:
    """Build the qualified name of a free function from its namespaced name."""
    return f"{qualified_name}{CALL_MARKER}"
