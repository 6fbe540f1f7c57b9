"""Unit tests for the scope_tracker module.

Tests cover the pure functions for scope stack management and qualified
name construction during identity assignment.
"""

import pytest

from scope_metrics.models import GLOBAL_IDENTITY, NodeKind, Scope, ScopeIdentity
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


def _scope(kind: NodeKind, name: str, line: int = 1) -> Scope:
    return Scope(kind=kind, identity=ScopeIdentity(f"{name}#{line}"), qualified_name=name)


def test_create_initial_stack() -> None:
    """Test that create_initial_stack creates a stack with the global sentinel."""
    stack = create_initial_stack()
    assert len(stack) == 1
    assert stack[0].identity == GLOBAL_IDENTITY
    assert current_identity(stack) == "@global"


def test_add_drop_scope() -> None:
    """Test adding and dropping scopes from the stack."""
    stack = create_initial_stack()

    namespace_scope = _scope(NodeKind.NAMESPACE, "Shapes")
    stack = add_scope(stack, namespace_scope)
    assert len(stack) == 2
    assert current_identity(stack) == "Shapes#1"

    class_scope = _scope(NodeKind.CLASS, "Shapes\\Circle", 3)
    stack = add_scope(stack, class_scope)
    assert current_identity(stack) == "Shapes\\Circle#3"

    stack = drop_last_scope(stack)
    assert stack[-1] == namespace_scope

    stack = drop_last_scope(stack)
    assert stack == create_initial_stack()


def test_cannot_drop_global_scope() -> None:
    """Test that the global sentinel cannot be dropped."""
    stack = create_initial_stack()
    with pytest.raises(AssertionError, match="Cannot pop global scope"):
        drop_last_scope(stack)


def test_stack_is_immutable() -> None:
    """Test that operations return new stacks and leave the input untouched."""
    stack = create_initial_stack()
    new_stack = add_scope(stack, _scope(NodeKind.CLASS, "Circle"))
    assert isinstance(stack, tuple)
    assert len(stack) == 1
    assert len(new_stack) == 2


def test_current_identity_of_empty_stack_falls_back_to_global() -> None:
    """Test that an empty stack reports the global sentinel."""
    assert current_identity(()) == GLOBAL_IDENTITY


def test_get_enclosing_type_finds_innermost_type() -> None:
    """Test that the nearest class-like scope is returned."""
    outer = _scope(NodeKind.CLASS, "App\\Outer")
    method = _scope(NodeKind.METHOD, "App\\Outer::run()", 2)
    inner = _scope(NodeKind.CLASS, "class@anonymous", 3)

    stack = add_scope(create_initial_stack(), _scope(NodeKind.NAMESPACE, "App"))
    stack = add_scope(add_scope(stack, outer), method)
    assert get_enclosing_type(stack) == outer

    stack = add_scope(stack, inner)
    assert get_enclosing_type(stack) == inner

    # After the nested type closes, members resolve to the outer type again
    stack = drop_last_scope(stack)
    assert get_enclosing_type(stack) == outer


@pytest.mark.parametrize("kind", [NodeKind.INTERFACE, NodeKind.TRAIT])
def test_get_enclosing_type_accepts_interfaces_and_traits(kind: NodeKind) -> None:
    """Test that interfaces and traits count as enclosing types."""
    scope = _scope(kind, "Shapes\\Drawable")
    assert get_enclosing_type(add_scope(create_initial_stack(), scope)) == scope


def test_get_enclosing_type_outside_type() -> None:
    """Test that namespaces and functions are not enclosing types."""
    stack = add_scope(create_initial_stack(), _scope(NodeKind.NAMESPACE, "Shapes"))
    stack = add_scope(stack, _scope(NodeKind.FUNCTION, "Shapes\\draw()"))
    assert get_enclosing_type(stack) is None


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Shapes", "Shapes"),
        ("Shapes\\Flat", "Shapes\\Flat"),
        ("\\Shapes\\Flat\\", "Shapes\\Flat"),
        ("", ""),
        (None, ""),
    ],
)
def test_build_namespace_name(path: str | None, expected: str) -> None:
    """Test joining namespace path segments."""
    assert build_namespace_name(path) == expected


def test_build_member_name_markers() -> None:
    """Test that each member kind gets its own marker."""
    assert build_member_name("Shapes\\Circle", NodeKind.METHOD, "area") == "Shapes\\Circle::area()"
    assert build_member_name("Shapes\\Circle", NodeKind.PROPERTY, "area") == "Shapes\\Circle::$area"
    assert build_member_name("Shapes\\Circle", NodeKind.CONST, "area") == "Shapes\\Circle::area"


def test_build_member_name_without_type() -> None:
    """Test that a member outside any type still gets a usable name."""
    assert build_member_name("", NodeKind.CONST, "VERSION") == "::VERSION"


def test_build_member_name_rejects_non_members() -> None:
    """Test that only member kinds are accepted."""
    with pytest.raises(ValueError, match="Not a member kind"):
        build_member_name("Shapes", NodeKind.CLASS, "Circle")


def test_build_function_name() -> None:
    """Test that functions get a call marker to avoid clashing with constants."""
    assert build_function_name("Shapes\\draw") == "Shapes\\draw()"
