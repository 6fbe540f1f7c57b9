"""Test helper utilities."""

from .console import assert_console_contains, capture_console_output, render_table
from .factories import (
    make_class,
    make_const,
    make_function,
    make_interface,
    make_method,
    make_namespace,
    make_other,
    make_property,
    make_trait,
)
from .temp_files import temp_json_file

__all__ = [
    "assert_console_contains",
    "capture_console_output",
    "make_class",
    "make_const",
    "make_function",
    "make_interface",
    "make_method",
    "make_namespace",
    "make_other",
    "make_property",
    "make_trait",
    "render_table",
    "temp_json_file",
]
