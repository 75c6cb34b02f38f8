"""Diagnostics and debugging utilities for fdbench."""

from .core import (
    assert_edges,
    assert_finite,
    debug_context,
    field_mass,
    is_debug_enabled,
    is_finite_field,
    set_debug_enabled,
    total_variation,
)

__all__ = [
    "assert_edges",
    "assert_finite",
    "field_mass",
    "is_finite_field",
    "total_variation",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
