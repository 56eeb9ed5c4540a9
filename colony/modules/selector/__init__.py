"""
Selector Module - Black Box Interface

Purpose: Narrow a node registry with a user-supplied selector
Interface: filter_nodes(), parse_selector(), select(), selector_option
Hidden: Glob compilation and matching rules

Filters combine with OR: a node matching any one component is selected.
"""

from .selector import (
    NameFilter,
    NodeFilter,
    TagFilter,
    compile_glob,
    filter_nodes,
    parse_selector,
    select,
    selector_option,
)

__all__ = [
    "NameFilter",
    "NodeFilter",
    "TagFilter",
    "compile_glob",
    "filter_nodes",
    "parse_selector",
    "select",
    "selector_option",
]
