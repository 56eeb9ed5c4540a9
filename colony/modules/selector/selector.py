"""
Node selection by name and tag globs.

A selector is a comma-separated list of shell-style globs. A component
starting with ``@`` matches against node tags, anything else matches the
node name. A node is selected when it satisfies at least one component.
"""

import fnmatch
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Set, Union

import click

from colony.errors import SelectorError
from colony.modules.nodes import NodeConfig, NodeName, NodeRegistry

logger = logging.getLogger("colony.selector")

SELECTOR_HELP = """Select a list of nodes to deploy to.

The list is comma-separated and globs are supported. To match tags, prepend the filter by @. Valid examples:

\b
- host1,host2,host3
- edge-*
- edge-*,core-*
- @a-tag,@tags-can-have-*"""


def compile_glob(pattern: str, expression: str = "") -> Pattern:
    """
    Compile a case-sensitive shell-style glob.

    Raises:
        SelectorError: If a character class is never closed
    """
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "[":
            j = i
            if j < n and pattern[j] == "!":
                j += 1
            # A leading ] is a literal member of the class
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise SelectorError(
                    expression or pattern, f"unterminated character class in {pattern!r}"
                )
            i = j + 1

    return re.compile(fnmatch.translate(pattern))


@dataclass(frozen=True)
class NameFilter:
    """Matches the node name."""

    pattern: str
    regex: Pattern

    def matches(self, name: NodeName, node: NodeConfig) -> bool:
        return self.regex.match(name) is not None


@dataclass(frozen=True)
class TagFilter:
    """Matches if any of the node's tags matches."""

    pattern: str
    regex: Pattern

    def matches(self, name: NodeName, node: NodeConfig) -> bool:
        return any(self.regex.match(tag) is not None for tag in node.tags)


NodeFilter = Union[NameFilter, TagFilter]


def parse_selector(expression: str) -> List[NodeFilter]:
    """
    Compile a selector expression into filters.

    Every component is compiled before any is used, so one bad component
    rejects the whole expression.

    Raises:
        SelectorError: On an empty component, a bare ``@`` or a malformed glob
    """
    filters: List[NodeFilter] = []

    for component in expression.split(","):
        if not component:
            raise SelectorError(expression, "empty component")

        if component.startswith("@"):
            tag_pattern = component[1:]
            if not tag_pattern:
                raise SelectorError(expression, "tag filter '@' needs a pattern")
            filters.append(TagFilter(tag_pattern, compile_glob(tag_pattern, expression)))
        else:
            filters.append(NameFilter(component, compile_glob(component, expression)))

    return filters


def select(nodes: NodeRegistry, filters: Iterable[NodeFilter]) -> Set[NodeName]:
    """Names of nodes matching at least one filter; no filters selects all."""
    filters = list(filters)
    if not filters:
        return set(nodes)

    return {
        name for name, node in nodes.items()
        if any(f.matches(name, node) for f in filters)
    }


def filter_nodes(nodes: NodeRegistry, expression: Optional[str]) -> Set[NodeName]:
    """
    Evaluate a selector expression against a registry.

    Args:
        nodes: Registry to select from
        expression: Raw selector; None or "" selects every node

    Returns:
        Set of matching node names
    """
    if not expression:
        return set(nodes)

    selected = select(nodes, parse_selector(expression))
    logger.debug(f"Selector {expression!r} matched {len(selected)} of {len(nodes)} nodes")
    return selected


def selector_option(command):
    """Register the --on node selector option on a click command."""
    return click.option(
        "--on",
        "on",
        metavar="NODES",
        default=None,
        help=SELECTOR_HELP,
    )(command)
