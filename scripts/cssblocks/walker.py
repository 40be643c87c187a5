"""Depth-first traversal over a parsed stylesheet tree."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from .nodes import BlockNode, Node
from .parser_manager import parse
from .utils import is_tree

Visitor = Callable[[Node], Any]

_EXHAUSTED = object()


def walk(tree: Iterable[Node] | str, visitor: Visitor | None = None) -> None:
    """Visit every node pre-order; a visitor returning ``False`` prunes that block's subtree."""
    if not is_tree(tree):
        tree = parse(tree)
    if not callable(visitor):
        return

    stack: list[Iterator[Node]] = [iter(tree)]
    while stack:
        node = next(stack[-1], _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
        elif visitor(node) is not False and isinstance(node, BlockNode):
            stack.append(iter(node.children))


def iter_nodes(tree: Iterable[Node] | str) -> list[Node]:
    nodes: list[Node] = []
    walk(tree, nodes.append)
    return nodes


__all__ = ["Visitor", "iter_nodes", "walk"]
