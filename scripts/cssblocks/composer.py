"""Composition of a base stylesheet with per-variant block overrides."""

from __future__ import annotations

from typing import Iterable

from .formatter import Keep, Replace, stringify
from .nodes import BlockNode, ImportNode, Node
from .parser_manager import parse
from .utils import is_tree
from .walker import iter_nodes, walk

StyleSource = Iterable[Node] | str


def _as_tree(source: StyleSource) -> list[Node]:
    return list(source) if is_tree(source) else parse(source)


def collect_imports(source: StyleSource) -> list[str]:
    imports: list[str] = []

    def visit(node: Node) -> None:
        if isinstance(node, ImportNode):
            imports.append(node.id)

    walk(_as_tree(source), visit)
    return imports


def collect_blocks(source: StyleSource) -> dict[str, BlockNode]:
    """Map block names to blocks; when a name repeats, the first block keeps it."""
    blocks: dict[str, BlockNode] = {}

    def visit(node: Node) -> None:
        if isinstance(node, BlockNode) and node.id and node.id not in blocks:
            blocks[node.id] = node

    # the root is named by define, it is not an override point
    for root in _as_tree(source):
        if isinstance(root, BlockNode):
            walk(root.children, visit)
        else:
            visit(root)
    return blocks


def compose(base: StyleSource, *overrides: StyleSource) -> str:
    """Render ``base`` with each named block swapped for the same-named block of an override.

    Later overrides win. Only blocks that belong to ``base`` are swapped, so
    override content is emitted as written.
    """
    base_tree = _as_tree(base)
    replacements: dict[str, BlockNode] = {}
    for override in overrides:
        replacements.update(collect_blocks(override))

    base_nodes = {id(node) for node in iter_nodes(base_tree)}
    roots = {id(node) for node in base_tree}

    def substitute(node: Node, parent: BlockNode | None):
        if (
            isinstance(node, BlockNode)
            and node.id in replacements
            and id(node) in base_nodes
            and id(node) not in roots
        ):
            return Replace(replacements[node.id])
        return Keep()

    return stringify(base_tree, substitute)


__all__ = ["collect_blocks", "collect_imports", "compose"]
