"""Formatter that re-serializes stylesheet trees, with an optional per-node filter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Mapping

from .nodes import NODE_ADAPTER, NODE_TYPES, BlockNode, ImportNode, Node, StringNode
from .utils import is_tree

# one line break at each edge of the first rendered block's body
EDGE_NEWLINE_REGEX = re.compile(r"\A(?:\r\n|\r|\n)|(?:\r\n|\r|\n)\Z")


@dataclass(frozen=True, slots=True)
class Keep:
    pass


@dataclass(frozen=True, slots=True)
class Skip:
    pass


@dataclass(frozen=True, slots=True)
class Replace:
    node: Node


FilterResult = Keep | Skip | Replace
NodeFilter = Callable[[Node, "BlockNode | None"], Any]


NODE_FIELDS = ("type", "id", "code", "children")


def _as_node_data(value: Any) -> Any:
    """Turn a node-shaped object, and the node-shaped objects among its children, into mappings."""
    if isinstance(value, NODE_TYPES):
        return value
    if isinstance(value, Mapping):
        data = dict(value)
    elif getattr(value, "type", None):
        data = {name: getattr(value, name) for name in NODE_FIELDS if hasattr(value, name)}
    else:
        return value
    if is_tree(data.get("children")):
        data["children"] = [_as_node_data(child) for child in data["children"]]
    return data


def _is_node_shaped(value: Any) -> bool:
    if isinstance(value, Mapping):
        return bool(value.get("type"))
    return bool(getattr(value, "type", None))


def resolve_filter_result(result: Any) -> FilterResult:
    """Normalize whatever a filter returned into ``Keep``, ``Skip`` or ``Replace``.

    ``False`` skips the node. A node instance replaces it, and so does a
    mapping or any other object carrying a ``type`` field, after validation.
    Anything else keeps it.
    """
    if isinstance(result, (Keep, Skip, Replace)):
        return result
    if result is False:
        return Skip()
    if isinstance(result, NODE_TYPES):
        return Replace(result)
    if _is_node_shaped(result):
        return Replace(NODE_ADAPTER.validate_python(_as_node_data(result)))
    return Keep()


def import_marker(id: str) -> str:
    return f"/*! import {id} */"


def block_markers(id: str) -> tuple[str, str]:
    return f"/*! block {id} */", f"/*! endblock {id} */"


_EXHAUSTED = object()


@dataclass
class _Frame:
    """A block being rendered, with the first-render flag it opened under."""

    block: BlockNode | None
    children: Iterator[Node]
    first_render: bool = False
    parts: list[str] = field(default_factory=list)


@dataclass
class StyleFormatter:
    filter: NodeFilter | None = None

    def format(self, tree: Iterable[Node] | str | Any) -> str:
        if not is_tree(tree):
            return tree if isinstance(tree, str) else ""

        first_render = True
        stack = [_Frame(None, iter(tree))]
        while True:
            frame = stack[-1]
            node = next(frame.children, _EXHAUSTED)
            if node is _EXHAUSTED:
                if frame.block is None:
                    return "".join(frame.parts)
                stack.pop()
                stack[-1].parts.append(self._close_block(frame))
                first_render = False
                continue

            node = self._apply_filter(node, frame.block)
            if node is None:
                continue
            if isinstance(node, BlockNode):
                stack.append(_Frame(node, iter(node.children), first_render))
                continue
            frame.parts.append(self._format_leaf(node))
            first_render = False

    def _apply_filter(self, node: Node, parent: BlockNode | None) -> Node | None:
        if not callable(self.filter):
            return node
        result = resolve_filter_result(self.filter(node, parent))
        if isinstance(result, Skip):
            return None
        if isinstance(result, Replace):
            return result.node
        return node

    def _format_leaf(self, node: Node) -> str:
        if isinstance(node, StringNode):
            return node.code
        if isinstance(node, ImportNode):
            return import_marker(node.id)
        return ""

    def _close_block(self, frame: _Frame) -> str:
        inner = "".join(frame.parts)
        if not frame.block.id:
            return inner
        if frame.first_render:
            inner = "\n" + EDGE_NEWLINE_REGEX.sub("", inner) + "\n"
        open_marker, close_marker = block_markers(frame.block.id)
        return f"{open_marker}{inner}{close_marker}"


def stringify(tree: Iterable[Node] | str | Any, filter: NodeFilter | None = None) -> str:
    return StyleFormatter(filter=filter).format(tree)


__all__ = [
    "FilterResult",
    "Keep",
    "NodeFilter",
    "Replace",
    "Skip",
    "StyleFormatter",
    "block_markers",
    "import_marker",
    "resolve_filter_result",
    "stringify",
]
