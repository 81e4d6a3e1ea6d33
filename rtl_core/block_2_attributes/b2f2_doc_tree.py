# Folder: rtl_core/block_2_attributes
# File:   b2f2_doc_tree.py

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

__all__ = [
    "children",
    "is_text",
    "node_size",
    "content_size",
    "text_content",
    "descendants",
    "nodes_between",
    "node_at",
    "locate",
    "boundary",
    "resolve_block",
    "eligible_blocks",
    "empty_doc",
]

Node = Dict[str, Any]
DEFAULT_LEAF_TYPES = ("horizontalRule", "image", "hardBreak")

# Positions follow the ProseMirror scheme: the document's content starts at 0,
# a text node spans len(text), a leaf spans 1, every other node spans its
# content plus one token on each side.


def children(node: Node) -> List[Node]:
    c = node.get("content") if isinstance(node, dict) else None
    return c if isinstance(c, list) else []


def is_text(node: Node) -> bool:
    return isinstance(node, dict) and node.get("type") == "text"


def _is_leaf(node: Node, leaf_types: Sequence[str]) -> bool:
    return not is_text(node) and node.get("type") in leaf_types


def node_size(node: Node, leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> int:
    if is_text(node):
        t = node.get("text")
        return len(t) if isinstance(t, str) else 0
    if _is_leaf(node, leaf_types):
        return 1
    return content_size(node, leaf_types) + 2


def content_size(node: Node, leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> int:
    return sum(node_size(ch, leaf_types) for ch in children(node))


def text_content(node: Node) -> str:
    if is_text(node):
        t = node.get("text")
        return t if isinstance(t, str) else ""
    return "".join(text_content(ch) for ch in children(node))


def _has_inner(node: Node, leaf_types: Sequence[str]) -> bool:
    return not is_text(node) and not _is_leaf(node, leaf_types)


def _walk(parent: Node, start: int, leaf_types: Sequence[str]) -> Iterator[Tuple[Node, int, Node]]:
    pos = start
    for child in children(parent):
        yield child, pos, parent
        if _has_inner(child, leaf_types):
            yield from _walk(child, pos + 1, leaf_types)
        pos += node_size(child, leaf_types)


def descendants(doc: Node, leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Iterator[Tuple[Node, int, Node]]:
    """Pre-order (node, pos, parent) for every node below the document."""
    return _walk(doc, 0, leaf_types)


def _between(parent: Node, start: int, frm: int, to: int,
             leaf_types: Sequence[str]) -> Iterator[Tuple[Node, int, Node]]:
    pos = start
    for child in children(parent):
        if pos >= to:
            break
        end = pos + node_size(child, leaf_types)
        if end > frm:
            yield child, pos, parent
            if _has_inner(child, leaf_types):
                yield from _between(child, pos + 1, frm, to, leaf_types)
        pos = end


def nodes_between(doc: Node, frm: int, to: int,
                  leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Iterator[Tuple[Node, int, Node]]:
    """
    Nodes overlapping [frm, to). A collapsed range (frm == to) yields the
    nodes whose content contains the position.
    """
    frm, to = (frm, to) if frm <= to else (to, frm)
    return _between(doc, 0, frm, to, leaf_types)


def locate(doc: Node, pos: int,
           leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Optional[Tuple[Node, int, int]]:
    """
    (parent, index, start) of the node that starts at pos, or of the text
    node that contains it. None when nothing starts there.
    """
    if not isinstance(pos, int) or pos < 0:
        return None
    node = doc
    base = 0
    while True:
        off = base
        found: Optional[Tuple[int, Node]] = None
        for i, child in enumerate(children(node)):
            end = off + node_size(child, leaf_types)
            if off <= pos < end:
                found = (i, child)
                break
            off = end
        if found is None:
            return None
        i, child = found
        if off == pos or is_text(child):
            return node, i, off
        node = child
        base = off + 1


def node_at(doc: Node, pos: int, leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Optional[Node]:
    hit = locate(doc, pos, leaf_types)
    if hit is None:
        return None
    parent, i, _ = hit
    return children(parent)[i]


def boundary(doc: Node, pos: int,
             leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Optional[Tuple[Node, int]]:
    """(parent, index) where a node inserted at pos would land; None inside text or leaves."""
    if not isinstance(pos, int) or pos < 0:
        return None
    node = doc
    base = 0
    while True:
        off = base
        nxt: Optional[Tuple[Node, int]] = None
        kids = children(node)
        for i, child in enumerate(kids):
            if pos == off:
                return node, i
            end = off + node_size(child, leaf_types)
            if off < pos < end:
                if not _has_inner(child, leaf_types):
                    return None
                nxt = (child, off + 1)
                break
            off = end
        if nxt is None:
            return (node, len(kids)) if pos == off else None
        node, base = nxt


def _deepest_containing(doc: Node, pos: int,
                        leaf_types: Sequence[str]) -> Tuple[Optional[Node], Optional[int]]:
    best: Tuple[Optional[Node], Optional[int]] = (None, None)
    node = doc
    base = 0
    while True:
        off = base
        nxt: Optional[Tuple[Node, int]] = None
        for child in children(node):
            end = off + node_size(child, leaf_types)
            if _has_inner(child, leaf_types) and off < pos < end:
                nxt = (child, off)
                break
            off = end
        if nxt is None:
            return best
        best = nxt
        node, base = nxt[0], nxt[1] + 1


def resolve_block(doc: Node, pos: int,
                  leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Tuple[Optional[Node], Optional[int]]:
    """
    The block a cursor at pos refers to: the non-text node starting exactly
    at pos, else the deepest block whose content contains pos.
    """
    if not isinstance(pos, int) or pos < 0:
        return None, None
    hit = node_at(doc, pos, leaf_types)
    if hit is not None and not is_text(hit):
        return hit, pos
    return _deepest_containing(doc, pos, leaf_types)


def eligible_blocks(doc: Node, types: Sequence[str],
                    leaf_types: Sequence[str] = DEFAULT_LEAF_TYPES) -> Iterator[Tuple[Node, int]]:
    wanted = set(types or [])
    for node, pos, _ in descendants(doc, leaf_types):
        if node.get("type") in wanted:
            yield node, pos


def empty_doc(direction: Optional[str] = None) -> Node:
    return {
        "type": "doc",
        "attrs": {"dir": direction},
        "content": [{"type": "paragraph", "attrs": {"dir": None, "dirSource": None}, "content": []}],
    }
