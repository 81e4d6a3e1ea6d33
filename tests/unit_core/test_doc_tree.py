# Folder: tests/unit_core
# File:   test_doc_tree.py

from rtl_core.block_2_attributes.b2f2_doc_tree import (
    boundary,
    content_size,
    descendants,
    eligible_blocks,
    node_at,
    node_size,
    nodes_between,
    resolve_block,
    text_content,
)

TYPES = ["paragraph", "heading", "blockquote", "listItem"]


def _p(text, **attrs):
    return {"type": "paragraph", "attrs": attrs, "content": [{"type": "text", "text": text}] if text else []}


def _doc(*blocks, dir=None):
    return {"type": "doc", "attrs": {"dir": dir}, "content": list(blocks)}


def _list_doc():
    # bulletList(0) > listItem(1) > paragraph(2) > text(3)
    return _doc({
        "type": "bulletList",
        "content": [{"type": "listItem", "attrs": {}, "content": [_p("abc")]}],
    })


def test_sizes_follow_open_close_tokens():
    doc = _doc(_p("hello"), _p("world"), _p(""))
    assert node_size(doc["content"][0]) == 7
    assert node_size(doc["content"][2]) == 2
    assert content_size(doc) == 16
    assert node_size({"type": "horizontalRule"}) == 1


def test_descendants_positions():
    doc = _doc(_p("hello"), _p("world"))
    rows = [(n["type"], pos) for n, pos, _ in descendants(doc)]
    assert rows == [("paragraph", 0), ("text", 1), ("paragraph", 7), ("text", 8)]


def test_node_at():
    doc = _doc(_p("hello"), _p("world"))
    assert node_at(doc, 0) is doc["content"][0]
    assert node_at(doc, 7) is doc["content"][1]
    assert node_at(doc, 3)["type"] == "text"
    assert node_at(doc, 14) is None
    assert node_at(doc, -1) is None


def test_nodes_between_range_and_collapsed():
    doc = _doc(_p("hello"), _p("world"))
    assert [(n["type"], pos) for n, pos, _ in nodes_between(doc, 1, 9)] == [
        ("paragraph", 0), ("text", 1), ("paragraph", 7), ("text", 8),
    ]
    assert [pos for n, pos, _ in nodes_between(doc, 3, 3) if n["type"] == "paragraph"] == [0]
    assert list(nodes_between(doc, 0, 0)) == []
    # reversed bounds are normalized
    assert [pos for n, pos, _ in nodes_between(doc, 9, 1) if n["type"] == "paragraph"] == [0, 7]


def test_resolve_block_prefers_node_at_then_deepest_container():
    doc = _doc(_p("hello"), _p("world"))
    node, pos = resolve_block(doc, 3)
    assert pos == 0 and node is doc["content"][0]
    node, pos = resolve_block(doc, 6)  # end of first paragraph's content
    assert pos == 0
    node, pos = resolve_block(doc, 7)
    assert pos == 7
    assert resolve_block(doc, 40) == (None, None)

    nested = _list_doc()
    node, pos = resolve_block(nested, 4)
    assert node["type"] == "paragraph" and pos == 2
    node, pos = resolve_block(nested, 1)
    assert node["type"] == "listItem" and pos == 1


def test_leaf_blocks_take_one_position():
    doc = _doc(_p("a"), {"type": "horizontalRule"}, _p("b"))
    assert node_at(doc, 3)["type"] == "horizontalRule"
    assert node_at(doc, 4)["type"] == "paragraph"
    assert text_content(doc) == "ab"


def test_boundary():
    doc = _doc(_p("hello"), _p("world"))
    parent, index = boundary(doc, 7)
    assert parent is doc and index == 1
    parent, index = boundary(doc, 14)
    assert parent is doc and index == 2
    assert boundary(doc, 3) is None


def test_eligible_blocks_and_text_content():
    nested = _list_doc()
    assert [(n["type"], pos) for n, pos in eligible_blocks(nested, TYPES)] == [("listItem", 1), ("paragraph", 2)]
    assert text_content(nested["content"][0]) == "abc"
    assert list(eligible_blocks(nested, [])) == []
