import logging

import pytest

from xmlplus.core.exceptions import CycleError, LocationError
from xmlplus.core.location import Location
from xmlplus.core.models import Node, count_nodes, make_node
from xmlplus.core.mutation import (
    copy_node,
    edit_attrs,
    edit_tag,
    edit_text,
    insert_child,
    insert_left,
    insert_parent,
    insert_right,
    move_node,
)
from xmlplus.core.path import PathStep, path
from xmlplus.core.predicates import text
from xmlplus.core.query import select_one
from xmlplus.core.serializer import emit
from xmlplus.core.steps import tag


def tags(node):
    return [item.tag if isinstance(item, Node) else item for item in node.children]


@pytest.fixture
def pair():
    """<a><b/><c/></a>"""
    return Location(make_node("a", {}, [make_node("b"), make_node("c")]))


class TestEditInPlace:
    def test_edit_attrs_merges_then_dissociates(self):
        loc = Location(make_node("a", {"x": "1"}, None))
        assert edit_attrs(loc, {"y": "2"}, dissoc=["x"]).node.attrs == {"y": "2"}

    def test_edit_attrs_new_values_win(self):
        loc = Location(make_node("a", {"x": "1", "z": "3"}, None))
        assert edit_attrs(loc, {"x": "9"}).node.attrs == {"x": "9", "z": "3"}

    def test_edit_tag(self, doc):
        body = edit_tag(select_one(doc, tag("body")), "main")
        assert tags(body.root().node) == ["title", "main"]

    def test_edit_text_replaces_mixed_content(self, doc):
        p = select_one(doc, tag("body"), tag("section"), 1, tag("p"))
        assert edit_text(p, "plain").node.content == ("plain",)

    def test_edit_text_append(self, doc):
        p = select_one(doc, tag("body"), tag("section"), 1, tag("p"))
        edited = edit_text(p, "!", append=True)
        assert tags(edited.node) == ["Hello ", "b", "!"]

    def test_edit_text_on_empty_node(self):
        loc = Location(make_node("br"))
        assert edit_text(loc, "x", append=True).node.content == ("x",)

    def test_editing_a_text_fragment_raises(self, doc):
        fragment = select_one(doc, tag("title")).down()
        with pytest.raises(LocationError):
            edit_tag(fragment, "x")

    def test_edits_leave_the_source_tree_untouched(self, doc):
        before = emit(doc.node)
        title = select_one(doc, tag("title"))
        edit_text(title, "Changed").root()
        edit_attrs(title, {"lang": "en"}).root()
        assert emit(doc.node) == before


class TestInsertChild:
    @pytest.mark.parametrize(
        "pos, expected",
        [
            (0, ["n", "b", "c"]),
            (1, ["b", "n", "c"]),
            (2, ["b", "c", "n"]),
            ("last", ["b", "c", "n"]),
            (99, ["b", "c", "n"]),
            (-5, ["n", "b", "c"]),
        ],
    )
    def test_positions(self, pair, pos, expected):
        loc = insert_child(pair, make_node("n"), pos)
        assert loc.node.tag == "a"
        assert tags(loc.node) == expected

    def test_default_position_is_first(self, pair):
        assert tags(insert_child(pair, "text").node) == ["text", "b", "c"]

    def test_positions_count_text_entries(self):
        loc = Location(make_node("p", {}, ["one", make_node("b"), "two"]))
        assert tags(insert_child(loc, make_node("i"), 1).node) == ["one", "i", "b", "two"]

    def test_into_empty_node(self):
        loc = insert_child(Location(make_node("br")), make_node("x"), "last")
        assert tags(loc.node) == ["x"]

    @pytest.mark.parametrize("pos", ["middle", 1.5, True, None])
    def test_invalid_position_raises(self, pair, pos):
        with pytest.raises(ValueError):
            insert_child(pair, make_node("n"), pos)


class TestSiblingsAndParent:
    def test_insert_left_and_right_keep_focus(self, pair):
        c = pair.down().right()
        loc = insert_right(insert_left(c, make_node("l")), make_node("r"))
        assert loc.node.tag == "c"
        assert tags(loc.root().node) == ["b", "l", "c", "r"]

    def test_sibling_of_root_raises(self, pair):
        with pytest.raises(LocationError):
            insert_left(pair, make_node("x"))

    def test_insert_parent_wraps_focus(self, pair):
        wrapper = insert_parent(pair.down(), "wrap", {"k": "v"})
        assert wrapper.node == make_node("wrap", {"k": "v"}, make_node("b"))
        assert tags(wrapper.root().node) == ["wrap", "c"]

    def test_insert_parent_at_root(self, pair):
        wrapper = insert_parent(pair, "outer")
        assert wrapper.is_root
        assert wrapper.node.content == (pair.node,)


class TestMoveNode:
    @pytest.fixture
    def chain(self):
        """<a><b><c><d/></c></b></a>"""
        return make_node("a", {}, make_node("b", {}, make_node("c", {}, make_node("d"))))

    def test_move_into_own_descendant_raises(self, chain):
        root = Location(chain)
        b = root.down()
        d = b.down().down()
        with pytest.raises(CycleError) as info:
            move_node(b, d)
        assert info.value.from_path == (PathStep("b"),)
        assert info.value.to_path == (PathStep("b"), PathStep("c"), PathStep("d"))
        assert root.node == chain
        assert d.root().node == chain

    def test_move_into_itself_raises(self, chain):
        b = Location(chain).down()
        with pytest.raises(CycleError):
            move_node(b, b)

    def test_moving_the_root_raises(self, chain):
        root = Location(chain)
        with pytest.raises(CycleError):
            move_node(root, root.down())

    def test_cycle_is_logged(self, chain, caplog):
        b = Location(chain).down()
        with caplog.at_level(logging.WARNING, logger="xmlplus.core.mutation"):
            with pytest.raises(CycleError):
                move_node(b, b.down())
        assert "Edit FAIL: move_node cycle" in caplog.text

    def test_same_tag_ordinal_is_not_a_prefix(self):
        root = Location(make_node("a", {}, [
            make_node("b", {"id": "1"}, "x"),
            make_node("b", {"id": "2"}, "y"),
        ]))
        first = root.down()
        second = first.right()

        moved = move_node(first, second)

        assert moved.node == make_node("b", {"id": "1"}, "x")
        assert moved.root().node == make_node("a", {}, [
            make_node("b", {"id": "2"}, [make_node("b", {"id": "1"}, "x"), "y"]),
        ])

    def test_move_conserves_nodes(self, doc):
        li_b = select_one(doc, tag("body"), tag("ul"), tag("li"), 1)
        s1 = select_one(doc, tag("body"), tag("section"))

        moved = move_node(li_b, s1, "last")

        assert text(moved) == "B"
        assert path(moved) == (PathStep("body"), PathStep("section"), PathStep("li"))
        new_root = moved.root().node
        assert count_nodes(new_root) == count_nodes(doc.node)
        ul = select_one(moved.root(), tag("body"), tag("ul"))
        assert [text(li) for li in ul.children()] == ["A"]
        section = select_one(moved.root(), tag("body"), tag("section"))
        assert tags(section.node) == ["title", "p", "li"]

    def test_move_leaves_inputs_untouched(self, doc):
        before = emit(doc.node)
        li_b = select_one(doc, tag("body"), tag("ul"), tag("li"), 1)
        s1 = select_one(doc, tag("body"), tag("section"))
        move_node(li_b, s1)
        assert emit(li_b.root().node) == before
        assert emit(s1.root().node) == before

    def test_move_logs_success(self, doc, caplog):
        li_b = select_one(doc, tag("body"), tag("ul"), tag("li"), 1)
        s1 = select_one(doc, tag("body"), tag("section"))
        with caplog.at_level(logging.INFO, logger="xmlplus.core.mutation"):
            move_node(li_b, s1)
        assert "Edit OK: move_node from=/body/ul/li[1] to=/body/section" in caplog.text

    def test_moving_a_text_fragment_raises(self, doc):
        fragment = select_one(doc, tag("title")).down()
        s1 = select_one(doc, tag("body"), tag("section"))
        with pytest.raises(LocationError):
            move_node(fragment, s1)


class TestCopyNode:
    def test_copy_returns_location_on_the_copy(self, doc):
        title = select_one(doc, tag("title"))
        s2 = select_one(doc, tag("body"), tag("section"), 1)

        copied = copy_node(title, s2, 1)

        assert copied.node == title.node
        assert copied.index == 1
        assert tags(copied.up().node) == ["title", "title", "p"]

    def test_copy_keeps_the_source(self, doc):
        title = select_one(doc, tag("title"))
        body = select_one(doc, tag("body"))
        new_root = copy_node(title, body, "last").root()
        assert tags(new_root.node) == ["title", "body"]
        assert count_nodes(new_root.node) == count_nodes(doc.node) + 1

    def test_copy_among_identical_siblings(self, ab_tree):
        root = Location(ab_tree)
        first = root.down()
        copied = copy_node(first, root, 1)
        # copy sits between two equal <b>1</b> nodes, found by index not by tag
        assert copied.index == 1
        assert [text(loc) for loc in copied.up().children()] == ["1", "1", "2"]
