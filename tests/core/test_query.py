import re

import pytest

from xmlplus.core import axes
from xmlplus.core.location import Location
from xmlplus.core.predicates import attr_p, tag_not, text, text_eq
from xmlplus.core.query import select, select_from_root, select_one, select_one_from_root
from xmlplus.core.steps import Index, Predicate, Tag, Text, as_steps, tag
from xmlplus.core.path import PathStep


def texts_of(locs):
    return [text(loc) for loc in locs]


class TestSteps:
    def test_tag_matches_children(self, ab_tree):
        assert texts_of(select(Location(ab_tree), tag("b"))) == ["1", "2"]

    def test_index_picks_nth_match(self, ab_tree):
        assert texts_of(select(Location(ab_tree), tag("b"), 1)) == ["2"]

    @pytest.mark.parametrize("index", [2, 10, -1])
    def test_index_out_of_range_is_empty(self, ab_tree, index):
        assert list(select(Location(ab_tree), tag("b"), index)) == []
        assert select_one(Location(ab_tree), tag("b"), index) is None

    def test_text_step_matches_descendant_text(self, doc):
        found = select_one(doc, tag("body"), tag("section"), tag("p"), "Hello world")
        assert found is not None
        assert found.node.content[0] == "Hello "

    def test_text_step_does_not_match_direct_text_only(self, doc):
        assert select_one(doc, tag("body"), tag("section"), tag("p"), "Hello ") is None

    def test_boolean_predicate_filters(self, doc):
        ids = [loc.node.attrs["id"] for loc in select(doc, tag("body"), tag("section"), attr_p("id"))]
        assert ids == ["s1", "s2"]

    def test_iterable_predicate_is_flattened(self, doc):
        paragraphs = texts_of(select(doc, axes.descendants, tag("p")))
        assert paragraphs == ["Intro", "P1", "Hello "]

    def test_index_after_flattening(self, doc):
        assert texts_of(select(doc, axes.descendants, tag("p"), 1)) == ["P1"]

    def test_location_returning_predicate(self, doc):
        li = select_one(doc, tag("body"), tag("ul"), tag("li"), 1)
        assert select_one(li, axes.parent).node.tag == "ul"

    def test_none_result_drops_location(self, doc):
        assert list(select(doc, axes.parent)) == []

    def test_truthy_result_keeps_location(self, ab_tree):
        pattern = re.compile("^2$")
        found = select(Location(ab_tree), tag("b"), lambda loc: pattern.search(text(loc)))
        assert texts_of(found) == ["2"]

    def test_tag_not(self, doc):
        tags = [loc.node.tag for loc in select(doc, tag("body"), tag_not("section"))]
        assert tags == ["p", "ul", "br"]

    def test_unknown_tag_matches_nothing(self, doc):
        assert list(select(doc, tag("missing"), tag("p"))) == []


class TestEvaluator:
    def test_no_steps_returns_seed(self, doc):
        assert [loc.node for loc in select(doc)] == [doc.node]

    def test_accepts_iterable_of_locations(self, doc):
        sections = list(select(doc, tag("body"), tag("section")))
        titles = texts_of(select(sections, tag("title")))
        assert titles == ["S1", "S2"]

    def test_results_are_lazy(self, ab_tree):
        calls = []

        def spy(loc):
            calls.append(loc)
            return True

        assert select_one(Location(ab_tree), tag("b"), spy) is not None
        assert len(calls) == 1

    def test_path_steps_expand_to_tag_and_index(self):
        assert as_steps([PathStep("b", 2), PathStep("c")]) == [Tag("b"), Index(2), Tag("c")]

    def test_loose_arguments_resolve_once(self):
        fn = lambda loc: True  # noqa: E731
        assert as_steps(["x", 3, fn]) == [Text("x"), Index(3), Predicate(fn)]

    @pytest.mark.parametrize("bad", [True, 1.5, None, object()])
    def test_rejects_unsupported_steps(self, doc, bad):
        with pytest.raises(TypeError):
            select(doc, bad)


class TestRootAnchored:
    def test_first_tag_matches_root_itself(self, doc):
        deep = select_one(doc, tag("body"), tag("ul"), tag("li"))
        found = select_one_from_root(deep, tag("doc"), tag("title"))
        assert text(found) == "T"

    def test_wrong_root_tag_matches_nothing(self, doc):
        deep = select_one(doc, tag("body"))
        assert list(select_from_root(deep, tag("body"))) == []

    def test_descendant_axis_then_text_predicate(self, doc):
        found = select_one_from_root(doc, axes.descendants, tag("li"), text_eq("B"))
        assert found.node.content == ("B",)
