from __future__ import annotations

import unittest

from inlinenonce.node import MarkupNode
from inlinenonce.transform import annotate, matches, partition, process_slot, reassemble


def inline_script(code: str, **attrs: str) -> MarkupNode:
    return MarkupNode("script", attrs, inline_content=code)


def external_script(src: str) -> MarkupNode:
    return MarkupNode("script", {"src": src})


class TestMatches(unittest.TestCase):
    def test_inline_node_of_requested_type_matches(self) -> None:
        assert matches(inline_script("console.log(1)"), "script") is True

    def test_other_tag_type_does_not_match(self) -> None:
        assert matches(inline_script("console.log(1)"), "style") is False

    def test_external_reference_never_matches(self) -> None:
        assert matches(external_script("x.js"), "script") is False
        assert matches(MarkupNode("style", {"href": "a.css"}), "style") is False

    def test_empty_inline_content_does_not_match(self) -> None:
        assert matches(MarkupNode("style", inline_content=""), "style") is False

    def test_malformed_nodes_do_not_match(self) -> None:
        class Bare:
            tag_name = "script"

        assert matches(None, "script") is False
        assert matches("<script>x</script>", "script") is False
        assert matches({"type": "script"}, "script") is False
        assert matches(Bare(), "script") is False

    def test_annotated_node_still_matches(self) -> None:
        node = annotate(inline_script("a()"), "abc")
        assert matches(node, "script") is True


class TestPartition(unittest.TestCase):
    def test_empty_input(self) -> None:
        assert partition([], bool) == ([], [])

    def test_keeps_relative_order(self) -> None:
        matching, rest = partition([1, 2, 3, 4, 5, 6], lambda n: n % 2 == 0)
        assert matching == [2, 4, 6]
        assert rest == [1, 3, 5]

    def test_does_not_mutate_input(self) -> None:
        nodes = [3, 1, 2]
        partition(nodes, lambda n: n > 1)
        assert nodes == [3, 1, 2]

    def test_predicate_failure_counts_as_non_matching(self) -> None:
        def predicate(value: object) -> bool:
            if value == "boom":
                raise KeyError("props")
            return True

        matching, rest = partition(["a", "boom", "b"], predicate)
        assert matching == ["a", "b"]
        assert rest == ["boom"]

    def test_accepts_tuples(self) -> None:
        matching, rest = partition(("x", "", "y"), bool)
        assert matching == ["x", "y"]
        assert rest == [""]


class TestAnnotate(unittest.TestCase):
    def test_adds_nonce(self) -> None:
        node = inline_script("a()")
        clone = annotate(node, "abc123")
        assert clone.attrs == {"nonce": "abc123"}
        assert "nonce" not in node.attrs

    def test_overwrites_existing_nonce(self) -> None:
        node = inline_script("a()", nonce="old", type="module")
        clone = annotate(node, "new")
        assert clone.attrs == {"nonce": "new", "type": "module"}
        assert node.attrs["nonce"] == "old"

    def test_keeps_everything_else(self) -> None:
        node = MarkupNode("style", {"media": "print"}, inline_content="p{}", children=("x",), key="critical-css")
        clone = annotate(node, "n")
        assert clone is not node
        assert clone.tag_name == "style"
        assert clone.inline_content == "p{}"
        assert clone.children == ("x",)
        assert clone.key == "critical-css"
        assert clone.attrs["media"] == "print"

    def test_attrs_are_not_shared(self) -> None:
        node = inline_script("a()")
        clone = annotate(node, "n")
        assert clone.attrs is not node.attrs

    def test_empty_nonce_is_applied(self) -> None:
        assert annotate(inline_script("a()"), "").attrs["nonce"] == ""

    def test_reannotating_with_same_nonce_is_stable(self) -> None:
        once = annotate(inline_script("a()"), "n")
        assert annotate(once, "n") == once


class TestReassemble(unittest.TestCase):
    def test_matching_nodes_move_to_the_end(self) -> None:
        meta = MarkupNode("meta", {"charset": "utf-8"})
        first = inline_script("one()")
        ext = external_script("x.js")
        second = inline_script("two()")

        out = reassemble([first, meta, second, ext], "script", "n")

        assert out == [meta, ext, annotate(first, "n"), annotate(second, "n")]

    def test_length_is_preserved(self) -> None:
        nodes = [inline_script("a()"), external_script("b.js"), MarkupNode("style", inline_content="p{}")]
        assert len(reassemble(nodes, "script", "n")) == len(nodes)

    def test_nothing_matches_returns_equal_copy(self) -> None:
        nodes = [external_script("a.js"), MarkupNode("link", {"rel": "stylesheet"})]
        out = reassemble(nodes, "script", "n")
        assert out == nodes
        assert out is not nodes

    def test_malformed_node_is_kept_in_place(self) -> None:
        weird = object()
        inline = inline_script("a()")
        out = reassemble([weird, inline], "script", "n")
        assert out[0] is weird
        assert out[1].attrs["nonce"] == "n"


class TestProcessSlot(unittest.TestCase):
    def test_replaces_exactly_once(self) -> None:
        calls: list[list[object]] = []
        nodes = [inline_script("console.log(1)"), external_script("x.js")]

        process_slot(lambda: nodes, "script", "abc123", calls.append)

        assert len(calls) == 1
        assert calls[0] == [external_script("x.js"), inline_script("console.log(1)", nonce="abc123")]

    def test_replaces_even_without_matches(self) -> None:
        calls: list[list[object]] = []
        process_slot(list, "style", "n", calls.append)
        assert calls == [[]]

    def test_original_sequence_untouched(self) -> None:
        original = inline_script("a()")
        nodes = [original]
        process_slot(lambda: nodes, "script", "n", lambda _: None)
        assert nodes == [original]
        assert "nonce" not in original.attrs


if __name__ == "__main__":
    unittest.main()
