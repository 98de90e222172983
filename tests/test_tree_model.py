"""Tests for jsonl_viewer/core/tree_model.py."""

from __future__ import annotations

import pytest

from jsonl_viewer.core import (
    MAX_TREE_DEPTH,
    ROOT_PATH,
    UNDEFINED,
    ExpansionState,
    PathResolutionError,
    TreeModel,
    TreeNode,
    children,
    classify,
    format_selected,
    preview,
    unescape_display,
)
from jsonl_viewer.core.tree_model import child_path


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "boolean"),
            (False, "boolean"),
            (0, "number"),
            (1.5, "number"),
            ("", "string"),
            ([], "array"),
            ({}, "object"),
            (UNDEFINED, "undefined"),
        ],
    )
    def test_kinds(self, value, expected):
        assert classify(value) == expected

    def test_booleans_are_not_numbers(self):
        """bool is a subclass of int but must classify as boolean."""
        assert classify(True) != "number"


class TestPreview:
    """Tests for preview()."""

    def test_composites(self):
        assert preview([1, 2, 3]) == "Array(3)"
        assert preview([]) == "Array(0)"
        assert preview({"a": 1, "b": 2}) == "{2 keys}"

    def test_scalars(self):
        assert preview(None) == "null"
        assert preview(True) == "true"
        assert preview(False) == "false"
        assert preview(42) == "42"
        assert preview(-1.25) == "-1.25"

    def test_integral_float_prints_as_integer(self):
        assert preview(3.0) == "3"

    def test_short_string_is_quoted(self):
        assert preview("hello") == '"hello"'

    def test_long_string_is_truncated(self):
        assert preview("x" * 60) == '"' + "x" * 50 + '..."'

    def test_string_at_limit_is_not_truncated(self):
        assert preview("x" * 50) == '"' + "x" * 50 + '"'

    def test_custom_length(self):
        assert preview("abcdef", 3) == '"abc..."'


class TestUnescapeDisplay:
    """Tests for unescape_display() and format_selected()."""

    def test_fixed_escapes(self):
        assert unescape_display(r"a\nb\tc\rd") == "a\nb\tc\rd"
        assert unescape_display(r"say \"hi\"") == 'say "hi"'
        assert unescape_display(r"C:\\dir") == "C:\\dir"

    def test_unicode_escape_is_left_alone(self):
        assert unescape_display(r"\u00e9") == r"\u00e9"

    def test_null_and_undefined(self):
        assert format_selected(None) == "null"
        assert format_selected(UNDEFINED) == "undefined"

    def test_string_shows_real_newlines(self):
        assert format_selected("line1\\nline2") == "line1\nline2"

    def test_composite_is_pretty_json(self):
        assert format_selected({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'

    def test_composite_escapes_are_unescaped(self):
        """A newline inside a nested string shows as a real line break."""
        assert format_selected({"s": "a\nb"}) == '{\n  "s": "a\nb"\n}'

    def test_scalars_use_preview(self):
        assert format_selected(7) == "7"
        assert format_selected(False) == "false"


class TestChildren:
    """Tests for children() and child_path()."""

    def test_child_path(self):
        assert child_path("root", "a") == "root.a"
        assert child_path("root.a", 0) == "root.a[0]"

    def test_array_children_in_index_order(self):
        node = TreeNode(ROOT_PATH, ROOT_PATH, ["x", "y"])
        result = children(node)
        assert [c.label for c in result] == ["[0]", "[1]"]
        assert [c.path for c in result] == ["root[0]", "root[1]"]
        assert all(c.depth == 1 for c in result)

    def test_object_children_in_insertion_order(self):
        node = TreeNode(ROOT_PATH, ROOT_PATH, {"b": 1, "a": 2})
        assert [c.path for c in children(node)] == ["root.b", "root.a"]

    def test_leaf_has_no_children(self):
        assert children(TreeNode("x", "root.x", 5)) == []


class TestResolve:
    """Tests for TreeModel.resolve()."""

    def test_nested_object(self):
        model = TreeModel({"a": {"b": 1}})
        assert model.resolve("root.a") == {"b": 1}
        assert model.resolve("root.a.b") == 1

    def test_root(self, nested_value):
        assert TreeModel(nested_value).resolve("root") is nested_value

    def test_arrays_and_objects_mixed(self, nested_value):
        model = TreeModel(nested_value)
        assert model.resolve("root.user.tags[1]") == "ops"
        assert model.resolve("root.events[0].type") == "login"
        assert model.resolve("root.events[1].ok") is None

    def test_root_array(self):
        model = TreeModel([[1, 2], [3]])
        assert model.resolve("root[0][1]") == 2

    def test_is_deterministic(self, nested_value):
        model = TreeModel(nested_value)
        assert model.resolve("root.user") == model.resolve("root.user")

    def test_key_containing_dot(self):
        model = TreeModel({"a.b": 1})
        assert model.resolve("root.a.b") == 1

    def test_key_containing_bracket(self):
        model = TreeModel({"x[0]": "literal"})
        assert model.resolve("root.x[0]") == "literal"

    def test_ambiguous_path_prefers_first_key(self):
        """When two splits both succeed, the earlier key wins."""
        model = TreeModel({"a": {"b": "nested"}, "a.b": "flat"})
        assert model.resolve("root.a.b") == "nested"
        model = TreeModel({"a.b": "flat", "a": {"b": "nested"}})
        assert model.resolve("root.a.b") == "flat"

    def test_backtracks_past_a_dead_end(self):
        """A key that matches a prefix but cannot finish the path is skipped."""
        model = TreeModel({"a": {"c": 1}, "a.b": 2})
        assert model.resolve("root.a.b") == 2

    def test_empty_key(self):
        model = TreeModel({"": {"": 3}})
        assert model.resolve("root..") == 3

    @pytest.mark.parametrize(
        "path",
        ["root.missing", "root.user.tags[5]", "root.count.x", "other", "root[0]", "root.user[0]"],
    )
    def test_unknown_paths_raise(self, nested_value, path):
        with pytest.raises(PathResolutionError):
            TreeModel(nested_value).resolve(path)

    def test_error_is_a_lookup_error(self):
        assert issubclass(PathResolutionError, LookupError)


class TestExpansionState:
    """Tests for ExpansionState and TreeModel.toggle()."""

    def test_default_is_root(self):
        assert ExpansionState().paths == frozenset({ROOT_PATH})

    def test_toggle_twice_restores(self):
        """Toggling removes an expanded path and a second toggle restores it."""
        model = TreeModel({"a": {"b": 1}, "c": [1]})
        model.toggle("root.a")
        model.toggle("root.c")
        before = model.expansion

        model.toggle("root.a")
        assert "root.a" not in model.expansion
        assert "root.c" in model.expansion
        assert ROOT_PATH in model.expansion

        model.toggle("root.a")
        assert model.expansion == before

    def test_toggle_never_mutates_previous_state(self):
        model = TreeModel({"a": {}})
        shared = model.expansion
        model.toggle("root.a")
        assert "root.a" not in shared
        assert "root.a" in model.expansion

    def test_expand_and_collapse_are_idempotent(self):
        state = ExpansionState()
        assert state.expand(ROOT_PATH) is state
        assert state.collapse("root.x") is state
        assert ROOT_PATH not in state.collapse(ROOT_PATH)

    def test_hashable_and_comparable(self):
        assert ExpansionState(["root", "root.a"]) == ExpansionState(["root.a", "root"])
        assert len({ExpansionState(), ExpansionState()}) == 1


class TestSelect:
    """Tests for TreeModel.select()."""

    def test_select_records_path_and_value(self, nested_value):
        model = TreeModel(nested_value)
        assert model.select("root.user.name") == "Ada"
        assert model.selected_path == "root.user.name"
        assert model.selected_display == "Ada"

    def test_select_composite_display(self, nested_value):
        model = TreeModel(nested_value)
        model.select("root.user.tags")
        assert model.selected_display == '[\n  "admin",\n  "ops"\n]'

    def test_select_null_display(self, nested_value):
        model = TreeModel(nested_value)
        model.select("root.events[1].ok")
        assert model.selected_display == "null"

    def test_nothing_selected(self, nested_value):
        model = TreeModel(nested_value)
        assert model.selected_path is None
        assert model.selected_value is UNDEFINED
        assert model.selected_display == ""

    def test_select_unknown_path_keeps_previous(self, nested_value):
        model = TreeModel(nested_value)
        model.select("root.count")
        with pytest.raises(PathResolutionError):
            model.select("root.nope")
        assert model.selected_path == "root.count"


class TestVisibleNodes:
    """Tests for TreeModel.visible_nodes()."""

    def test_only_root_children_when_collapsed(self, nested_value):
        paths = [n.path for n in TreeModel(nested_value).visible_nodes()]
        assert paths == ["root", "root.user", "root.events", "root.note", "root.count"]

    def test_expanded_nodes_show_children_in_place(self, nested_value):
        model = TreeModel(nested_value)
        model.toggle("root.user")
        paths = [n.path for n in model.visible_nodes()]
        assert paths == [
            "root",
            "root.user",
            "root.user.name",
            "root.user.tags",
            "root.events",
            "root.note",
            "root.count",
        ]

    def test_expanding_a_leaf_changes_nothing(self, nested_value):
        model = TreeModel(nested_value)
        before = model.visible_nodes()
        model.toggle("root.count")
        assert model.visible_nodes() == before

    def test_collapsed_root(self, nested_value):
        model = TreeModel(nested_value)
        model.toggle(ROOT_PATH)
        assert [n.path for n in model.visible_nodes()] == ["root"]

    def test_depth_ceiling(self):
        value = current = {}
        path = ROOT_PATH
        paths = [path]
        for _ in range(MAX_TREE_DEPTH + 5):
            current["k"] = {}
            current = current["k"]
            path += ".k"
            paths.append(path)

        model = TreeModel(value)
        model.expansion = ExpansionState(paths)
        nodes = model.visible_nodes()
        assert max(n.depth for n in nodes) == MAX_TREE_DEPTH

    def test_is_browsable(self):
        assert TreeModel({}).is_browsable
        assert TreeModel([1]).is_browsable
        assert not TreeModel("text").is_browsable
        assert not TreeModel(None).is_browsable
