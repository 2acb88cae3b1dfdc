"""
Unit tests for template compilation and expansion.
"""

import pytest

from datatransform.paths import MISSING
from datatransform.spec import MappingSpec
from datatransform.template import (
    Group,
    Malformed,
    PathRef,
    Template,
    compile_template,
    expand,
    map_items,
)


class TestCompileTemplate:
    """Test compiling raw templates into nodes."""

    def test_string_compiles_to_path_ref(self):
        """Test a path string."""
        assert compile_template("user.name") == PathRef("user.name")

    def test_list_compiles_to_group(self):
        """Test a list of templates."""
        assert compile_template(["a", {"x": "b"}]) == Group(
            (PathRef("a"), Template((("x", PathRef("b")),)))
        )

    def test_mapping_preserves_declaration_order(self):
        """Test that output fields keep their declaration order."""
        node = compile_template({"z": "a", "y": "b", "x": "c"})
        assert isinstance(node, Template)
        assert [name for name, _ in node.fields] == ["z", "y", "x"]

    def test_nested_mapping(self):
        """Test a mapping nested in a mapping."""
        node = compile_template({"address": {"city": "addr.city"}})
        assert node == Template(
            (("address", Template((("city", PathRef("addr.city")),))),)
        )

    @pytest.mark.parametrize("raw", [42, 3.5, None, True])
    def test_unsupported_values_compile_to_malformed(self, raw):
        """Test that unsupported entries are kept as Malformed."""
        assert compile_template(raw) == Malformed(raw)

    def test_compiled_node_passes_through(self):
        """Test that compiling a node returns it unchanged."""
        node = PathRef("a")
        assert compile_template(node) is node


class TestExpand:
    """Test expanding nodes against records."""

    def setup_method(self):
        """Set up test fixtures."""
        self.spec = MappingSpec(defaults={"fullName": "Unknown"})
        self.record = {
            "name": "Ann",
            "address": {"city": "Oslo"},
            "tags": ["a", "b"],
        }

    def test_path_ref_copies_value(self):
        """Test a bare path template."""
        assert expand(PathRef("address.city"), self.record, {}, self.spec) == "Oslo"

    def test_path_ref_miss(self):
        """Test a bare path that misses."""
        assert expand(PathRef("nope"), self.record, {}, self.spec) is MISSING

    def test_template_copies_fields(self):
        """Test building a record from paths."""
        node = compile_template({"fullName": "name", "city": "address.city"})
        assert expand(node, self.record, {}, self.spec) == {
            "fullName": "Ann",
            "city": "Oslo",
        }

    def test_missing_fields_are_omitted(self):
        """Test that absent source fields are not written as None."""
        node = compile_template({"city": "address.city", "zip": "address.zip"})
        assert expand(node, self.record, {}, self.spec) == {"city": "Oslo"}

    def test_missing_field_uses_default(self):
        """Test that a default fills a missing field."""
        node = compile_template({"fullName": "first_name"})
        assert expand(node, self.record, {}, self.spec) == {"fullName": "Unknown"}

    def test_stored_none_is_written(self):
        """Test that a stored None is copied, not replaced by a default."""
        node = compile_template({"fullName": "name"})
        assert expand(node, {"name": None}, {}, self.spec) == {"fullName": None}

    def test_group_field_is_always_assigned(self):
        """Test that list fields are present even when empty."""
        node = compile_template({"pair": ["name", "address.city"], "none": []})
        assert expand(node, self.record, {}, self.spec) == {
            "pair": ["Ann", "Oslo"],
            "none": [],
        }

    def test_group_keeps_positions_of_misses(self):
        """Test that misses inside a list become None."""
        node = compile_template({"pair": ["name", "nope"]})
        assert expand(node, self.record, {}, self.spec) == {"pair": ["Ann", None]}

    def test_group_does_not_apply_defaults(self):
        """Test that list elements never use field defaults."""
        node = compile_template({"fullName": ["nope"]})
        assert expand(node, self.record, {}, self.spec) == {"fullName": [None]}

    def test_group_of_templates(self):
        """Test records nested in a list."""
        node = compile_template({"parts": [{"n": "name"}, {"c": "address.city"}]})
        assert expand(node, self.record, {}, self.spec) == {
            "parts": [{"n": "Ann"}, {"c": "Oslo"}]
        }

    def test_nested_template_is_always_assigned(self):
        """Test that nested records are present even when empty."""
        node = compile_template({"location": {"zip": "address.zip"}})
        assert expand(node, self.record, {}, self.spec) == {"location": {}}

    def test_malformed_field_becomes_empty_string(self):
        """Test the fallback for unsupported entries."""
        node = compile_template({"bad": 42, "name": "name"})
        assert expand(node, self.record, {}, self.spec) == {"bad": "", "name": "Ann"}

    def test_top_level_group(self):
        """Test a list template at the top level."""
        node = compile_template(["name", "tags.1"])
        assert expand(node, self.record, {}, self.spec) == ["Ann", "b"]

    def test_top_level_malformed(self):
        """Test an unsupported template at the top level."""
        assert expand(Malformed(7), self.record, {}, self.spec) == ""

    def test_copied_containers_are_detached(self):
        """Test that copied containers are not shared with the input."""
        node = compile_template({"address": "address", "tags": "tags"})
        result = expand(node, self.record, {}, self.spec)
        assert result["address"] == self.record["address"]
        assert result["address"] is not self.record["address"]
        assert result["tags"] is not self.record["tags"]

    def test_containers_inside_tuples_are_detached(self):
        """Test that records nested in a tuple are copied, not shared."""
        record = {"a": ({"b": 1},)}
        result = expand(compile_template({"t": "a"}), record, {}, self.spec)
        assert result["t"] == record["a"]
        assert result["t"][0] is not record["a"][0]

    def test_mutable_defaults_are_detached(self):
        """Test that default containers are copied per record."""
        spec = MappingSpec(defaults={"tags": ["none"]})
        node = compile_template({"tags": "labels"})
        result = expand(node, {}, {}, spec)
        result["tags"].append("x")
        assert spec.defaults["tags"] == ["none"]

    def test_unknown_node_type_raises(self):
        """Test that non-node values are rejected by expand."""
        with pytest.raises(TypeError):
            expand("name", self.record, {}, self.spec)


class TestMapItems:
    """Test expanding a template over a list."""

    def test_preserves_length_and_order(self):
        """Test one output per input, in order."""
        node = compile_template({"n": "name"})
        items = [{"name": "a"}, {"name": "b"}, {}]
        assert map_items(items, node, {}, MappingSpec()) == [{"n": "a"}, {"n": "b"}, {}]

    def test_bare_path_misses_become_none(self):
        """Test that a bare path template never leaks the sentinel."""
        assert map_items([{"a": 1}, {}], PathRef("a"), {}, MappingSpec()) == [1, None]
