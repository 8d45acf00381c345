"""Unit tests for tfwrsense.catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tfwrsense import catalog as catalog_module
from tfwrsense.catalog import load_catalog, parse_catalog, read_reference, split_params
from tfwrsense.errors import ErrorCode, TFWRSenseError
from tfwrsense.models.catalog import Catalog

if TYPE_CHECKING:
    from pathlib import Path

# ---------------------------------------------------------------------------
# Classes and members
# ---------------------------------------------------------------------------


class TestClasses:
    def test_class_names_in_declaration_order(self, catalog: Catalog) -> None:
        assert catalog.class_names == ["Vector", "Items"]

    def test_single_line_member_doc(self, catalog: Catalog) -> None:
        assert catalog.classes["Vector"].members["length"] == "Euclidean length"

    def test_multi_line_member_doc(self, catalog: Catalog) -> None:
        assert catalog.classes["Vector"].members["x"] == "Horizontal component.\nMeasured in tiles."

    def test_member_without_doc(self, catalog: Catalog) -> None:
        members = catalog.classes["Vector"].members
        assert "y" in members
        assert members["y"] is None

    def test_single_quote_docstring(self, catalog: Catalog) -> None:
        assert catalog.classes["Items"].members["Hay"] == "Obtained by harvesting grass."

    def test_members_in_declaration_order(self, catalog: Catalog) -> None:
        assert list(catalog.classes["Vector"].members) == ["length", "x", "y"]

    def test_methods_are_not_members(self, catalog: Catalog) -> None:
        assert list(catalog.classes["Items"].members) == ["Hay"]
        assert "helper" not in catalog.functions

    def test_reopened_class_accumulates_members(self) -> None:
        text = "class A:\n    one: int\n\nx = 1\n\nclass A:\n    two: int\n"
        result = parse_catalog(text)
        assert list(result.classes) == ["A"]
        assert list(result.classes["A"].members) == ["one", "two"]

    def test_tab_indented_member(self) -> None:
        result = parse_catalog("class A:\n\tvalue: int\n")
        assert "value" in result.classes["A"].members

    def test_dedent_closes_class_and_line_is_reparsed(self) -> None:
        text = "class A:\n    value: int\ndef after():\n    pass\n"
        result = parse_catalog(text)
        assert "after" in result.functions
        assert list(result.classes["A"].members) == ["value"]

    def test_member_doc_requires_indent(self) -> None:
        text = 'class A:\n    value: int\n"""not a member doc"""\n'
        result = parse_catalog(text)
        assert result.classes["A"].members["value"] is None


# ---------------------------------------------------------------------------
# Functions and constants
# ---------------------------------------------------------------------------


class TestFunctions:
    def test_label_with_return_type(self, catalog: Catalog) -> None:
        fn = catalog.functions["move"]
        assert fn.signature_label == "move(direction: Direction) -> bool"
        assert fn.return_type == "bool"
        assert fn.params == ["direction: Direction"]
        assert fn.doc == "Moves the drone one tile."

    def test_label_without_return_type(self, catalog: Catalog) -> None:
        fn = catalog.functions["clamp"]
        assert fn.signature_label == "clamp(value, low, high)"
        assert fn.return_type is None
        assert fn.params == ["value", "low", "high"]
        assert fn.doc == "Clamp value into [low, high]."

    def test_no_arguments_gives_empty_params(self, catalog: Catalog) -> None:
        fn = catalog.functions["harvest"]
        assert fn.params == []
        assert fn.signature_label == "harvest()"
        assert fn.doc is None

    def test_indented_def_is_not_a_function(self) -> None:
        result = parse_catalog("    def nested(a):\n        pass\n")
        assert result.functions == {}

    def test_multi_line_docstring_drops_opening_line_text(self) -> None:
        result = parse_catalog('def f():\n    """first\n    second\n    third"""\n')
        assert result.functions["f"].doc == "second\nthird"


class TestConstants:
    def test_constructed_constant(self, catalog: Catalog) -> None:
        assert catalog.constants["Origin"].doc == "The zero vector."

    def test_plain_assignment_is_not_a_constant(self) -> None:
        result = parse_catalog("LIMIT = 10\n")
        assert result.constants == {}

    def test_constant_without_doc(self) -> None:
        result = parse_catalog('North = Direction("North")\nSouth = Direction("South")\n')
        assert list(result.constants) == ["North", "South"]
        assert result.constants["North"].doc is None


# ---------------------------------------------------------------------------
# Lookups, determinism, failure policy
# ---------------------------------------------------------------------------


class TestLookups:
    def test_find_class_is_case_insensitive(self, catalog: Catalog) -> None:
        entry = catalog.find_class("VECTOR")
        assert entry is not None
        assert entry.name == "Vector"

    def test_find_member_returns_canonical_name(self, catalog: Catalog) -> None:
        found = catalog.find_member("vector", "LENGTH")
        assert found is not None
        entry, member = found
        assert (entry.name, member) == ("Vector", "length")

    def test_find_member_unknown(self, catalog: Catalog) -> None:
        assert catalog.find_member("Vector", "bogus") is None
        assert catalog.find_member("Nope", "length") is None

    def test_find_function_and_constant(self, catalog: Catalog) -> None:
        assert catalog.find_function("MOVE") is catalog.functions["move"]
        assert catalog.find_constant("origin") is catalog.constants["Origin"]
        assert catalog.find_function("Origin") is None


class TestParseCatalog:
    def test_deterministic(self, reference_text: str) -> None:
        assert parse_catalog(reference_text) == parse_catalog(reference_text)

    def test_crlf_line_endings(self, reference_text: str) -> None:
        crlf = reference_text.replace("\n", "\r\n")
        assert parse_catalog(crlf) == parse_catalog(reference_text)

    def test_empty_text(self) -> None:
        assert parse_catalog("") == Catalog()

    def test_unexpected_error_gives_empty_catalog(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken(text: str) -> Catalog:
            raise RuntimeError("boom")

        monkeypatch.setattr(catalog_module, "_parse", broken)
        assert parse_catalog("class A:\n") == Catalog()


class TestSplitParams:
    def test_strips_each_fragment(self) -> None:
        assert split_params(" a ,b:int , c = 1 ") == ["a", "b:int", "c = 1"]

    def test_blank_is_empty(self) -> None:
        assert split_params("   ") == []


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoadCatalog:
    def test_bundled_reference(self) -> None:
        result = load_catalog()
        assert {"Items", "Entities", "Grounds"} <= set(result.class_names)
        assert result.functions["plant"].params == ["entity: Entity"]
        assert result.functions["move"].signature_label == "move(direction: Direction) -> bool"
        assert "North" in result.constants

    def test_explicit_path(self, tmp_path: Path, reference_text: str) -> None:
        path = tmp_path / "reference.py"
        path.write_text(reference_text, encoding="utf-8")
        assert load_catalog(path) == parse_catalog(reference_text)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TFWRSenseError) as exc_info:
            read_reference(tmp_path / "missing.py")
        assert exc_info.value.code == ErrorCode.CATALOG_NOT_FOUND
        assert exc_info.value.recoverable is False

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "reference.py"
        path.write_bytes(b"\xff\xfe\xfa class A:")
        with pytest.raises(TFWRSenseError) as exc_info:
            load_catalog(path)
        assert exc_info.value.code == ErrorCode.CATALOG_UNREADABLE
