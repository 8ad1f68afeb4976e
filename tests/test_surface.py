"""Tests for the query surface and the standard library catalog search."""

import pytest

from go_docs_mcp.builtin_catalog import builtin_functions
from go_docs_mcp.models import SourceArchive
from go_docs_mcp.stdlib import find_item, search_items, stdlib_items
from go_docs_mcp.surface import QuerySurface


@pytest.fixture
def surface():
    return QuerySurface(
        "1.21.0",
        builtin_functions(),
        SourceArchive(kind="archive", data=b"\x1f\x8bdata"),
    )


class TestBuiltins:
    def test_list_includes_len(self, surface):
        functions = surface.list_builtin_functions()
        len_fn = next(fn for fn in functions if fn.name == "len")
        assert "length" in len_fn.documentation

    def test_list_is_a_copy(self, surface):
        surface.list_builtin_functions().clear()
        assert surface.list_builtin_functions()

    def test_get_known(self, surface):
        fn = surface.get_builtin_function("append")
        assert fn.signature.startswith("func append(")

    def test_get_unknown_is_none(self, surface):
        assert surface.get_builtin_function("printf") is None


class TestSearch:
    def test_fmt_scenario(self, surface):
        items = surface.search_std_lib("fmt", limit=5)
        assert 0 < len(items) <= 5
        for item in items:
            assert "fmt" in item.name.lower() or "fmt" in item.description.lower()

    def test_exact_match_ranked_first(self, surface):
        assert surface.search_std_lib("strings")[0].name == "strings"

    def test_name_matches_before_description_matches(self):
        items = search_items(stdlib_items(), "json", limit=50)
        names = [item.name for item in items]
        assert names[0] == "json.Marshal"
        assert "encoding/json" in names

    def test_case_insensitive(self, surface):
        assert surface.search_std_lib("PRINTLN")[0].name == "fmt.Println"

    def test_zero_limit(self, surface):
        assert surface.search_std_lib("fmt", limit=0) == []

    def test_no_match(self, surface):
        assert surface.search_std_lib("kubernetes") == []


class TestGetItem:
    def test_exact(self, surface):
        item = surface.get_std_lib_item("fmt.Println")
        assert item.kind == "function"
        assert "Println" in item.signature

    def test_package(self, surface):
        assert surface.get_std_lib_item("net/http").kind == "package"

    def test_import_path_form(self):
        item = find_item(stdlib_items(), "net/http.Get")
        assert item.name == "http.Get"

    def test_case_insensitive(self, surface):
        assert surface.get_std_lib_item("fmt.println").name == "fmt.Println"

    def test_unknown(self, surface):
        assert surface.get_std_lib_item("fmt.Nope") is None
