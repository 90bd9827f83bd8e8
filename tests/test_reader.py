"""Tests for the Reader layer."""

import logging

import pytest

from docblock_core.model import ABool, AGroup, AList, ANull, ANumber, AString, GroupEntry
from docblock_core.reader import (
    accumulate,
    extract_tags,
    list_annotations,
    normalize_comment,
    parse_arguments,
    split_arguments,
)


def group(*pairs):
    return AGroup(tuple(GroupEntry(k, v) for k, v in pairs))


# ---------------------------------------------------------------------------
# normalize_comment
# ---------------------------------------------------------------------------

def test_normalize_docblock():
    doc = """/**
     * Users of the system.
     *
     * @table users
     */"""
    assert normalize_comment(doc) == "Users of the system.\n\n@table users"

def test_normalize_single_line():
    assert normalize_comment("/** @id */") == "@id"

def test_normalize_empty():
    assert normalize_comment("") == ""

def test_normalize_plain_docstring():
    doc = "Summary line.\n\n    @table users\n    @schema app\n    "
    assert normalize_comment(doc) == "Summary line.\n\n@table users\n@schema app"

def test_normalize_hash_markers():
    assert normalize_comment("# @id\n# @column id") == "@id\n@column id"

def test_normalize_keeps_inline_asterisks():
    assert normalize_comment("/**\n * a *b* c\n */") == "a *b* c"

def test_normalize_marker_directly_before_tag():
    assert normalize_comment("/**\n *@id\n */") == "@id"


# ---------------------------------------------------------------------------
# extract_tags
# ---------------------------------------------------------------------------

def test_extract_no_tags():
    assert extract_tags("Just a description.\nNothing else.") == []

def test_extract_bare_tag():
    assert extract_tags("@id") == [("id", "")]

def test_extract_inline_rest_of_line():
    assert extract_tags("@table  users table\n@id") == [("table", "users table"), ("id", "")]

def test_extract_group():
    text = '@join(table: "addresses", field: "user_id")'
    assert extract_tags(text) == [("join", '(table: "addresses", field: "user_id")')]

def test_extract_group_after_space():
    assert extract_tags("@join (a: b)") == [("join", "(a: b)")]

def test_extract_group_with_quoted_paren():
    text = '@column(name: "a)b", type: int)'
    assert extract_tags(text) == [("column", '(name: "a)b", type: int)')]

def test_extract_group_spanning_lines():
    text = "@join(\n  table: addresses,\n  field: user_id\n)\n@id"
    tags = extract_tags(text)
    assert [name for name, _ in tags] == ["join", "id"]
    assert tags[0][1].startswith("(") and tags[0][1].endswith(")")

def test_extract_requires_whitespace_before_at():
    assert extract_tags("mail me at user@example.com") == []

def test_extract_tag_after_tag_on_same_line():
    assert extract_tags("@entity @inherit") == [("entity", ""), ("inherit", "")]

def test_extract_namespaced_name():
    assert extract_tags("@ORM\\Column name") == [("ORM\\Column", "name")]

def test_extract_unicode_name():
    assert extract_tags("@émoji yes") == [("émoji", "yes")]

def test_extract_unterminated_group_is_skipped():
    text = "@join(table: addresses\n@id\n@column id"
    assert extract_tags(text) == [("id", ""), ("column", "id")]

def test_extract_unterminated_quote_is_skipped():
    text = '@join(table: "addresses)\n@id'
    assert extract_tags(text) == [("id", "")]

def test_extract_skip_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="docblock_core.reader"):
        extract_tags("@join(oops")
    assert "unterminated" in caplog.text

def test_extract_crlf():
    assert extract_tags("@table users\r\n@id") == [("table", "users"), ("id", "")]


# ---------------------------------------------------------------------------
# split_arguments / parse_arguments
# ---------------------------------------------------------------------------

def test_split_respects_quotes():
    assert split_arguments('a, "b, c", \'d,e\'') == ["a", ' "b, c"', " 'd,e'"]

def test_parse_empty_is_true():
    assert parse_arguments("") == ABool(True)

def test_parse_inline():
    assert parse_arguments("users") == AString("users")

def test_parse_inline_false():
    assert parse_arguments("false") == ABool(False)

def test_parse_keyed_group():
    value = parse_arguments('(table: "addresses", field: "user_id")')
    assert value == group(("table", AString("addresses")), ("field", AString("user_id")))
    assert value.get("table") == AString("addresses")

def test_parse_equals_key():
    assert parse_arguments("(length = 255)") == group(("length", ANumber(255)))

def test_parse_positional_and_keyed():
    value = parse_arguments('(1, "two", key: true, null)')
    assert value == group(
        (None, ANumber(1)),
        (None, AString("two")),
        ("key", ABool(True)),
        (None, ANull),
    )
    assert value.positional == [ANumber(1), AString("two"), ANull]

def test_parse_bareword_values():
    value = parse_arguments("(entity: App\\Entity\\Address, field: user_id)")
    assert value.get("entity") == AString("App\\Entity\\Address")
    assert value.get("field") == AString("user_id")

def test_parse_skips_blank_segments():
    assert parse_arguments("(a, , b,)") == group((None, AString("a")), (None, AString("b")))

def test_parse_empty_group():
    assert parse_arguments("()") == AGroup(())

def test_parse_quoted_colon_is_not_a_key():
    assert parse_arguments('("a: b")') == group((None, AString("a: b")))

def test_parse_number_is_not_a_key():
    assert parse_arguments("(12:30)") == group((None, AString("12:30")))


# ---------------------------------------------------------------------------
# accumulate / list_annotations
# ---------------------------------------------------------------------------

def test_accumulate_single_is_scalar():
    assert accumulate([("id", ABool(True))]) == {"id": ABool(True)}

def test_accumulate_two_becomes_list():
    result = accumulate([("join", AString("a")), ("join", AString("b"))])
    assert result == {"join": AList((AString("a"), AString("b")))}

@pytest.mark.parametrize("n", [2, 3, 5])
def test_accumulate_n_occurrences(n):
    result = accumulate([("tag", ANumber(i)) for i in range(n)])
    assert result["tag"] == AList(tuple(ANumber(i) for i in range(n)))

def test_accumulate_groups_stay_items():
    a = group(("table", AString("a")))
    b = group(("table", AString("b")))
    assert accumulate([("join", a), ("join", b)]) == {"join": AList((a, b))}

def test_list_annotations_no_tags():
    assert list_annotations("/**\n * Nothing to see here.\n */") == {}

def test_list_annotations_docblock():
    doc = """/**
     * @var array
     * @join(table: "addresses", field: "user_id")
     * @join(table: "phones", field: "user_id")
     * @lazy
     */"""
    result = list_annotations(doc)
    assert result["var"] == AString("array")
    assert result["lazy"] == ABool(True)
    assert isinstance(result["join"], AList)
    assert [j.get("table") for j in result["join"].items] == [
        AString("addresses"),
        AString("phones"),
    ]

def test_list_annotations_inline_quotes():
    assert list_annotations('/** @table "users" */') == {"table": AString("users")}

def test_list_annotations_markers_without_space():
    assert list_annotations("/**\n *@var int\n *@column id\n */") == {
        "var": AString("int"),
        "column": AString("id"),
    }
