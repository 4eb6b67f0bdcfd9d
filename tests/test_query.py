from __future__ import annotations

import pytest

from oeis_client.errors import BadParameterError
from oeis_client.query import (
    build_query_terms,
    build_search_params,
    format_identifier,
    is_identifier,
    validate_start,
)


def test_format_identifier_pads_to_seven_characters():
    for number in (0, 1, 45, 1234, 999999):
        identifier = format_identifier(number)
        assert len(identifier) == 7
        assert identifier.startswith("A")
    assert format_identifier(45) == "A000045"


def test_is_identifier():
    assert is_identifier("A000045")
    assert not is_identifier("A45")
    assert not is_identifier("B000045")
    assert not is_identifier(45)


def test_sequence_term_prefixes():
    assert build_query_terms({"sequence": [1, 2, 3]}) == ["signed:1,2,3"]
    assert build_query_terms({"sequence": "1 2 3"}, respect_sign=False) == ["seq:1,2,3"]


def test_sequence_truncation_can_be_disabled():
    long_sequence = [2, 3, 4, 5, 6, 7, 8, 999]
    assert build_query_terms({"sequence": long_sequence}) == ["signed:2,3,4,5,6,7"]
    assert build_query_terms({"sequence": long_sequence}, may_truncate=False) == [
        "signed:2,3,4,5,6,7,8,999"
    ]
    assert build_query_terms({"sequence": long_sequence}, max_terms=10) == [
        "signed:2,3,4,5,6,7,8,999"
    ]


def test_field_tokens_keep_input_order():
    terms = build_query_terms(
        {
            "keyword": "core",
            "author": "Sloane",
            "name": "Fibonacci",
            "query": "golden ratio",
            "id": "A000045",
        }
    )
    assert terms == [
        "keyword:core",
        "author:*Sloane*",
        "name:Fibonacci",
        "golden ratio",
        "id:A000045",
    ]


@pytest.mark.parametrize("field", ["comment", "ref", "link", "formula", "example", "xref", "subseq"])
def test_string_fields(field):
    assert build_query_terms({field: "text"}) == [f"{field}:text"]


def test_none_values_are_skipped():
    assert build_query_terms({"keyword": None, "query": "x"}) == ["x"]


@pytest.mark.parametrize(
    "params, message",
    [
        ({"keyword": 123}, "keyword must be a string."),
        ({"author": 123}, "Author must be a string."),
        ({"query": ["x"]}, "General query must be a string."),
        ({"invalid": "value"}, "Unsupported option: 'invalid' with value: 'value'."),
        (
            {"id": "A45"},
            "ID must be a string starting with 'A' and 7 characters long (e.g., 'A000001').",
        ),
        ({"sequence": [1, "two", 3]}, "Sequence list must contain only integers."),
        (
            {},
            "At least one of sequence, id, keyword, author, or query must be provided.",
        ),
        (
            {"keyword": None},
            "At least one of sequence, id, keyword, author, or query must be provided.",
        ),
    ],
)
def test_bad_parameters(params, message):
    with pytest.raises(BadParameterError) as excinfo:
        build_query_terms(params)
    assert excinfo.value.message == message


def test_validate_start():
    assert validate_start(None) is None
    assert validate_start(0) == 0
    assert validate_start(20) == 20
    for bad in (-1, "10", 1.5, True):
        with pytest.raises(BadParameterError, match=":start must be a non-negative integer."):
            validate_start(bad)


def test_build_search_params():
    params = build_search_params({"sequence": [1, 2, 3, 5, 8], "keyword": "core"}, start=10)
    assert params == {"q": "signed:1,2,3,5,8 keyword:core", "fmt": "json", "start": 10}


def test_build_search_params_reads_embedded_start():
    params = build_search_params({"query": "partitions", "start": 5})
    assert params == {"q": "partitions", "fmt": "json", "start": 5}
    assert "start" not in build_search_params({"query": "partitions"})
