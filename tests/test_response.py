from __future__ import annotations

from conftest import record_payload
from oeis_client.errors import ErrorCategory
from oeis_client.models import Multi, NoMatch, Partial, SearchError, Single
from oeis_client.response import classify_response


def test_null_payload_is_no_match():
    outcome = classify_response(None)
    assert isinstance(outcome, NoMatch)
    assert outcome.message == "No matches found."


def test_empty_list_is_no_match():
    assert classify_response([]) == NoMatch(message="No matches found.")


def test_ten_items_is_partial_never_multi(caplog):
    payload = [record_payload(n) for n in range(1, 11)]
    outcome = classify_response(payload)
    assert isinstance(outcome, Partial)
    assert [seq.id for seq in outcome.sequences][:2] == ["A000001", "A000002"]
    assert len(outcome.sequences) == 10
    assert "more matches may exist" in caplog.text


def test_other_list_lengths_are_multi():
    for size in (1, 3, 9, 11):
        outcome = classify_response([record_payload(n) for n in range(1, size + 1)])
        assert isinstance(outcome, Multi)
        assert len(outcome.sequences) == size


def test_page_size_is_configurable():
    payload = [record_payload(n) for n in range(1, 4)]
    assert isinstance(classify_response(payload, page_size=3), Partial)


def test_record_object_is_single(fib_payload):
    outcome = classify_response(fib_payload)
    assert isinstance(outcome, Single)
    assert outcome.sequence.id == "A000045"


def test_unknown_shapes_carry_the_payload():
    for payload in ({"greeting": "hello"}, {"number": "45", "data": "1"}, "text", 42):
        outcome = classify_response(payload)
        assert isinstance(outcome, SearchError)
        assert outcome.category == ErrorCategory.UNKNOWN_RESPONSE_FORMAT
        assert outcome.payload == payload


def test_list_with_non_objects_is_unknown_format():
    outcome = classify_response([record_payload(1), "junk"])
    assert isinstance(outcome, SearchError)
    assert outcome.category == ErrorCategory.UNKNOWN_RESPONSE_FORMAT
