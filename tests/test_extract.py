from __future__ import annotations

from fgd.extract import find_bool, find_str


def test_find_bool_flat_record():
    text = '{"hit": true, "outputValid": false}'
    assert find_bool(text, "hit") is True
    assert find_bool(text, "outputValid") is False


def test_find_bool_missing_key_is_none():
    assert find_bool('{"hit": true}', "outputValid") is None


def test_find_bool_ignores_non_boolean_values():
    assert find_bool('{"hit": "true"}', "hit") is None
    assert find_bool('{"hit": 1}', "hit") is None


def test_find_bool_unrelated_structure_does_not_interfere():
    text = '{"meta": {"key": "hit", "list": [1, 2]}, "hit":\n\n  true, "outputValid": false}'
    assert find_bool(text, "hit") is True


def test_find_bool_nested_key_in_document_order():
    text = '{"cache": {"hit": false}, "hit": true}'
    assert find_bool(text, "hit") is False


def test_find_bool_falls_back_on_non_json():
    text = '{ "hit": TRUE, "outputValid": False, }'
    assert find_bool(text, "hit") is True
    assert find_bool(text, "outputValid") is False


def test_find_str_flat_and_nested():
    assert find_str('{"commit": "abc123", "imageDigest": "sha256:x"}', "commit") == "abc123"
    assert find_str('{"build": {"commit": "deadbeef"}}', "commit") == "deadbeef"


def test_find_str_wrong_type_or_missing_is_none():
    assert find_str('{"commit": 123}', "commit") is None
    assert find_str('{"sha": "abc"}', "commit") is None


def test_find_str_falls_back_on_non_json():
    assert find_str('commit-info: {"commit": "cafe"} trailing', "commit") == "cafe"


def test_duplicate_keys_first_occurrence_wins():
    assert find_str('{"commit": "first", "commit": "second"}', "commit") == "first"
    assert find_bool('{"hit": false, "hit": true}', "hit") is False


def test_object_and_array_values_are_walked_in_order():
    text = '{"runs": [{"commit": "aaa"}, {"commit": "bbb"}], "commit": "ccc"}'
    assert find_str(text, "commit") == "aaa"


def test_deeply_nested_record_falls_back_to_token_scan():
    depth = 100_000
    text = '{"hit": true, "outputValid": false, "junk": ' + "[" * depth + "]" * depth + "}"
    assert find_bool(text, "hit") is True
    assert find_bool(text, "outputValid") is False
    assert find_str("[" * depth + "]" * depth, "commit") is None
