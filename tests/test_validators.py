import pytest

from retroboy_backup.core.validators import (
    is_upper_case_identifier,
    is_valid_base64,
    is_valid_json_object,
    parse_json_object,
)


@pytest.mark.parametrize("value", ["dGVzdA==", "dGVzdGE=", "dGVzdGFi", "1234", ""])
def test_canonical_base64_is_valid(value):
    assert is_valid_base64(value)


@pytest.mark.parametrize(
    "value",
    [
        "invalid base64 string!@#",
        "also invalid",
        "dGVzdA",        # missing padding
        "dGVzdA===",     # extra padding
        "dGVzdB==",      # non-canonical trailing bits
        "dGVzdA==\n",    # trailing whitespace
        "dGVz dA==",
        "dGVzdA-_",      # urlsafe alphabet
        "tést",
    ],
)
def test_non_canonical_base64_is_rejected(value):
    assert not is_valid_base64(value)


@pytest.mark.parametrize("value", [None, 42, b"dGVzdA==", ["dGVzdA=="]])
def test_non_string_is_not_base64(value):
    assert not is_valid_base64(value)


@pytest.mark.parametrize("value", ['{"controls": "gamepad", "cheats": true}', "{}", ' {"a": [1, 2]} '])
def test_json_object_is_valid(value):
    assert is_valid_json_object(value)


@pytest.mark.parametrize(
    "value",
    ["null", "[]", '["array", "is", "not", "valid"]', '"text"', "42", "true", "invalid json string", "", '{"a": NaN}'],
)
def test_non_object_json_is_rejected(value):
    assert not is_valid_json_object(value)


@pytest.mark.parametrize("value", [None, {"a": 1}, 42])
def test_non_string_is_not_json_object(value):
    assert not is_valid_json_object(value)


def test_parse_json_object_returns_object():
    assert parse_json_object('{"controls": "gamepad"}') == {"controls": "gamepad"}


@pytest.mark.parametrize("value", ['{"a": NaN}', '{"a": -Infinity}', "[]", "null", "nope", "[" * 100000])
def test_parse_json_object_rejects_with_value_error(value):
    with pytest.raises(ValueError):
        parse_json_object(value)


@pytest.mark.parametrize("name", ["POKEMON", "UPPERCASE", "ZELDA_2", "MARIO-64", "POKÉMON"])
def test_upper_case_identifier(name):
    assert is_upper_case_identifier(name)


@pytest.mark.parametrize("name", ["pokemon", "MixedCase", "settings", "123", "", "-_-"])
def test_not_upper_case_identifier(name):
    assert not is_upper_case_identifier(name)
