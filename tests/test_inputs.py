import json

import pytest

from notekv.inputs import InputError, parse_values, read_input


def test_parse_values_trims_keys_and_values():
    text = "  build_number = 42 \n\tcommit_sha=abc123  \n"

    assert parse_values(text) == {"build_number": "42", "commit_sha": "abc123"}


@pytest.mark.parametrize(
    "text",
    [
        "no_equals_sign",
        "=value",
        "key=",
        "a=b=c",
        "good=1\n\nother=2",
    ],
)
def test_parse_values_rejects_malformed_lines(text):
    with pytest.raises(InputError):
        parse_values(text)


def test_parse_values_reports_original_line_numbers():
    text = "ok=1\nbroken\nalso=fine\nkey="

    with pytest.raises(InputError) as excinfo:
        parse_values(text)

    assert str(excinfo.value) == "Invalid input format on lines: 2, 4"


def test_parse_values_last_duplicate_wins():
    assert parse_values("stage=build\nstage=deploy") == {"stage": "deploy"}


def test_read_input_rejects_both_sources(tmp_path):
    path = tmp_path / "values.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(InputError, match="Both values and values_file"):
        read_input("a=b", str(path))


@pytest.mark.parametrize("values,values_file", [("", ""), ("   \n ", "  "), (None, None)])
def test_read_input_rejects_missing_sources(values, values_file):
    with pytest.raises(InputError, match="Either values or values_file"):
        read_input(values, values_file)


def test_read_input_uses_inline_values():
    assert read_input("author=bob\nstage=deploy", "") == {"author": "bob", "stage": "deploy"}


def test_read_input_accepts_json_object_as_is(tmp_path):
    payload = {"build": 42, "ok": True, "tags": ["a", "b"], "name": "nightly"}
    path = tmp_path / "values.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    assert read_input("", str(path)) == payload


def test_read_input_accepts_empty_json_object(tmp_path):
    path = tmp_path / "values.json"
    path.write_text("{}", encoding="utf-8")

    assert read_input("", f"  {path}  ") == {}


@pytest.mark.parametrize("body", ["[1, 2]", '"text"', "3", "true", "null"])
def test_read_input_rejects_non_object_json(tmp_path, body):
    path = tmp_path / "values.json"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(InputError, match="Input must be a JSON object."):
        read_input("", str(path))


def test_read_input_rejects_invalid_json(tmp_path):
    path = tmp_path / "values.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InputError, match="not valid JSON"):
        read_input("", str(path))


def test_read_input_rejects_missing_file(tmp_path):
    with pytest.raises(InputError, match="Unable to read values file"):
        read_input("", str(tmp_path / "missing.json"))


def test_read_input_rejects_values_file_with_invalid_utf8(tmp_path):
    path = tmp_path / "values.json"
    path.write_bytes(b'{"a": "\xff"}')

    with pytest.raises(InputError) as excinfo:
        read_input("", str(path))

    assert str(path) in str(excinfo.value)
