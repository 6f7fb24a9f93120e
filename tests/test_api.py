import pytest

from texted.api import (
    EditResult,
    edit_file,
    edit_file_with_format,
    edit_files,
    edit_files_with_format,
    execute_script,
    execute_script_with_format,
    is_valid_format,
)
from texted.values import ScriptError


def test_execute_script_leaves_text_when_script_does_not_edit():
    text = "hello world"
    assert execute_script(text, 'upcase "x"\nset-mark-command 3') == text


def test_execute_script_empty_script_returns_input():
    assert execute_script("abc", "") == "abc"


def test_execute_script_undefined_function():
    with pytest.raises(ScriptError) as info:
        execute_script("test", "invalid-function")
    message = str(info.value)
    assert message.startswith("script execution failed: ")
    assert 'undefined-function "invalid-function"' in message


def test_execute_script_parse_error():
    with pytest.raises(ScriptError) as info:
        execute_script("test", 'upcase "unterminated')
    assert str(info.value).startswith("parsing script: ")


def test_execute_script_with_format_invalid_format():
    with pytest.raises(ScriptError) as info:
        execute_script_with_format("x", "upcase", "yaml")
    assert "invalid script format: yaml" in str(info.value)


@pytest.mark.parametrize(
    "format,script",
    [
        ("shell", 'upcase "a"'),
        ("sexp", '(upcase "a")'),
        ("json", '[["upcase", "a"]]'),
    ],
)
def test_execute_script_with_format_runs_each_format(format, script):
    assert execute_script_with_format("content", script, format) == "content"


def test_execute_script_with_format_json_parse_error():
    with pytest.raises(ScriptError) as info:
        execute_script_with_format("x", '[["upcase", "a"', "json")
    assert str(info.value).startswith("parsing script: ")


def test_execute_script_with_format_json_runtime_error():
    with pytest.raises(ScriptError) as info:
        execute_script_with_format("x", '[["no-such-fn"]]', "json")
    assert 'undefined-function "no-such-fn"' in str(info.value)


@pytest.mark.parametrize(
    "format,expected",
    [("shell", True), ("sexp", True), ("json", True), ("xml", False), ("", False)],
)
def test_is_valid_format(format, expected):
    assert is_valid_format(format) is expected


def test_edit_file_preserves_bytes(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"line one\r\nline two\n")
    edit_file(str(path), "set-mark-command 2")
    assert path.read_bytes() == b"line one\r\nline two\n"


def test_edit_file_missing_file(tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(OSError) as info:
        edit_file(str(missing), 'upcase "a"')
    assert str(info.value).startswith(f"failed to read file {missing}")


def test_edit_file_failing_script_leaves_file(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("keep me")
    with pytest.raises(ScriptError):
        edit_file(str(path), "missing-function")
    assert path.read_text() == "keep me"


def test_edit_file_with_format_json(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("data")
    edit_file_with_format(str(path), '[["upcase", "a"]]', "json")
    assert path.read_text() == "data"


def test_edit_files_reports_each_file(tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("ok")
    bad = tmp_path / "bad.txt"
    results = edit_files([str(good), str(bad)], 'upcase "a"')
    assert [r.filename for r in results] == [str(good), str(bad)]
    assert [r.success for r in results] == [True, False]
    assert results[0].error is None
    assert isinstance(results[1].error, OSError)


def test_edit_files_with_format_script_error(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("x")
    results = edit_files_with_format([str(path)], '[["nope"]]', "json")
    assert len(results) == 1
    assert results[0].success is False
    assert isinstance(results[0].error, ScriptError)


def test_edit_files_with_format_invalid_format(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("x")
    results = edit_files_with_format([str(path)], "upcase", "bogus")
    assert results == [EditResult(str(path), False, results[0].error)]
    assert "invalid script format" in str(results[0].error)