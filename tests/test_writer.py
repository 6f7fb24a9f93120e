import io
import json

import pytest

from texted.values import List, Number, String, Symbol
from texted.writer import (
    Format,
    JSONWriter,
    SExpWriter,
    ShellWriter,
    WriterError,
    new_writer,
)


def _write_value(writer, value):
    out = io.StringIO()
    writer.write_value(out, value)
    return out.getvalue()


def _write(writer, expressions):
    out = io.StringIO()
    writer.write(out, expressions)
    return out.getvalue()


COMMANDS = [
    List.of(Symbol("search-forward"), String("doIt")),
    List.of(Symbol("set-mark")),
    List.of(Symbol("search-forward"), String("(")),
    List.of(Symbol("replace-region"), String("helloWorld")),
]

NESTED = List.of(
    Symbol("progn"),
    List.of(Symbol("search-forward"), String("text")),
    List.of(Symbol("replace-match"), String("replacement")),
)


# JSON writer


def test_json_symbol():
    assert _write_value(JSONWriter(), Symbol("search-forward")) == '"search-forward"\n'


def test_json_string():
    assert _write_value(JSONWriter(), String("hello world")) == '"hello world"\n'


@pytest.mark.parametrize(
    "value, expected",
    [
        (Number.from_int(42), "42\n"),
        (Number(3.14), "3.14\n"),
        (Number.from_int(0), "0\n"),
        (Number.from_int(-123), "-123\n"),
    ],
)
def test_json_number(value, expected):
    assert _write_value(JSONWriter(), value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (List(), "[]\n"),
        (List.of(Symbol("search-forward"), String("text")), '["search-forward","text"]\n'),
        (List.of(Symbol("move"), Number.from_int(5)), '["move",5]\n'),
        (
            NESTED,
            '["progn",["search-forward","text"],["replace-match","replacement"]]\n',
        ),
    ],
)
def test_json_list(value, expected):
    assert _write_value(JSONWriter(), value) == expected


def test_json_multiple_expressions():
    lines = _write(JSONWriter(), COMMANDS).strip().split("\n")
    assert lines == [
        '["search-forward","doIt"]',
        '["set-mark"]',
        '["search-forward","("]',
        '["replace-region","helloWorld"]',
    ]


def test_json_output_is_valid_json():
    value = List.of(
        Symbol("search-forward"),
        String('text with "quotes" and \n newlines'),
        Number(3.14159),
    )
    decoded = json.loads(_write_value(JSONWriter(), value))
    assert decoded == ["search-forward", 'text with "quotes" and \n newlines', 3.14159]


def test_json_escapes_html_characters():
    assert _write_value(JSONWriter(), String("<a&b>")) == '"\\u003ca\\u0026b\\u003e"\n'


def test_json_unsupported_type():
    with pytest.raises(WriterError, match="unsupported value type"):
        _write_value(JSONWriter(), None)


# S-expression writer


def test_sexp_symbol():
    assert _write_value(SExpWriter(), Symbol("search-forward")) == "search-forward"


def test_sexp_string():
    assert _write_value(SExpWriter(), String("hello world")) == '"hello world"'


@pytest.mark.parametrize(
    "value, expected",
    [
        (Number.from_int(42), "42"),
        (Number(3.14), "3.14"),
        (Number.from_int(0), "0"),
        (Number.from_int(-123), "-123"),
        (Number(1234.5678), "1234.5678"),
    ],
)
def test_sexp_number(value, expected):
    assert _write_value(SExpWriter(), value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (List(), "()"),
        (List.of(Symbol("search-forward"), String("text")), '(search-forward "text")'),
        (List.of(Symbol("move"), Number.from_int(5)), "(move 5)"),
        (NESTED, '(progn (search-forward "text") (replace-match "replacement"))'),
        (List.of(Symbol("set-mark")), "(set-mark)"),
    ],
)
def test_sexp_list(value, expected):
    assert _write_value(SExpWriter(), value) == expected


def test_sexp_multiple_expressions():
    lines = _write(SExpWriter(), COMMANDS).strip().split("\n")
    assert lines == [
        '(search-forward "doIt")',
        "(set-mark)",
        '(search-forward "(")',
        '(replace-region "helloWorld")',
    ]


def test_sexp_string_with_special_characters():
    value = String('text with "quotes" and \n newlines')
    assert _write_value(SExpWriter(), value) == '"text with \\"quotes\\" and \\n newlines"'


def test_sexp_complex_nesting():
    value = List.of(
        Symbol("if"),
        List.of(Symbol("search-forward"), String("pattern")),
        List.of(
            Symbol("progn"),
            List.of(Symbol("set-mark")),
            List.of(Symbol("replace-match"), String("replacement")),
        ),
    )
    expected = '(if (search-forward "pattern") (progn (set-mark) (replace-match "replacement")))'
    assert _write_value(SExpWriter(), value) == expected


# Shell writer


def test_shell_simple_command():
    value = List.of(Symbol("search-forward"), String("text"))
    assert _write_value(ShellWriter(), value) == 'search-forward "text"'


def test_shell_empty_list():
    assert _write_value(ShellWriter(), List()) == ""


def test_shell_single_symbol():
    assert _write_value(ShellWriter(), List.of(Symbol("set-mark"))) == "set-mark"


@pytest.mark.parametrize(
    "number, expected",
    [
        (Number.from_int(42), "move 42"),
        (Number(3.14), "move 3.14"),
        (Number.from_int(0), "move 0"),
        (Number.from_int(-5), "move -5"),
    ],
)
def test_shell_command_with_number(number, expected):
    assert _write_value(ShellWriter(), List.of(Symbol("move"), number)) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello", 'test "hello"'),
        ("hello world", 'test "hello world"'),
        ('hello "world"', 'test "hello \\"world\\""'),
        ("hello\nworld", 'test "hello\\nworld"'),
        ("hello\\world", 'test "hello\\\\world"'),
        ("", 'test ""'),
    ],
)
def test_shell_string_quoting(text, expected):
    assert _write_value(ShellWriter(), List.of(Symbol("test"), String(text))) == expected


def test_shell_multiple_arguments():
    value = List.of(Symbol("command"), String("arg1"), Number.from_int(42), String("arg3"))
    assert _write_value(ShellWriter(), value) == 'command "arg1" 42 "arg3"'


def test_shell_multiple_expressions():
    lines = _write(ShellWriter(), COMMANDS).strip().split("\n")
    assert lines == [
        'search-forward "doIt"',
        "set-mark",
        'search-forward "("',
        'replace-region "helloWorld"',
    ]


def test_shell_non_list_value():
    with pytest.raises(WriterError, match="can only convert lists to shell format"):
        _write_value(ShellWriter(), Symbol("standalone-symbol"))


def test_shell_nested_list():
    value = List.of(Symbol("command"), List.of(Symbol("nested"), String("arg")))
    with pytest.raises(WriterError, match="nested lists are not supported"):
        _write_value(ShellWriter(), value)


def test_shell_unsupported_element_type():
    with pytest.raises(WriterError, match="unsupported value type"):
        _write_value(ShellWriter(), List.of(Symbol("command"), None))


# Factory


@pytest.mark.parametrize(
    "fmt, cls",
    [
        (Format.SHELL, ShellWriter),
        (Format.SEXP, SExpWriter),
        (Format.JSON, JSONWriter),
        ("json", JSONWriter),
    ],
)
def test_new_writer(fmt, cls):
    assert type(new_writer(fmt)) is cls


def test_new_writer_unsupported_format():
    with pytest.raises(WriterError, match="unsupported format: yaml"):
        new_writer("yaml")