# texted

texted runs short scripts in a small Lisp-like language against a text
buffer. It parses a script, evaluates its commands one after another with a
table of functions, and gives back the edited buffer or the value of the last
command. Scripts can run on strings in memory or on files.

## Installing

```
pip install .
```

The package has no dependencies outside the standard library.

## Script formats

The same script can be written in three ways:

- **shell**: one command on each line, arguments separated by spaces. A
  semicolon outside a string literal also ends a command:
  `set-mark-command 3; upcase "abc"`
- **sexp**: S-expressions such as `(substring "Hello world" 1 5)`. Calls can
  nest, also inside a shell line: `upcase (substring "hello" 1 3)`
- **json**: an array of commands, each an array that starts with the function
  name: `[["upcase", "abc"], ["set-mark-command"]]`

A string literal uses double quotes and backslash escapes (`\"`, `\n`,
`\t`, `\x41`, `\u00e9` and so on). A token that reads as a number becomes a
number, and any other token becomes a symbol.

## Built-in functions

`new_default_environment()` in `texted.evaluator` provides these functions:

| function | what it does |
| --- | --- |
| `substring STRING START [END]` | part of STRING from START (1-based, inclusive) to END (1-based, exclusive) or to the end; indices out of range are clamped |
| `string-match PATTERN STRING` | 0-based index of the first match of PATTERN (a regular expression, or a literal string if it does not compile), or the symbol `nil` |
| `upcase STRING` | STRING in upper case |
| `set-mark-command [POSITION]` | sets the buffer's mark at POSITION, or at point when no position is given |

A command with the wrong number or wrong kind of arguments raises
`texted.values.ScriptError`. A call to a name that is not in the environment
fails with `undefined-function "name"`.

## Running scripts

```python
from texted.api import execute_script, execute_script_with_format, edit_file

execute_script("hello", "set-mark-command 3")
# 'hello'  (the buffer text; only the mark moved)

execute_script_with_format("hello", '[["upcase", "abc"]]', "json")
# 'hello'
```

`execute_script` and `execute_script_with_format` return the text of the
buffer after the script has run. `edit_file` and `edit_file_with_format` read
a file, run the script on its text and write the result back. `edit_files`
and `edit_files_with_format` do this for several files and return one
`EditResult` (`filename`, `success`, `error`) for each, so one failed file
does not stop the others. `is_valid_format` accepts `"shell"`, `"sexp"` and
`"json"`; the `"shell"` and `"sexp"` formats use the same line-based parser.

A script that cannot be parsed raises `ScriptError` with a message that
starts with `parsing script:`. A command that fails raises `ScriptError` with
a message that starts with `script execution failed:`. A file that cannot be
read or written raises `OSError`.

To get the value of the last command rather than the buffer, use
`texted_eval_tool` from `texted.tools`:

```python
from texted.tools import texted_eval_tool

texted_eval_tool("", 'upcase (substring "hello" 1 3)', output="expression").text
# '"HE"'
```

## Adding functions

An `Environment` is a mapping from names to functions. A function takes the
list of evaluated arguments and the `Buffer` and returns a value:

```python
from texted.buffer import Buffer
from texted.evaluator import eval_program, new_default_environment
from texted.parser import parse_string
from texted.values import String

def insert(args, buffer):
    buffer.insert(args[0].value)
    return String("")

env = new_default_environment()
env.functions["insert"] = insert

buffer = Buffer("world")
eval_program(parse_string('insert "hello "'), env, buffer)
str(buffer)
# 'hello world'
```

`eval_program` takes an optional trace callback, which is called with a
`TraceContext` (`buffer`, `environment`, `instruction`) after each top-level
command. A failing command raises `texted.evaluator.ExecutionError`, which
keeps the original error, the program, the index and text of the failed
instruction, and a snapshot of the buffer text, point and mark.

## Modules

- `texted.values`: the value types `Symbol`, `String`, `Number` and `List`,
  the `Kind` enum, `is_a`, and `equal` for deep comparison.
- `texted.buffer`: `Buffer`, the text with a 1-based `point` and `mark`.
- `texted.parser`: `parse_string`, `parse_reader`, `parse_sexp`,
  `parse_json_string`, `parse_json_reader` and `parse_format`, plus the
  helpers `tokenize`, `split_on_semicolons`, `parse_token`,
  `validate_json_format` and the `convert_json_*` functions. Errors raise
  `ParseError`.
- `texted.evaluator`: `Environment`, `eval_program`,
  `new_default_environment`, `TraceContext` and `ExecutionError`.
- `texted.builtins`: the built-in functions listed above.
- `texted.writer`: `JSONWriter`, `SExpWriter` and `ShellWriter`, each with
  `write(stream, expressions)` and `write_value(stream, value)`, and
  `new_writer(Format.JSON)` and the like. The shell format writes only flat
  command lists; anything else raises `WriterError`.
- `texted.documentation`: a registry of `FunctionDoc` records, looked up with
  `get_documentation`, `get_all_documentation`,
  `get_documentation_by_category` and `get_categories`. The built-in
  functions register themselves when `texted.builtins` is imported (which
  `texted.evaluator` and `texted.tools` do).
- `texted.tools`: functions returning a `ToolResult` (`text`, `is_error`)
  for tool-calling front ends: `edit_file_tool`, `texted_eval_tool` and
  `texted_doc_tool`, with `format_function_doc` and `format_function_list`
  for rendering documentation as Markdown. With `loop_until_error=True`,
  `edit_file_tool` runs the script over the files again and again until one
  of them fails, so use it only with a script that eventually fails.

## What the package does not do

The default environment holds only the four functions above. There are no
built-in commands for moving the point, inserting or deleting text,
searching, or replacing: a script such as `insert "x"` or `goto-char 5`
fails with `undefined-function` unless you add such a function to the
environment yourself. The package also has no command-line program and no
tool server; the functions in `texted.tools` are plain Python calls.

## Running the tests

```
pip install .[test]
pytest
```