"""Tool entry points: editing files, showing function documentation and evaluating scripts."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, Sequence

from .api import EditResult, edit_files, execute_script
from .buffer import Buffer
from .documentation import (
    FunctionDoc,
    get_all_documentation,
    get_categories,
    get_documentation,
    get_documentation_by_category,
)
from .evaluator import eval_program, new_default_environment
from .parser import parse_string
from .values import ScriptError
from .writer import SExpWriter


@dataclass(frozen=True)
class ToolResult:
    """Text returned by a tool, flagged as an error or not."""

    text: str
    is_error: bool = False


def _error(text: str) -> ToolResult:
    return ToolResult(text, is_error=True)


def edit_files_with_loop(
    files: Sequence[str], script: str
) -> tuple[list[EditResult], int]:
    """Apply script to all files repeatedly until some file fails.

    Returns the results of the failing round and the number of rounds run.
    """
    iterations = 0
    while True:
        iterations += 1
        results = edit_files(files, script)
        if any(not result.success for result in results):
            return results, iterations


def edit_file_tool(
    script: str, files: Sequence[str], loop_until_error: bool = False
) -> ToolResult:
    """Apply a script to each file and report which edits succeeded."""
    if not isinstance(script, str):
        return _error("script parameter required: script must be a string")
    if isinstance(files, str) or not all(isinstance(f, str) for f in files):
        return _error("files parameter required: files must be a list of strings")
    files = list(files)
    if not files:
        return _error("at least one file must be specified")

    if loop_until_error:
        results, iterations = edit_files_with_loop(files, script)
    else:
        results, iterations = edit_files(files, script), 1

    successes = [
        f"Successfully edited {r.filename}" for r in results if r.success
    ]
    failures = [
        f"Failed to edit {r.filename}: {r.error}" for r in results if not r.success
    ]

    if failures:
        lines = [f"Completed with errors after {iterations} iterations:"]
    else:
        lines = [f"All files edited successfully after {iterations} iterations:"]
    lines.extend(f"✓ {line}" for line in successes)
    lines.extend(f"✗ {line}" for line in failures)
    return ToolResult("\n".join(lines) + "\n")


def format_function_doc(doc: FunctionDoc) -> str:
    """Render one function's documentation as Markdown."""
    out = [f"# {doc.name}\n\n"]
    if doc.summary:
        out.append(f"**{doc.summary}**\n\n")
    if doc.description:
        out.append(f"{doc.description}\n\n")
    if doc.parameters:
        out.append("## Parameters\n\n")
        for param in doc.parameters:
            line = f"- **{param.name}** ({param.type})"
            if param.description:
                line += f": {param.description}"
            out.append(line + "\n")
        out.append("\n")
    if doc.examples:
        out.append("## Examples\n\n")
        for example in doc.examples:
            if example.description:
                out.append(f"{example.description}\n\n")
            out.append(f"```\n{example.input}\n```\n\n")
    if doc.category:
        out.append(f"**Category:** {doc.category}\n\n")
    if doc.see_also:
        out.append("**See also:** " + ", ".join(doc.see_also) + "\n")
    return "".join(out).strip()


def format_function_list(docs: Iterable[FunctionDoc], title: str, verbose: bool) -> str:
    """Render a list of functions as Markdown, grouped by category when verbose."""
    docs = list(docs)
    out = [f"# {title}\n\n", f"Found {len(docs)} function(s):\n\n"]
    if verbose:
        by_category: dict[str, list[FunctionDoc]] = {}
        for doc in docs:
            by_category.setdefault(doc.category or "Uncategorized", []).append(doc)
        for category in sorted(by_category):
            out.append(f"## {category}\n\n")
            for doc in by_category[category]:
                line = f"- **{doc.name}**"
                if doc.summary:
                    line += f": {doc.summary}"
                out.append(line + "\n")
            out.append("\n")
    else:
        out.extend(f"- {doc.name}\n" for doc in docs)
    return "".join(out).strip()


def _function_doc(function_name: str) -> ToolResult:
    doc = get_documentation(function_name)
    if doc is None:
        suggestions = [
            d.name
            for d in get_all_documentation()
            if d.name in function_name or function_name in d.name
        ][:3]
        message = f"Function '{function_name}' not found"
        if suggestions:
            message += f". Did you mean: {', '.join(suggestions)}"
        return _error(message)
    return ToolResult(format_function_doc(doc))


def _category_listing(category: str, verbose: bool) -> ToolResult:
    docs = get_documentation_by_category(category)
    if not docs:
        message = f"No functions found in category '{category}'"
        categories = get_categories()
        if categories:
            message += f". Available categories: {', '.join(categories)}"
        return _error(message)
    return ToolResult(
        format_function_list(docs, f"Functions in category '{category}'", verbose)
    )


def texted_doc_tool(
    function_name: str = "", category: str = "", verbose: bool = False
) -> ToolResult:
    """Show documentation for one function, one category, or all functions."""
    if function_name and category:
        return _error("function_name and category parameters are mutually exclusive")
    if function_name:
        return _function_doc(function_name)
    if category:
        return _category_listing(category, verbose)
    docs = get_all_documentation()
    if not docs:
        return _error("No functions documented")
    return ToolResult(format_function_list(docs, "All functions", verbose))


def texted_eval_tool(input_text: str, script: str, output: str = "buffer") -> ToolResult:
    """Run a script on input_text and return the edited text or the last value."""
    if output not in ("buffer", "expression"):
        return _error("output parameter must be 'buffer' or 'expression'")

    if output == "buffer":
        try:
            return ToolResult(execute_script(input_text, script))
        except ScriptError as err:
            return _error(f"script execution failed: {err}")

    try:
        program = parse_string(script)
    except ScriptError as err:
        return _error(f"parsing script: {err}")
    try:
        result = eval_program(program, new_default_environment(), Buffer(input_text))
    except ScriptError as err:
        return _error(f"script execution failed: {err}")

    stream = io.StringIO()
    SExpWriter().write_value(stream, result)
    return ToolResult(stream.getvalue())