import pytest

from stacklatex.commands import get_custom_commands
from stacklatex.transform import TransformResult, transform_latex

HTML_INFO = "Output contains HTML.\nInput in Moodle as source code (Ansicht -> Quellcode)!"


def test_empty_input_gives_empty_output():
    result = transform_latex("")
    assert result.transformed == ""
    assert result.log == ""
    assert result.success is True


def test_plain_text_is_unchanged():
    result = transform_latex("plain words here")
    assert result.transformed == "plain words here"
    assert result.errors == ()


def test_inline_dollar_math_becomes_parenthesis():
    result = transform_latex("$x$")
    assert result.transformed == "\\(x\\)"
    assert "1x Replaced $...$ with \\(...\\)\n" in result.log


def test_display_dollar_math_becomes_brackets():
    result = transform_latex("$$a$$")
    assert result.transformed == "\\[a\\]"
    assert "Replaced $...$ with \\[...\\]" in result.log


def test_log_counts_repeated_operations():
    result = transform_latex("$a$ and $b$")
    assert "2x Replaced $...$ with \\(...\\)\n" in result.log


def test_newline_outside_math_is_wrapped():
    result = transform_latex("\\\\")
    assert result.transformed == "\\(\\\\ \\)"
    assert "Wrapped newline \\\\ in \\( \\)" in result.log


def test_newline_inside_math_is_kept():
    result = transform_latex("\\(a\\\\b\\)")
    assert result.transformed == "\\(a\\\\b\\)"
    assert "Wrapped newline" not in result.log


def test_comment_is_removed():
    result = transform_latex("a % comment\nb")
    assert "comment" not in result.transformed
    assert result.transformed.startswith("a ")
    assert result.transformed.endswith("b")
    assert "1x Removed comment\n" in result.log


def test_escaped_characters_are_kept():
    result = transform_latex("\\$ \\% \\{")
    assert result.transformed == "\\$ \\% \\{"
    assert result.errors == ()


def test_custom_command_adds_preamble():
    commands = get_custom_commands()
    result = transform_latex("\\abs{x}")
    assert result.transformed == "\\(" + commands["abs"] + " \\)\\abs{x}"
    assert "Included definition for abs" in result.log


def test_custom_command_dependency_included_in_order():
    commands = get_custom_commands()
    result = transform_latex("\\normone{v}")
    expected_preamble = "\\(" + commands["norm"] + " " + commands["normone"] + " \\)"
    assert result.transformed.startswith(expected_preamble)
    assert result.transformed.endswith("\\normone{v}")
    assert "Included definition for norm" in result.log
    assert "Included definition for normone" in result.log


def test_argument_command_is_replaced():
    result = transform_latex("\\Tilde{a}")
    assert result.transformed == "\\tilde{a}"
    assert "Replaced \\Tilde{...} with \\tilde{...}" in result.log


def test_nested_braces_inside_replaced_command():
    result = transform_latex("\\mbox{a{b}c}")
    assert result.transformed.count("{") == result.transformed.count("}")
    assert "mbox" not in result.transformed


def test_missing_brace_for_argument_command_is_reported():
    result = transform_latex("\\mbox x")
    assert "expected { for command mbox" in result.errors
    assert result.success is True


def test_known_math_environment_is_wrapped():
    result = transform_latex("\\begin{align}x\\end{align}")
    assert result.transformed == "\\(\\begin{align}x\\end{align}\\)"
    assert "Wrapped environment align in \\( \\)" in result.log


def test_newline_inside_math_environment_is_not_wrapped():
    result = transform_latex("\\begin{align}a\\\\b\\end{align}")
    assert "\\(\\\\ \\)" not in result.transformed
    assert "a\\\\b" in result.transformed


def test_unknown_environment_is_kept():
    result = transform_latex("\\begin{center}x\\end{center}")
    assert result.transformed == "\\begin{center}x\\end{center}"
    assert result.info == ""


def test_itemize_becomes_html_list():
    result = transform_latex("\\begin{itemize}\\item a\\end{itemize}")
    assert result.transformed == "<ul><li> a</ul>"
    assert result.info == HTML_INFO
    assert "Replaced \\item with <li>" in result.log


def test_enumerate_items_carry_type():
    result = transform_latex("\\begin{enumerate}\\item a\\end{enumerate}")
    assert result.transformed.startswith("<ol>")
    assert '<li type="a">)' in result.transformed
    assert result.transformed.endswith("</ol>")


def test_nested_enumerate_uses_roman_type():
    text = (
        "\\begin{enumerate}\\item a\\begin{enumerate}\\item b"
        "\\end{enumerate}\\end{enumerate}"
    )
    result = transform_latex(text)
    assert '<li type="i">)' in result.transformed
    assert result.transformed.count("<ol>") == 2


def test_html_output_escapes_text():
    result = transform_latex("\\begin{itemize}\\item a<b & c\\end{itemize}")
    assert "&lt;" in result.transformed
    assert "&amp;" in result.transformed


def test_description_item_label_loses_brackets():
    result = transform_latex("\\begin{description}\\item[Term] text\\end{description}")
    assert "[" not in result.transformed
    assert "]" not in result.transformed
    assert "Term" in result.transformed
    assert "description" not in result.transformed


@pytest.mark.parametrize(
    "text, message",
    [
        ("\\)", "unexpected closure \\) of math mode"),
        ("\\]", "unexpected closure \\] of math mode"),
        ("\\(a\\]", "mismatched closure of math mode: \\]"),
        ("\\[a\\)", "mismatched closure of math mode: \\)"),
        ("\\(a\\(", "unexpected math mode opening \\( in math mode"),
        ("$$a$ ", "math error: $ after open $$"),
        ("$a$$", "math error: $$ after open $"),
        ("\\end{foo}", "unexpected environment closure: foo"),
        (
            "\\begin{itemize}\\end{center}",
            "unexpected environment closure: center, last open environment: itemize",
        ),
    ],
)
def test_malformed_input_is_reported(text, message):
    result = transform_latex(text)
    assert message in result.errors


def test_result_is_immutable():
    result = transform_latex("x")
    with pytest.raises(AttributeError):
        result.transformed = "y"  # type: ignore[misc]
    assert isinstance(result, TransformResult) and result.operations_log == ()