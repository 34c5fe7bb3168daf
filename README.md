# stacklatex

stacklatex takes LaTeX as you would write it in a paper or lecture notes and
rewrites it so that it can be pasted into a Moodle STACK question.

What it changes:

- `$...$` becomes `\(...\)` and `$$...$$` becomes `\[...\]`.
- `%` comments are removed, up to the end of the line.
- A `\\` line break outside of math is wrapped in `\( \)`.
- The math environments `align`, `align*`, `aligned`, `equation` and
  `equation*`, when they stand outside of math mode, are wrapped in `\( \)`.
- `\mbox{...}` becomes `{...}`, `\Tilde{...}` becomes `\tilde{...}` and
  `\intertext{...}` becomes `\text{...}\\ `.
- `enumerate` becomes an HTML `<ol>` list and `itemize` an HTML `<ul>` list.
  Inside `description`, `\item[label]` keeps just its label. When the input
  contains `\begin{enumerate}` or `\begin{itemize}`, the rest of the text is
  HTML-escaped (`&`, `<`, `>`, and line breaks become `<br>`), and the output
  should be entered in Moodle's source-code view.
- The shorthand commands `\abs`, `\norm`, `\energynorm`, `\normone`,
  `\normtwo` and `\norminf` get their `\newcommand` definitions put in front of
  the output, together with the definitions they rely on (`\norm` for the
  last four).

Requires Python 3.10 or later and has no dependencies outside the standard
library. The desktop window needs `tkinter`.

## Installing

```
pip install .
```

## Using it from Python

```python
from stacklatex.transform import transform_latex

result = transform_latex(r"Let $x$ satisfy $\abs{x} \le 1$. % note")
print(result.transformed)
print(result.log)
print(result.errors)
```

`transform_latex` returns a `TransformResult` with these fields:

- `transformed`: the rewritten text, preceded by any needed definitions.
- `log`: one line per kind of change, with how often it was made, for example
  `2x Replaced $...$ with \(...\)`.
- `info`: a notice when the output contains HTML, otherwise empty.
- `errors`: a tuple of messages about malformed input, such as math mode
  opened with `\(` and closed with `\]`, `$$` inside an open `$`, or an
  environment closed that was never opened. The character that caused each
  problem is skipped and the transformation carries on, so `transformed` is
  always filled in.

`success` is always `True` and `error_message` always empty; check `errors`
to find out whether the input had problems.

The tables the transformer works from are in `stacklatex.commands`
(`get_custom_commands`, `get_command_replacements`, `get_env_replacements`,
`get_known_math_environs`, `create_custom_command_preamble`), and the state it
carries from character to character is `stacklatex.state.TransformState`.

## The desktop window

```
stacklatex
```

opens a window with the LaTeX input on the left and the output on the right.
Press the transform button to convert, and the copy button to put the output
on the clipboard. The log of changes appears under the input, the HTML notice
under the output. The window does not show the messages in `errors`.

## What it does not do

There is no web interface and no command that transforms files or standard
input; use the desktop window or call `transform_latex` from Python.

## Running the tests

```
pip install .[test]
pytest
```