"""Character-by-character rewriting of LaTeX into STACK-compatible LaTeX."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from stacklatex.state import (
    BraceClosing,
    BracketClosing,
    EnvMode,
    LatexError,
    MathMode,
    Token,
    TokenType,
    TransformState,
)

_HTML_INFO = "Output contains HTML.\nInput in Moodle as source code (Ansicht -> Quellcode)!"
_NO_TOKEN = Token()


@dataclass(frozen=True)
class TransformResult:
    """Outcome of a transformation.

    ``errors`` lists the problems met in the input; the characters that
    caused them are skipped and the transformation carries on.
    """

    transformed: str
    operations_log: tuple[str, ...] = ()
    success: bool = True
    error_message: str = ""
    log: str = ""
    info: str = ""
    errors: tuple[str, ...] = ()


def transform_latex(text: str) -> TransformResult:
    """Rewrite ``text`` so that it can be pasted into a STACK question."""
    original = text + " "
    state = TransformState()
    state.set_html_if_needed(original)
    errors: list[str] = []
    for char in original:
        try:
            _handle_character(char, state)
        except LatexError as exc:
            errors.append(str(exc))
    preamble = state.preamble()
    return TransformResult(
        transformed=preamble + state.output[:-1],
        log=state.log_report(),
        info=_HTML_INFO if state.html else "",
        errors=tuple(errors),
    )


def _emit(state: TransformState, text: str, escape: bool) -> None:
    if escape:
        state.emit(text)
    else:
        state.emit_raw(text)


def _math_active(state: TransformState) -> bool:
    return state.math_mode is not MathMode.NOT_OPEN


def _brace_check(state: TransformState, char: str) -> bool:
    """Track brace depth and emit pending closing text; True if the char was consumed."""
    if char == "{" or char == "}":
        state.open_braces += 1 if char == "{" else -1
        action = state.peek_closing_brace_action()
        if action is not None and action.depth == state.open_braces:
            _emit(state, action.replacement, action.escape)
            state.pop_closing_brace_action()
            return True
    elif char == "]":
        closing = state.take_bracket_replacement()
        if closing is not None:
            _emit(state, closing.replacement, closing.escape)
            return True
    return False


def _check_for_comment(state: TransformState, char: str) -> None:
    if char == "%":
        state.log("Removed comment")
        state.set_token(Token(TokenType.COMMENT))


def _handle_character(char: str, state: TransformState) -> None:
    kind = state.token.type
    if kind is TokenType.COMMENT:
        if char == "\n":
            state.set_token(_NO_TOKEN)
        return
    _HANDLERS[kind](char, state)


def _after_dollar(char: str, state: TransformState) -> None:
    state.set_token(_NO_TOKEN)
    mode = state.math_mode
    if char == "$":
        if mode is MathMode.NOT_OPEN:
            state.math_mode = MathMode.BLOCK
            state.emit("\\[")
            state.log("Replaced $...$ with \\[...\\]")
        elif mode is MathMode.INLINE:
            raise LatexError("math error: $$ after open $")
        else:
            state.math_mode = MathMode.NOT_OPEN
            state.emit("\\]")
        return

    if mode is MathMode.NOT_OPEN:
        state.math_mode = MathMode.INLINE
        state.emit("\\(")
        state.log("Replaced $...$ with \\(...\\)")
    elif mode is MathMode.INLINE:
        state.math_mode = MathMode.NOT_OPEN
        state.emit("\\)")
    else:
        raise LatexError("math error: $ after open $$")

    if char == "\\":
        state.set_token(Token(TokenType.BACKSLASH))
    else:
        _check_for_comment(state, char)
        _handle_character(char, state)


def _after_nothing(char: str, state: TransformState) -> None:
    if char == "$":
        state.set_token(Token(TokenType.DOLLAR))
    elif char == "\\":
        state.set_token(Token(TokenType.BACKSLASH))
    elif char == "%":
        _check_for_comment(state, char)
    elif not _brace_check(state, char):
        state.emit(char)


def _after_backslash(char: str, state: TransformState) -> None:
    if char == "\\":
        if not _math_active(state) and state.env_mode is EnvMode.NO_MATH_ENV:
            state.log("Wrapped newline \\\\ in \\( \\)")
            state.emit("\\(\\\\ \\)")
        else:
            state.emit("\\\\")
        state.set_token(_NO_TOKEN)
    elif char in "${}%":
        # Escaped characters neither count as braces nor open math mode.
        state.set_token(_NO_TOKEN)
        state.emit("\\" + char)
    elif char in "([":
        if _math_active(state):
            raise LatexError("unexpected math mode opening \\" + char + " in math mode")
        state.math_mode = MathMode.INLINE if char == "(" else MathMode.BLOCK
        state.set_token(_NO_TOKEN)
        state.emit("\\" + char)
    elif char in ")]":
        if not _math_active(state):
            raise LatexError("unexpected closure \\" + char + " of math mode")
        wrong = MathMode.BLOCK if char == ")" else MathMode.INLINE
        if state.math_mode is wrong:
            raise LatexError("mismatched closure of math mode: \\" + char)
        state.math_mode = MathMode.NOT_OPEN
        state.set_token(_NO_TOKEN)
        state.emit("\\" + char)
    elif char.isalpha():
        state.set_token(Token(TokenType.BACKSLASH_ONGOING, char))
    else:
        state.emit("\\" + char)
        state.set_token(_NO_TOKEN)


def _log_replacement(state: TransformState, command: str, repl) -> None:
    if repl.arg_command:
        if repl.right:
            state.log(f"Replaced \\{command}{{...}} with {repl.left}...{repl.right}")
        else:
            state.log(f"Replaced \\{command}{{...}} with {repl.left}")
    elif repl.opt_arg_command:
        if repl.right:
            state.log(f"Replaced \\{command}[...] with {repl.left}...{repl.right}")
        else:
            state.log(f"Replaced \\{command}[...] with{repl.left}")
    else:
        state.log(f"Replaced \\{command} with {repl.left}")


def _after_command_letters(char: str, state: TransformState) -> None:
    if char.isalpha():
        state.add_token_info(char)
        return

    command = state.token_info()
    original_command = command
    repl = None
    if command in state.custom_commands:
        state.add_command_usage(command)
    else:
        repl = state.command_replacement(command)
        if repl is not None:
            if repl.arg_command:
                if char != "{":
                    raise LatexError("expected { for command " + command)
            elif repl.opt_arg_command:
                if char != "[":
                    raise LatexError("expected [ for command " + command)
            else:
                command = repl.left[1:]

    if command == "begin":
        _brace_check(state, char)
        state.set_token(Token(TokenType.ENVIRON_OPEN))
    elif command == "end":
        _brace_check(state, char)
        state.set_token(Token(TokenType.ENVIRON_CLOSE))
    elif repl is not None:
        _log_replacement(state, original_command, repl)
        _emit(state, repl.left, repl.escape)
        state.set_token(_NO_TOKEN)
        if repl.arg_command:
            state.push_closing_brace_action(
                BraceClosing(repl.escape, state.open_braces, repl.right)
            )
            _brace_check(state, char)
        elif repl.opt_arg_command:
            state.set_bracket_replacement(BracketClosing(repl.escape, repl.right))
            _brace_check(state, char)
        else:
            _handle_character(char, state)
    else:
        state.emit("\\" + command)
        state.set_token(_NO_TOKEN)
        _handle_character(char, state)


def _after_environ_open(char: str, state: TransformState) -> None:
    _brace_check(state, char)
    if char != "}":
        state.add_token_info(char)
        return

    environ = state.token_info()
    state.push_environment(environ)
    repl = state.env_replacement(environ)
    if repl is not None:
        state.log(f"Replaced environment {environ} with {repl.left}...{repl.right}")
        _emit(state, repl.left, repl.escape)
    state.set_token(_NO_TOKEN)
    if (
        state.is_math_environ(environ)
        and state.count_math_envs() <= 1
        and state.math_mode is MathMode.NOT_OPEN
    ):
        if repl is None:
            state.log(f"Wrapped environment {environ} in \\( \\)")
            state.emit("\\(\\begin{" + environ + "}")
        state.env_mode = EnvMode.MATH_ENV
    elif repl is None:
        state.emit("\\begin{" + environ + "}")


def _after_environ_close(char: str, state: TransformState) -> None:
    _brace_check(state, char)
    if char != "}":
        state.add_token_info(char)
        return

    environ = state.token_info()
    state.pop_environment(environ)
    repl = state.env_replacement(environ)
    if repl is not None:
        _emit(state, repl.right, repl.escape)
    state.set_token(_NO_TOKEN)
    if (
        state.is_math_environ(environ)
        and state.count_math_envs() == 0
        and state.math_mode is MathMode.NOT_OPEN
    ):
        if repl is None:
            state.emit("\\end{" + environ + "}\\)")
        state.env_mode = EnvMode.NO_MATH_ENV
    elif repl is None:
        state.emit("\\end{" + environ + "}")


_HANDLERS: dict[TokenType, Callable[[str, TransformState], None]] = {
    TokenType.DOLLAR: _after_dollar,
    TokenType.NONE: _after_nothing,
    TokenType.BACKSLASH: _after_backslash,
    TokenType.BACKSLASH_ONGOING: _after_command_letters,
    TokenType.ENVIRON_OPEN: _after_environ_open,
    TokenType.ENVIRON_CLOSE: _after_environ_close,
}