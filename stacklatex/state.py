"""Mutable state carried through a LaTeX transformation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto

from stacklatex.commands import (
    CommandReplacement,
    EnvReplacement,
    create_custom_command_preamble,
    get_command_replacements,
    get_custom_commands,
    get_env_replacements,
    get_known_math_environs,
)


class LatexError(Exception):
    """Raised when the input LaTeX is malformed."""


class TokenType(Enum):
    BACKSLASH = auto()
    BACKSLASH_ONGOING = auto()
    ENVIRON_OPEN = auto()
    ENVIRON_CLOSE = auto()
    DOLLAR = auto()
    COMMENT = auto()
    NONE = auto()


_INFO_TOKENS = frozenset(
    {TokenType.BACKSLASH_ONGOING, TokenType.ENVIRON_OPEN, TokenType.ENVIRON_CLOSE}
)


class MathMode(Enum):
    NOT_OPEN = auto()
    INLINE = auto()
    BLOCK = auto()


class EnvMode(Enum):
    MATH_ENV = auto()
    NO_MATH_ENV = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType = TokenType.NONE
    info: str = ""


@dataclass(frozen=True)
class BraceClosing:
    """Text to emit when the brace depth returns to ``depth``."""

    escape: bool
    depth: int
    replacement: str


@dataclass(frozen=True)
class BracketClosing:
    """Text to emit at the next closing square bracket."""

    escape: bool
    replacement: str


@dataclass
class TransformState:
    """Everything the character-by-character transformer keeps track of."""

    open_braces: int = 0
    math_mode: MathMode = MathMode.NOT_OPEN
    env_mode: EnvMode = EnvMode.NO_MATH_ENV
    token: Token = field(default_factory=Token)
    custom_commands: dict[str, str] = field(default_factory=get_custom_commands)
    command_replacements: dict[str, CommandReplacement] = field(
        default_factory=get_command_replacements
    )
    used_custom_commands: set[str] = field(default_factory=set)
    known_math_environs: frozenset[str] = field(default_factory=get_known_math_environs)
    brace_actions: list[BraceClosing] = field(default_factory=list)
    environment_stack: list[str] = field(default_factory=list)
    environment_replacements: dict[str, EnvReplacement] = field(
        default_factory=get_env_replacements
    )
    bracket_replacement: BracketClosing | None = None
    html: bool = False
    log_counts: Counter = field(default_factory=Counter)
    _parts: list[str] = field(default_factory=list, repr=False)

    @property
    def output(self) -> str:
        """The output produced so far."""
        return "".join(self._parts)

    def log(self, message: str) -> None:
        self.log_counts[message] += 1

    def log_report(self) -> str:
        """Return one line per distinct log message, prefixed by its count."""
        return "".join(f"{count}x {message}\n" for message, count in self.log_counts.items())

    def env_replacement(self, env: str) -> EnvReplacement | None:
        return self.environment_replacements.get(env)

    def env_command_replacement(self, env: str, command: str) -> CommandReplacement | None:
        repl = self.environment_replacements.get(env)
        if repl is None:
            return None
        return repl.inner.get(command)

    def take_bracket_replacement(self) -> BracketClosing | None:
        closing, self.bracket_replacement = self.bracket_replacement, None
        return closing

    def set_bracket_replacement(self, closing: BracketClosing) -> None:
        self.bracket_replacement = closing

    def set_html_if_needed(self, original: str) -> None:
        self.html = "\\begin{enumerate}" in original or "\\begin{itemize}" in original

    def emit(self, text: str) -> None:
        """Append text, escaping it for HTML when the output is HTML."""
        if self.html:
            text = (
                text.replace("&", "&amp;")
                .replace("<", "&lt;")
                .replace(">", "&gt;")
                .replace("\n", "<br>\n")
            )
        self._parts.append(text)

    def emit_raw(self, text: str) -> None:
        self._parts.append(text)

    def push_closing_brace_action(self, action: BraceClosing) -> None:
        self.brace_actions.append(action)

    def peek_closing_brace_action(self) -> BraceClosing | None:
        return self.brace_actions[-1] if self.brace_actions else None

    def pop_closing_brace_action(self) -> BraceClosing:
        return self.brace_actions.pop()

    def is_math_environ(self, environ: str) -> bool:
        return environ in self.known_math_environs

    def count_math_envs(self) -> int:
        return sum(1 for env in self.environment_stack if self.is_math_environ(env))

    def add_command_usage(self, command: str) -> None:
        self.used_custom_commands.add(command)

    def command_replacement(self, command: str) -> CommandReplacement | None:
        """Find the replacement for a command, taking the open environment into account."""
        repl = self.command_replacements.get(command)
        if repl is not None:
            return repl
        env = self.current_environment()
        if env is None:
            return None
        if env == "enumerate" and command == "item":
            depth = self.environment_stack.count("enumerate")
            if depth == 1:
                return CommandReplacement(left='<li type="a">)')
            if depth == 2:
                return CommandReplacement(left='<li type="i">)')
            return CommandReplacement(left='<li type="A">)')
        return self.env_command_replacement(env, command)

    def push_environment(self, env: str) -> None:
        self.environment_stack.append(env)

    def current_environment(self) -> str | None:
        return self.environment_stack[-1] if self.environment_stack else None

    def pop_environment(self, env: str) -> None:
        if not self.environment_stack:
            raise LatexError("unexpected environment closure: " + env)
        last = self.environment_stack[-1]
        if last != env:
            raise LatexError(
                "unexpected environment closure: " + env + ", last open environment: " + last
            )
        self.environment_stack.pop()

    def set_token(self, token: Token) -> None:
        if token.type not in _INFO_TOKENS and token.info:
            raise ValueError(
                f"Token info should be empty! Token of type {token.type.name} does not contain info!"
            )
        self.token = token

    def token_info(self) -> str:
        if self.token.type not in _INFO_TOKENS:
            raise RuntimeError(
                f"Token info should not be requested for token of type {self.token.type.name}!"
            )
        return self.token.info

    def add_token_info(self, text: str) -> None:
        if self.token.type not in _INFO_TOKENS:
            raise RuntimeError(
                f"Token info should not be added for token of type {self.token.type.name}!"
            )
        self.token = Token(self.token.type, self.token.info + text)

    def preamble(self) -> str:
        return create_custom_command_preamble(self.used_custom_commands, self.log)