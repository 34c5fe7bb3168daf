"""Custom command definitions and replacement tables for STACK-compatible LaTeX."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableSet
from dataclasses import dataclass, field

_CUSTOM_COMMANDS: dict[str, str] = {
    "abs": "\\newcommand{\\abs}[1]{\\left|#1\\right|}",
    "norm": "\\newcommand{\\norm}[1]{\\left|\\!\\left|#1\\right|\\!\\right|}",
    "energynorm": (
        "\\newcommand{\\energynorm}[1]"
        "{\\left|\\!\\left|\\!\\left|#1\\right|\\!\\right|\\!\\right|}"
    ),
    "normone": "\\newcommand{\\normone}[1]{\\norm{#1}_1}",
    "normtwo": "\\newcommand{\\normtwo}[1]{\\norm{#1}_2}",
    "norminf": "\\newcommand{\\norminf}[1]{\\norm{#1}_\\infty}",
}

_CUSTOM_COMMAND_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "energynorm": ("norm",),
    "normone": ("norm",),
    "normtwo": ("norm",),
    "norminf": ("norm",),
}

_KNOWN_MATH_ENVIRONS = frozenset({"align", "align*", "aligned", "equation", "equation*"})


@dataclass(frozen=True)
class CommandReplacement:
    """How a command is rewritten: text before and after, and what argument it takes."""

    escape: bool = False
    arg_command: bool = False
    opt_arg_command: bool = False
    left: str = ""
    right: str = ""


@dataclass(frozen=True)
class EnvReplacement:
    """How an environment is rewritten, including replacements of commands inside it."""

    escape: bool = False
    left: str = ""
    right: str = ""
    inner: Mapping[str, CommandReplacement] = field(default_factory=dict)


def get_custom_commands() -> dict[str, str]:
    """Return the custom command definitions, in preamble order."""
    return dict(_CUSTOM_COMMANDS)


def get_command_replacements() -> dict[str, CommandReplacement]:
    """Return the commands that are replaced wherever they appear."""
    return {
        "mbox": CommandReplacement(True, True, False, "{", "}"),
        "Tilde": CommandReplacement(True, True, False, "\\tilde{", "}"),
        "intertext": CommandReplacement(True, True, False, "\\text{", "}\\\\ "),
    }


def get_env_replacements() -> dict[str, EnvReplacement]:
    """Return the environments that are replaced by HTML or removed."""
    return {
        "enumerate": EnvReplacement(
            escape=False,
            left="<ol>",
            right="</ol>",
            inner={"item": CommandReplacement(left="<li>")},
        ),
        "itemize": EnvReplacement(
            escape=False,
            left="<ul>",
            right="</ul>",
            inner={"item": CommandReplacement(left="<li>")},
        ),
        "description": EnvReplacement(
            escape=False,
            left="",
            right="",
            inner={"item": CommandReplacement(opt_arg_command=True)},
        ),
    }


def get_known_math_environs() -> frozenset[str]:
    """Return the environments that are typeset in math mode."""
    return _KNOWN_MATH_ENVIRONS


def create_custom_command_preamble(
    used_commands: MutableSet[str], log: Callable[[str], None]
) -> str:
    """Build the preamble defining the used custom commands.

    Dependencies of the used commands are added to ``used_commands``.
    """
    dependencies = {
        dep
        for command in used_commands
        for dep in _CUSTOM_COMMAND_DEPENDENCIES.get(command, ())
    }
    used_commands |= dependencies

    definitions = []
    for name, definition in _CUSTOM_COMMANDS.items():
        if name in used_commands:
            definitions.append(definition)
            log("Included definition for " + name)

    if not definitions:
        return ""
    return "\\(" + "".join(d + " " for d in definitions) + "\\)"